# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""healthprobe CLI."""

from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from ..config import ProbeSettings, load_probe_settings
from ..errors import FailureCode
from ..log import setup_logging
from ..models.result import ProbeResult, exit_status
from ..net.dial import NETWORKS
from ..poll import PollMode
from ..runtime import HealthProbe
from ..utils.duration import parse_duration

logger = logging.getLogger(__name__)


def _duration(value: str) -> float:
    try:
        return parse_duration(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


class _FlagParser(argparse.ArgumentParser):
    def error(self, message: str):  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(int(FailureCode.FLAG_PARSE), f"{self.prog}: error: {message}\n")


def build_parser(settings: ProbeSettings | None = None) -> argparse.ArgumentParser:
    settings = settings or ProbeSettings()
    parser = _FlagParser(
        prog="healthprobe",
        description="Probe a local service on the first non-loopback IPv4 interface",
    )
    parser.add_argument(
        "-network",
        "--network",
        default=settings.network,
        choices=NETWORKS,
        help="network type to dial with (e.g. unix, tcp)",
    )
    parser.add_argument("-uri", "--uri", default=settings.uri, help="uri to healthcheck")
    parser.add_argument("-port", "--port", default=settings.port, help="port to healthcheck")
    parser.add_argument(
        "-timeout",
        "--timeout",
        type=_duration,
        default=settings.timeout,
        help="dial timeout, e.g. 1s or 100ms",
    )
    modes = parser.add_mutually_exclusive_group()
    modes.add_argument(
        "-readiness-interval",
        "--readiness-interval",
        type=_duration,
        default=settings.readiness_interval,
        help="if set, starts the healthcheck in readiness mode, i.e. do not exit until the healthcheck passes. "
        "runs checks every readiness-interval",
    )
    modes.add_argument(
        "-liveness-interval",
        "--liveness-interval",
        type=_duration,
        default=settings.liveness_interval,
        help="if set, starts the healthcheck in liveness mode, i.e. do not exit until the healthcheck fails. "
        "runs checks every liveness-interval",
    )
    parser.add_argument(
        "-log-level",
        "--log-level",
        default=None,
        help="diagnostic log level on stderr (default: $HEALTHPROBE_LOG_LEVEL or WARNING)",
    )
    return parser


@contextmanager
def _stop_on_signals(stop: threading.Event) -> Iterator[None]:
    """Set `stop` on SIGTERM/SIGINT for the duration of the block (main thread only)."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def _handler(signum, _frame):  # noqa: ANN001
        logger.debug("Received signal %s, stopping", signum)
        stop.set()

    previous = {sig: signal.signal(sig, _handler) for sig in (signal.SIGTERM, signal.SIGINT)}
    try:
        yield
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


def report(result: ProbeResult) -> int:
    """Write the result line and return the process exit status."""
    if result.ok:
        sys.stdout.write(result.message + "\n")
    else:
        sys.stderr.write("healthcheck failed: " + result.message + "\n")
    return exit_status(result)


def main(argv: list[str] | None = None) -> int:
    settings = load_probe_settings()
    parser = build_parser(settings)
    args = parser.parse_args(argv)
    try:
        setup_logging(args.log_level)
    except ValueError as exc:
        parser.error(str(exc))
    if args.timeout <= 0:
        parser.error("timeout must be positive")

    settings.network = args.network
    settings.uri = args.uri
    settings.port = args.port
    settings.timeout = args.timeout
    mode = PollMode.from_intervals(args.readiness_interval, args.liveness_interval)

    stop = threading.Event()
    try:
        with _stop_on_signals(stop), HealthProbe(settings.to_config()) as probe:
            result = probe.run(mode, stop=stop)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Unexpected error", exc_info=True)
        sys.stderr.write(f"healthcheck failed(unknown error): {exc}\n")
        return int(FailureCode.UNKNOWN)

    return report(result)


if __name__ == "__main__":
    raise SystemExit(main())
