# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for healthprobe."""

import os
from dataclasses import dataclass

from .utils.duration import parse_duration
from .version import __version__

DEFAULT_USER_AGENT = f"healthprobe/{__version__}"
DISABLED_INTERVAL = -1.0


def _str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


def _duration_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return parse_duration(value) if value is not None else default
    except ValueError:
        return default


@dataclass(frozen=True)
class ProbeConfig:
    """Immutable inputs of a single probe run."""

    network: str = "tcp"
    uri: str = ""
    port: str = "8080"
    timeout: float = 1.0
    user_agent: str = DEFAULT_USER_AGENT

    @property
    def is_http(self) -> bool:
        return len(self.uri) > 0


@dataclass
class ProbeSettings:
    """Probe defaults; the CLI layers its flags on top of these."""

    network: str = "tcp"
    uri: str = ""
    port: str = "8080"
    timeout: float = 1.0
    readiness_interval: float = DISABLED_INTERVAL
    liveness_interval: float = DISABLED_INTERVAL
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls) -> "ProbeSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _duration_env("HEALTHPROBE_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            network=_str_env("HEALTHPROBE_NETWORK", cls.network),
            uri=_str_env("HEALTHPROBE_URI", cls.uri),
            port=_str_env("HEALTHPROBE_PORT", cls.port),
            timeout=timeout,
            readiness_interval=_duration_env("HEALTHPROBE_READINESS_INTERVAL", cls.readiness_interval),
            liveness_interval=_duration_env("HEALTHPROBE_LIVENESS_INTERVAL", cls.liveness_interval),
            user_agent=_str_env("HEALTHPROBE_USER_AGENT", cls.user_agent),
        )

    def to_config(self) -> ProbeConfig:
        return ProbeConfig(
            network=self.network,
            uri=self.uri,
            port=self.port,
            timeout=self.timeout,
            user_agent=self.user_agent,
        )


def load_probe_settings() -> ProbeSettings:
    """Load probe settings from environment with sensible defaults."""
    return ProbeSettings.from_env()
