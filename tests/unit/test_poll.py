# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import threading

import pytest

from healthprobe.models.result import ProbeFailure, ProbeSuccess
from healthprobe.poll import PollKind, PollMode, run

FAIL = ProbeFailure(code=4, message="failure to make TCP connection: refused")
OK = ProbeSuccess()


class SequenceCheck:
    def __init__(self, results):
        self._results = list(results)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self._results[min(self.calls - 1, len(self._results) - 1)]


class RecordingSleep:
    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)


def test_single_shot_returns_first_result_verbatim():
    for result in (OK, FAIL):
        check = SequenceCheck([result, OK])
        sleep = RecordingSleep()
        assert run(check, PollMode.single_shot(), sleep=sleep) is result
        assert check.calls == 1
        assert sleep.calls == []


def test_readiness_retries_until_success():
    check = SequenceCheck([FAIL, FAIL, OK])
    sleep = RecordingSleep()
    assert run(check, PollMode.readiness(0.25), sleep=sleep) == OK
    assert check.calls == 3
    assert sleep.calls == [0.25, 0.25]


def test_readiness_returns_immediately_on_success():
    check = SequenceCheck([OK])
    sleep = RecordingSleep()
    assert run(check, PollMode.readiness(1.0), sleep=sleep) == OK
    assert sleep.calls == []


def test_liveness_returns_first_failure():
    check = SequenceCheck([OK, OK, FAIL])
    sleep = RecordingSleep()
    assert run(check, PollMode.liveness(2.0), sleep=sleep) is FAIL
    assert check.calls == 3
    assert sleep.calls == [2.0, 2.0]


def test_stop_event_interrupts_readiness():
    stop = threading.Event()
    check = SequenceCheck([FAIL])

    def sleep(_seconds):
        if check.calls == 2:
            stop.set()

    result = run(check, PollMode.readiness(0.01), sleep=sleep, stop=stop)
    assert result is FAIL
    assert check.calls == 2


def test_stop_event_already_set_ends_liveness_after_one_attempt():
    stop = threading.Event()
    stop.set()
    check = SequenceCheck([OK])
    assert run(check, PollMode.liveness(30.0), stop=stop) == OK
    assert check.calls == 1


def test_stop_event_wait_is_default_sleep():
    stop = threading.Event()
    check = SequenceCheck([FAIL, FAIL, OK])
    timer = threading.Timer(0.05, stop.set)
    timer.start()
    try:
        # A long interval only returns quickly because the event wakes the wait.
        result = run(check, PollMode.readiness(30.0), stop=stop)
    finally:
        timer.cancel()
    assert result is FAIL
    assert check.calls == 1


@pytest.mark.parametrize(
    "readiness, liveness, expected",
    [
        (-1, -1, PollMode(PollKind.SINGLE_SHOT, 0.0)),
        (0.5, -1, PollMode(PollKind.READINESS, 0.5)),
        (-1, 2.0, PollMode(PollKind.LIVENESS, 2.0)),
        (0, 0, PollMode(PollKind.SINGLE_SHOT, 0.0)),
    ],
)
def test_mode_from_intervals(readiness, liveness, expected):
    assert PollMode.from_intervals(readiness, liveness) == expected


def test_modes_reject_non_positive_intervals():
    with pytest.raises(ValueError):
        PollMode.readiness(0)
    with pytest.raises(ValueError):
        PollMode.liveness(-1)


def test_on_attempt_sees_every_attempt_in_order():
    check = SequenceCheck([FAIL, FAIL, OK])
    seen = []
    result = run(
        check,
        PollMode.readiness(0.1),
        sleep=RecordingSleep(),
        on_attempt=lambda attempt, outcome: seen.append((attempt, outcome)),
    )
    assert result == OK
    assert seen == [(1, FAIL), (2, FAIL), (3, OK)]


def test_on_attempt_called_once_for_single_shot():
    seen = []
    run(SequenceCheck([FAIL]), PollMode.single_shot(), on_attempt=lambda *args: seen.append(args))
    assert seen == [(1, FAIL)]


def test_on_attempt_not_called_for_skipped_attempt_after_stop():
    stop = threading.Event()
    check = SequenceCheck([OK])
    seen = []

    def sleep(_seconds):
        stop.set()

    run(check, PollMode.liveness(1.0), sleep=sleep, stop=stop, on_attempt=lambda n, _r: seen.append(n))
    assert seen == [1]
    assert check.calls == 1
