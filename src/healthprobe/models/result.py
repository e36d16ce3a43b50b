# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe outcome models: a tagged success | failure union."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Union

from ..errors import ErrorCategory, FailureCode, category_to_code

SUCCESS_MESSAGE = "healthcheck passed"


@dataclass(frozen=True)
class ProbeSuccess:
    kind: Literal["success"] = "success"

    @property
    def ok(self) -> bool:
        return True

    @property
    def code(self) -> int:
        return int(FailureCode.SUCCESS)

    @property
    def message(self) -> str:
        return SUCCESS_MESSAGE

    def to_dict(self) -> dict[str, Any]:
        return {"ok": True, "code": self.code, "message": self.message}


@dataclass(frozen=True)
class ProbeFailure:
    code: int
    message: str
    kind: Literal["failure"] = "failure"

    @property
    def ok(self) -> bool:
        return False

    @classmethod
    def from_category(cls, category: ErrorCategory, message: str) -> ProbeFailure:
        return cls(code=int(category_to_code(category)), message=message)

    def to_dict(self) -> dict[str, Any]:
        return {"ok": False, "code": self.code, "message": self.message}


ProbeResult = Union[ProbeSuccess, ProbeFailure]


def exit_status(result: ProbeResult) -> int:
    """Process exit status for a result; negative codes wrap like os._exit would."""
    return result.code & 0xFF


__all__ = ["ProbeFailure", "ProbeResult", "ProbeSuccess", "SUCCESS_MESSAGE", "exit_status"]
