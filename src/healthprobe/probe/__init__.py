# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from .engine import NO_INTERFACE_MESSAGE, ProbeEngine

__all__ = ["NO_INTERFACE_MESSAGE", "ProbeEngine"]
