"""Shared type aliases for the core and domain layers."""
from typing import Literal

SessionStatus = Literal["active", "ended", "aborted"]
AbortReason = Literal["NODE_NOT_FOUND", "INPUT_CLOSED"]
Severity = Literal["ERROR", "WARN"]

__all__ = ["AbortReason", "SessionStatus", "Severity"]
