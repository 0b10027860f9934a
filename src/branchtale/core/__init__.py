"""Core shared helpers."""

from .types import AbortReason, SessionStatus, Severity

__all__ = ["AbortReason", "SessionStatus", "Severity"]
