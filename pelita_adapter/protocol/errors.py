"""Error codes and exception types raised across the adapter boundary.

Every failure here is fatal for the current turn: the exception propagates out
of the host-callable entry point and the host records a failed move. The
adapter never substitutes a default move.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple


EXTRACTION_FAILED = "EXTRACTION_FAILED"
DECISION_FAILED = "DECISION_FAILED"
ILLEGAL_MOVE = "ILLEGAL_MOVE"
SESSION_TIMEOUT = "SESSION_TIMEOUT"


class AdapterError(Exception):
    code = "ADAPTER_ERROR"


class SnapshotError(AdapterError):
    """The host state is missing a field or a field has the wrong shape."""

    code = EXTRACTION_FAILED

    def __init__(self, message: str, locations: Optional[List[Tuple[Any, ...]]] = None):
        super().__init__(message)
        self.locations = locations or []

    @classmethod
    def from_validation_error(cls, exc: Exception) -> "SnapshotError":
        errors = exc.errors() if hasattr(exc, "errors") else []
        locations = [tuple(error.get("loc", ())) for error in errors]
        details = "; ".join(
            f"{'.'.join(str(part) for part in error.get('loc', ())) or '<root>'}: {error.get('msg')}"
            for error in errors
        )
        return cls(f"Malformed host state ({len(errors)} error(s)): {details}", locations)


class DecisionError(AdapterError):
    """The decision routine failed or produced an unusable result."""

    code = DECISION_FAILED


class IllegalMoveError(DecisionError):
    code = ILLEGAL_MOVE

    def __init__(self, position: Any, legal_positions: Any):
        super().__init__(f"Chosen position {position!r} is not one of {list(legal_positions)!r}")
        self.position = position
        self.legal_positions = legal_positions


class SessionTimeoutError(DecisionError):
    code = SESSION_TIMEOUT
