from pelita_adapter.protocol.errors import (
    DECISION_FAILED,
    EXTRACTION_FAILED,
    ILLEGAL_MOVE,
    SESSION_TIMEOUT,
    AdapterError,
    DecisionError,
    IllegalMoveError,
    SessionTimeoutError,
    SnapshotError,
)
from pelita_adapter.protocol.models import (
    ActingBot,
    EnemyBot,
    Position,
    Shape,
    TeammateBot,
    WorldSnapshot,
)

__all__ = [
    "DECISION_FAILED",
    "EXTRACTION_FAILED",
    "ILLEGAL_MOVE",
    "SESSION_TIMEOUT",
    "ActingBot",
    "AdapterError",
    "DecisionError",
    "EnemyBot",
    "IllegalMoveError",
    "Position",
    "SessionTimeoutError",
    "Shape",
    "SnapshotError",
    "TeammateBot",
    "WorldSnapshot",
]
