"""Decision routine contract.

A decision routine receives the validated snapshot and a handle to the
player's persistent session. It returns one of
`snapshot.acting_bot.legal_positions` and may call
`snapshot.acting_bot.say()` to announce a caption for this turn. Routines
must not keep the handle beyond the call.
"""

from __future__ import annotations

from typing import Protocol

from pelita_adapter.protocol.models import Position, WorldSnapshot
from pelita_adapter.runtime.session_store import SessionHandle


class DecisionRoutine(Protocol):
    def __call__(self, snapshot: WorldSnapshot, session: SessionHandle) -> Position:
        ...
