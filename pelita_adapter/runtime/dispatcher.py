
"""Per-turn move dispatcher between the host engine and a decision routine."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from pelita_adapter.players.base import DecisionRoutine
from pelita_adapter.protocol.errors import AdapterError, DecisionError, IllegalMoveError, SnapshotError
from pelita_adapter.protocol.models import Position
from pelita_adapter.runtime.serialization import snapshot_to_dict, state_hash
from pelita_adapter.runtime.session_store import PlayerSession
from pelita_adapter.runtime.snapshot import build_snapshot


logger = logging.getLogger(__name__)

ANNOUNCEMENT_FIELD = "_say"

_position_adapter = TypeAdapter(Position)


def write_announcement(raw_state: Any, text: str) -> None:
    if isinstance(raw_state, MutableMapping):
        raw_state[ANNOUNCEMENT_FIELD] = text
    else:
        setattr(raw_state, ANNOUNCEMENT_FIELD, text)


class MoveDispatcher:
    def __init__(
        self,
        decide: DecisionRoutine,
        session: Optional[PlayerSession] = None,
        *,
        check_legal_moves: bool = True,
    ):
        self.decide = decide
        self.session = session or PlayerSession()
        self.check_legal_moves = check_legal_moves

    def _coerce_position(self, chosen: Any) -> Position:
        try:
            return _position_adapter.validate_python(chosen)
        except ValidationError as exc:
            raise DecisionError(f"Decision routine returned {chosen!r}, not a position") from exc

    def handle_move(self, raw_state: Any) -> Position:
        try:
            snapshot = build_snapshot(raw_state)
        except SnapshotError:
            logger.exception("Aborting turn: host state could not be converted")
            raise

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "round=%s turn=%s snapshot=%s",
                snapshot.round,
                snapshot.turn,
                state_hash(snapshot_to_dict(snapshot))[:12],
            )

        bot = snapshot.acting_bot
        with self.session.acquire() as handle:
            try:
                chosen = self.decide(snapshot, handle)
            except AdapterError:
                raise
            except Exception as exc:
                logger.error("Decision routine %r failed: %s", self.decide, exc)
                raise DecisionError(f"Decision routine failed: {exc}") from exc

            text = bot.announcement
            if text is not None:
                write_announcement(raw_state, text)

            position = self._coerce_position(chosen)
            if self.check_legal_moves and position not in bot.legal_positions:
                logger.error("Decision routine chose %s outside %s", tuple(position), list(bot.legal_positions))
                raise IllegalMoveError(position, bot.legal_positions)

        logger.debug("round=%s turn=%s move=%s say=%r", snapshot.round, snapshot.turn, tuple(position), text)
        return position
