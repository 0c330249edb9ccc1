
"""Player registration and loading."""

from __future__ import annotations

import importlib
import logging
from typing import Any, Callable, MutableMapping, Optional

from pelita_adapter.config import AdapterConfig, load_config
from pelita_adapter.players.base import DecisionRoutine
from pelita_adapter.protocol.models import Position
from pelita_adapter.runtime.dispatcher import MoveDispatcher
from pelita_adapter.runtime.session_store import PlayerSession


logger = logging.getLogger(__name__)

REQUIRED_PLAYER_ATTRIBUTES = ("TEAM_NAME", "move")


class PlayerAdapter:
    """Host-callable move entry point for one team.

    Called by the host as `adapter(bot, state)`; the host's own `state` dict
    is not used, player state lives in the adapter's session instead.
    """

    def __init__(self, team_name: str, dispatcher: MoveDispatcher):
        self.team_name = team_name
        self.__name__ = team_name
        self.dispatcher = dispatcher

    @property
    def session(self) -> PlayerSession:
        return self.dispatcher.session

    def __call__(self, bot: Any, state: Any = None) -> Position:
        return self.dispatcher.handle_move(bot)

    def install(self, namespace: MutableMapping[str, Any]) -> "PlayerAdapter":
        namespace["TEAM_NAME"] = self.team_name
        namespace["move"] = self
        return self

    def __repr__(self) -> str:
        return f"PlayerAdapter(team_name={self.team_name!r})"


def register_player(
    team_name: str,
    decide: DecisionRoutine,
    session_factory: Optional[Callable[[], Any]] = None,
    *,
    config: Optional[AdapterConfig] = None,
) -> PlayerAdapter:
    name = (team_name or "").strip()
    if not name:
        raise ValueError("Team name cannot be empty")
    if not callable(decide):
        raise TypeError("decide must be callable")

    config = config or load_config()
    session = PlayerSession(session_factory, lock_timeout=config.lock_timeout)
    dispatcher = MoveDispatcher(decide, session, check_legal_moves=config.check_legal_moves)
    logger.debug("Registered player %r", name)
    return PlayerAdapter(name, dispatcher)


def _validate_player(module: object) -> None:
    for attribute in REQUIRED_PLAYER_ATTRIBUTES:
        if not hasattr(module, attribute):
            raise TypeError(f"missing required attribute: {attribute}")

    team_name = getattr(module, "TEAM_NAME")
    if not isinstance(team_name, str) or not team_name.strip():
        raise ValueError("TEAM_NAME must be a non-empty string")
    if not callable(getattr(module, "move")):
        raise TypeError("move must be callable")


def load_player(module_name: str) -> Any:
    module = importlib.import_module(module_name.strip())
    _validate_player(module)
    return module
