"""Sample player that walks to the nearest edible food and remembers its target."""

from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional

from pelita_adapter.protocol.models import Position, WorldSnapshot
from pelita_adapter.registry import register_player
from pelita_adapter.runtime.session_store import SessionHandle


_STEPS = ((0, -1), (0, 1), (-1, 0), (1, 0))


def _neighbours(snapshot: WorldSnapshot, pos: Position) -> List[Position]:
    width, height = snapshot.shape
    result = []
    for dx, dy in _STEPS:
        x, y = pos.x + dx, pos.y + dy
        if 0 <= x < width and 0 <= y < height and (x, y) not in snapshot.walls:
            result.append(Position(x, y))
    return result


def _shortest_path(snapshot: WorldSnapshot, start: Position, goals: set) -> Optional[List[Position]]:
    parents: Dict[Position, Optional[Position]] = {start: None}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        if current in goals:
            path = []
            while current is not None:
                path.append(current)
                current = parents[current]
            return path[::-1]
        for neighbour in _neighbours(snapshot, current):
            if neighbour not in parents:
                parents[neighbour] = current
                queue.append(neighbour)
    return None


def decide(snapshot: WorldSnapshot, session: SessionHandle) -> Position:
    bot = snapshot.acting_bot
    edible = set(snapshot.enemies[0].food)
    targets: Dict[int, Position] = session.value["targets"]

    target = targets.get(bot.turn)
    goals = {target} if target in edible else edible
    path = _shortest_path(snapshot, bot.position, goals) if goals else None
    if not path:
        targets.pop(bot.turn, None)
        bot.say("nothing left")
        return bot.legal_positions[0]

    targets[bot.turn] = path[-1]
    bot.say(f"food at {tuple(path[-1])}")
    if len(path) > 1 and path[1] in bot.legal_positions:
        return path[1]
    return bot.legal_positions[0]


def _new_memory() -> dict:
    return {"targets": {}}


register_player("Nearest Food", decide, _new_memory).install(globals())
