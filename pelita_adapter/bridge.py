"""Bootstrap bridge: layout parsing and driving a game through the host engine.

Layouts use the host's text format: `#` is a wall, `.` is food, space is free
and the four bots are marked `0`-`3` (or `a`, `x`, `b`, `y`). Bots 0 and 2
play on the blue team, 1 and 3 on the red team.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, Field

from pelita_adapter.protocol.models import Position, Shape


logger = logging.getLogger(__name__)

WALL = "#"
FOOD = "."
FREE = " "
BOT_MARKERS = {"0": 0, "1": 1, "2": 2, "3": 3, "a": 0, "x": 1, "b": 2, "y": 3}

Runner = Callable[..., Any]


class LayoutError(ValueError):
    pass


class Layout(BaseModel):
    walls: FrozenSet[Position]
    food: Tuple[Position, ...]
    shape: Shape
    bots: Tuple[Position, Position, Position, Position]
    name: str = Field(default="")

    class Config:
        frozen = True
        extra = "forbid"

    def to_host_dict(self) -> Dict[str, Any]:
        return {
            "walls": sorted(tuple(pos) for pos in self.walls),
            "food": [tuple(pos) for pos in self.food],
            "bots": [tuple(pos) for pos in self.bots],
            "shape": tuple(self.shape),
        }


def _layout_rows(text: str) -> List[str]:
    rows = [line.rstrip("\n") for line in text.splitlines()]
    while rows and not rows[0].strip():
        rows.pop(0)
    while rows and not rows[-1].strip():
        rows.pop()
    return rows


def parse_layout(text: str, name: str = "") -> Layout:
    rows = _layout_rows(text)
    if not rows:
        raise LayoutError("Layout is empty")

    width = len(rows[0])
    for y, row in enumerate(rows):
        if len(row) != width:
            raise LayoutError(f"Row {y} has width {len(row)}, expected {width}")

    walls: List[Position] = []
    food: List[Position] = []
    bots: List[Optional[Position]] = [None, None, None, None]

    for y, row in enumerate(rows):
        for x, char in enumerate(row):
            pos = Position(x, y)
            if char == WALL:
                walls.append(pos)
            elif char == FOOD:
                food.append(pos)
            elif char in BOT_MARKERS:
                index = BOT_MARKERS[char]
                if bots[index] is not None:
                    raise LayoutError(f"Bot {index} appears more than once")
                bots[index] = pos
            elif char != FREE:
                raise LayoutError(f"Unknown layout character {char!r} at {(x, y)}")

    height = len(rows)
    wall_set = frozenset(walls)
    for x in range(width):
        for y in (0, height - 1):
            if (x, y) not in wall_set:
                raise LayoutError(f"Border cell {(x, y)} is not a wall")
    for y in range(height):
        for x in (0, width - 1):
            if (x, y) not in wall_set:
                raise LayoutError(f"Border cell {(x, y)} is not a wall")

    missing = [index for index, pos in enumerate(bots) if pos is None]
    if missing:
        raise LayoutError(f"Layout is missing bots {missing}")

    return Layout(walls=wall_set, food=tuple(food), shape=Shape(width, height), bots=tuple(bots), name=name)


def load_layout(path: str) -> Layout:
    layout_path = Path(path)
    return parse_layout(layout_path.read_text(encoding="utf-8"), name=layout_path.stem)


def _default_runner() -> Runner:
    from pelita.game import run_game as pelita_run_game

    return pelita_run_game


def run_game(
    layout: Layout,
    blue: Any,
    red: Any,
    *,
    max_rounds: int = 300,
    team_names: Tuple[Optional[str], Optional[str]] = (None, None),
    runner: Optional[Runner] = None,
) -> Any:
    if max_rounds <= 0:
        raise ValueError("max_rounds must be positive")
    runner = runner or _default_runner()
    names = tuple(
        name if name is not None else getattr(spec, "team_name", None)
        for name, spec in zip(team_names, (blue, red))
    )
    logger.info("Starting game on layout %r for %d rounds", layout.name or "<unnamed>", max_rounds)
    return runner(
        [blue, red],
        layout_dict=layout.to_host_dict(),
        max_rounds=max_rounds,
        team_names=names,
    )
