
"""Typed per-turn world snapshot and bot records."""

from __future__ import annotations

from typing import Annotated, FrozenSet, Iterable, NamedTuple, Optional, Tuple

from pydantic import BaseModel, Field, PrivateAttr, StrictBool, StrictInt, model_validator

from pelita_adapter.runtime.announcement import AnnouncementSlot


Coordinate = Annotated[StrictInt, Field(ge=0)]
Extent = Annotated[StrictInt, Field(gt=0)]
Counter = Annotated[StrictInt, Field(ge=0)]


class Position(NamedTuple):
    x: Coordinate
    y: Coordinate


class Shape(NamedTuple):
    width: Extent
    height: Extent

    def contains(self, position: Position) -> bool:
        x, y = position
        return 0 <= x < self.width and 0 <= y < self.height


class _HostRecord(BaseModel):
    class Config:
        extra = "ignore"
        frozen = True
        from_attributes = True
        populate_by_name = True


class TeammateBot(_HostRecord):
    """Partial record of the allied bot."""

    position: Position
    initial_position: Position = Field(alias="_initial_position")
    legal_positions: Tuple[Position, ...] = ()
    is_blue: StrictBool
    turn: Counter
    score: Counter


class EnemyBot(_HostRecord):
    """Partial record of an enemy bot.

    When `is_noisy` is set the host has blurred `position`; it is passed on
    exactly as received.
    """

    position: Position
    initial_position: Position = Field(alias="_initial_position")
    is_noisy: StrictBool
    legal_positions: Tuple[Position, ...] = ()
    food: Tuple[Position, ...]
    is_blue: StrictBool
    turn: Counter
    score: Counter


class ActingBot(_HostRecord):
    """Full record of the bot whose move is requested.

    Carries a write-once announcement slot: the first `say()` of a turn wins.
    """

    position: Position
    initial_position: Position = Field(alias="_initial_position")
    legal_positions: Tuple[Position, ...] = Field(min_length=1)
    is_blue: StrictBool
    turn: Counter
    score: Counter

    _announcement: AnnouncementSlot = PrivateAttr(default_factory=AnnouncementSlot)

    def say(self, text: str) -> None:
        self._announcement.announce(text)

    @property
    def announcement(self) -> Optional[str]:
        return self._announcement.read()


class WorldSnapshot(_HostRecord):
    walls: FrozenSet[Position]
    food: Tuple[Position, ...]
    shape: Shape
    acting_bot: ActingBot
    teammate: TeammateBot = Field(alias="other")
    enemies: Tuple[EnemyBot, ...] = Field(alias="enemy", min_length=1)
    turn: Counter
    round: Optional[Counter]
    score: Counter

    @model_validator(mode="after")
    def _check_geometry(self) -> "WorldSnapshot":
        bot = self.acting_bot
        _check_bounds(self.shape, "walls", self.walls)
        _check_bounds(self.shape, "food", self.food)
        _check_bounds(
            self.shape,
            "acting_bot",
            (bot.position, bot.initial_position, *bot.legal_positions),
        )
        _check_bounds(
            self.shape,
            "other",
            (self.teammate.position, self.teammate.initial_position, *self.teammate.legal_positions),
        )
        for index, enemy in enumerate(self.enemies):
            _check_bounds(
                self.shape,
                f"enemy.{index}",
                (enemy.position, enemy.initial_position, *enemy.legal_positions, *enemy.food),
            )

        if bot.position in self.walls:
            raise ValueError(f"acting bot position {tuple(bot.position)} is a wall")
        blocked = [tuple(pos) for pos in bot.legal_positions if pos in self.walls]
        if blocked:
            raise ValueError(f"legal positions {blocked} are walls")
        return self

    def is_wall(self, position: Iterable[int]) -> bool:
        return tuple(position) in self.walls


def _check_bounds(shape: Shape, field: str, positions: Iterable[Position]) -> None:
    outside = [tuple(pos) for pos in positions if not shape.contains(pos)]
    if outside:
        raise ValueError(f"{field}: positions {outside} lie outside shape {tuple(shape)}")
