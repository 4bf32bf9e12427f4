"""Bingo-Bango-Bongo: one point per category won on each hole."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from .pairwise import pairwise_net
from .primitives import NetPosition, PlayerId, ensure_hole, ensure_known_players, tally_holes
from .segments import segment_pot_net, segment_scores

GAME_NAME = "bbb"


class BBBCategory(str, Enum):
    FIRST_ON = "first_on"
    CLOSEST_TO = "closest_to"
    FIRST_IN = "first_in"


def _winner(value: str | None) -> PlayerId | None:
    if value is None:
        return None
    value = value.strip()
    if not value or value.lower() == "none":
        return None
    return value


@dataclass(frozen=True)
class BBBHole:
    first_on: PlayerId | None = None
    closest_to: PlayerId | None = None
    first_in: PlayerId | None = None

    def __post_init__(self) -> None:
        for category in BBBCategory:
            object.__setattr__(self, category.value, _winner(getattr(self, category.value)))

    def winners(self) -> list[PlayerId]:
        return [winner for winner in (self.first_on, self.closest_to, self.first_in) if winner is not None]


@dataclass(frozen=True)
class BBBGameData:
    holes: Mapping[int, BBBHole] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "holes", MappingProxyType({ensure_hole(hole): entry for hole, entry in self.holes.items()}))

    def player_ids(self) -> set[PlayerId]:
        return {winner for entry in self.holes.values() for winner in entry.winners()}

    def hole_points(self) -> dict[int, dict[PlayerId, int]]:
        result: dict[int, dict[PlayerId, int]] = {}
        for hole in sorted(self.holes):
            points: dict[PlayerId, int] = {}
            for winner in self.holes[hole].winners():
                points[winner] = points.get(winner, 0) + 1
            result[hole] = points
        return result


def _participants(game: BBBGameData, roster: Iterable[PlayerId] | None) -> list[PlayerId]:
    # Everyone on the roster is in the game once a hole has been recorded.
    if not game.holes:
        return []
    if roster is None:
        return sorted(game.player_ids())
    return list(roster)


def bbb_points_net(game: BBBGameData, unit_value: int, roster: Iterable[PlayerId] | None = None) -> NetPosition:
    roster = list(roster) if roster is not None else None
    ensure_known_players(game.player_ids(), roster, game=GAME_NAME)
    totals = tally_holes(game.hole_points(), participants=_participants(game, roster))
    return pairwise_net(totals, unit_value)


def bbb_segment_net(game: BBBGameData, pot: int, roster: Iterable[PlayerId] | None = None) -> NetPosition:
    roster = list(roster) if roster is not None else None
    ensure_known_players(game.player_ids(), roster, game=GAME_NAME)
    return segment_pot_net(segment_scores(game.hole_points(), participants=_participants(game, roster)), pot)
