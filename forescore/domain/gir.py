"""Greens in regulation, with penalty and bonus holes."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet

from .pairwise import pairwise_net
from .primitives import (
    DomainValidationError,
    NetPosition,
    PlayerId,
    ensure_hole,
    ensure_known_players,
    tally_holes,
)
from .segments import segment_pot_net, segment_scores

GAME_NAME = "gir"

DEFAULT_PENALTY_HOLES = frozenset({1, 8, 13, 16})
DEFAULT_BONUS_HOLES = frozenset({6, 9, 17, 18})


class GIRPayoutMode(str, Enum):
    POINTS = "points"
    SEGMENT_POT = "segment_pot"


@dataclass(frozen=True)
class HoleConfiguration:
    penalty_holes: FrozenSet[int] = DEFAULT_PENALTY_HOLES
    bonus_holes: FrozenSet[int] = DEFAULT_BONUS_HOLES

    def __post_init__(self) -> None:
        penalty = frozenset(ensure_hole(hole) for hole in self.penalty_holes)
        bonus = frozenset(ensure_hole(hole) for hole in self.bonus_holes)
        overlap = penalty & bonus
        if overlap:
            holes = ", ".join(str(hole) for hole in sorted(overlap))
            raise DomainValidationError(f"holes cannot be both penalty and bonus: {holes}")
        object.__setattr__(self, "penalty_holes", penalty)
        object.__setattr__(self, "bonus_holes", bonus)

    def hole_delta(self, hole: int, hit: bool) -> int:
        if hole in self.penalty_holes:
            return 1 if hit else -1
        if hole in self.bonus_holes:
            return 2 if hit else 0
        return 1 if hit else 0


@dataclass(frozen=True)
class GIRGameData:
    holes: Mapping[int, Mapping[PlayerId, bool]] = field(default_factory=dict)
    configuration: HoleConfiguration = field(default_factory=HoleConfiguration)

    def __post_init__(self) -> None:
        for entries in self.holes.values():
            for player, hit in entries.items():
                if not isinstance(hit, bool):
                    raise DomainValidationError(f"GIR mark for {player} must be true or false")
        frozen = {ensure_hole(hole): MappingProxyType(dict(entries)) for hole, entries in self.holes.items()}
        object.__setattr__(self, "holes", MappingProxyType(frozen))

    def player_ids(self) -> set[PlayerId]:
        return {player for entries in self.holes.values() for player in entries}

    def hole_points(self) -> dict[int, dict[PlayerId, int]]:
        return {
            hole: {player: self.configuration.hole_delta(hole, hit) for player, hit in self.holes[hole].items()}
            for hole in sorted(self.holes)
        }


def gir_points_net(game: GIRGameData, unit_value: int, roster: Iterable[PlayerId] | None = None) -> NetPosition:
    ensure_known_players(game.player_ids(), roster, game=GAME_NAME)
    return pairwise_net(tally_holes(game.hole_points()), unit_value)


def gir_segment_net(game: GIRGameData, pot: int, roster: Iterable[PlayerId] | None = None) -> NetPosition:
    ensure_known_players(game.player_ids(), roster, game=GAME_NAME)
    return segment_pot_net(segment_scores(game.hole_points()), pot)
