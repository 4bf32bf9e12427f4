"""The classic stroke game: 2/9/16 points and its Front/Back/Total pot."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType

from .pairwise import pairwise_net
from .primitives import (
    DomainValidationError,
    NetPosition,
    PlayerId,
    Points,
    ensure_hole,
    ensure_known_players,
    tally_holes,
)
from .segments import SEGMENT_HOLES, Segment, segment_pot_net

GAME_NAME = "points"

# Tie pattern (group sizes from lowest strokes up) -> points per group member.
# Each hole hands out 2, 9 or 16 points for 2, 3 or 4 players.
_POINT_TABLE: dict[tuple[int, ...], tuple[Points, ...]] = {
    (2,): (1,),
    (1, 1): (2, 0),
    (3,): (3,),
    (2, 1): (4, 1),
    (1, 2): (5, 2),
    (1, 1, 1): (5, 3, 1),
    (4,): (4,),
    (3, 1): (5, 1),
    (2, 2): (5, 3),
    (1, 3): (7, 3),
    (2, 1, 1): (6, 3, 1),
    (1, 2, 1): (7, 4, 1),
    (1, 1, 2): (8, 5, Decimal("1.5")),
    (1, 1, 1, 1): (7, 5, 3, 1),
}


def allocate_hole_points(strokes: Mapping[PlayerId, int]) -> dict[PlayerId, Points]:
    """Turn one hole's strokes into 2/9/16 points (fewest strokes scores most)."""
    if len(strokes) > 4:
        raise DomainValidationError("2/9/16 points support at most 4 players per hole")
    if len(strokes) < 2:
        return {player: 0 for player in strokes}

    groups: dict[int, list[PlayerId]] = {}
    for player, value in strokes.items():
        groups.setdefault(value, []).append(player)
    ordered = [groups[value] for value in sorted(groups)]

    awards = _POINT_TABLE[tuple(len(group) for group in ordered)]
    points: dict[PlayerId, Points] = {}
    for group, award in zip(ordered, awards):
        for player in group:
            points[player] = award
    return {player: points[player] for player in strokes}


def _freeze_holes(holes: Mapping[int, Mapping[PlayerId, object]]) -> Mapping[int, Mapping[PlayerId, object]]:
    return MappingProxyType({ensure_hole(hole): MappingProxyType(dict(entries)) for hole, entries in holes.items()})


@dataclass(frozen=True)
class StrokeGameData:
    """Per-hole strokes and/or per-hole points already resolved upstream.

    A hole with explicit points uses them; a hole with strokes only is
    converted through the 2/9/16 table.
    """

    strokes: Mapping[int, Mapping[PlayerId, int]] = field(default_factory=dict)
    points: Mapping[int, Mapping[PlayerId, Points]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for entries in self.strokes.values():
            for player, value in entries.items():
                if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                    raise DomainValidationError(f"strokes for {player} must be a positive integer")
        for entries in self.points.values():
            for player, value in entries.items():
                if isinstance(value, (bool, float)) or not isinstance(value, (int, Decimal)):
                    raise DomainValidationError(f"points for {player} must be an integer or Decimal")
        object.__setattr__(self, "strokes", _freeze_holes(self.strokes))
        object.__setattr__(self, "points", _freeze_holes(self.points))

    def player_ids(self) -> set[PlayerId]:
        players: set[PlayerId] = set()
        for entries in [*self.strokes.values(), *self.points.values()]:
            players.update(entries)
        return players

    def hole_points(self) -> dict[int, dict[PlayerId, Points]]:
        result: dict[int, dict[PlayerId, Points]] = {}
        for hole in sorted(set(self.strokes) | set(self.points)):
            if hole in self.points:
                result[hole] = dict(self.points[hole])
            else:
                result[hole] = allocate_hole_points(self.strokes[hole])
        return result

    def segment_scores(self) -> dict[Segment, dict[PlayerId, Points]]:
        """Negated stroke totals per segment, so the best round scores highest.

        Only holes posted by every player in the segment count, so a partly
        scored round is compared like for like. Segments with no stroke
        entries fall back to point totals.
        """
        hole_points = self.hole_points()
        scores: dict[Segment, dict[PlayerId, Points]] = {}
        for segment, holes in SEGMENT_HOLES.items():
            played = {hole: self.strokes[hole] for hole in holes if hole in self.strokes}
            if not played:
                scores[segment] = tally_holes(hole_points, holes=holes)
                continue
            participants = list(dict.fromkeys(player for hole in sorted(played) for player in played[hole]))
            shared = {hole: entries for hole, entries in played.items() if set(participants) <= set(entries)}
            strokes = tally_holes(shared, holes=holes, participants=participants)
            scores[segment] = {player: -total for player, total in strokes.items()}
        return scores


def points_net(game: StrokeGameData, unit_value: int, roster: Iterable[PlayerId] | None = None) -> NetPosition:
    ensure_known_players(game.player_ids(), roster, game=GAME_NAME)
    return pairwise_net(tally_holes(game.hole_points()), unit_value)


def stroke_segment_net(game: StrokeGameData, pot: int, roster: Iterable[PlayerId] | None = None) -> NetPosition:
    ensure_known_players(game.player_ids(), roster, game=GAME_NAME)
    return segment_pot_net(game.segment_scores(), pot)
