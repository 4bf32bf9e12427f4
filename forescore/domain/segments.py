"""Front / Back / Total fixed-pot segments (a.k.a. Nassau or FBT)."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum

from .primitives import NetPosition, PlayerId, Points, split_evenly, tally_holes


class Segment(str, Enum):
    FRONT = "front"
    BACK = "back"
    TOTAL = "total"


SEGMENT_HOLES: dict[Segment, range] = {
    Segment.FRONT: range(1, 10),
    Segment.BACK: range(10, 19),
    Segment.TOTAL: range(1, 19),
}


def segment_scores(
    hole_values: Mapping[int, Mapping[PlayerId, Points]],
    participants: Iterable[PlayerId] | None = None,
) -> dict[Segment, dict[PlayerId, Points]]:
    players = list(participants) if participants is not None else None
    return {
        segment: tally_holes(hole_values, holes=holes, participants=players)
        for segment, holes in SEGMENT_HOLES.items()
    }


def single_segment_net(scores: Mapping[PlayerId, Points], pot: int) -> NetPosition:
    """Highest score takes the pot; a full tie voids the segment."""
    players = list(scores)
    net = {player: 0 for player in players}
    if pot <= 0 or not players:
        return NetPosition(net)

    best = max(scores.values())
    winners = [player for player in players if scores[player] == best]
    losers = [player for player in players if scores[player] != best]
    if not losers:
        return NetPosition(net)

    for player, amount in split_evenly(pot, winners).items():
        net[player] += amount
    for player, amount in split_evenly(pot, losers).items():
        net[player] -= amount
    return NetPosition(net)


def segment_pot_net(segments: Mapping[Segment, Mapping[PlayerId, Points]], pot: int) -> NetPosition:
    net: dict[PlayerId, int] = {}
    for segment in Segment:
        scores = segments.get(segment, {})
        for player, amount in single_segment_net(scores, pot).items():
            net[player] = net.get(player, 0) + amount
    return NetPosition(net)
