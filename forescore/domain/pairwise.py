from __future__ import annotations

from collections.abc import Mapping

from .primitives import NetPosition, PlayerId, Points, to_minor_units


def pairwise_net(totals: Mapping[PlayerId, Points], unit_value: int) -> NetPosition:
    """Settle every pair of players on the difference of their point totals.

    For each unordered pair the leader receives ``diff * unit_value`` from the
    other. A non-positive ``unit_value`` disables the game and yields zeros.
    """
    players = list(totals)
    net = {player: 0 for player in players}
    if unit_value <= 0:
        return NetPosition(net)

    for idx, first in enumerate(players):
        for second in players[idx + 1 :]:
            diff = totals[first] - totals[second]
            if diff == 0:
                continue
            amount = to_minor_units(abs(diff) * unit_value)
            winner, loser = (first, second) if diff > 0 else (second, first)
            net[winner] += amount
            net[loser] -= amount

    return NetPosition(net)
