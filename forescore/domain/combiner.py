from __future__ import annotations

from collections.abc import Iterable, Mapping

from .primitives import NetPosition, PlayerId


def combine_positions(positions: Mapping[str, NetPosition] | Iterable[NetPosition]) -> NetPosition:
    """Add positions together by player id.

    Every input and the result must be exactly zero-sum; a mapping input
    names the offending game in the raised ``InvariantViolation``.
    """
    if isinstance(positions, Mapping):
        labelled = [(str(label), position) for label, position in positions.items()]
    else:
        labelled = [(f"position[{idx}]", position) for idx, position in enumerate(positions)]

    combined: dict[PlayerId, int] = {}
    for label, position in labelled:
        position.ensure_balanced(game=label)
        for player, amount in position.items():
            combined[player] = combined.get(player, 0) + amount

    return NetPosition(combined).ensure_balanced(game="combined")
