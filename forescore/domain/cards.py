"""Penalty-card game and the two-phase "pay-up" settlement.

Players collect penalty cards during the round; each card carries a value and
a player's debt is the sum of the cards they currently hold. Settlement:

1. ``net_pot = total_debt - min_debt`` and ``threshold = min_debt + 0.4 * net_pot``.
2. Phase 1 (pay up): every player above the minimum whose debt is within the
   threshold pays their whole debt to the minimum holder(s).
3. Phase 2: the debts of the players above the threshold are pooled and
   shared evenly among everyone settled in phase 1, minimum holders included.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from types import MappingProxyType
from typing import Tuple

from .primitives import (
    DomainValidationError,
    NetPosition,
    PlayerId,
    ensure_known_players,
    normalize_player,
    split_evenly,
)

GAME_NAME = "cards"

CUSTOM_CARD = "custom"
DEFAULT_CARD_TYPES = ("camel", "fish", "roadrunner", "ghost", "skunk", "snake", "yeti")

PAY_UP_RATIO = Fraction(2, 5)


@dataclass(frozen=True)
class CardAssignment:
    card_id: str
    card_type: str
    value: int
    player_id: PlayerId
    timestamp: datetime | None = None
    card_name: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int) or self.value <= 0:
            raise DomainValidationError(f"card {self.card_id} value must be a positive integer")
        object.__setattr__(self, "player_id", normalize_player(self.player_id))

    def current_value(self, card_values: Mapping[str, int]) -> int:
        """Value after applying the group's current card values."""
        if self.card_type == CUSTOM_CARD:
            name = self.card_name or ""
            for key in (name, name.lower()):
                if key and key in card_values:
                    return card_values[key]
            return self.value
        return card_values.get(self.card_type, self.value)


@dataclass(frozen=True)
class CardGameData:
    """Resolved current holder of every card (latest assignment wins upstream)."""

    assignments: Mapping[str, CardAssignment] = field(default_factory=dict)
    card_values: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for card_id, assignment in self.assignments.items():
            if card_id != assignment.card_id:
                raise DomainValidationError(f"assignment keyed as {card_id} is for card {assignment.card_id}")
        for key, value in self.card_values.items():
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise DomainValidationError(f"card value for {key} must be a non-negative integer")
        object.__setattr__(self, "assignments", MappingProxyType(dict(self.assignments)))
        object.__setattr__(self, "card_values", MappingProxyType(dict(self.card_values)))

    def player_ids(self) -> set[PlayerId]:
        return {assignment.player_id for assignment in self.assignments.values()}

    def debts(self, roster: Iterable[PlayerId] | None = None) -> dict[PlayerId, int]:
        """Card debt per player; roster players without cards owe 0."""
        roster = list(roster) if roster is not None else None
        ensure_known_players(self.player_ids(), roster, game=GAME_NAME)
        debts = {player: 0 for player in roster or ()}
        for card_id in sorted(self.assignments):
            assignment = self.assignments[card_id]
            debts[assignment.player_id] = debts.get(assignment.player_id, 0) + assignment.current_value(self.card_values)
        return debts


class CardRole(str, Enum):
    MINIMUM = "minimum"
    PAY_UP = "pay_up"
    LARGE_DEBTOR = "large_debtor"


@dataclass(frozen=True)
class CardPlayerBreakdown:
    player_id: PlayerId
    debt: int
    role: CardRole
    paid: int = 0
    received: int = 0
    share: int = 0

    @property
    def net(self) -> int:
        return self.received + self.share - self.paid

    def to_dict(self) -> dict[str, object]:
        return {
            "player_id": self.player_id,
            "debt": self.debt,
            "role": self.role.value,
            "paid": self.paid,
            "received": self.received,
            "share": self.share,
            "net": self.net,
        }


@dataclass(frozen=True)
class CardGameBreakdown:
    total_pot: int
    min_debt: int
    net_pot: int
    pay_up_threshold: Decimal
    players: Tuple[CardPlayerBreakdown, ...] = ()

    def net_position(self) -> NetPosition:
        return NetPosition({entry.player_id: entry.net for entry in self.players})

    def to_dict(self) -> dict[str, object]:
        return {
            "total_pot": self.total_pot,
            "min_debt": self.min_debt,
            "net_pot": self.net_pot,
            "pay_up_threshold": str(self.pay_up_threshold),
            "players": [entry.to_dict() for entry in self.players],
        }


def pay_up(debts: Mapping[PlayerId, int]) -> CardGameBreakdown:
    if not debts:
        return CardGameBreakdown(total_pot=0, min_debt=0, net_pot=0, pay_up_threshold=Decimal(0))
    for player, debt in debts.items():
        if debt < 0:
            raise DomainValidationError(f"card debt for {player} cannot be negative")

    total_debt = sum(debts.values())
    min_debt = min(debts.values())
    net_pot = total_debt - min_debt
    threshold = Decimal(min_debt) + Decimal(PAY_UP_RATIO.numerator) / Decimal(PAY_UP_RATIO.denominator) * net_pot

    roles: dict[PlayerId, CardRole] = {}
    for player, debt in debts.items():
        if debt == min_debt:
            roles[player] = CardRole.MINIMUM
        elif (debt - min_debt) * PAY_UP_RATIO.denominator <= net_pot * PAY_UP_RATIO.numerator:
            roles[player] = CardRole.PAY_UP
        else:
            roles[player] = CardRole.LARGE_DEBTOR

    minimum = [player for player, role in roles.items() if role is CardRole.MINIMUM]
    settled = [player for player, role in roles.items() if role is not CardRole.LARGE_DEBTOR]
    pay_up_total = sum(debts[player] for player, role in roles.items() if role is CardRole.PAY_UP)
    remainder = sum(debts[player] for player, role in roles.items() if role is CardRole.LARGE_DEBTOR)

    received = split_evenly(pay_up_total, minimum)
    shares = split_evenly(remainder, settled)

    players = []
    for player, debt in debts.items():
        role = roles[player]
        players.append(
            CardPlayerBreakdown(
                player_id=player,
                debt=debt,
                role=role,
                paid=0 if role is CardRole.MINIMUM else debt,
                received=received.get(player, 0),
                share=shares.get(player, 0),
            )
        )

    return CardGameBreakdown(
        total_pot=total_debt,
        min_debt=min_debt,
        net_pot=net_pot,
        pay_up_threshold=threshold,
        players=tuple(players),
    )


def card_game_net(debts: Mapping[PlayerId, int]) -> NetPosition:
    return pay_up(debts).net_position()
