"""Shared value types for the settlement engine.

Money is always an ``int`` number of minor units (cents). Point totals may be
``Decimal`` because the 2/9/16 table hands out half points in one case; they
are converted to money exactly once, by :func:`to_minor_units`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_EVEN
from types import MappingProxyType
from typing import Union

PlayerId = str
Points = Union[int, Decimal]

HOLE_NUMBERS = range(1, 19)


class DomainValidationError(ValueError):
    """Raised when a value object is built from malformed data."""


class SettlementError(Exception):
    """Base class for failures of a single settlement call."""

    def __init__(self, message: str, *, game: str | None = None, player_ids: Iterable[PlayerId] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.game = game
        self.player_ids = tuple(player_ids)

    def details(self) -> dict[str, object]:
        return {"game": self.game, "player_ids": list(self.player_ids)}


class ConfigurationError(SettlementError):
    """A selected game cannot be scored with the given configuration or data."""


class InvariantViolation(SettlementError):
    """A position that must be zero-sum is not."""


class UnknownPlayerReference(SettlementError):
    """Score data names a player that is not on the roster."""


def normalize_player(player_id: str) -> PlayerId:
    value = player_id.strip()
    if not value:
        raise DomainValidationError("player id must be non-empty")
    return value


def unique_preserve_order(players: Iterable[str]) -> list[PlayerId]:
    seen: set[str] = set()
    result: list[PlayerId] = []
    for player in players:
        normalized = normalize_player(player)
        if normalized not in seen:
            seen.add(normalized)
            result.append(normalized)
    return result


def ensure_hole(hole: int) -> int:
    if isinstance(hole, bool) or not isinstance(hole, int):
        raise DomainValidationError(f"hole number must be an integer, got {hole!r}")
    if hole not in HOLE_NUMBERS:
        raise DomainValidationError(f"hole number out of range 1-18: {hole}")
    return hole


def ensure_known_players(
    referenced: Iterable[PlayerId],
    roster: Iterable[PlayerId] | None,
    *,
    game: str | None = None,
) -> None:
    """Raise :class:`UnknownPlayerReference` if any referenced id is off the roster."""
    if roster is None:
        return
    known = set(roster)
    unknown = sorted({player for player in referenced if player not in known})
    if unknown:
        raise UnknownPlayerReference(
            f"unknown players referenced: {', '.join(unknown)}",
            game=game,
            player_ids=unknown,
        )


def to_minor_units(value: Points) -> int:
    if isinstance(value, int):
        return value
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_EVEN))


def split_evenly(amount: int, recipients: Sequence[PlayerId]) -> dict[PlayerId, int]:
    """Split ``amount`` into integer shares that add up to exactly ``amount``.

    Leftover minor units go one each to the first recipients by id order.
    """
    if amount < 0:
        raise DomainValidationError("cannot split a negative amount")
    ordered = sorted(set(recipients))
    if not ordered:
        return {}
    share, remainder = divmod(amount, len(ordered))
    return {player: share + (1 if idx < remainder else 0) for idx, player in enumerate(ordered)}


def tally_holes(
    hole_values: Mapping[int, Mapping[PlayerId, Points]],
    holes: Iterable[int] = HOLE_NUMBERS,
    participants: Iterable[PlayerId] | None = None,
) -> dict[PlayerId, Points]:
    """Sum per-hole values by player over ``holes``.

    Without ``participants`` only players with at least one entry in those
    holes appear; a hole missing a player simply adds nothing for them.
    """
    totals: dict[PlayerId, Points] = {}
    if participants is not None:
        totals = {player: 0 for player in participants}
    for hole in sorted(set(holes) & set(hole_values)):
        for player, value in hole_values[hole].items():
            totals[player] = totals.get(player, 0) + value
    return totals


@dataclass(frozen=True)
class Player:
    id: PlayerId
    name: str
    color: str = "#0EA5E9"

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", normalize_player(self.id))
        if not self.name.strip():
            raise DomainValidationError("player name must be non-empty")


@dataclass(frozen=True)
class NetPosition:
    """Signed amount per player: positive is owed money, negative owes money."""

    amounts: Mapping[PlayerId, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for player, amount in self.amounts.items():
            if isinstance(amount, bool) or not isinstance(amount, int):
                raise DomainValidationError(f"amount for {player} must be integer minor units, got {amount!r}")
        object.__setattr__(self, "amounts", MappingProxyType(dict(self.amounts)))

    @classmethod
    def zero(cls, players: Iterable[PlayerId]) -> "NetPosition":
        return cls({player: 0 for player in players})

    @property
    def players(self) -> tuple[PlayerId, ...]:
        return tuple(self.amounts)

    @property
    def total(self) -> int:
        return sum(self.amounts.values())

    def get(self, player: PlayerId) -> int:
        return self.amounts.get(player, 0)

    def items(self):
        return self.amounts.items()

    def is_balanced(self) -> bool:
        return self.total == 0

    def ensure_balanced(self, *, game: str | None = None) -> "NetPosition":
        if not self.is_balanced():
            raise InvariantViolation(
                f"net position is not zero-sum (off by {self.total})",
                game=game,
                player_ids=self.players,
            )
        return self

    def nonzero(self) -> dict[PlayerId, int]:
        return {player: amount for player, amount in self.amounts.items() if amount != 0}

    def as_dict(self) -> dict[PlayerId, int]:
        return dict(self.amounts)


@dataclass(frozen=True)
class Transaction:
    payer: PlayerId
    payee: PlayerId
    amount: int

    def __post_init__(self) -> None:
        if self.amount <= 0:
            raise DomainValidationError("transaction amount must be positive")
        if self.payer == self.payee:
            raise DomainValidationError("transaction payer and payee must differ")

    def to_dict(self) -> dict[str, int | str]:
        return {"from": self.payer, "to": self.payee, "amount": self.amount}
