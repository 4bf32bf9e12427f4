"""Settle any combination of games played by one group in one round.

``settle`` is a pure function: score each selected game, combine the
positions, then build the who-owes-who transfers.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Tuple

from .bbb import BBBGameData, bbb_points_net, bbb_segment_net
from .cards import CardGameBreakdown, CardGameData, pay_up
from .combiner import combine_positions
from .gir import GIRGameData, GIRPayoutMode, gir_points_net, gir_segment_net
from .primitives import (
    ConfigurationError,
    DomainValidationError,
    NetPosition,
    Player,
    PlayerId,
    Transaction,
)
from .settlement import build_transfers
from .strokes import StrokeGameData, points_net, stroke_segment_net

logger = logging.getLogger(__name__)


class GameKind(str, Enum):
    CARDS = "cards"
    POINTS = "points"
    SEGMENT_POT = "segment_pot"
    BBB_POINTS = "bbb_points"
    BBB_SEGMENT_POT = "bbb_segment_pot"
    GIR_POINTS = "gir_points"
    GIR_SEGMENT_POT = "gir_segment_pot"


POINT_KINDS = frozenset({GameKind.POINTS, GameKind.BBB_POINTS, GameKind.GIR_POINTS})
SEGMENT_KINDS = frozenset({GameKind.SEGMENT_POT, GameKind.BBB_SEGMENT_POT, GameKind.GIR_SEGMENT_POT})


@dataclass(frozen=True)
class SettlementConfig:
    """Unit value per game kind in minor units: a point value or a segment pot."""

    unit_values: Mapping[GameKind, int] = field(default_factory=dict)
    gir_payout_mode: GIRPayoutMode = GIRPayoutMode.POINTS

    def __post_init__(self) -> None:
        values = {}
        for kind, value in self.unit_values.items():
            if isinstance(value, bool) or not isinstance(value, int):
                raise DomainValidationError(f"unit value for {kind} must be integer minor units")
            values[GameKind(kind)] = value
        object.__setattr__(self, "unit_values", MappingProxyType(values))
        object.__setattr__(self, "gir_payout_mode", GIRPayoutMode(self.gir_payout_mode))

    @classmethod
    def uniform(
        cls,
        point_value: int = 0,
        segment_pot: int = 0,
        gir_payout_mode: GIRPayoutMode = GIRPayoutMode.POINTS,
    ) -> "SettlementConfig":
        values = {kind: point_value for kind in POINT_KINDS}
        values.update({kind: segment_pot for kind in SEGMENT_KINDS})
        return cls(unit_values=values, gir_payout_mode=gir_payout_mode)

    def unit_value(self, kind: GameKind) -> int:
        return self.unit_values.get(kind, 0)


@dataclass(frozen=True)
class RawGameData:
    """Roster plus one optional score snapshot per game family.

    An empty roster skips the unknown-player check and settles whoever the
    score data names.
    """

    roster: Tuple[Player, ...] = ()
    cards: CardGameData | None = None
    strokes: StrokeGameData | None = None
    bbb: BBBGameData | None = None
    gir: GIRGameData | None = None

    def __post_init__(self) -> None:
        roster = tuple(self.roster)
        ids = [player.id for player in roster]
        if len(set(ids)) != len(ids):
            raise DomainValidationError("roster player ids must be unique")
        object.__setattr__(self, "roster", roster)

    def player_ids(self) -> tuple[PlayerId, ...]:
        return tuple(player.id for player in self.roster)


@dataclass(frozen=True)
class SettlementResult:
    net_position: NetPosition
    transactions: Tuple[Transaction, ...] = ()
    per_game: Mapping[GameKind, NetPosition] = field(default_factory=dict)
    card_breakdown: CardGameBreakdown | None = None
    active_games: Tuple[GameKind, ...] = ()
    skipped_games: Mapping[GameKind, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "per_game", MappingProxyType(dict(self.per_game)))
        object.__setattr__(self, "skipped_games", MappingProxyType(dict(self.skipped_games)))

    def to_dict(self) -> dict[str, object]:
        return {
            "net_position": self.net_position.as_dict(),
            "transactions": [transaction.to_dict() for transaction in self.transactions],
            "per_game": {kind.value: position.as_dict() for kind, position in self.per_game.items()},
            "card_breakdown": self.card_breakdown.to_dict() if self.card_breakdown else None,
            "active_games": [kind.value for kind in self.active_games],
            "skipped_games": {kind.value: reason for kind, reason in self.skipped_games.items()},
        }


def _require(game_data, kind: GameKind):
    if game_data is None:
        raise ConfigurationError(f"no score data for {kind.value}", game=kind.value)
    return game_data


def _unit(config: SettlementConfig, kind: GameKind) -> int:
    value = config.unit_value(kind)
    if value <= 0:
        raise ConfigurationError(f"{kind.value} has no positive unit value", game=kind.value)
    return value


def _score(
    kind: GameKind,
    config: SettlementConfig,
    data: RawGameData,
    selection: frozenset[GameKind],
) -> tuple[NetPosition, CardGameBreakdown | None]:
    roster = data.player_ids() or None

    if kind is GameKind.CARDS:
        cards = _require(data.cards, kind)
        if not cards.assignments:
            raise ConfigurationError("no cards have been assigned", game=kind.value)
        breakdown = pay_up(cards.debts(roster))
        return breakdown.net_position(), breakdown

    if {GameKind.GIR_POINTS, GameKind.GIR_SEGMENT_POT} <= selection:
        chosen = GameKind.GIR_POINTS if config.gir_payout_mode is GIRPayoutMode.POINTS else GameKind.GIR_SEGMENT_POT
        if kind in (GameKind.GIR_POINTS, GameKind.GIR_SEGMENT_POT) and kind is not chosen:
            raise ConfigurationError(
                f"GIR is paid in {config.gir_payout_mode.value} mode, {kind.value} not charged",
                game=kind.value,
            )

    unit = _unit(config, kind)
    if kind is GameKind.POINTS:
        return points_net(_require(data.strokes, kind), unit, roster), None
    if kind is GameKind.SEGMENT_POT:
        return stroke_segment_net(_require(data.strokes, kind), unit, roster), None
    if kind is GameKind.BBB_POINTS:
        return bbb_points_net(_require(data.bbb, kind), unit, roster), None
    if kind is GameKind.BBB_SEGMENT_POT:
        return bbb_segment_net(_require(data.bbb, kind), unit, roster), None
    if kind is GameKind.GIR_POINTS:
        return gir_points_net(_require(data.gir, kind), unit, roster), None
    return gir_segment_net(_require(data.gir, kind), unit, roster), None


def _in_roster_order(position: NetPosition, roster: tuple[PlayerId, ...]) -> NetPosition:
    order = {player: idx for idx, player in enumerate(roster)}
    players = sorted(position.players, key=lambda player: (order.get(player, len(order)), player))
    return NetPosition({player: position.get(player) for player in players})


def settle(
    selected_games: Iterable[GameKind | str],
    config: SettlementConfig,
    data: RawGameData,
) -> SettlementResult:
    selection = frozenset(GameKind(kind) for kind in selected_games)
    per_game: dict[GameKind, NetPosition] = {}
    skipped: dict[GameKind, str] = {}
    card_breakdown: CardGameBreakdown | None = None

    for kind in GameKind:
        if kind not in selection:
            continue
        try:
            position, breakdown = _score(kind, config, data, selection)
        except ConfigurationError as exc:
            logger.warning("Skipping %s: %s", kind.value, exc.message)
            skipped[kind] = exc.message
            continue
        logger.debug("Scored %s: %s", kind.value, position.as_dict())
        per_game[kind] = position
        if breakdown is not None:
            card_breakdown = breakdown

    roster = data.player_ids()
    combined = _in_roster_order(combine_positions({kind.value: position for kind, position in per_game.items()}), roster)
    transactions = build_transfers(combined)
    logger.debug(
        "Settled %d game(s) into %d transaction(s)",
        len(per_game),
        len(transactions),
    )

    return SettlementResult(
        net_position=combined,
        transactions=tuple(transactions),
        per_game=per_game,
        card_breakdown=card_breakdown,
        active_games=tuple(per_game),
        skipped_games=skipped,
    )
