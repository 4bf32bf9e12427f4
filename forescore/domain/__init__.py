from .bbb import BBBCategory, BBBGameData, BBBHole, bbb_points_net, bbb_segment_net
from .cards import (
    CardAssignment,
    CardGameBreakdown,
    CardGameData,
    CardPlayerBreakdown,
    CardRole,
    card_game_net,
    pay_up,
)
from .combiner import combine_positions
from .gir import GIRGameData, GIRPayoutMode, HoleConfiguration, gir_points_net, gir_segment_net
from .pairwise import pairwise_net
from .pipeline import GameKind, RawGameData, SettlementConfig, SettlementResult, settle
from .primitives import (
    ConfigurationError,
    DomainValidationError,
    InvariantViolation,
    NetPosition,
    Player,
    SettlementError,
    Transaction,
    UnknownPlayerReference,
    normalize_player,
    split_evenly,
    unique_preserve_order,
)
from .segments import Segment, segment_pot_net, single_segment_net
from .settlement import build_transfers, replay_transfers
from .strokes import StrokeGameData, allocate_hole_points, points_net, stroke_segment_net

__all__ = [
    "BBBCategory",
    "BBBGameData",
    "BBBHole",
    "CardAssignment",
    "CardGameBreakdown",
    "CardGameData",
    "CardPlayerBreakdown",
    "CardRole",
    "ConfigurationError",
    "DomainValidationError",
    "GIRGameData",
    "GIRPayoutMode",
    "GameKind",
    "HoleConfiguration",
    "InvariantViolation",
    "NetPosition",
    "Player",
    "RawGameData",
    "Segment",
    "SettlementConfig",
    "SettlementError",
    "SettlementResult",
    "StrokeGameData",
    "Transaction",
    "UnknownPlayerReference",
    "allocate_hole_points",
    "bbb_points_net",
    "bbb_segment_net",
    "build_transfers",
    "card_game_net",
    "combine_positions",
    "gir_points_net",
    "gir_segment_net",
    "normalize_player",
    "pairwise_net",
    "pay_up",
    "points_net",
    "replay_transfers",
    "segment_pot_net",
    "settle",
    "single_segment_net",
    "split_evenly",
    "stroke_segment_net",
    "unique_preserve_order",
]
