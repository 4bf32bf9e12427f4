from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, model_validator

from forescore.domain import (
    BBBGameData,
    BBBHole,
    CardAssignment,
    CardGameData,
    GameKind,
    GIRGameData,
    GIRPayoutMode,
    HoleConfiguration,
    Player,
    StrokeGameData,
)


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: Any | None = None


class PlayerIn(BaseModel):
    id: str = Field(..., min_length=1, examples=["p1"])
    name: str = Field(..., min_length=1, examples=["Daniel"])
    color: str = "#0EA5E9"

    def to_domain(self) -> Player:
        return Player(id=self.id, name=self.name, color=self.color)


class CardAssignmentIn(BaseModel):
    card_id: str
    card_type: str = Field(..., examples=["camel"])
    value: int | None = Field(default=None, gt=0, description="Recorded card value in cents")
    player_id: str
    timestamp: datetime | None = None
    card_name: str | None = None


class CardsPayload(BaseModel):
    game: Literal["cards"]
    assignments: list[CardAssignmentIn] = Field(
        default_factory=list,
        description="Card history; for a repeated card_id the last entry wins",
    )
    card_values: dict[str, int] = Field(default_factory=dict)

    def to_domain(self, default_card_value: int) -> CardGameData:
        latest: dict[str, CardAssignment] = {}
        for entry in self.assignments:
            latest[entry.card_id] = CardAssignment(
                card_id=entry.card_id,
                card_type=entry.card_type,
                value=entry.value if entry.value is not None else default_card_value,
                player_id=entry.player_id,
                timestamp=entry.timestamp,
                card_name=entry.card_name,
            )
        return CardGameData(assignments=latest, card_values=self.card_values)


def _points(value: Decimal) -> int | Decimal:
    return int(value) if value == value.to_integral_value() else value


class PointsPayload(BaseModel):
    game: Literal["points"]
    strokes: dict[int, dict[str, int]] = Field(default_factory=dict)
    points: dict[int, dict[str, Decimal]] = Field(default_factory=dict)

    def to_domain(self) -> StrokeGameData:
        return StrokeGameData(
            strokes=self.strokes,
            points={
                hole: {player: _points(value) for player, value in entries.items()}
                for hole, entries in self.points.items()
            },
        )


class BBBHoleIn(BaseModel):
    first_on: str | None = None
    closest_to: str | None = None
    first_in: str | None = None


class BBBPayload(BaseModel):
    game: Literal["bbb"]
    holes: dict[int, BBBHoleIn] = Field(default_factory=dict)

    def to_domain(self) -> BBBGameData:
        return BBBGameData(
            holes={
                hole: BBBHole(first_on=entry.first_on, closest_to=entry.closest_to, first_in=entry.first_in)
                for hole, entry in self.holes.items()
            }
        )


class GIRPayload(BaseModel):
    game: Literal["gir"]
    holes: dict[int, dict[str, bool]] = Field(default_factory=dict)
    penalty_holes: list[int] | None = None
    bonus_holes: list[int] | None = None

    def to_domain(self) -> GIRGameData:
        configuration = HoleConfiguration()
        if self.penalty_holes is not None or self.bonus_holes is not None:
            configuration = HoleConfiguration(
                penalty_holes=frozenset(self.penalty_holes or ()),
                bonus_holes=frozenset(self.bonus_holes or ()),
            )
        return GIRGameData(holes=self.holes, configuration=configuration)


GamePayload = Annotated[
    Union[CardsPayload, PointsPayload, BBBPayload, GIRPayload],
    Field(discriminator="game"),
]


class SettlementRequest(BaseModel):
    players: list[PlayerIn] = Field(default_factory=list)
    selected_games: list[GameKind] = Field(..., min_length=1, examples=[["cards", "points"]])
    point_value: int | None = Field(default=None, ge=0, description="Cents per point")
    segment_pot: int | None = Field(default=None, ge=0, description="Cents per front/back/total segment")
    unit_values: dict[GameKind, int] = Field(default_factory=dict)
    gir_payout_mode: GIRPayoutMode = GIRPayoutMode.POINTS
    games: list[GamePayload] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_games(self) -> "SettlementRequest":
        kinds = [game.game for game in self.games]
        if len(set(kinds)) != len(kinds):
            raise ValueError("each game may be supplied only once")
        ids = [player.id for player in self.players]
        if len(set(ids)) != len(ids):
            raise ValueError("player ids must be unique")
        return self

    def game(self, name: str) -> Any | None:
        for game in self.games:
            if game.game == name:
                return game
        return None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "players": [
                        {"id": "daniel", "name": "Daniel"},
                        {"id": "kate", "name": "Kate"},
                    ],
                    "selected_games": ["cards", "points"],
                    "point_value": 100,
                    "games": [
                        {
                            "game": "cards",
                            "assignments": [
                                {"card_id": "c1", "card_type": "camel", "value": 200, "player_id": "kate"}
                            ],
                        },
                        {"game": "points", "strokes": {"1": {"daniel": 4, "kate": 5}}},
                    ],
                }
            ]
        }
    }


class TransactionOut(BaseModel):
    from_player_id: str
    from_name: str
    to_player_id: str
    to_name: str
    amount: int


class CardPlayerOut(BaseModel):
    player_id: str
    player_name: str
    debt: int
    role: str
    paid: int
    received: int
    share: int
    net: int


class CardBreakdownOut(BaseModel):
    total_pot: int
    min_debt: int
    net_pot: int
    pay_up_threshold: str
    players: list[CardPlayerOut]


class SettlementResponse(BaseModel):
    net_position: dict[str, int]
    transactions: list[TransactionOut]
    per_game: dict[str, dict[str, int]]
    card_breakdown: CardBreakdownOut | None = None
    active_games: list[str]
    skipped_games: dict[str, str]


class HolePointsRequest(BaseModel):
    strokes: dict[str, Annotated[int, Field(gt=0)]] = Field(
        ..., min_length=2, max_length=4, examples=[{"a": 4, "b": 5, "c": 5}]
    )


class HolePointsResponse(BaseModel):
    points: dict[str, str] = Field(..., description="Points per player as exact decimal strings")
