from __future__ import annotations

import logging
import uuid

import forescore.config as app_config
from forescore.api.schemas import (
    CardBreakdownOut,
    CardPlayerOut,
    SettlementRequest,
    SettlementResponse,
    TransactionOut,
)
from forescore.domain import (
    InvariantViolation,
    RawGameData,
    SettlementConfig,
    SettlementResult,
    allocate_hole_points,
    settle,
)
from forescore.logging_config import request_id_var

logger = logging.getLogger(__name__)


class SettlementService:
    """Translates validated requests into engine calls and engine results into responses."""

    def build_config(self, payload: SettlementRequest) -> SettlementConfig:
        settings = app_config.config
        point_value = payload.point_value if payload.point_value is not None else settings.DEFAULT_POINT_VALUE
        segment_pot = payload.segment_pot if payload.segment_pot is not None else settings.DEFAULT_SEGMENT_POT
        uniform = SettlementConfig.uniform(point_value, segment_pot, payload.gir_payout_mode)
        return SettlementConfig(
            unit_values={**uniform.unit_values, **payload.unit_values},
            gir_payout_mode=payload.gir_payout_mode,
        )

    def build_data(self, payload: SettlementRequest) -> RawGameData:
        cards = payload.game("cards")
        points = payload.game("points")
        bbb = payload.game("bbb")
        gir = payload.game("gir")
        return RawGameData(
            roster=tuple(player.to_domain() for player in payload.players),
            cards=cards.to_domain(app_config.config.DEFAULT_CARD_VALUE) if cards else None,
            strokes=points.to_domain() if points else None,
            bbb=bbb.to_domain() if bbb else None,
            gir=gir.to_domain() if gir else None,
        )

    def settle(self, payload: SettlementRequest) -> SettlementResponse:
        token = request_id_var.set(uuid.uuid4().hex)
        try:
            result = settle(payload.selected_games, self.build_config(payload), self.build_data(payload))
        except InvariantViolation as exc:
            logger.error(
                "Settlement invariant violated: %s",
                exc.message,
                extra={"game": exc.game, "player_ids": list(exc.player_ids)},
            )
            raise
        finally:
            request_id_var.reset(token)

        logger.info(
            "Settled %s into %d transaction(s)",
            ", ".join(kind.value for kind in result.active_games) or "no games",
            len(result.transactions),
        )
        names = {player.id: player.name for player in payload.players}
        return self.to_response(result, names)

    def to_response(self, result: SettlementResult, names: dict[str, str]) -> SettlementResponse:
        breakdown = None
        if result.card_breakdown is not None:
            cards = result.card_breakdown
            breakdown = CardBreakdownOut(
                total_pot=cards.total_pot,
                min_debt=cards.min_debt,
                net_pot=cards.net_pot,
                pay_up_threshold=str(cards.pay_up_threshold),
                players=[
                    CardPlayerOut(player_name=names.get(entry.player_id, "Unknown"), **entry.to_dict())
                    for entry in cards.players
                ],
            )

        return SettlementResponse(
            net_position=result.net_position.as_dict(),
            transactions=[
                TransactionOut(
                    from_player_id=transaction.payer,
                    from_name=names.get(transaction.payer, "Unknown"),
                    to_player_id=transaction.payee,
                    to_name=names.get(transaction.payee, "Unknown"),
                    amount=transaction.amount,
                )
                for transaction in result.transactions
            ],
            per_game={kind.value: position.as_dict() for kind, position in result.per_game.items()},
            card_breakdown=breakdown,
            active_games=[kind.value for kind in result.active_games],
            skipped_games={kind.value: reason for kind, reason in result.skipped_games.items()},
        )

    def hole_points(self, strokes: dict[str, int]) -> dict[str, str]:
        return {player: str(points) for player, points in allocate_hole_points(strokes).items()}
