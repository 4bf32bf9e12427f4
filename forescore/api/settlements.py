from __future__ import annotations

from fastapi import APIRouter

from forescore.api.errors import settlement_api_error
from forescore.api.schemas import (
    HolePointsRequest,
    HolePointsResponse,
    SettlementRequest,
    SettlementResponse,
)
from forescore.domain import DomainValidationError, SettlementError
from forescore.runtime import service

router = APIRouter(prefix="/settlements", tags=["settlements"])


@router.post(
    "",
    response_model=SettlementResponse,
    summary="Settle the selected games and list who owes who",
)
def create_settlement(payload: SettlementRequest) -> SettlementResponse:
    try:
        return service.settle(payload)
    except (SettlementError, DomainValidationError) as exc:
        raise settlement_api_error(exc) from exc


@router.post(
    "/hole-points",
    response_model=HolePointsResponse,
    summary="2/9/16 points for one hole",
)
def hole_points(payload: HolePointsRequest) -> HolePointsResponse:
    try:
        return HolePointsResponse(points=service.hole_points(payload.strokes))
    except DomainValidationError as exc:
        raise settlement_api_error(exc) from exc
