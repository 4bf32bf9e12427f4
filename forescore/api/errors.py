from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status

from forescore.domain import DomainValidationError, InvariantViolation, SettlementError, UnknownPlayerReference


def api_error(
    *,
    code: str,
    message: str,
    details: Any | None = None,
    status_code: int = status.HTTP_400_BAD_REQUEST,
) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={
            "code": code,
            "message": message,
            "details": details,
        },
    )


def settlement_api_error(exc: SettlementError | DomainValidationError) -> HTTPException:
    if isinstance(exc, UnknownPlayerReference):
        return api_error(code="unknown_player", message=exc.message, details=exc.details())
    if isinstance(exc, InvariantViolation):
        return api_error(
            code="settlement_invariant_violation",
            message="Settlement could not be balanced",
            details=exc.details(),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    if isinstance(exc, SettlementError):
        return api_error(code="settlement_failed", message=exc.message, details=exc.details())
    return api_error(code="invalid_game_data", message=str(exc))
