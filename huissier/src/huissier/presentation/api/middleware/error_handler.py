"""
Global error handling.

Every failure is rendered as {"success": false, "message": ...} so the
verification frontend can display it without special cases.
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from huissier.domain.exceptions import HuissierException
from huissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

MISSING_FIELDS_MESSAGE = "Missing fields"

STATUS_CODE_MAP = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "BALANCE_LOOKUP_FAILED": status.HTTP_502_BAD_GATEWAY,
    "LEDGER_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
    "LINKAGE_CONFLICT": status.HTTP_409_CONFLICT,
}

PUBLIC_MESSAGES = {
    "VALIDATION_ERROR": MISSING_FIELDS_MESSAGE,
    "BALANCE_LOOKUP_FAILED": "Could not read wallet balance, please retry",
    "LEDGER_UNAVAILABLE": "Verification storage unavailable, please retry",
    "LINKAGE_CONFLICT": "Verification in progress for this account, please retry",
}


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
    )


async def huissier_exception_handler(
    request: Request, exc: HuissierException
) -> JSONResponse:
    """
    Handle Huissier domain exceptions.

    Converts domain exceptions to structured HTTP responses.
    """
    status_code = STATUS_CODE_MAP.get(
        exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR
    )

    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")

    message = PUBLIC_MESSAGES.get(exc.code, exc.message)
    return _failure(status_code, message)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed JSON or wrong field types count as missing fields."""
    logger.info(f"{request.method} {request.url.path} malformed request body")
    return _failure(status.HTTP_400_BAD_REQUEST, MISSING_FIELDS_MESSAGE)
