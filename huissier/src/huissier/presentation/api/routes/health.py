"""
Health check API routes.
"""

from fastapi import APIRouter, Depends, Response, status

from huissier.di.dependencies import get_database
from huissier.infrastructure.persistence.database import Database

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check(
    response: Response,
    database: Database = Depends(get_database),
):
    """
    Readiness check.

    Returns 200 if the ledger database answers, 503 otherwise.
    """
    db_healthy = await database.health_check()

    if not db_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": "healthy" if db_healthy else "degraded",
        "components": {
            "database": {"status": "healthy" if db_healthy else "unhealthy"},
        },
    }
