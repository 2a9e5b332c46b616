"""API schemas."""

from huissier.presentation.schemas.verify_schemas import (
    VerifyRequest,
    VerifyResponse,
)

__all__ = ["VerifyRequest", "VerifyResponse"]
