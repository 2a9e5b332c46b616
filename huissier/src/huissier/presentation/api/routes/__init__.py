"""API routes."""
from huissier.presentation.api.routes import health, verify

__all__ = ["health", "verify"]
