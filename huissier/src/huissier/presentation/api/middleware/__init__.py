"""
API middleware for Huissier.
"""

from huissier.presentation.api.middleware.error_handler import (
    huissier_exception_handler,
    request_validation_handler,
)
from huissier.presentation.api.middleware.metrics_middleware import (
    MetricsMiddleware,
)
from huissier.presentation.api.middleware.request_id_middleware import (
    RequestIDMiddleware,
)

__all__ = [
    "huissier_exception_handler",
    "request_validation_handler",
    "MetricsMiddleware",
    "RequestIDMiddleware",
]
