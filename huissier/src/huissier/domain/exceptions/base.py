"""
Base domain exceptions.
"""


class HuissierException(Exception):
    """Base exception for all Huissier domain errors."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(HuissierException):
    """Raised when request or entity validation fails."""

    def __init__(self, field: str, reason: str):
        self.field = field
        message = f"Validation failed for {field}: {reason}"
        super().__init__(message, code="VALIDATION_ERROR")
