"""
Unit tests for structured JSON logging.

Usage:
    pytest huissier/tests/unit/infrastructure
"""

import json
import logging
import sys
from decimal import Decimal

from huissier.infrastructure.monitoring.logger import (
    JSONFormatter,
    request_id_ctx,
)


def _record(message="Verification finished", extra=None, exc_info=None):
    logger = logging.getLogger("huissier.test")
    return logger.makeRecord(
        "huissier.test",
        logging.INFO,
        __file__,
        42,
        message,
        None,
        exc_info,
        extra=extra,
    )


class TestJSONFormatter:
    """Tests for JSONFormatter output."""

    def test_fixed_fields(self):
        """Test every line names level, service, logger and message."""
        data = json.loads(JSONFormatter().format(_record()))

        assert data["level"] == "INFO"
        assert data["service"] == "huissier"
        assert data["logger"] == "huissier.test"
        assert data["message"] == "Verification finished"
        assert data["source"].endswith(":42")
        assert "context" not in data
        assert "request_id" not in data

    def test_extra_fields_grouped_under_context(self):
        """Test extra fields are serialized, Decimal as string."""
        record = _record(
            extra={
                "discord_id": "123456789012345678",
                "total_balance": Decimal("1100.5"),
                "roles": ["participant", "tier-1"],
            }
        )

        data = json.loads(JSONFormatter().format(record))

        assert data["context"] == {
            "discord_id": "123456789012345678",
            "total_balance": "1100.5",
            "roles": ["participant", "tier-1"],
        }

    def test_request_id_included_when_set(self):
        """Test the current request id is attached."""
        token = request_id_ctx.set("req-1")
        try:
            data = json.loads(JSONFormatter().format(_record()))
        finally:
            request_id_ctx.reset(token)

        assert data["request_id"] == "req-1"

    def test_exception_formatted(self):
        """Test exc_info is rendered as a traceback string."""
        try:
            raise RuntimeError("rpc down")
        except RuntimeError:
            record = _record(exc_info=sys.exc_info())

        data = json.loads(JSONFormatter(service="huissier-test").format(record))

        assert data["service"] == "huissier-test"
        assert "RuntimeError: rpc down" in data["exception"]
