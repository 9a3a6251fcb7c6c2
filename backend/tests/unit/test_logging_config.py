"""Unit tests for log redaction and JSON formatting."""

import json
import logging

from infrastructure.logging_config import JSONFormatter, SensitiveDataFilter


def _record(msg: str, *args, **extra) -> logging.LogRecord:
    record = logging.LogRecord("test", logging.INFO, __file__, 1, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestSensitiveDataFilter:
    def test_redacts_bearer_jwt(self):
        record = _record("Got header Bearer aaa.bbb.ccc from client")

        SensitiveDataFilter().filter(record)

        assert "aaa.bbb.ccc" not in record.getMessage()

    def test_redacts_stripe_values_in_args(self):
        record = _record("key=%s secret=%s", "sk_test_abcdefgh1234", "pi_123_secret_xyz")

        SensitiveDataFilter().filter(record)

        message = record.getMessage()
        assert "sk_test_abcdefgh1234" not in message
        assert "pi_123_secret_xyz" not in message

    def test_leaves_ordinary_messages(self):
        record = _record("Article %s approved", "abc-123")

        assert SensitiveDataFilter().filter(record) is True
        assert record.getMessage() == "Article abc-123 approved"


class TestJSONFormatter:
    def test_includes_request_fields(self):
        record = _record("GET /api/v1/articles 200", request_id="rid-1", status_code=200)

        entry = json.loads(JSONFormatter().format(record))

        assert entry["message"] == "GET /api/v1/articles 200"
        assert entry["level"] == "INFO"
        assert entry["request_id"] == "rid-1"
        assert entry["status_code"] == 200
        assert "path" not in entry
