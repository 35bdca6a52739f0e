import json
import logging

from shared.core.logging_config import (
    SecurityFilter,
    StructuredFormatter,
    request_id_var,
    set_request_context,
)


def _record(msg, *args, **extra):
    record = logging.LogRecord("petcare.test", logging.INFO, __file__, 10, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_json_with_service_and_custom_fields():
    formatter = StructuredFormatter(service_name="inventory-service", environment="test", version="9.9.9")

    line = formatter.format(_record("created %s", "item-1", extra_fields={"item_id": "item-1"}))

    data = json.loads(line)
    assert data["message"] == "created item-1"
    assert data["service"] == "inventory-service"
    assert data["environment"] == "test"
    assert data["custom"] == {"item_id": "item-1"}
    assert data["location"]["line"] == 10


def test_formatter_includes_request_context():
    token = request_id_var.set(None)
    try:
        set_request_context(request_id="req-42")
        data = json.loads(StructuredFormatter("svc", "test", "1").format(_record("hello")))
        assert data["trace"]["request_id"] == "req-42"
    finally:
        request_id_var.reset(token)


def test_security_filter_redacts_bearer_tokens_and_secrets():
    record = _record("Authorization: Bearer abc.def.ghi password=hunter2 ok")

    assert SecurityFilter().filter(record) is True

    message = record.getMessage()
    assert "abc.def.ghi" not in message
    assert "hunter2" not in message
    assert message.endswith("ok")


def test_security_filter_leaves_plain_messages_alone():
    record = _record("Inventory item created: %s", "abc")
    SecurityFilter().filter(record)
    assert record.getMessage() == "Inventory item created: abc"
    assert record.args == ("abc",)
