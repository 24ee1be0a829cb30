import json
import logging

from app.core.logging import CustomJsonFormatter, request_id_var


def _format(message="Employee invited", **extra):
    formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    record = logging.LogRecord("app.services.employee_service", logging.INFO, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return json.loads(formatter.format(record))


def test_record_carries_timestamp_and_level():
    line = _format()
    assert line["timestamp"]
    assert line["timestamp"].endswith("+00:00")
    assert line["level"] == "INFO"
    assert line["logger"] == "app.services.employee_service"
    assert line["message"] == "Employee invited"


def test_record_carries_request_id_and_extra():
    token = request_id_var.set("req-123")
    try:
        line = _format(company_id=7)
    finally:
        request_id_var.reset(token)
    assert line["request_id"] == "req-123"
    assert line["company_id"] == 7


def test_request_id_omitted_outside_a_request():
    assert "request_id" not in _format()
