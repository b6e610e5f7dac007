import json
import logging

import pytest
from flask import Flask

from employee_api.request_logging import JsonFormatter, logging_middleware


@pytest.fixture
def app():
    return logging_middleware(Flask("logging_test"))


def _request_records(caplog):
    return [r for r in caplog.records if r.getMessage() == "HTTP REQUEST STATUS"]


def test_logging_middleware_logs_unknown_route(app, caplog):
    caplog.set_level(logging.INFO, logger="employee_api.request")
    response = app.test_client().get("/example", headers={"X-Real-IP": "192.168.0.1"})
    assert response.status_code == 404
    records = _request_records(caplog)
    assert len(records) == 1
    fields = records[0].fields
    assert fields["http_method"] == "GET"
    assert fields["request_uri"] == "/example"
    assert fields["status_code"] == 404
    assert fields["client_ip"] == "192.168.0.1"
    assert fields["latency"] >= 0


def test_logging_middleware_keeps_query_and_forwarded_address(app, caplog):
    @app.route("/ok")
    def ok():
        return "fine"

    caplog.set_level(logging.INFO, logger="employee_api.request")
    response = app.test_client().get(
        "/ok?id=OT-043", headers={"X-Forwarded-For": "10.0.0.7, 10.0.0.8"}
    )
    assert response.status_code == 200
    fields = _request_records(caplog)[0].fields
    assert fields["request_uri"] == "/ok?id=OT-043"
    assert fields["client_ip"] == "10.0.0.7"
    assert fields["status_code"] == 200


def test_logging_middleware_falls_back_to_remote_address(app, caplog):
    caplog.set_level(logging.INFO, logger="employee_api.request")
    app.test_client().post("/missing", environ_base={"REMOTE_ADDR": "10.1.2.3"})
    fields = _request_records(caplog)[0].fields
    assert fields["client_ip"] == "10.1.2.3"
    assert fields["http_method"] == "POST"


def test_json_formatter_includes_fields():
    record = logging.LogRecord(
        "employee_api.request", logging.INFO, __file__, 1, "HTTP REQUEST STATUS", None, None
    )
    record.fields = {"http_method": "GET", "status_code": 404}
    entry = json.loads(JsonFormatter().format(record))
    assert entry["msg"] == "HTTP REQUEST STATUS"
    assert entry["level"] == "info"
    assert entry["http_method"] == "GET"
    assert entry["status_code"] == 404
    assert "time" in entry


def test_json_formatter_level_names_and_sorted_keys():
    record = logging.LogRecord("x", logging.WARNING, __file__, 1, "Unable %s", ("now",), None)
    text = JsonFormatter().format(record)
    entry = json.loads(text)
    assert entry["level"] == "warning"
    assert entry["msg"] == "Unable now"
    assert list(entry) == sorted(entry)