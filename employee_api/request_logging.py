"""Per-request access logging and a JSON log formatter."""

from __future__ import annotations

import datetime as _dt
import json
import logging
import time

from flask import Flask, Response, g, request

log = logging.getLogger("employee_api.request")

_LEVEL_NAMES = {"CRITICAL": "fatal", "WARNING": "warning"}


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object with sorted keys."""

    def format(self, record: logging.LogRecord) -> str:
        entry = dict(getattr(record, "fields", None) or {})
        entry["level"] = _LEVEL_NAMES.get(record.levelname, record.levelname.lower())
        entry["msg"] = record.getMessage()
        entry["time"] = (
            _dt.datetime.fromtimestamp(record.created).astimezone().isoformat(timespec="seconds")
        )
        if record.exc_info:
            entry["error"] = self.formatException(record.exc_info)
        return json.dumps(entry, sort_keys=True, default=str)


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    first = forwarded.split(",")[0].strip()
    if first:
        return first
    real_ip = request.headers.get("X-Real-IP", "").strip()
    if real_ip:
        return real_ip
    return request.remote_addr or ""


def _request_uri() -> str:
    raw = request.environ.get("REQUEST_URI") or request.environ.get("RAW_URI")
    if raw:
        return raw
    query = request.query_string.decode("latin-1")
    return request.path + ("?" + query if query else "")


def logging_middleware(app: Flask) -> Flask:
    """Log method, URI, status, latency and client address of every request."""

    @app.before_request
    def _mark_start() -> None:
        g.request_log_started = time.perf_counter_ns()

    @app.after_request
    def _log_request(response: Response) -> Response:
        started = g.get("request_log_started")
        latency = time.perf_counter_ns() - started if started is not None else 0
        log.info(
            "HTTP REQUEST STATUS",
            extra={
                "fields": {
                    "http_method": request.method,
                    "request_uri": _request_uri(),
                    "status_code": response.status_code,
                    "latency": latency,
                    "client_ip": _client_ip(),
                }
            },
        )
        return response

    return app