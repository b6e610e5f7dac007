"""Health check handlers."""

from __future__ import annotations

import json

import redis
from flask import Response

from employee_api.api import error_response
from employee_api.cache import create_redis_client
from employee_api.model import CustomMessage, DetailedHealthCheck
from employee_api.scylladb import CqlError, create_scylladb_client

NOT_RUNNING = "Employee API is not running. Check application logs"
RUNNING = "Employee API is up and running"


def _json_response(payload: dict, status: int = 200) -> Response:
    body = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    return Response(body, status=status, mimetype="application/json")


def get_redis_health() -> str:
    """Return "up" when Redis answers a ping, otherwise "down"."""
    try:
        with create_redis_client() as client:
            client.ping()
    except (redis.RedisError, ValueError):
        return "down"
    return "up"


def health_check_api() -> Response:
    """Report whether the database can be reached."""
    try:
        session = create_scylladb_client()
    except CqlError:
        return error_response(NOT_RUNNING)
    session.close()
    return _json_response(CustomMessage(RUNNING).to_dict())


def detailed_health_check_api() -> Response:
    """Report the state of the API, the database and the cache."""
    try:
        session = create_scylladb_client()
    except CqlError:
        session = None
    redis_health = get_redis_health()
    if session is None:
        data = DetailedHealthCheck(
            message=NOT_RUNNING, scylla_db="down", employee_api="down", redis=redis_health
        )
        return _json_response(data.to_dict(), 400)
    session.close()
    data = DetailedHealthCheck(
        message=RUNNING, scylla_db="up", employee_api="up", redis=redis_health
    )
    return _json_response(data.to_dict())