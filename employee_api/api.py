"""Employee request handlers backed by ScyllaDB with an optional Redis cache."""

from __future__ import annotations

import datetime as _dt
import json
import logging
import re
from collections import Counter
from dataclasses import fields
from typing import Any

import redis
from flask import Response, request

from employee_api.cache import create_redis_client
from employee_api.config import read_config_and_property
from employee_api.model import CustomMessage, Designation, Employee, Location
from employee_api.scylladb import CqlError, create_scylladb_client

log = logging.getLogger(__name__)

CACHE_HASH = "employee"
READ_FAILURE = "Cannot read data from the system, request failure"
WRITE_FAILURE = "Cannot write data to the system, request failure"
MISSING_QUERY = "Unable to perform search operation, query params not defined"
MALFORMED_BODY = "Unable to Bind JSON in defined format, seems malformed"

_SELECT_ALL = (
    "SELECT id, name, designation, department, joining_date, address, "
    "office_location, status, email, phone_number FROM employee_info"
)
_SELECT_ONE = "SELECT * FROM employee_info where id = ?"
_INSERT = (
    "INSERT INTO employee_info(id, name, designation, department, joining_date, "
    "address, office_location, status, email, phone_number) "
    "VALUES(?, ?, ?, ?, ?, ?, ?, ?, ?, ?)"
)
_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")
_EMPLOYEE_FIELDS = tuple(f.name for f in fields(Employee))


def _json_response(payload: Any, status: int = 200) -> Response:
    body = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    return Response(body, status=status, mimetype="application/json")


def error_response(message: str) -> Response:
    """A 400 response carrying the given message."""
    return _json_response(CustomMessage(message).to_dict(), 400)


def _redis_enabled() -> bool:
    return read_config_and_property().redis.enabled


def _read_cache(cache_field: str) -> tuple[str | None, bool]:
    """Return the cached value and whether the field is known to be missing."""
    try:
        with create_redis_client() as client:
            value = client.hget(CACHE_HASH, cache_field)
    except (redis.RedisError, ValueError) as exc:
        log.warning("Unable to read data from Redis %s", exc)
        return None, False
    if value is None:
        log.warning("Unable to read data from Redis redis: nil")
        return None, True
    return value.decode("utf-8", errors="replace"), False


def write_in_redis(cache_key: str, cache_value: str) -> None:
    """Store a value under the employee hash; failures are only logged."""
    try:
        with create_redis_client() as client:
            client.hset(CACHE_HASH, cache_key, cache_value)
    except (redis.RedisError, ValueError) as exc:
        log.error("Error in reading writing data to Redis: %s", exc)


def _fetch(statement: str, *args: Any) -> list[dict[str, Any]]:
    """Run a query on a fresh session; a failing query yields no rows."""
    with create_scylladb_client() as session:
        try:
            return session.query(statement, *args)
        except CqlError as exc:
            log.warning("Query failed on scylladb: %s", exc)
            return []


def _encode(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def _decode(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        return None


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _load_counts(text: str, model):
    data = _decode(text)
    if not isinstance(data, dict):
        return model()
    try:
        return model.from_dict(data)
    except (TypeError, ValueError):
        return model()


def _read_counts(column: str, cache_field: str, model, label: str) -> Response:
    cache_miss = False
    if _redis_enabled():
        cached, cache_miss = _read_cache(cache_field)
        if cached is not None:
            log.info("Successfully fetched the data for %s from the Redis", label)
            return _json_response(_load_counts(cached, model).to_dict())
    try:
        rows = _fetch(f"SELECT {column} FROM employee_info")
    except CqlError as exc:
        log.error("Error in reading data from scylladb: %s", exc)
        return error_response(READ_FAILURE)
    counts = Counter(_text(row.get(column)) for row in rows)
    if cache_miss:
        write_in_redis(cache_field, _encode(dict(counts)))
    log.info("Successfully fetched the data for all %s from the ScyllaDB", label)
    return _json_response(model.from_dict(counts).to_dict())


def read_employees_designation() -> Response:
    """Count employees per designation."""
    return _read_counts("designation", "designation", Designation, "designation")


def read_employees_location() -> Response:
    """Count employees per office location."""
    return _read_counts("office_location", "location", Location, "location")


def _employees_from_json(text: str) -> list[dict[str, str]] | None:
    data = _decode(text)
    if not isinstance(data, list):
        return None
    return [Employee.from_dict(item).to_dict() for item in data if isinstance(item, dict)]


def read_complete_employees_data() -> Response:
    """List every employee record."""
    cache_miss = False
    if _redis_enabled():
        cached, cache_miss = _read_cache("all_data")
        if cached is not None:
            log.info("Successfully fetched the data for all employee from the Redis")
            return _json_response(_employees_from_json(cached))
    try:
        rows = _fetch(_SELECT_ALL)
    except CqlError as exc:
        log.error("Error in reading data from scylladb: %s", exc)
        return error_response(READ_FAILURE)
    employees = [Employee.from_dict(row).to_dict() for row in rows] or None
    if cache_miss:
        write_in_redis("all_data", _encode(employees))
    log.info("Successfully fetched the data for all employee from the ScyllaDB")
    return _json_response(employees)


def read_employee_data() -> Response:
    """Look up one employee by the ``id`` query parameter."""
    employee_id = request.args.get("id")
    if employee_id is None:
        log.error("Query request of data without params")
        return error_response(MISSING_QUERY)
    cache_miss = False
    if _redis_enabled():
        cached, cache_miss = _read_cache(employee_id)
        if cached is not None:
            data = _decode(cached)
            employee = Employee.from_dict(data) if isinstance(data, dict) else Employee()
            log.info("Successfully fetched the data for %s from the Redis", employee_id)
            return _json_response(employee.to_dict())
    try:
        rows = _fetch(_SELECT_ONE, employee_id)
    except CqlError as exc:
        log.error("Error in reading data from scylladb: %s", exc)
        return error_response(READ_FAILURE)
    if not rows:
        return Response(status=200)
    employee = Employee.from_dict(rows[0]).to_dict()
    if cache_miss:
        write_in_redis(employee_id, _encode(employee))
    log.info("Successfully fetched the data for %s from the ScyllaDB", employee_id)
    return _json_response(employee)


def _bind_employee(payload: Any) -> Employee | None:
    if not isinstance(payload, dict):
        return None
    values = {key: payload.get(key) for key in _EMPLOYEE_FIELDS}
    if any(value is not None and not isinstance(value, str) for value in values.values()):
        return None
    return Employee.from_dict({key: value for key, value in values.items() if value is not None})


def _parse_date(text: str) -> _dt.date:
    if not _DATE.fullmatch(text):
        raise ValueError(f"cannot parse {text!r} as a date in YYYY-MM-DD form")
    return _dt.date.fromisoformat(text)


def create_employee_data() -> Response:
    """Insert the employee record given in the JSON body."""
    employee = _bind_employee(request.get_json(force=True, silent=True))
    if employee is None:
        log.error("Error parsing the request body in JSON")
        return error_response(MALFORMED_BODY)
    try:
        session = create_scylladb_client()
    except CqlError as exc:
        log.error("Error in writing data to scylladb: %s", exc)
        return error_response(WRITE_FAILURE)
    with session:
        try:
            joining_date = _parse_date(employee.joining_date)
            session.execute(
                _INSERT,
                employee.id,
                employee.name,
                employee.designation,
                employee.department,
                joining_date,
                employee.address,
                employee.office_location,
                employee.status,
                employee.email,
                employee.phone_number,
            )
        except (ValueError, CqlError) as exc:
            log.error("Error in writing data to scylladb: %s", exc)
            return error_response(WRITE_FAILURE)
    log.info("Successfully created the employee record")
    return _json_response(CustomMessage("Successfully created the data for the user").to_dict())