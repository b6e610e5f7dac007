"""Data shapes exchanged by the employee API and its configuration."""

from __future__ import annotations

import datetime as _dt
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Mapping


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, _dt.datetime):
        text = value.isoformat()
        return text[:-6] + "Z" if text.endswith("+00:00") else text
    if isinstance(value, _dt.date):
        return value.isoformat()
    return str(value)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "t", "true", "yes", "on"}
    return bool(value)


def _lower_keys(data: Mapping[str, Any] | None) -> dict[str, Any]:
    return {str(key).lower(): value for key, value in (data or {}).items()}


def _counts_to_dict(table: Any, keys: Mapping[str, str]) -> dict[str, int]:
    return {key: getattr(table, attr) for attr, key in keys.items()}


def _counts_from_data(keys: Mapping[str, str], data: Mapping[str, Any]) -> dict[str, int]:
    return {attr: int(data[key]) for attr, key in keys.items() if key in data}


@dataclass
class Employee:
    """One employee record."""

    id: str = ""
    name: str = ""
    designation: str = ""
    department: str = ""
    joining_date: str = ""
    address: str = ""
    office_location: str = ""
    status: str = ""
    email: str = ""
    phone_number: str = ""

    def to_dict(self) -> dict[str, str]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Employee":
        known = {f.name for f in fields(cls)}
        return cls(**{key: _as_text(value) for key, value in data.items() if key in known})


@dataclass
class CustomMessage:
    """A response carrying a single message."""

    message: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"message": self.message}


@dataclass
class Location:
    """Employee counts per office location."""

    noida: int = 0
    bangalore: int = 0
    hyderabad: int = 0
    delaware: int = 0

    _KEYS = {
        "noida": "Noida",
        "bangalore": "Bangalore",
        "hyderabad": "Hyderabad",
        "delaware": "Delaware",
    }

    def to_dict(self) -> dict[str, int]:
        return _counts_to_dict(self, self._KEYS)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Location":
        return cls(**_counts_from_data(cls._KEYS, data))


@dataclass
class Designation:
    """Employee counts per designation."""

    devops_consultant: int = 0
    devops_specialist: int = 0
    growth_partner: int = 0
    consultant_partner: int = 0

    _KEYS = {
        "devops_consultant": "DevOps Consultant",
        "devops_specialist": "DevOps Specialist",
        "growth_partner": "Growth Partner",
        "consultant_partner": "Consultant Partner",
    }

    def to_dict(self) -> dict[str, int]:
        return _counts_to_dict(self, self._KEYS)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Designation":
        return cls(**_counts_from_data(cls._KEYS, data))


@dataclass
class DetailedHealthCheck:
    """Health of the API and the services behind it."""

    message: str = ""
    scylla_db: str = ""
    employee_api: str = ""
    redis: str = ""

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass
class ScyllaDBConfig:
    host: list[str] = field(default_factory=list)
    keyspace: str = ""
    username: str = ""
    password: str = ""


@dataclass
class RedisConfig:
    host: str = ""
    password: str = ""
    database: int = 0
    enabled: bool = False


@dataclass
class Config:
    """Application configuration."""

    scylladb: ScyllaDBConfig = field(default_factory=ScyllaDBConfig)
    redis: RedisConfig = field(default_factory=RedisConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Config":
        top = _lower_keys(data)
        scylla = _lower_keys(top.get("scylladb"))
        cache = _lower_keys(top.get("redis"))
        hosts = scylla.get("host") or []
        if isinstance(hosts, str):
            hosts = [hosts]
        return cls(
            scylladb=ScyllaDBConfig(
                host=[str(h) for h in hosts],
                keyspace=_as_text(scylla.get("keyspace")),
                username=_as_text(scylla.get("username")),
                password=_as_text(scylla.get("password")),
            ),
            redis=RedisConfig(
                host=_as_text(cache.get("host")),
                password=_as_text(cache.get("password")),
                database=int(cache.get("database") or 0),
                enabled=_as_bool(cache.get("enabled", False)),
            ),
        )