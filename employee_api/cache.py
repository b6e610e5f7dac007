"""Construction of the Redis cache client."""

from __future__ import annotations

import redis

from employee_api.config import read_config_and_property
from employee_api.model import Config

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 6379


def _split_address(address: str) -> tuple[str, int]:
    if not address:
        return DEFAULT_HOST, DEFAULT_PORT
    host, sep, port = address.rpartition(":")
    if not sep:
        return address, DEFAULT_PORT
    return host or DEFAULT_HOST, int(port)


def create_redis_client(config: Config | None = None) -> redis.Redis:
    """Build a Redis client from the configured address, password and database."""
    cfg = config if config is not None else read_config_and_property()
    host, port = _split_address(cfg.redis.host)
    return redis.Redis(
        host=host,
        port=port,
        password=cfg.redis.password or None,
        db=cfg.redis.database,
    )