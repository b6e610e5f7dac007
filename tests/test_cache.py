from employee_api.cache import create_redis_client
from employee_api.model import Config, RedisConfig


def _kwargs(client):
    return client.connection_pool.connection_kwargs


def test_address_and_database():
    client = create_redis_client(Config(redis=RedisConfig(host="172.17.0.4:6379", database=2)))
    kwargs = _kwargs(client)
    assert kwargs["host"] == "172.17.0.4"
    assert kwargs["port"] == 6379
    assert kwargs["db"] == 2


def test_empty_address_uses_localhost():
    kwargs = _kwargs(create_redis_client(Config()))
    assert kwargs["host"] == "localhost"
    assert kwargs["port"] == 6379
    assert kwargs.get("password") is None


def test_password_passed_through():
    password = "password"
    client = create_redis_client(Config(redis=RedisConfig(host="cache:7000", password=password)))
    kwargs = _kwargs(client)
    assert kwargs["password"] == password
    assert kwargs["port"] == 7000