from employee_api.config import read_config_and_property
from employee_api.model import Config, RedisConfig, ScyllaDBConfig

PASSWORD = "password"

EXPECTED = Config(
    scylladb=ScyllaDBConfig(
        host=["172.17.0.3:9042"],
        keyspace="employee_db",
        username="scylladb",
        password=PASSWORD,
    ),
    redis=RedisConfig(host="172.17.0.4:6379", password="", database=0, enabled=False),
)

YAML = """\
scylladb:
  host:
    - 172.17.0.3:9042
  keyspace: employee_db
  username: scylladb
  password: password
redis:
  host: 172.17.0.4:6379
  password: ""
  database: 0
  enabled: false
"""


def test_missing_config_is_not_expected(tmp_path):
    config = read_config_and_property([tmp_path])
    assert config != EXPECTED
    assert config == Config()


def test_reads_yaml_file(tmp_path):
    (tmp_path / "config.yaml").write_text(YAML)
    assert read_config_and_property([tmp_path]) == EXPECTED


def test_first_path_wins(tmp_path):
    first = tmp_path / "a"
    second = tmp_path / "b"
    first.mkdir()
    second.mkdir()
    (first / "config.yaml").write_text("redis:\n  host: first:6379\n")
    (second / "config.yaml").write_text(YAML)
    assert read_config_and_property([first, second]).redis.host == "first:6379"


def test_invalid_yaml_gives_empty(tmp_path):
    (tmp_path / "config.yaml").write_text("scylladb: [unclosed\n")
    assert read_config_and_property([tmp_path]) == Config()