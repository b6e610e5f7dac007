# employee-api

Flask request handlers for employee records. Records live in a ScyllaDB
keyspace, reached through a small built-in CQL client; reads can be cached
in Redis. The package also provides health checks, a per-request JSON
access log and a Swagger 2.0 description of the endpoints.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Configuration

`employee_api.config.read_config_and_property()` reads `config.yaml` (or
`config.yml`), looking first in `/etc/employee-api/` and then in the
current directory; other directories can be passed as `search_paths`. When
no file is found or it cannot be read, an empty `Config` is returned, and
every request that needs the database answers with an error. The
configuration is read again on every request.

```yaml
scylladb:
  host:
    - 127.0.0.1:9042
  keyspace: employee_db
  username: scylladb
  password: password
redis:
  host: 127.0.0.1:6379
  password: password
  database: 0
  enabled: true
```

With `redis.enabled` set to `false` every read goes straight to ScyllaDB.
When it is `true`, reads look in the Redis hash `employee` first and, on a
miss, store the ScyllaDB result there under the fields `designation`,
`location`, `all_data` or the employee's id.

The table the handlers work with is `employee_info`, with the columns `id`,
`name`, `designation`, `department`, `joining_date`, `address`,
`office_location`, `status`, `email` and `phone_number`.

## Modules

- `employee_api.model` — dataclasses `Employee`, `CustomMessage`,
  `Location`, `Designation`, `DetailedHealthCheck` and the configuration
  classes `Config`, `ScyllaDBConfig`, `RedisConfig`.
- `employee_api.config` — `read_config_and_property()`.
- `employee_api.scylladb` — `create_scylladb_client()` connects to the first
  reachable configured node (1 second timeout), authenticates and selects
  the keyspace, returning a `Session` with `query()`, `execute()` and
  `close()`; it is also a context manager. Failures raise `CqlError`.
- `employee_api.cache` — `create_redis_client()` builds a `redis.Redis`
  client from the configuration.
- `employee_api.api` — the employee handlers.
- `employee_api.health` — `health_check_api()`, `detailed_health_check_api()`
  and `get_redis_health()`.
- `employee_api.routes` — `create_router_for_employee(url_prefix)` returns a
  Flask blueprint with every employee endpoint under `<url_prefix>/employee`.
- `employee_api.request_logging` — `logging_middleware(app)` logs method,
  URI, status code, latency (nanoseconds) and client address of each
  request to the `employee_api.request` logger; `JsonFormatter` renders
  records as one JSON object per line.
- `employee_api.docs` — `swagger_doc(host, base_path)` returns the Swagger
  document as a dictionary.

## Endpoints

Relative to the blueprint's prefix (`<url_prefix>/employee`):

| Method | Path                  | Answer                                            |
|--------|-----------------------|---------------------------------------------------|
| GET    | `/health`             | `{"message": ...}` — whether ScyllaDB is reachable |
| GET    | `/health/detail`      | status of the API, ScyllaDB and Redis              |
| POST   | `/create`             | stores one employee record                        |
| GET    | `/search?id=<id>`     | one employee record (empty body if none)          |
| GET    | `/search/all`         | every employee record                             |
| GET    | `/search/location`    | head count per office location                    |
| GET    | `/search/designation` | head count per designation                        |

Failures are answered with status 400 and a body of the form
`{"message": "..."}`.

A record sent to `/create`:

```json
{
  "id": "OT-043",
  "name": "Jane Doe",
  "designation": "Consultant Partner",
  "department": "Technology",
  "joining_date": "2017-09-26",
  "address": "1 Example Street",
  "office_location": "Noida",
  "status": "Active Employee",
  "email": "jane@example.com",
  "phone_number": ""
}
```

`joining_date` must be written as `YYYY-MM-DD`.

## Using it

```python
import logging

from flask import Flask

from employee_api.request_logging import JsonFormatter, logging_middleware
from employee_api.routes import create_router_for_employee

handler = logging.StreamHandler()
handler.setFormatter(JsonFormatter())
logging.basicConfig(level=logging.INFO, handlers=[handler])

app = Flask(__name__)
app.register_blueprint(create_router_for_employee("/api/v1"))
logging_middleware(app)

client = app.test_client()
print(client.get("/api/v1/employee/health").get_json())
```

The resulting Flask application can be served by any WSGI server.

## What the package does not do

There is no ready-made application and no command to start a server: the
application has to be assembled as shown above. Nothing serves the Swagger
document over HTTP (`swagger_doc()` only builds it), no CORS headers are
added, and no request metrics are collected or exposed.