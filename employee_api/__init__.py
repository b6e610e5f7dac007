"""Flask handlers, routing, health checks and clients for employee records in ScyllaDB with an optional Redis cache."""

__version__ = "0.1.0"