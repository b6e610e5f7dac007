"""URL routing for the employee endpoints."""

from __future__ import annotations

from flask import Blueprint

from employee_api.api import (
    create_employee_data,
    read_complete_employees_data,
    read_employee_data,
    read_employees_designation,
    read_employees_location,
)
from employee_api.health import detailed_health_check_api, health_check_api


def create_router_for_employee(url_prefix: str = "") -> Blueprint:
    """Build the blueprint serving the employee endpoints under ``<url_prefix>/employee``."""
    employee = Blueprint("employee", __name__, url_prefix=url_prefix.rstrip("/") + "/employee")
    employee.add_url_rule("/health", view_func=health_check_api, methods=["GET"])
    employee.add_url_rule("/health/detail", view_func=detailed_health_check_api, methods=["GET"])
    employee.add_url_rule("/create", view_func=create_employee_data, methods=["POST"])
    employee.add_url_rule("/search", view_func=read_employee_data, methods=["GET"])
    employee.add_url_rule("/search/all", view_func=read_complete_employees_data, methods=["GET"])
    employee.add_url_rule("/search/location", view_func=read_employees_location, methods=["GET"])
    employee.add_url_rule(
        "/search/designation", view_func=read_employees_designation, methods=["GET"]
    )
    return employee