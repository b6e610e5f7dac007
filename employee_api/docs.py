"""The Swagger 2.0 description of the employee API."""

from __future__ import annotations

from typing import Any

TITLE = "Employee API"
VERSION = "1.0"
DESCRIPTION = "The REST API documentation for employee webserver"
DEFAULT_BASE_PATH = "/api/v1"

_JSON = ["application/json"]


def _ref(name: str) -> dict[str, str]:
    return {"$ref": f"#/definitions/model.{name}"}


def _operation(
    summary: str,
    description: str,
    tag: str,
    schema: dict[str, Any],
    parameters: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    operation: dict[str, Any] = {
        "description": description,
        "consumes": list(_JSON),
        "produces": list(_JSON),
        "tags": [tag],
        "summary": summary,
    }
    if parameters:
        operation["parameters"] = parameters
    operation["responses"] = {"200": {"description": "OK", "schema": schema}}
    return operation


def _object(properties: dict[str, str]) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {name: {"type": kind} for name, kind in properties.items()},
    }


def _paths() -> dict[str, Any]:
    return {
        "/create": {
            "post": _operation(
                "CreateEmployeeData is a method to write employee information in database",
                "Write data in database",
                "employee",
                _ref("Employee"),
                [
                    {
                        "description": "Employee Data",
                        "name": "employee",
                        "in": "body",
                        "required": True,
                        "schema": _ref("Employee"),
                    }
                ],
            )
        },
        "/health": {
            "get": _operation(
                "HealthCheckAPI is a method to perform healthcheck of application",
                "Do healthcheck",
                "healthcheck",
                _ref("CustomMessage"),
            )
        },
        "/health/detail": {
            "get": _operation(
                "DetailedHealthCheckAPI is a method to perform detailed healthcheck of application",
                "Do detailed healthcheck",
                "healthcheck",
                _ref("DetailedHealthCheck"),
            )
        },
        "/search": {
            "get": _operation(
                "ReadEmployeeData is a method to read employee information",
                "Read data from database",
                "employee",
                _ref("Employee"),
                [
                    {
                        "type": "string",
                        "description": "User ID",
                        "name": "id",
                        "in": "query",
                        "required": True,
                    }
                ],
            )
        },
        "/search/all": {
            "get": _operation(
                "ReadCompleteEmployeesData is a method to read all employee's information",
                "Read all employee data from database",
                "employee",
                {"type": "array", "items": _ref("Employee")},
            )
        },
        "/search/designation": {
            "get": _operation(
                "ReadEmployeesDesignation is a method to read all employee designation",
                "Read all employee location data from database",
                "employee",
                _ref("Designation"),
            )
        },
        "/search/location": {
            "get": _operation(
                "ReadEmployeesLocation is a method to read all employee location",
                "Read all employee location data from database",
                "employee",
                _ref("Location"),
            )
        },
    }


def _definitions() -> dict[str, Any]:
    employee_fields = (
        "address",
        "department",
        "designation",
        "email",
        "id",
        "joining_date",
        "name",
        "office_location",
        "phone_number",
        "status",
    )
    return {
        "model.CustomMessage": _object({"message": "string"}),
        "model.Designation": _object(
            {
                "Consultant Partner": "integer",
                "DevOps Consultant": "integer",
                "DevOps Specialist": "integer",
                "Growth Partner": "integer",
            }
        ),
        "model.DetailedHealthCheck": _object(
            {
                "employee_api": "string",
                "message": "string",
                "redis": "string",
                "scylla_db": "string",
            }
        ),
        "model.Employee": _object({name: "string" for name in employee_fields}),
        "model.Location": _object(
            {
                "Bangalore": "integer",
                "Delaware": "integer",
                "Hyderabad": "integer",
                "Noida": "integer",
            }
        ),
    }


def swagger_doc(host: str = "", base_path: str = DEFAULT_BASE_PATH) -> dict[str, Any]:
    """Return the Swagger document for the given host and base path."""
    return {
        "schemes": ["http"],
        "swagger": "2.0",
        "info": {"description": DESCRIPTION, "title": TITLE, "version": VERSION},
        "host": host,
        "basePath": base_path,
        "paths": _paths(),
        "definitions": _definitions(),
    }