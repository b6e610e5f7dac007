import json

from employee_api.docs import swagger_doc


def _refs(node):
    if isinstance(node, dict):
        for key, value in node.items():
            if key == "$ref":
                yield value
            else:
                yield from _refs(value)
    elif isinstance(node, list):
        for item in node:
            yield from _refs(item)


def test_swagger_doc_header_fields():
    doc = swagger_doc()
    assert doc["swagger"] == "2.0"
    assert doc["schemes"] == ["http"]
    assert doc["basePath"] == "/api/v1"
    assert doc["info"]["title"] == "Employee API"
    assert doc["info"]["version"] == "1.0"
    assert doc["info"]["description"] == "The REST API documentation for employee webserver"


def test_swagger_doc_lists_every_path():
    assert set(swagger_doc()["paths"]) == {
        "/create",
        "/health",
        "/health/detail",
        "/search",
        "/search/all",
        "/search/designation",
        "/search/location",
    }


def test_swagger_doc_host_and_base_path_are_used():
    doc = swagger_doc(host="api.example.com", base_path="/api/v1/employee")
    assert doc["host"] == "api.example.com"
    assert doc["basePath"] == "/api/v1/employee"


def test_every_reference_resolves():
    doc = swagger_doc()
    found = list(_refs(doc["paths"]))
    assert found
    for ref in found:
        assert ref.startswith("#/definitions/")
        assert ref.split("/")[-1] in doc["definitions"]


def test_swagger_doc_round_trips_through_json():
    doc = swagger_doc()
    assert json.loads(json.dumps(doc)) == doc


def test_search_requires_id_query_parameter():
    parameters = swagger_doc()["paths"]["/search"]["get"]["parameters"]
    assert parameters[0]["name"] == "id"
    assert parameters[0]["in"] == "query"
    assert parameters[0]["required"] is True


def test_designation_definition_keys():
    props = swagger_doc()["definitions"]["model.Designation"]["properties"]
    assert set(props) == {
        "Consultant Partner",
        "DevOps Consultant",
        "DevOps Specialist",
        "Growth Partner",
    }
    assert all(p["type"] == "integer" for p in props.values())