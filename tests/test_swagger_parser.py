from pathlib import Path

from api_sdk_builder.parser.detect import detect_format
from api_sdk_builder.parser.swagger import parse_base_url, parse_openapi

FIXTURES = Path(__file__).parent / "fixtures"


class TestDetectFormat:
    def test_detect_openapi_yaml(self):
        assert detect_format(FIXTURES / "petstore.yaml") == "swagger"

    def test_detect_swagger_json(self):
        assert detect_format(FIXTURES / "swagger2.json") == "swagger"

    def test_detect_postman(self):
        assert detect_format(FIXTURES / "sample.postman.json") == "postman"

    def test_detect_unknown_format(self, tmp_path):
        f = tmp_path / "doc.md"
        f.write_text("# API Docs\nSome text")
        assert detect_format(f) == "markdown"

    def test_detect_markdown_fixture(self):
        assert detect_format(FIXTURES / "sample-api.md") == "markdown"


class TestOpenApiParser:
    def test_endpoint_count(self):
        endpoints = parse_openapi(FIXTURES / "petstore.yaml")
        assert len(endpoints) == 6

    def test_document_order(self):
        endpoints = parse_openapi(FIXTURES / "petstore.yaml")
        assert [(e.method, e.path) for e in endpoints] == [
            ("GET", "/pets"),
            ("POST", "/pets"),
            ("GET", "/pets/{petId}"),
            ("DELETE", "/pets/{petId}"),
            ("GET", "/store/inventory"),
            ("GET", "/health"),
        ]

    def test_query_param(self):
        endpoints = parse_openapi(FIXTURES / "petstore.yaml")
        get_pets = endpoints[0]
        assert get_pets.summary == "List all pets"
        assert get_pets.tags == ["pets"]
        assert len(get_pets.parameters) == 1
        assert get_pets.parameters[0].name == "limit"
        assert get_pets.parameters[0].location == "query"
        assert get_pets.parameters[0].required is False
        assert get_pets.parameters[0].param_type == "integer"
        assert get_pets.has_request_body is False

    def test_request_body(self):
        endpoints = parse_openapi(FIXTURES / "petstore.yaml")
        post_pets = [e for e in endpoints if e.method == "POST"][0]
        assert post_pets.has_request_body is True

    def test_path_level_params_merged(self):
        endpoints = parse_openapi(FIXTURES / "petstore.yaml")
        for ep in endpoints:
            if "{petId}" in ep.path:
                assert [p.name for p in ep.path_params] == ["petId"]
                assert ep.path_params[0].required is True

    def test_untagged_operation(self):
        endpoints = parse_openapi(FIXTURES / "petstore.yaml")
        health = endpoints[-1]
        assert health.tags == []
        assert health.service_key == "default"

    def test_swagger2_body_param(self):
        endpoints = parse_openapi(FIXTURES / "swagger2.json")
        assert len(endpoints) == 1
        order = endpoints[0]
        assert order.has_request_body is True
        # body parameters are not SDK arguments
        assert [p.name for p in order.parameters] == ["dryRun"]
        assert order.parameters[0].param_type == "boolean"

    def test_operation_param_overrides_path_param(self, tmp_path):
        f = tmp_path / "api.yaml"
        f.write_text(
            "openapi: '3.0.0'\n"
            "paths:\n"
            "  /items/{id}:\n"
            "    parameters:\n"
            "      - {name: id, in: path, required: true, description: shared}\n"
            "    get:\n"
            "      parameters:\n"
            "        - {name: id, in: path, required: true, description: own}\n"
        )
        endpoints = parse_openapi(f)
        assert len(endpoints[0].parameters) == 1
        assert endpoints[0].parameters[0].description == "own"


class TestParseBaseUrl:
    def test_openapi_servers(self):
        assert parse_base_url(FIXTURES / "petstore.yaml") == "https://petstore.example.com/v1"

    def test_swagger2_host(self):
        assert parse_base_url(FIXTURES / "swagger2.json") == "http://orders.example.com/api"

    def test_missing(self, tmp_path):
        f = tmp_path / "api.yaml"
        f.write_text("openapi: '3.0.0'\npaths: {}\n")
        assert parse_base_url(f) is None
