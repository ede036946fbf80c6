from api_sdk_builder.generator.validator import validate_files, validate_json, validate_python


class TestValidatePython:
    def test_valid_code(self):
        errors = validate_python({"acme/client.py": "import os\nx = 1\n"})
        assert errors == {}

    def test_syntax_error(self):
        errors = validate_python({"acme/bad.py": "def foo(\n"})
        assert "acme/bad.py" in errors
        assert "SyntaxError" in errors["acme/bad.py"]

    def test_skips_non_python(self):
        errors = validate_python({"src/client.js": "class {", "ok.py": "x = 1"})
        assert errors == {}

    def test_skips_empty_init(self):
        errors = validate_python({"acme/services/__init__.py": ""})
        assert errors == {}


class TestValidateJson:
    def test_valid_json(self):
        assert validate_json({"package.json": '{"name": "acme"}'}) == {}

    def test_invalid_json(self):
        errors = validate_json({"composer.json": '{"name": '})
        assert "composer.json" in errors
        assert "JSONDecodeError" in errors["composer.json"]

    def test_skips_non_json(self):
        assert validate_json({"go.mod": "module acme"}) == {}


class TestValidateFiles:
    def test_combines_checks(self):
        errors = validate_files({
            "setup.py": "setup(\n",
            "package.json": "{",
            "Client.cs": "namespace {",
        })
        assert set(errors) == {"setup.py", "package.json"}
