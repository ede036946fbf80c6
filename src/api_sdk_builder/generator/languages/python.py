"""Python (requests) SDK generator."""

import keyword
import re

from api_sdk_builder.generator.base import LanguageGenerator
from api_sdk_builder.generator.config import SDKConfig
from api_sdk_builder.generator.naming import pascal, snake, split_words
from api_sdk_builder.generator.services import Operation, ServiceGroup
from api_sdk_builder.parser.base import EndpointDescriptor

PY_KEYWORDS = frozenset(keyword.kwlist) | {"self", "path", "data", "query_params"}

DICT_TYPE = "Optional[Dict[str, Any]]"


def _escape_str(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _escape_fstring(text: str) -> str:
    return _escape_str(text).replace("{", "{{").replace("}", "}}")


class PythonGenerator(LanguageGenerator):
    language = "python"
    display_name = "Python"
    fence = "python"
    keywords = PY_KEYWORDS
    install_template = "pip install {package}"
    usage_template = (
        "from {module} import {client}\n"
        "\n"
        "client = {client}(\"your-api-key\")"
    )

    def module_name(self, config: SDKConfig) -> str:
        """Import name of the generated package."""
        return self.identifier(snake(split_words(config.package_name)) or "sdk")

    def distribution_name(self, config: SDKConfig) -> str:
        return re.sub(r"[^a-zA-Z0-9_]", "_", config.package_name)

    def client_class(self, config: SDKConfig) -> str:
        return self.identifier(pascal(split_words(config.package_name)) + "Client")

    def method_name(self, op: Operation) -> str:
        return self.identifier(snake(op.words))

    def snippet_fields(self, config: SDKConfig) -> dict[str, str]:
        fields = super().snippet_fields(config)
        fields["package"] = self.distribution_name(config)
        fields["module"] = self.module_name(config)
        return fields

    def client_path(self, config: SDKConfig) -> str:
        return f"{self.module_name(config)}/client.py"

    def service_path(self, service: ServiceGroup, config: SDKConfig) -> str:
        return f"{self.module_name(config)}/services/{self._service_module(service)}.py"

    def types_path(self, config: SDKConfig) -> str:
        return f"{self.module_name(config)}/types.py"

    def manifest_filename(self, config: SDKConfig) -> str:
        return "setup.py"

    def _service_module(self, service: ServiceGroup) -> str:
        return self.identifier(snake(service.words))

    def path_expression(self, op: Operation) -> str:
        if "{" not in op.path:
            return self.quote(op.path)
        return 'f"' + self.interpolate(op.path, lambda ident: "{" + ident + "}", _escape_fstring) + '"'

    def extra_files(self, services: list[ServiceGroup], config: SDKConfig) -> dict[str, str]:
        module = self.module_name(config)
        client = self.client_class(config)
        lines = [f'"""{_escape_str(config.summary)}"""', "", f"from .client import ApiError, {client}"]
        names = ["ApiError", client]
        for service in services:
            cls = self.service_class(service)
            lines.append(f"from .services.{self._service_module(service)} import {cls}")
            names.append(cls)
        lines.extend(["", f"__version__ = {self.quote(config.version)}", "", "__all__ = ["])
        lines.extend(f"    {self.quote(name)}," for name in names)
        lines.extend(["]", ""])
        return {
            f"{module}/__init__.py": "\n".join(lines),
            f"{module}/services/__init__.py": "",
        }

    def generate_client(self, config: SDKConfig) -> str:
        client = self.client_class(config)
        return "\n".join([
            "from typing import Any, Dict, Optional",
            "",
            "import requests",
            "",
            f"DEFAULT_BASE_URL = {self.quote(config.base_url)}",
            "",
            "",
            "class ApiError(Exception):",
            '    """Raised when the API answers with a non-2xx status."""',
            "",
            "    def __init__(self, status_code: int, message: str):",
            '        super().__init__(f"API Error {status_code}: {message}")',
            "        self.status_code = status_code",
            "",
            "",
            f"class {client}:",
            "    def __init__(self, api_key: str, base_url: str = DEFAULT_BASE_URL):",
            "        self.api_key = api_key",
            "        self.base_url = base_url",
            "        self.session = requests.Session()",
            "        self.session.headers.update({",
            '            "Authorization": f"Bearer {api_key}",',
            '            "Content-Type": "application/json",',
            "        })",
            "",
            f"    def request(self, method: str, path: str, data: {DICT_TYPE} = None) -> Any:",
            '        response = self.session.request(method, f"{self.base_url}{path}", json=data)',
            "        if not response.ok:",
            "            raise ApiError(response.status_code, response.text)",
            "        if not response.content:",
            "            return None",
            "        return response.json()",
            "",
        ])

    def generate_service(self, service: ServiceGroup, config: SDKConfig) -> str:
        lines = ["from typing import Any, Dict, Optional"]
        if any(op.has_query for op in service.operations):
            lines.append("from urllib.parse import urlencode")
        lines.extend([
            "",
            "",
            f"class {self.service_class(service)}:",
            "    def __init__(self, client):",
            "        self.client = client",
        ])
        for op in service.operations:
            lines.append("")
            lines.extend(self._method(op))
        lines.append("")
        return "\n".join(lines)

    def _method(self, op: Operation) -> list[str]:
        args = ["self"] + [f"{self.identifier(p.name)}: str" for p in op.path_params]
        if op.has_query:
            args.append(f"query_params: {DICT_TYPE} = None")
        if op.has_body:
            args.append(f"data: {DICT_TYPE} = None")

        lines = [f"    def {self.method_name(op)}({', '.join(args)}) -> Any:"]
        summary = self.summary_line(op)
        if summary:
            lines.append(f'        """{_escape_str(summary)}"""')
        lines.append(f"        path = {self.path_expression(op)}")
        if op.has_query:
            lines.extend([
                "        if query_params:",
                '            path += "?" + urlencode(query_params, doseq=True)',
            ])
        call_args = [self.quote(op.http_method), "path"]
        if op.has_body:
            call_args.append("data")
        lines.append(f"        return self.client.request({', '.join(call_args)})")
        return lines

    def generate_types(self, endpoints: list[EndpointDescriptor], config: SDKConfig) -> str:
        return (
            f"# Type definitions for {len(endpoints)} endpoints\n"
            "# Generated automatically\n"
            "\n"
            "from typing import Any, Dict\n"
            "\n"
            "ApiResponse = Dict[str, Any]\n"
        )

    def generate_manifest(self, config: SDKConfig) -> dict:
        module = self.module_name(config)
        manifest = {
            "name": self.distribution_name(config),
            "version": config.version,
            "description": config.summary,
            "license": config.license,
            "packages": [module, f"{module}.services"],
            "install_requires": ["requests>=2.25.0"],
            "python_requires": ">=3.7",
        }
        if config.author:
            manifest["author"] = config.author
        return manifest

    def example_call(self, service: ServiceGroup, op: Operation, config: SDKConfig) -> str:
        var = self.identifier(snake(service.words + ["service"]))
        args = [self.quote(f"<{p.name}>") for p in op.path_params]
        if op.has_query:
            pairs = ", ".join(f"{self.quote(p.name)}: {self.quote(f'<{p.name}>')}" for p in op.endpoint.query_params)
            args.append(f"query_params={{{pairs}}}")
        if op.has_body:
            args.append("data={}")
        return "\n".join([
            f"from {self.module_name(config)} import {self.service_class(service)}",
            "",
            f"{var} = {self.service_class(service)}(client)",
            f"result = {var}.{self.method_name(op)}({', '.join(args)})",
        ])
