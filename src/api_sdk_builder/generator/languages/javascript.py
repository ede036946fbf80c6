"""JavaScript (Node.js + axios) SDK generator."""

import re

from api_sdk_builder.generator.base import LanguageGenerator
from api_sdk_builder.generator.config import SDKConfig
from api_sdk_builder.generator.naming import camel, pascal, snake, split_words
from api_sdk_builder.generator.services import Operation, ServiceGroup
from api_sdk_builder.parser.base import EndpointDescriptor

JS_KEYWORDS = frozenset({
    "await", "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "enum", "export", "extends", "false",
    "finally", "for", "function", "if", "implements", "import", "in",
    "instanceof", "interface", "let", "new", "null", "package", "private",
    "protected", "public", "return", "static", "super", "switch", "this",
    "throw", "true", "try", "typeof", "var", "void", "while", "with", "yield",
    # locals of generated methods
    "path", "query", "queryParams", "data",
})


def _escape_template(text: str) -> str:
    return text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")


class JavaScriptGenerator(LanguageGenerator):
    language = "javascript"
    display_name = "JavaScript"
    fence = "javascript"
    keywords = JS_KEYWORDS
    install_template = "npm install {package}"
    usage_template = (
        "const {{ {client} }} = require('{package}');\n"
        "\n"
        "const client = new {client}('your-api-key');"
    )

    def client_path(self, config: SDKConfig) -> str:
        return "src/client.js"

    def service_path(self, service: ServiceGroup, config: SDKConfig) -> str:
        return f"src/services/{snake(service.words)}.js"

    def types_path(self, config: SDKConfig) -> str:
        return "src/types.js"

    def manifest_filename(self, config: SDKConfig) -> str:
        return "package.json"

    def client_class(self, config: SDKConfig) -> str:
        return self.identifier(pascal(split_words(config.package_name)) + "Client")

    def npm_name(self, config: SDKConfig) -> str:
        return re.sub(r"[^a-z0-9._~@/-]+", "-", config.package_name.lower()).strip("-") or "sdk"

    def snippet_fields(self, config: SDKConfig) -> dict[str, str]:
        fields = super().snippet_fields(config)
        fields["package"] = self.npm_name(config)
        return fields

    def quote(self, text: str) -> str:
        return "'" + text.replace("\\", "\\\\").replace("'", "\\'") + "'"

    def path_expression(self, op: Operation) -> str:
        if "{" not in op.path:
            return self.quote(op.path)
        return "`" + self.interpolate(op.path, lambda ident: "${" + ident + "}", _escape_template) + "`"

    def extra_files(self, services: list[ServiceGroup], config: SDKConfig) -> dict[str, str]:
        client = self.client_class(config)
        lines = [f"const {client} = require('./client');"]
        for service in services:
            cls = self.service_class(service)
            lines.append(f"const {cls} = require('./services/{snake(service.words)}');")
        exports = ", ".join([client] + [self.service_class(s) for s in services])
        lines.extend(["", f"module.exports = {{ {exports} }};", ""])
        return {"src/index.js": "\n".join(lines)}

    def generate_client(self, config: SDKConfig) -> str:
        client = self.client_class(config)
        return "\n".join([
            "const axios = require('axios');",
            "",
            f"const DEFAULT_BASE_URL = {self.quote(config.base_url)};",
            "",
            f"class {client} {{",
            "  constructor(apiKey, baseUrl = DEFAULT_BASE_URL) {",
            "    this.apiKey = apiKey;",
            "    this.baseUrl = baseUrl;",
            "    this.client = axios.create({",
            "      baseURL: baseUrl,",
            "      headers: {",
            "        'Authorization': `Bearer ${apiKey}`,",
            "        'Content-Type': 'application/json'",
            "      }",
            "    });",
            "  }",
            "",
            "  async request(method, path, data = null) {",
            "    try {",
            "      const response = await this.client.request({ method, url: path, data });",
            "      return response.data;",
            "    } catch (error) {",
            "      const message = (error.response && error.response.data && error.response.data.message) || error.message;",
            "      throw new Error(`API Error: ${message}`);",
            "    }",
            "  }",
            "}",
            "",
            f"module.exports = {client};",
            "",
        ])

    def generate_service(self, service: ServiceGroup, config: SDKConfig) -> str:
        cls = self.service_class(service)
        lines = [
            f"class {cls} {{",
            "  constructor(client) {",
            "    this.client = client;",
            "  }",
        ]
        for op in service.operations:
            lines.append("")
            lines.extend(self._method(op))
        lines.extend(["}", "", f"module.exports = {cls};", ""])
        return "\n".join(lines)

    def _method(self, op: Operation) -> list[str]:
        args = [self.identifier(p.name) for p in op.path_params]
        if op.has_query:
            args.append("queryParams = {}")
        if op.has_body:
            args.append("data = null")

        call_args = [self.quote(op.http_method), "path" if op.has_query else self.path_expression(op)]
        if op.has_body:
            call_args.append("data")

        lines = []
        summary = self.summary_line(op)
        if summary:
            lines.extend(["  /**", f"   * {summary}", "   */"])
        lines.append(f"  async {self.method_name(op)}({', '.join(args)}) {{")
        if op.has_query:
            lines.extend([
                f"    let path = {self.path_expression(op)};",
                "    const query = new URLSearchParams(queryParams).toString();",
                "    if (query) {",
                "      path += `?${query}`;",
                "    }",
            ])
        lines.append(f"    return this.client.request({', '.join(call_args)});")
        lines.append("  }")
        return lines

    def generate_types(self, endpoints: list[EndpointDescriptor], config: SDKConfig) -> str:
        return (
            f"// Type definitions for {len(endpoints)} endpoints\n"
            "// Generated automatically\n"
            "\n"
            "module.exports = {};\n"
        )

    def generate_manifest(self, config: SDKConfig) -> dict:
        manifest = {
            "name": self.npm_name(config),
            "version": config.version,
            "description": config.summary,
            "main": "src/index.js",
            "license": config.license,
            "dependencies": {"axios": "^1.0.0"},
            "devDependencies": {"jest": "^29.0.0"},
            "scripts": {"test": "jest", "build": "npm run test"},
        }
        if config.author:
            manifest["author"] = config.author
        return manifest

    def example_call(self, service: ServiceGroup, op: Operation, config: SDKConfig) -> str:
        var = self.identifier(camel(service.words + ["service"]))
        args = [self.quote(f"<{p.name}>") for p in op.path_params]
        if op.has_query:
            pairs = ", ".join(f"{self.quote(p.name)}: {self.quote(f'<{p.name}>')}" for p in op.endpoint.query_params)
            args.append(f"{{ {pairs} }}")
        if op.has_body:
            args.append("{ /* request body */ }")
        return "\n".join([
            f"const {var} = new {self.service_class(service)}(client);",
            f"const result = await {var}.{self.method_name(op)}({', '.join(args)});",
        ])
