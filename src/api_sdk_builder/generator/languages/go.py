"""Go (resty) SDK generator."""

import re

from api_sdk_builder.generator.base import PLACEHOLDER_RE, LanguageGenerator
from api_sdk_builder.generator.config import SDKConfig
from api_sdk_builder.generator.naming import doc_line, pascal, snake
from api_sdk_builder.generator.services import Operation, ServiceGroup
from api_sdk_builder.parser.base import EndpointDescriptor

GO_KEYWORDS = frozenset({
    "break", "case", "chan", "const", "continue", "default", "defer", "else",
    "fallthrough", "for", "func", "go", "goto", "if", "import", "interface",
    "map", "package", "range", "return", "select", "struct", "switch", "type",
    "var",
    # names the generated methods use
    "s", "path", "queryParams", "data", "fmt", "url", "resty",
})

RESTY_IMPORT = '"github.com/go-resty/resty/v2"'


def _escape_format(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("%", "%%")


class GoGenerator(LanguageGenerator):
    language = "go"
    display_name = "Go"
    fence = "go"
    keywords = GO_KEYWORDS
    install_template = "go get {package}"
    usage_template = (
        "import {go_package} \"{package}\"\n"
        "\n"
        "client := {go_package}.NewClient(\"your-api-key\")"
    )

    def module_path(self, config: SDKConfig) -> str:
        return re.sub(r"\s+", "-", config.package_name.strip()) or "sdk"

    def go_package(self, config: SDKConfig) -> str:
        last = self.module_path(config).rstrip("/").split("/")[-1]
        # drop a major-version suffix such as /v2
        if re.fullmatch(r"v\d+", last) and "/" in self.module_path(config):
            last = self.module_path(config).rstrip("/").split("/")[-2]
        name = re.sub(r"[^a-z0-9]", "", last.lower()) or "sdk"
        return self.identifier(name if not name[0].isdigit() else "sdk" + name)

    def snippet_fields(self, config: SDKConfig) -> dict[str, str]:
        fields = super().snippet_fields(config)
        fields["package"] = self.module_path(config)
        fields["go_package"] = self.go_package(config)
        return fields

    def method_name(self, op: Operation) -> str:
        return pascal(op.words)

    def client_path(self, config: SDKConfig) -> str:
        return "client.go"

    def service_path(self, service: ServiceGroup, config: SDKConfig) -> str:
        # suffixed so a tag named "client" or "types" cannot clobber those files
        return f"{snake(service.words)}_service.go"

    def types_path(self, config: SDKConfig) -> str:
        return "types.go"

    def manifest_filename(self, config: SDKConfig) -> str:
        return "go.mod"

    def path_expression(self, op: Operation) -> str:
        idents = []

        def render(ident: str) -> str:
            idents.append(ident)
            return "%s"

        template = self.interpolate(op.path, render, _escape_format)
        if not idents:
            return self.quote(op.path)
        return f"fmt.Sprintf(\"{template}\", {', '.join(idents)})"

    def generate_client(self, config: SDKConfig) -> str:
        return "\n".join([
            f"package {self.go_package(config)}",
            "",
            "import (",
            '\t"fmt"',
            "",
            f"\t{RESTY_IMPORT}",
            ")",
            "",
            "// DefaultBaseURL is the API root used when NewClient gets no override.",
            f"const DefaultBaseURL = {self.quote(config.base_url)}",
            "",
            "// Client sends authenticated requests to the API.",
            "type Client struct {",
            "\tclient  *resty.Client",
            "\tbaseURL string",
            "\tapiKey  string",
            "}",
            "",
            "// NewClient creates a Client; an optional second argument overrides the base URL.",
            "func NewClient(apiKey string, baseURL ...string) *Client {",
            "\turl := DefaultBaseURL",
            "\tif len(baseURL) > 0 {",
            "\t\turl = baseURL[0]",
            "\t}",
            "",
            "\tclient := resty.New()",
            "\tclient.SetBaseURL(url)",
            '\tclient.SetHeader("Authorization", "Bearer "+apiKey)',
            '\tclient.SetHeader("Content-Type", "application/json")',
            "",
            "\treturn &Client{",
            "\t\tclient:  client,",
            "\t\tbaseURL: url,",
            "\t\tapiKey:  apiKey,",
            "\t}",
            "}",
            "",
            "// Request sends method to path with an optional JSON body.",
            "func (c *Client) Request(method, path string, data interface{}) (*resty.Response, error) {",
            "\trequest := c.client.R()",
            "\tif data != nil {",
            "\t\trequest.SetBody(data)",
            "\t}",
            "",
            "\tresp, err := request.Execute(method, path)",
            "\tif err != nil {",
            "\t\treturn resp, err",
            "\t}",
            "\tif resp.IsError() {",
            '\t\treturn resp, fmt.Errorf("API Error: %s", resp.Status())',
            "\t}",
            "\treturn resp, nil",
            "}",
            "",
        ])

    def generate_service(self, service: ServiceGroup, config: SDKConfig) -> str:
        cls = self.service_class(service)

        std_imports = []
        if any(PLACEHOLDER_RE.search(op.path) for op in service.operations):
            std_imports.append('"fmt"')
        if any(op.has_query for op in service.operations):
            std_imports.append('"net/url"')

        lines = [f"package {self.go_package(config)}", "", "import ("]
        lines.extend(f"\t{imp}" for imp in std_imports)
        if std_imports:
            lines.append("")
        lines.extend([
            f"\t{RESTY_IMPORT}",
            ")",
            "",
            f"// {cls} groups the {doc_line(service.key)} endpoints.",
            f"type {cls} struct {{",
            "\tclient *Client",
            "}",
            "",
            f"// New{cls} creates a {cls} bound to client.",
            f"func New{cls}(client *Client) *{cls} {{",
            f"\treturn &{cls}{{client: client}}",
            "}",
        ])
        for op in service.operations:
            lines.append("")
            lines.extend(self._method(cls, op))
        lines.append("")
        return "\n".join(lines)

    def _method(self, cls: str, op: Operation) -> list[str]:
        args = [f"{self.identifier(p.name)} string" for p in op.path_params]
        if op.has_query:
            args.append("queryParams url.Values")
        if op.has_body:
            args.append("data interface{}")
        body = "data" if op.has_body else "nil"
        name = self.method_name(op)

        summary = self.summary_line(op)
        lines = [f"// {name} {summary}" if summary else f"// {name} calls {op.http_method} {op.path}."]
        lines.append(f"func (s *{cls}) {name}({', '.join(args)}) (*resty.Response, error) {{")
        if op.has_query:
            lines.extend([
                f"\tpath := {self.path_expression(op)}",
                "\tif len(queryParams) > 0 {",
                '\t\tpath += "?" + queryParams.Encode()',
                "\t}",
                f"\treturn s.client.Request({self.quote(op.http_method)}, path, {body})",
            ])
        else:
            lines.append(f"\treturn s.client.Request({self.quote(op.http_method)}, {self.path_expression(op)}, {body})")
        lines.append("}")
        return lines

    def generate_types(self, endpoints: list[EndpointDescriptor], config: SDKConfig) -> str:
        return "\n".join([
            f"package {self.go_package(config)}",
            "",
            f"// ApiResponse represents a generic API response ({len(endpoints)} endpoints).",
            "type ApiResponse map[string]interface{}",
            "",
        ])

    def generate_manifest(self, config: SDKConfig) -> str:
        return (
            f"module {self.module_path(config)}\n"
            "\n"
            "go 1.19\n"
            "\n"
            "require github.com/go-resty/resty/v2 v2.7.0\n"
        )

    def example_call(self, service: ServiceGroup, op: Operation, config: SDKConfig) -> str:
        pkg = self.go_package(config)
        cls = self.service_class(service)
        args = [self.quote(f"<{p.name}>") for p in op.path_params]
        if op.has_query:
            pairs = ", ".join(f"{self.quote(p.name)}: {{{self.quote(f'<{p.name}>')}}}" for p in op.endpoint.query_params)
            args.append(f"url.Values{{{pairs}}}")
        if op.has_body:
            args.append("map[string]interface{}{}")
        return "\n".join([
            f"service := {pkg}.New{cls}(client)",
            f"resp, err := service.{self.method_name(op)}({', '.join(args)})",
        ])
