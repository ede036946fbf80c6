"""C# (.NET HttpClient + Newtonsoft.Json) SDK generator."""

from api_sdk_builder.generator.base import LanguageGenerator
from api_sdk_builder.generator.config import SDKConfig
from api_sdk_builder.generator.naming import pascal, sanitize_identifier, xml_escape
from api_sdk_builder.generator.services import Operation, ServiceGroup
from api_sdk_builder.parser.base import EndpointDescriptor

CSHARP_KEYWORDS = frozenset({
    "abstract", "as", "base", "bool", "break", "byte", "case", "catch", "char",
    "checked", "class", "const", "continue", "decimal", "default", "delegate",
    "do", "double", "else", "enum", "event", "explicit", "extern", "false",
    "finally", "fixed", "float", "for", "foreach", "goto", "if", "implicit",
    "in", "int", "interface", "internal", "is", "lock", "long", "namespace",
    "new", "null", "object", "operator", "out", "override", "params",
    "private", "protected", "public", "readonly", "ref", "return", "sbyte",
    "sealed", "short", "sizeof", "stackalloc", "static", "string", "struct",
    "switch", "this", "throw", "true", "try", "typeof", "uint", "ulong",
    "unchecked", "unsafe", "ushort", "using", "virtual", "void", "volatile",
    "while",
})

# Locals and parameters of generated methods; "@path" and "path" are one identifier
GENERATED_NAMES = frozenset({"path", "queryParams", "data", "kv"})


def _escape_str(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _escape_interpolated(text: str) -> str:
    return _escape_str(text).replace("{", "{{").replace("}", "}}")


class CSharpGenerator(LanguageGenerator):
    language = "csharp"
    display_name = "C#"
    fence = "csharp"
    keywords = CSHARP_KEYWORDS
    escape_format = "@{}"
    install_template = "dotnet add package {package}"
    usage_template = (
        "using {namespace};\n"
        "\n"
        "var client = new Client(\"your-api-key\");"
    )

    def identifier(self, name: str) -> str:
        ident = sanitize_identifier(name, GENERATED_NAMES)
        return sanitize_identifier(ident, self.keywords, self.escape_format)

    def method_name(self, op: Operation) -> str:
        return pascal(op.words) + "Async"

    def client_path(self, config: SDKConfig) -> str:
        return "Client.cs"

    def service_path(self, service: ServiceGroup, config: SDKConfig) -> str:
        return f"Services/{self.service_class(service)}.cs"

    def types_path(self, config: SDKConfig) -> str:
        return "Models/ApiResponse.cs"

    def manifest_filename(self, config: SDKConfig) -> str:
        return f"{self.namespace(config)}.csproj"

    def path_expression(self, op: Operation) -> str:
        if "{" not in op.path:
            return self.quote(op.path)
        return '$"' + self.interpolate(op.path, lambda ident: "{" + ident + "}", _escape_interpolated) + '"'

    def generate_client(self, config: SDKConfig) -> str:
        ns = self.namespace(config)
        return "\n".join([
            "using System;",
            "using System.Net.Http;",
            "using System.Text;",
            "using System.Threading.Tasks;",
            "using Newtonsoft.Json;",
            "",
            f"namespace {ns}",
            "{",
            "    public class Client",
            "    {",
            f"        public const string DefaultBaseUrl = {self.quote(config.base_url)};",
            "",
            "        private readonly HttpClient _httpClient;",
            "        private readonly string _baseUrl;",
            "        private readonly string _apiKey;",
            "",
            "        public Client(string apiKey, string baseUrl = DefaultBaseUrl)",
            "        {",
            "            _apiKey = apiKey;",
            "            _baseUrl = baseUrl;",
            "            _httpClient = new HttpClient();",
            "            _httpClient.DefaultRequestHeaders.Add(\"Authorization\", $\"Bearer {apiKey}\");",
            "        }",
            "",
            "        public async Task<string> RequestAsync(string method, string path, object data = null)",
            "        {",
            "            var request = new HttpRequestMessage(new HttpMethod(method), _baseUrl + path);",
            "",
            "            if (data != null)",
            "            {",
            "                var json = JsonConvert.SerializeObject(data);",
            "                request.Content = new StringContent(json, Encoding.UTF8, \"application/json\");",
            "            }",
            "",
            "            var response = await _httpClient.SendAsync(request);",
            "",
            "            if (!response.IsSuccessStatusCode)",
            "            {",
            "                throw new HttpRequestException($\"API Error: {(int)response.StatusCode} {response.StatusCode}\");",
            "            }",
            "",
            "            return await response.Content.ReadAsStringAsync();",
            "        }",
            "    }",
            "}",
            "",
        ])

    def generate_service(self, service: ServiceGroup, config: SDKConfig) -> str:
        cls = self.service_class(service)
        lines = [
            "using System;",
            "using System.Collections.Generic;",
            "using System.Linq;",
            "using System.Threading.Tasks;",
            "",
            f"namespace {self.namespace(config)}.Services",
            "{",
            f"    public class {cls}",
            "    {",
            "        private readonly Client _client;",
            "",
            f"        public {cls}(Client client)",
            "        {",
            "            _client = client;",
            "        }",
        ]
        for op in service.operations:
            lines.append("")
            lines.extend(self._method(op))
        lines.extend(["    }", "}", ""])
        return "\n".join(lines)

    def _method(self, op: Operation) -> list[str]:
        args = [f"string {self.identifier(p.name)}" for p in op.path_params]
        if op.has_query:
            args.append("Dictionary<string, string> queryParams = null")
        if op.has_body:
            args.append("object data = null")
        body = "data" if op.has_body else "null"

        lines = []
        summary = self.summary_line(op)
        if summary:
            summary = xml_escape(summary)
            lines.extend(["        /// <summary>", f"        /// {summary}", "        /// </summary>"])
        lines.extend([
            f"        public async Task<string> {self.method_name(op)}({', '.join(args)})",
            "        {",
        ])
        if op.has_query:
            lines.extend([
                f"            var path = {self.path_expression(op)};",
                "            if (queryParams != null && queryParams.Count > 0)",
                "            {",
                "                path += \"?\" + string.Join(\"&\", queryParams.Select(kv => "
                "$\"{Uri.EscapeDataString(kv.Key)}={Uri.EscapeDataString(kv.Value)}\"));",
                "            }",
                f"            return await _client.RequestAsync({self.quote(op.http_method)}, path, {body});",
            ])
        else:
            lines.append(
                f"            return await _client.RequestAsync({self.quote(op.http_method)}, {self.path_expression(op)}, {body});"
            )
        lines.append("        }")
        return lines

    def generate_types(self, endpoints: list[EndpointDescriptor], config: SDKConfig) -> str:
        return "\n".join([
            f"namespace {self.namespace(config)}.Models",
            "{",
            f"    // Models for {len(endpoints)} endpoints",
            "    public class ApiResponse",
            "    {",
            "        // Generated model class",
            "    }",
            "}",
            "",
        ])

    def generate_manifest(self, config: SDKConfig) -> str:
        return f"""<Project Sdk="Microsoft.NET.Sdk">
  <PropertyGroup>
    <TargetFramework>net6.0</TargetFramework>
    <RootNamespace>{self.namespace(config)}</RootNamespace>
    <PackageId>{xml_escape(config.package_name)}</PackageId>
    <Version>{xml_escape(config.version)}</Version>
    <Authors>{xml_escape(config.author or "Generated")}</Authors>
    <Description>{xml_escape(config.summary)}</Description>
    <PackageLicenseExpression>{xml_escape(config.license)}</PackageLicenseExpression>
  </PropertyGroup>

  <ItemGroup>
    <PackageReference Include="Newtonsoft.Json" Version="13.0.3" />
  </ItemGroup>
</Project>
"""

    def example_call(self, service: ServiceGroup, op: Operation, config: SDKConfig) -> str:
        cls = self.service_class(service)
        args = [self.quote(f"<{p.name}>") for p in op.path_params]
        if op.has_query:
            pairs = ", ".join(
                f"[{self.quote(p.name)}] = {self.quote(f'<{p.name}>')}" for p in op.endpoint.query_params
            )
            args.append(f"new Dictionary<string, string> {{ {pairs} }}")
        if op.has_body:
            args.append("new { }")
        return "\n".join([
            f"var service = new {self.namespace(config)}.Services.{cls}(client);",
            f"var result = await service.{self.method_name(op)}({', '.join(args)});",
        ])
