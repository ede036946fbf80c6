"""PHP (Guzzle) SDK generator."""

import re

from api_sdk_builder.generator.base import LanguageGenerator
from api_sdk_builder.generator.config import SDKConfig
from api_sdk_builder.generator.services import Operation, ServiceGroup
from api_sdk_builder.parser.base import EndpointDescriptor

# Variables only clash with $this and the method's own names
PHP_RESERVED = frozenset({"this", "path", "queryParams", "data"})


def _escape_single(text: str) -> str:
    return text.replace("\\", "\\\\").replace("'", "\\'")


def _escape_double(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$")


class PhpGenerator(LanguageGenerator):
    language = "php"
    display_name = "PHP"
    fence = "php"
    keywords = PHP_RESERVED
    install_template = "composer require {package}"
    usage_template = (
        "use {namespace}\\Client;\n"
        "\n"
        "$client = new Client('your-api-key');"
    )

    def composer_name(self, config: SDKConfig) -> str:
        name = re.sub(r"[^a-z0-9_./-]+", "-", config.package_name.lower()).strip("-/") or "sdk"
        if "/" not in name:
            name = f"{name}/{name}"
        return name

    def snippet_fields(self, config: SDKConfig) -> dict[str, str]:
        fields = super().snippet_fields(config)
        fields["package"] = self.composer_name(config)
        return fields

    def quote(self, text: str) -> str:
        return "'" + _escape_single(text) + "'"

    def client_path(self, config: SDKConfig) -> str:
        return "src/Client.php"

    def service_path(self, service: ServiceGroup, config: SDKConfig) -> str:
        return f"src/Services/{self.service_class(service)}.php"

    def types_path(self, config: SDKConfig) -> str:
        return "src/Models/ApiResponse.php"

    def manifest_filename(self, config: SDKConfig) -> str:
        return "composer.json"

    def path_expression(self, op: Operation) -> str:
        if "{" not in op.path:
            return self.quote(op.path)
        return '"' + self.interpolate(op.path, lambda ident: "{$" + ident + "}", _escape_double) + '"'

    def generate_client(self, config: SDKConfig) -> str:
        return "\n".join([
            "<?php",
            "",
            f"namespace {self.namespace(config)};",
            "",
            "use GuzzleHttp\\Client as HttpClient;",
            "use GuzzleHttp\\Exception\\RequestException;",
            "",
            "class Client",
            "{",
            f"    const DEFAULT_BASE_URL = {self.quote(config.base_url)};",
            "",
            "    private $client;",
            "    private $baseUrl;",
            "    private $apiKey;",
            "",
            "    public function __construct($apiKey, $baseUrl = self::DEFAULT_BASE_URL)",
            "    {",
            "        $this->apiKey = $apiKey;",
            "        $this->baseUrl = $baseUrl;",
            "        $this->client = new HttpClient([",
            "            'base_uri' => $baseUrl,",
            "            'headers' => [",
            "                'Authorization' => 'Bearer ' . $apiKey,",
            "                'Content-Type' => 'application/json'",
            "            ]",
            "        ]);",
            "    }",
            "",
            "    public function request($method, $path, $data = null)",
            "    {",
            "        try {",
            "            $options = [];",
            "            if ($data !== null) {",
            "                $options['json'] = $data;",
            "            }",
            "",
            "            $response = $this->client->request($method, $path, $options);",
            "            return json_decode($response->getBody()->getContents(), true);",
            "        } catch (RequestException $e) {",
            "            throw new \\RuntimeException('API Error: ' . $e->getMessage(), $e->getCode(), $e);",
            "        }",
            "    }",
            "}",
            "",
        ])

    def generate_service(self, service: ServiceGroup, config: SDKConfig) -> str:
        ns = self.namespace(config)
        cls = self.service_class(service)
        lines = [
            "<?php",
            "",
            f"namespace {ns}\\Services;",
            "",
            f"use {ns}\\Client;",
            "",
            f"class {cls}",
            "{",
            "    private $client;",
            "",
            "    public function __construct(Client $client)",
            "    {",
            "        $this->client = $client;",
            "    }",
        ]
        for op in service.operations:
            lines.append("")
            lines.extend(self._method(op))
        lines.extend(["}", ""])
        return "\n".join(lines)

    def _method(self, op: Operation) -> list[str]:
        args = [f"${self.identifier(p.name)}" for p in op.path_params]
        if op.has_query:
            args.append("array $queryParams = []")
        if op.has_body:
            args.append("$data = null")

        call_args = [self.quote(op.http_method), "$path" if op.has_query else self.path_expression(op)]
        if op.has_body:
            call_args.append("$data")

        lines = []
        summary = self.summary_line(op)
        if summary:
            lines.extend(["    /**", f"     * {summary}", "     */"])
        lines.extend([f"    public function {self.method_name(op)}({', '.join(args)})", "    {"])
        if op.has_query:
            lines.extend([
                f"        $path = {self.path_expression(op)};",
                "        if (!empty($queryParams)) {",
                "            $path .= '?' . http_build_query($queryParams);",
                "        }",
            ])
        lines.append(f"        return $this->client->request({', '.join(call_args)});")
        lines.append("    }")
        return lines

    def generate_types(self, endpoints: list[EndpointDescriptor], config: SDKConfig) -> str:
        return "\n".join([
            "<?php",
            "",
            f"namespace {self.namespace(config)}\\Models;",
            "",
            f"// Models for {len(endpoints)} endpoints",
            "class ApiResponse",
            "{",
            "    // Generated model class",
            "}",
            "",
        ])

    def generate_manifest(self, config: SDKConfig) -> dict:
        manifest = {
            "name": self.composer_name(config),
            "version": config.version,
            "description": config.summary,
            "type": "library",
            "license": config.license,
            "require": {
                "php": ">=7.4",
                "guzzlehttp/guzzle": "^7.0",
            },
            "autoload": {
                "psr-4": {f"{self.namespace(config)}\\": "src/"},
            },
        }
        if config.author:
            manifest["authors"] = [{"name": config.author}]
        return manifest

    def example_call(self, service: ServiceGroup, op: Operation, config: SDKConfig) -> str:
        cls = self.service_class(service)
        args = [self.quote(f"<{p.name}>") for p in op.path_params]
        if op.has_query:
            pairs = ", ".join(f"{self.quote(p.name)} => {self.quote(f'<{p.name}>')}" for p in op.endpoint.query_params)
            args.append(f"[{pairs}]")
        if op.has_body:
            args.append("[]")
        return "\n".join([
            f"$service = new \\{self.namespace(config)}\\Services\\{cls}($client);",
            f"$result = $service->{self.method_name(op)}({', '.join(args)});",
        ])
