"""Java (OkHttp + Gson) SDK generator."""

import re

from api_sdk_builder.generator.base import LanguageGenerator
from api_sdk_builder.generator.config import SDKConfig
from api_sdk_builder.generator.naming import xml_escape
from api_sdk_builder.generator.services import Operation, ServiceGroup
from api_sdk_builder.parser.base import EndpointDescriptor

JAVA_KEYWORDS = frozenset({
    "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char",
    "class", "const", "continue", "default", "do", "double", "else", "enum",
    "extends", "final", "finally", "float", "for", "goto", "if", "implements",
    "import", "instanceof", "int", "interface", "long", "native", "new",
    "package", "private", "protected", "public", "return", "short", "static",
    "strictfp", "super", "switch", "synchronized", "this", "throw", "throws",
    "transient", "try", "void", "volatile", "while", "true", "false", "null",
    "var", "record", "yield",
    # locals and parameters of generated methods
    "client", "path", "queryParams", "data",
})


class JavaGenerator(LanguageGenerator):
    language = "java"
    display_name = "Java"
    fence = "java"
    install_fence = "xml"
    keywords = JAVA_KEYWORDS
    install_template = (
        "<dependency>\n"
        "  <groupId>com.{java_package}</groupId>\n"
        "  <artifactId>{package}</artifactId>\n"
        "  <version>{version}</version>\n"
        "</dependency>"
    )
    usage_template = (
        "import com.{java_package}.Client;\n"
        "\n"
        "Client client = new Client(\"your-api-key\", null);"
    )

    def java_package(self, config: SDKConfig) -> str:
        name = re.sub(r"[^a-z0-9]", "", config.package_name.lower()) or "sdk"
        if name[0].isdigit() or name in JAVA_KEYWORDS:
            name = "_" + name
        return name

    def snippet_fields(self, config: SDKConfig) -> dict[str, str]:
        fields = super().snippet_fields(config)
        fields["java_package"] = self.java_package(config)
        return fields

    def _root(self, config: SDKConfig) -> str:
        return f"src/main/java/com/{self.java_package(config)}"

    def client_path(self, config: SDKConfig) -> str:
        return f"{self._root(config)}/Client.java"

    def service_path(self, service: ServiceGroup, config: SDKConfig) -> str:
        return f"{self._root(config)}/services/{self.service_class(service)}.java"

    def types_path(self, config: SDKConfig) -> str:
        return f"{self._root(config)}/models/ApiResponse.java"

    def manifest_filename(self, config: SDKConfig) -> str:
        return "pom.xml"

    def path_expression(self, op: Operation) -> str:
        idents = []

        def render(ident: str) -> str:
            idents.append(ident)
            return "%s"

        template = self.interpolate(op.path, render, lambda s: s.replace("%", "%%"))
        if not idents:
            return self.quote(op.path)
        return f"String.format({self.quote(template)}, {', '.join(idents)})"

    def generate_client(self, config: SDKConfig) -> str:
        pkg = self.java_package(config)
        return "\n".join([
            f"package com.{pkg};",
            "",
            "import com.google.gson.Gson;",
            "import java.io.IOException;",
            "import java.net.URLEncoder;",
            "import java.nio.charset.StandardCharsets;",
            "import java.util.Map;",
            "import java.util.StringJoiner;",
            "import okhttp3.MediaType;",
            "import okhttp3.OkHttpClient;",
            "import okhttp3.Request;",
            "import okhttp3.RequestBody;",
            "import okhttp3.Response;",
            "",
            "public class Client {",
            f"    public static final String DEFAULT_BASE_URL = {self.quote(config.base_url)};",
            "    private static final MediaType JSON = MediaType.get(\"application/json\");",
            "",
            "    private final OkHttpClient client;",
            "    private final String baseUrl;",
            "    private final String apiKey;",
            "    private final Gson gson;",
            "",
            "    public Client(String apiKey, String baseUrl) {",
            "        this.apiKey = apiKey;",
            "        this.baseUrl = baseUrl != null ? baseUrl : DEFAULT_BASE_URL;",
            "        this.client = new OkHttpClient();",
            "        this.gson = new Gson();",
            "    }",
            "",
            "    public static String encodeQuery(Map<String, String> params) {",
            "        if (params == null || params.isEmpty()) {",
            "            return \"\";",
            "        }",
            "        StringJoiner joiner = new StringJoiner(\"&\", \"?\", \"\");",
            "        for (Map.Entry<String, String> entry : params.entrySet()) {",
            "            joiner.add(URLEncoder.encode(entry.getKey(), StandardCharsets.UTF_8)",
            "                + \"=\" + URLEncoder.encode(entry.getValue(), StandardCharsets.UTF_8));",
            "        }",
            "        return joiner.toString();",
            "    }",
            "",
            "    public String request(String method, String path, Object data) throws IOException {",
            "        RequestBody body = null;",
            "        if (data != null) {",
            "            body = RequestBody.create(gson.toJson(data), JSON);",
            "        } else if (method.equals(\"POST\") || method.equals(\"PUT\") || method.equals(\"PATCH\")) {",
            "            body = RequestBody.create(\"\", JSON);",
            "        }",
            "",
            "        Request request = new Request.Builder()",
            "            .url(baseUrl + path)",
            "            .addHeader(\"Authorization\", \"Bearer \" + apiKey)",
            "            .method(method, body)",
            "            .build();",
            "",
            "        try (Response response = client.newCall(request).execute()) {",
            "            if (!response.isSuccessful()) {",
            "                throw new IOException(\"API Error: \" + response.code());",
            "            }",
            "            return response.body() != null ? response.body().string() : null;",
            "        }",
            "    }",
            "}",
            "",
        ])

    def generate_service(self, service: ServiceGroup, config: SDKConfig) -> str:
        pkg = self.java_package(config)
        cls = self.service_class(service)
        lines = [
            f"package com.{pkg}.services;",
            "",
            f"import com.{pkg}.Client;",
            "import java.io.IOException;",
            "import java.util.Map;",
            "",
            f"public class {cls} {{",
            "    private final Client client;",
            "",
            f"    public {cls}(Client client) {{",
            "        this.client = client;",
            "    }",
        ]
        for op in service.operations:
            lines.append("")
            lines.extend(self._method(op))
        lines.extend(["}", ""])
        return "\n".join(lines)

    def _method(self, op: Operation) -> list[str]:
        args = [f"String {self.identifier(p.name)}" for p in op.path_params]
        if op.has_query:
            args.append("Map<String, String> queryParams")
        if op.has_body:
            args.append("Object data")

        path = self.path_expression(op)
        if op.has_query:
            path += " + Client.encodeQuery(queryParams)"
        body = "data" if op.has_body else "null"

        lines = []
        summary = self.summary_line(op)
        if summary:
            lines.extend(["    /**", f"     * {summary}", "     */"])
        lines.extend([
            f"    public String {self.method_name(op)}({', '.join(args)}) throws IOException {{",
            f"        return client.request({self.quote(op.http_method)}, {path}, {body});",
            "    }",
        ])
        return lines

    def generate_types(self, endpoints: list[EndpointDescriptor], config: SDKConfig) -> str:
        return "\n".join([
            f"package com.{self.java_package(config)}.models;",
            "",
            f"// Models for {len(endpoints)} endpoints",
            "public class ApiResponse {",
            "    // Generated model class",
            "}",
            "",
        ])

    def generate_manifest(self, config: SDKConfig) -> str:
        pkg = self.java_package(config)
        artifact = re.sub(r"[^A-Za-z0-9._-]", "-", config.package_name)
        return f"""<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
    <modelVersion>4.0.0</modelVersion>
    <groupId>com.{pkg}</groupId>
    <artifactId>{artifact}</artifactId>
    <version>{xml_escape(config.version)}</version>
    <packaging>jar</packaging>
    <description>{xml_escape(config.summary)}</description>

    <properties>
        <maven.compiler.source>11</maven.compiler.source>
        <maven.compiler.target>11</maven.compiler.target>
    </properties>

    <dependencies>
        <dependency>
            <groupId>com.squareup.okhttp3</groupId>
            <artifactId>okhttp</artifactId>
            <version>4.10.0</version>
        </dependency>
        <dependency>
            <groupId>com.google.code.gson</groupId>
            <artifactId>gson</artifactId>
            <version>2.10.1</version>
        </dependency>
    </dependencies>
</project>
"""

    def example_call(self, service: ServiceGroup, op: Operation, config: SDKConfig) -> str:
        cls = self.service_class(service)
        args = [self.quote(f"<{p.name}>") for p in op.path_params]
        if op.has_query:
            pairs = ", ".join(
                f"Map.entry({self.quote(p.name)}, {self.quote(f'<{p.name}>')})" for p in op.endpoint.query_params
            )
            args.append(f"Map.ofEntries({pairs})")
        if op.has_body:
            args.append("Map.of()")
        return "\n".join([
            f"{cls} service = new {cls}(client);",
            f"String result = service.{self.method_name(op)}({', '.join(args)});",
        ])
