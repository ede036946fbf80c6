import json

from api_sdk_builder.generator import SDKConfig, generate_sdk
from api_sdk_builder.generator.validator import validate_python
from api_sdk_builder.parser.base import EndpointDescriptor, Param
from api_sdk_builder.writer import manifest_file

ENDPOINTS = [
    EndpointDescriptor(
        path="/users", method="GET", tags=["users"], summary="List users",
        parameters=[Param(name="page", location="query")],
    ),
    EndpointDescriptor(path="/users", method="POST", tags=["users"], has_request_body=True, summary="Create a user"),
    EndpointDescriptor(
        path="/users/{id}", method="GET", tags=["users"],
        parameters=[Param(name="id", location="path", required=True)],
    ),
    EndpointDescriptor(
        path="/users/{userId}/orders/{orderId}", method="PUT", tags=["orders"], has_request_body=True,
        parameters=[
            Param(name="userId", location="path", required=True),
            Param(name="orderId", location="path", required=True),
        ],
    ),
    EndpointDescriptor(path="/health", method="GET"),
]

KEYWORD_PARAM = EndpointDescriptor(
    path="/classes/{class}", method="GET", tags=["classes"],
    parameters=[Param(name="class", location="path", required=True)],
)


def _generate(language: str, endpoints=None, **kwargs):
    fields = {"package_name": "acme", "base_url": "https://api.acme.test"}
    fields.update(kwargs)
    return generate_sdk(ENDPOINTS if endpoints is None else endpoints, SDKConfig(language=language, **fields))


class TestJavaScript:
    def test_layout(self):
        sdk = _generate("javascript")
        assert list(sdk.files) == [
            "src/client.js",
            "src/services/users.js",
            "src/services/orders.js",
            "src/services/default.js",
            "src/types.js",
            "src/index.js",
        ]

    def test_client(self):
        client = _generate("javascript").files["src/client.js"]
        assert "const DEFAULT_BASE_URL = 'https://api.acme.test';" in client
        assert "'Authorization': `Bearer ${apiKey}`" in client
        assert "throw new Error(`API Error: ${message}`);" in client
        assert "module.exports = AcmeClient;" in client

    def test_query_and_body_arguments(self):
        users = _generate("javascript").files["src/services/users.js"]
        assert "async getUsers(queryParams = {}) {" in users
        assert "new URLSearchParams(queryParams).toString()" in users
        assert "async postUsers(data = null) {" in users
        assert "return this.client.request('POST', '/users', data);" in users
        assert "async getUsersById(id) {" in users

    def test_multiple_path_params(self):
        orders = _generate("javascript").files["src/services/orders.js"]
        assert "async putUsersOrders(userId, orderId, data = null) {" in orders
        assert "`/users/${userId}/orders/${orderId}`" in orders

    def test_index_exports(self):
        index = _generate("javascript").files["src/index.js"]
        assert "const UsersService = require('./services/users');" in index
        assert "module.exports = { AcmeClient, UsersService, OrdersService, DefaultService };" in index

    def test_keyword_param(self):
        sdk = _generate("javascript", [KEYWORD_PARAM])
        service = sdk.files["src/services/classes.js"]
        assert "async getClasses(class_) {" in service
        assert "`/classes/${class_}`" in service

    def test_manifest(self):
        sdk = _generate("javascript", author="Ann", description="Acme API")
        assert sdk.package_config["name"] == "acme"
        assert sdk.package_config["main"] == "src/index.js"
        assert sdk.package_config["description"] == "Acme API"
        assert sdk.package_config["author"] == "Ann"
        assert "axios" in sdk.package_config["dependencies"]

    def test_manifest_without_author(self):
        assert "author" not in _generate("javascript").package_config

    def test_scoped_package_name(self):
        sdk = _generate("javascript", package_name="@Acme/Widgets SDK")
        assert sdk.package_config["name"] == "@acme/widgets-sdk"
        assert "class AcmeWidgetsSDKClient" in sdk.files["src/client.js"]

    def test_summary_comment(self):
        users = _generate("javascript").files["src/services/users.js"]
        assert "   * List users" in users


class TestPython:
    def test_layout(self):
        sdk = _generate("python")
        assert set(sdk.files) == {
            "acme/client.py",
            "acme/services/users.py",
            "acme/services/orders.py",
            "acme/services/default.py",
            "acme/types.py",
            "acme/__init__.py",
            "acme/services/__init__.py",
        }

    def test_all_files_parse(self):
        sdk = _generate("python", description='Say "hi"')
        assert validate_python(sdk.files) == {}
        name, text = manifest_file(sdk)
        assert validate_python({name: text}) == {}

    def test_keyword_param_parses(self):
        endpoint = EndpointDescriptor(
            path="/flights/{from}/{to-city}", method="GET", tags=["class"],
            parameters=[
                Param(name="from", location="path", required=True),
                Param(name="to-city", location="path", required=True),
            ],
        )
        sdk = _generate("python", [endpoint])
        assert validate_python(sdk.files) == {}
        service = sdk.files["acme/services/class_.py"]
        assert "def get_flights(self, from_: str, to_city: str) -> Any:" in service
        assert 'f"/flights/{from_}/{to_city}"' in service

    def test_literal_braces_doubled(self):
        endpoint = EndpointDescriptor(
            path="/a/{id}/x}", method="GET", tags=["t"],
            parameters=[Param(name="id", location="path", required=True)],
        )
        sdk = _generate("python", [endpoint])
        assert validate_python(sdk.files) == {}
        assert 'f"/a/{id}/x}}"' in sdk.files["acme/services/t.py"]

    def test_client(self):
        client = _generate("python").files["acme/client.py"]
        assert "class AcmeClient:" in client
        assert 'DEFAULT_BASE_URL = "https://api.acme.test"' in client
        assert "raise ApiError(response.status_code, response.text)" in client

    def test_query_encoding(self):
        users = _generate("python").files["acme/services/users.py"]
        assert "from urllib.parse import urlencode" in users
        assert "def get_users(self, query_params: Optional[Dict[str, Any]] = None) -> Any:" in users
        assert 'path += "?" + urlencode(query_params, doseq=True)' in users
        assert '        """List users"""' in users

    def test_no_unused_import(self):
        default = _generate("python").files["acme/services/default.py"]
        assert "urlencode" not in default
        assert 'return self.client.request("GET", path)' in default

    def test_package_exports(self):
        init = _generate("python", version="2.1.0").files["acme/__init__.py"]
        assert "from .client import ApiError, AcmeClient" in init
        assert "from .services.users import UsersService" in init
        assert '__version__ = "2.1.0"' in init

    def test_manifest(self):
        sdk = _generate("python", author="Ann")
        assert sdk.package_config["name"] == "acme"
        assert sdk.package_config["packages"] == ["acme", "acme.services"]
        assert sdk.package_config["install_requires"] == ["requests>=2.25.0"]
        assert sdk.package_config["author"] == "Ann"

    def test_hyphenated_package(self):
        sdk = _generate("python", package_name="my-api")
        assert "my_api/client.py" in sdk.files
        assert "class MyApiClient:" in sdk.files["my_api/client.py"]
        assert "from my_api import MyApiClient" in sdk.readme


class TestJava:
    ROOT = "src/main/java/com/acme"

    def test_layout(self):
        sdk = _generate("java")
        assert f"{self.ROOT}/Client.java" in sdk.files
        assert f"{self.ROOT}/services/UsersService.java" in sdk.files
        assert f"{self.ROOT}/models/ApiResponse.java" in sdk.files

    def test_service(self):
        sdk = _generate("java")
        users = sdk.files[f"{self.ROOT}/services/UsersService.java"]
        assert "package com.acme.services;" in users
        assert "public String getUsers(Map<String, String> queryParams) throws IOException {" in users
        assert 'return client.request("GET", "/users" + Client.encodeQuery(queryParams), null);' in users
        assert 'return client.request("GET", String.format("/users/%s", id), null);' in users

    def test_multiple_path_params(self):
        orders = _generate("java").files[f"{self.ROOT}/services/OrdersService.java"]
        assert 'String.format("/users/%s/orders/%s", userId, orderId)' in orders
        assert "(String userId, String orderId, Object data)" in orders

    def test_example_keeps_every_query_param(self):
        endpoint = EndpointDescriptor(
            path="/search", method="GET", tags=["search"],
            parameters=[Param(name=f"p{i}", location="query") for i in range(1, 13)],
        )
        examples = _generate("java", [endpoint]).examples
        assert "Map.ofEntries(" in examples
        assert 'Map.entry("p1", "<p1>")' in examples
        assert 'Map.entry("p12", "<p12>")' in examples

    def test_query_encoder(self):
        client = _generate("java").files[f"{self.ROOT}/Client.java"]
        assert "URLEncoder.encode(entry.getKey(), StandardCharsets.UTF_8)" in client
        assert 'throw new IOException("API Error: " + response.code());' in client

    def test_pom(self):
        sdk = _generate("java", version="3.0.0", description="Tools & more")
        assert isinstance(sdk.package_config, str)
        assert "<groupId>com.acme</groupId>" in sdk.package_config
        assert "<artifactId>acme</artifactId>" in sdk.package_config
        assert "<version>3.0.0</version>" in sdk.package_config
        assert "<description>Tools &amp; more</description>" in sdk.package_config
        assert manifest_file(sdk) == ("pom.xml", sdk.package_config)


class TestCSharp:
    def test_layout(self):
        sdk = _generate("csharp")
        assert list(sdk.files) == [
            "Client.cs",
            "Services/UsersService.cs",
            "Services/OrdersService.cs",
            "Services/DefaultService.cs",
            "Models/ApiResponse.cs",
        ]
        assert sdk.manifest_name == "Acme.csproj"

    def test_service(self):
        users = _generate("csharp").files["Services/UsersService.cs"]
        assert "namespace Acme.Services" in users
        assert "public async Task<string> GetUsersAsync(Dictionary<string, string> queryParams = null)" in users
        assert "Uri.EscapeDataString(kv.Key)" in users
        assert 'return await _client.RequestAsync("GET", $"/users/{id}", null);' in users
        assert "/// List users" in users

    def test_keyword_param(self):
        service = _generate("csharp", [KEYWORD_PARAM]).files["Services/ClassesService.cs"]
        assert "GetClassesAsync(string @class)" in service
        assert '$"/classes/{@class}"' in service

    def test_params_named_like_locals(self):
        endpoints = [
            EndpointDescriptor(
                path="/files/{path}", method="PUT", tags=["files"], has_request_body=True,
                parameters=[Param(name="path", location="path", required=True), Param(name="q", location="query")],
            ),
            EndpointDescriptor(
                path="/blobs/{data}", method="POST", tags=["blobs"], has_request_body=True,
                parameters=[Param(name="data", location="path", required=True)],
            ),
        ]
        sdk = _generate("csharp", endpoints)
        files = sdk.files["Services/FilesService.cs"]
        blobs = sdk.files["Services/BlobsService.cs"]
        assert "PutFilesAsync(string path_, Dictionary<string, string> queryParams = null, object data = null)" in files
        assert 'var path = $"/files/{path_}";' in files
        assert "PostBlobsAsync(string data_, object data = null)" in blobs
        assert 'RequestAsync("POST", $"/blobs/{data_}", data);' in blobs
        assert "@path" not in files
        assert "@data" not in blobs

    def test_client_error(self):
        client = _generate("csharp").files["Client.cs"]
        assert "throw new HttpRequestException(" in client
        assert "namespace Acme" in client

    def test_csproj(self):
        sdk = _generate("csharp", author="Ann")
        assert "<RootNamespace>Acme</RootNamespace>" in sdk.package_config
        assert "<Authors>Ann</Authors>" in sdk.package_config
        assert "<PackageLicenseExpression>MIT</PackageLicenseExpression>" in sdk.package_config


class TestGo:
    def test_layout(self):
        sdk = _generate("go")
        assert list(sdk.files) == [
            "client.go",
            "users_service.go",
            "orders_service.go",
            "default_service.go",
            "types.go",
        ]

    def test_imports_follow_usage(self):
        sdk = _generate("go")
        users = sdk.files["users_service.go"]
        assert '\t"fmt"' in users
        assert '\t"net/url"' in users
        orders = sdk.files["orders_service.go"]
        assert '\t"fmt"' in orders
        assert '"net/url"' not in orders
        default = sdk.files["default_service.go"]
        assert '"fmt"' not in default
        assert '"net/url"' not in default

    def test_service(self):
        users = _generate("go").files["users_service.go"]
        assert "package acme" in users
        assert "func (s *UsersService) GetUsers(queryParams url.Values) (*resty.Response, error) {" in users
        assert '\t\tpath += "?" + queryParams.Encode()' in users
        assert 'return s.client.Request("GET", fmt.Sprintf("/users/%s", id), nil)' in users
        assert 'return s.client.Request("POST", "/users", data)' in users

    def test_go_mod(self):
        sdk = _generate("go", package_name="github.com/acme/sdk-go/v2")
        assert sdk.package_config.startswith("module github.com/acme/sdk-go/v2\n")
        assert "github.com/go-resty/resty/v2" in sdk.package_config
        assert sdk.files["client.go"].startswith("package sdkgo\n")

    def test_client_checks_status(self):
        client = _generate("go").files["client.go"]
        assert "if resp.IsError() {" in client
        assert "const DefaultBaseURL = \"https://api.acme.test\"" in client


class TestPhp:
    def test_layout(self):
        sdk = _generate("php")
        assert "src/Client.php" in sdk.files
        assert "src/Services/UsersService.php" in sdk.files
        assert "src/Models/ApiResponse.php" in sdk.files

    def test_service(self):
        users = _generate("php").files["src/Services/UsersService.php"]
        assert "namespace Acme\\Services;" in users
        assert "public function getUsers(array $queryParams = [])" in users
        assert "$path .= '?' . http_build_query($queryParams);" in users
        assert "return $this->client->request('GET', \"/users/{$id}\");" in users
        assert "public function postUsers($data = null)" in users

    def test_composer(self):
        sdk = _generate("php", author="Ann")
        assert sdk.package_config["name"] == "acme/acme"
        assert sdk.package_config["autoload"]["psr-4"] == {"Acme\\": "src/"}
        assert sdk.package_config["authors"] == [{"name": "Ann"}]
        name, text = manifest_file(sdk)
        assert name == "composer.json"
        assert json.loads(text)["require"]["guzzlehttp/guzzle"] == "^7.0"

    def test_vendor_name_kept(self):
        sdk = _generate("php", package_name="acme/widgets")
        assert sdk.package_config["name"] == "acme/widgets"
        assert "composer require acme/widgets" in sdk.readme
