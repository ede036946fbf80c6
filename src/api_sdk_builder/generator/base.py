"""Shared shape of every language generator.

A LanguageGenerator turns grouped endpoints into source files. The
generate() template method fixes the order of emission; subclasses only
supply syntax: file layout, client and service templates, manifest and
the snippets used by the README and examples.
"""

import json
import logging
import re
from abc import ABC, abstractmethod

from api_sdk_builder.generator.config import GeneratedSDK, LanguageTemplate, SDKConfig
from api_sdk_builder.generator.naming import camel, doc_line, pascal, sanitize_identifier, split_words
from api_sdk_builder.generator.services import Operation, ServiceGroup, group_endpoints
from api_sdk_builder.parser.base import EndpointDescriptor

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(r"\{([^}]+)\}")


class UnsupportedLanguageError(ValueError):
    """Raised when an SDK is requested for a language with no generator."""

    def __init__(self, language: str):
        super().__init__(f"Unsupported language: {language}")
        self.language = language


class LanguageGenerator(ABC):
    """Base class for one target language."""

    language: str = ""
    display_name: str = ""
    fence: str = ""  # Markdown code fence tag
    install_fence: str = "bash"
    keywords: frozenset[str] = frozenset()
    escape_format: str = "{}_"
    install_template: str = ""
    usage_template: str = ""

    def generate(self, endpoints: list[EndpointDescriptor], config: SDKConfig) -> GeneratedSDK:
        services = group_endpoints(endpoints)

        files: dict[str, str] = {}
        files[self.client_path(config)] = self.generate_client(config)
        for service in services:
            files[self.service_path(service, config)] = self.generate_service(service, config)
        files[self.types_path(config)] = self.generate_types(endpoints, config)
        files.update(self.extra_files(services, config))

        logger.debug("Generated %d %s files for %s", len(files), self.language, config.package_name)
        return GeneratedSDK(
            language=self.language,
            files=files,
            package_config=self.generate_manifest(config),
            manifest_name=self.manifest_filename(config),
            readme=self.generate_readme(services, config),
            examples=self.generate_examples(services, config),
        )

    # -- layout ---------------------------------------------------------------

    @abstractmethod
    def client_path(self, config: SDKConfig) -> str: ...

    @abstractmethod
    def service_path(self, service: ServiceGroup, config: SDKConfig) -> str: ...

    @abstractmethod
    def types_path(self, config: SDKConfig) -> str: ...

    @abstractmethod
    def manifest_filename(self, config: SDKConfig) -> str: ...

    def extra_files(self, services: list[ServiceGroup], config: SDKConfig) -> dict[str, str]:
        return {}

    # -- source templates -----------------------------------------------------

    @abstractmethod
    def generate_client(self, config: SDKConfig) -> str: ...

    @abstractmethod
    def generate_service(self, service: ServiceGroup, config: SDKConfig) -> str: ...

    @abstractmethod
    def generate_types(self, endpoints: list[EndpointDescriptor], config: SDKConfig) -> str: ...

    @abstractmethod
    def generate_manifest(self, config: SDKConfig) -> dict | str: ...

    @abstractmethod
    def example_call(self, service: ServiceGroup, op: Operation, config: SDKConfig) -> str:
        """Code calling one generated method, for the examples document."""

    # -- naming ---------------------------------------------------------------

    def client_class(self, config: SDKConfig) -> str:
        return "Client"

    def service_class(self, service: ServiceGroup) -> str:
        return pascal(service.words) + "Service"

    def method_name(self, op: Operation) -> str:
        return self.identifier(camel(op.words))

    def identifier(self, name: str) -> str:
        return sanitize_identifier(name, self.keywords, self.escape_format)

    def namespace(self, config: SDKConfig) -> str:
        """PascalCase namespace built from the package name."""
        return self.identifier(pascal(split_words(config.package_name)) or "Sdk")

    def quote(self, text: str) -> str:
        return json.dumps(text)

    def interpolate(self, path: str, render, escape=lambda s: s) -> str:
        """Rebuild a path template, passing each placeholder's identifier to render.

        Literal text between placeholders goes through escape.
        """
        pieces = PLACEHOLDER_RE.split(path)
        out = []
        for i, piece in enumerate(pieces):
            out.append(render(self.identifier(piece)) if i % 2 else escape(piece))
        return "".join(out)

    def summary_line(self, op: Operation) -> str:
        return doc_line(op.endpoint.summary)

    # -- docs -----------------------------------------------------------------

    def snippet_fields(self, config: SDKConfig) -> dict[str, str]:
        return {
            "package": config.package_name,
            "version": config.version,
            "client": self.client_class(config),
            "namespace": self.namespace(config),
        }

    def install_snippet(self, config: SDKConfig) -> str:
        return self.install_template.format(**self.snippet_fields(config))

    def usage_snippet(self, config: SDKConfig) -> str:
        return self.usage_template.format(**self.snippet_fields(config))

    def template(self, config: SDKConfig) -> LanguageTemplate:
        return LanguageTemplate(
            language=self.language,
            display_name=self.display_name,
            manifest_file=self.manifest_filename(config),
            client_file=self.client_path(config),
            install=self.install_snippet(config),
            usage=self.usage_snippet(config),
        )

    def generate_readme(self, services: list[ServiceGroup], config: SDKConfig) -> str:
        lines = [
            f"# {config.package_name} SDK",
            "",
            config.summary,
            "",
            "## Installation",
            "",
            f"```{self.install_fence}",
            self.install_snippet(config),
            "```",
            "",
            "## Usage",
            "",
            f"```{self.fence}",
            self.usage_snippet(config),
            "```",
            "",
        ]
        if services:
            lines.extend(["## Services", ""])
            for service in services:
                lines.extend([
                    f"### {self.service_class(service)}",
                    "",
                    "| Method | HTTP request | Description |",
                    "|--------|--------------|-------------|",
                ])
                for op in service.operations:
                    lines.append(
                        f"| `{self.method_name(op)}` | `{op.http_method} {op.path}` | {self.summary_line(op)} |"
                    )
                lines.append("")
        lines.extend(["## License", "", config.license, ""])
        return "\n".join(lines)

    def generate_examples(self, services: list[ServiceGroup], config: SDKConfig) -> str:
        lines = [
            f"# Examples for {config.package_name} SDK",
            "",
            "## Setup",
            "",
            f"```{self.fence}",
            self.usage_snippet(config),
            "```",
            "",
        ]
        for service in services:
            lines.extend([f"## {self.service_class(service)}", ""])
            for op in service.operations:
                heading = f"`{op.http_method} {op.path}`"
                summary = self.summary_line(op)
                lines.extend([
                    f"### {self.method_name(op)}",
                    "",
                    f"{heading}: {summary}" if summary else heading,
                    "",
                    f"```{self.fence}",
                    self.example_call(service, op, config),
                    "```",
                    "",
                ])
        return "\n".join(lines)
