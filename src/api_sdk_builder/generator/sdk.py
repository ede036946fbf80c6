"""SDK generation entry points.

generate_sdk() is a pure function: every call builds a fresh generator
and returns a fresh GeneratedSDK, so calls may run concurrently.
"""

from api_sdk_builder.generator.base import LanguageGenerator, UnsupportedLanguageError
from api_sdk_builder.generator.config import GeneratedSDK, LanguageTemplate, SDKConfig
from api_sdk_builder.generator.languages import (
    CSharpGenerator,
    GoGenerator,
    JavaGenerator,
    JavaScriptGenerator,
    PhpGenerator,
    PythonGenerator,
)
from api_sdk_builder.parser.base import EndpointDescriptor

LANGUAGES: dict[str, type[LanguageGenerator]] = {
    gen.language: gen
    for gen in (
        JavaScriptGenerator,
        PythonGenerator,
        JavaGenerator,
        CSharpGenerator,
        GoGenerator,
        PhpGenerator,
    )
}


def supported_languages() -> list[str]:
    return list(LANGUAGES)


def get_generator(language: str) -> LanguageGenerator:
    """Return a generator for language, or raise UnsupportedLanguageError."""
    try:
        return LANGUAGES[language.lower()]()
    except KeyError:
        raise UnsupportedLanguageError(language) from None


def generate_sdk(endpoints: list[EndpointDescriptor], config: SDKConfig) -> GeneratedSDK:
    """Generate the source bundle of an SDK for config.language."""
    return get_generator(config.language).generate(endpoints, config)


def get_template(language: str, package_name: str = "example") -> LanguageTemplate:
    """Layout and snippets for a language, before any endpoints are known."""
    generator = get_generator(language)
    config = SDKConfig(language=language, package_name=package_name, base_url="https://api.example.com")
    return generator.template(config)
