"""Multi-language SDK generator."""

from api_sdk_builder.generator.base import LanguageGenerator, UnsupportedLanguageError
from api_sdk_builder.generator.config import GeneratedSDK, LanguageTemplate, SDKConfig
from api_sdk_builder.generator.sdk import generate_sdk, get_generator, get_template, supported_languages

__all__ = [
    "GeneratedSDK",
    "LanguageGenerator",
    "LanguageTemplate",
    "SDKConfig",
    "UnsupportedLanguageError",
    "generate_sdk",
    "get_generator",
    "get_template",
    "supported_languages",
]
