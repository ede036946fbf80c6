"""Generation request and result models."""

from pydantic import BaseModel, ConfigDict, Field


class SDKConfig(BaseModel):
    """What to generate: target language plus package metadata."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    language: str  # javascript / python / java / csharp / go / php
    package_name: str = Field(alias="packageName")
    version: str = "1.0.0"
    base_url: str = Field(alias="baseUrl")
    author: str | None = None
    description: str | None = None
    license: str = "MIT"

    @property
    def summary(self) -> str:
        return self.description or f"SDK for {self.package_name}"


class GeneratedSDK(BaseModel):
    """The bundle produced by one generation call."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    language: str
    files: dict[str, str]  # relative path -> source text, in generation order
    package_config: dict | str = Field(alias="packageConfig")
    manifest_name: str  # file the package config is written to
    readme: str
    examples: str


class LanguageTemplate(BaseModel):
    """Static facts about one target language, shown before generating anything."""

    language: str
    display_name: str
    manifest_file: str
    client_file: str
    install: str
    usage: str
