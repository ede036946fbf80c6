"""Unified data models for parsed API documentation.

All parsers (Swagger, Postman, Markdown) convert their input
into these standard models for SDK generation.
"""

from pydantic import BaseModel, ConfigDict, Field


class Param(BaseModel):
    """A single API parameter (path, query, header, or cookie)."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    location: str = Field(alias="in")  # path / query / header / cookie
    required: bool = False
    param_type: str = "string"
    description: str = ""


class EndpointDescriptor(BaseModel):
    """One API operation to expose in a generated SDK."""

    model_config = ConfigDict(populate_by_name=True)

    path: str  # /users/{id}
    method: str  # any case, emitted upper-case
    parameters: list[Param] = []
    has_request_body: bool = Field(default=False, alias="hasRequestBody")
    tags: list[str] = []
    summary: str = ""

    @property
    def path_params(self) -> list[Param]:
        return [p for p in self.parameters if p.location == "path"]

    @property
    def query_params(self) -> list[Param]:
        return [p for p in self.parameters if p.location == "query"]

    @property
    def service_key(self) -> str:
        """The group this endpoint belongs to: its first tag, or 'default'."""
        if self.tags and self.tags[0]:
            return self.tags[0]
        return "default"
