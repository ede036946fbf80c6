"""OpenAPI / Swagger document parser.

Parses OpenAPI 3.x and Swagger 2.0 documents into EndpointDescriptor models.
"""

import logging
from pathlib import Path

import yaml

from .base import EndpointDescriptor, Param

logger = logging.getLogger(__name__)

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS")


def _load(file_path: Path) -> dict:
    text = file_path.read_text(encoding="utf-8")
    # JSON is a subset of YAML, so one loader covers both
    return yaml.safe_load(text) or {}


def parse_openapi(file_path: Path) -> list[EndpointDescriptor]:
    """Parse an OpenAPI/Swagger file into a list of EndpointDescriptor."""
    doc = _load(file_path)

    endpoints = []
    paths = doc.get("paths", {}) or {}

    for path, methods in paths.items():
        shared_params = methods.get("parameters", [])
        for method, operation in methods.items():
            if method.upper() not in HTTP_METHODS:
                continue

            raw_params = _merge_parameters(shared_params, operation.get("parameters", []))
            has_body = "requestBody" in operation or any(
                p.get("in") in ("body", "formData") for p in raw_params
            )

            endpoints.append(
                EndpointDescriptor(
                    method=method.upper(),
                    path=path,
                    summary=operation.get("summary", "") or "",
                    parameters=_parse_parameters(raw_params),
                    has_request_body=has_body,
                    tags=operation.get("tags", []),
                )
            )

    logger.debug("Parsed %d endpoints from %s", len(endpoints), file_path)
    return endpoints


def parse_base_url(file_path: Path) -> str | None:
    """Return the first server URL declared by the document, if any."""
    doc = _load(file_path)

    servers = doc.get("servers") or []
    if servers and servers[0].get("url"):
        return servers[0]["url"].rstrip("/")

    host = doc.get("host")
    if host:
        scheme = (doc.get("schemes") or ["https"])[0]
        base_path = doc.get("basePath", "").rstrip("/")
        return f"{scheme}://{host}{base_path}"

    return None


def _merge_parameters(shared: list[dict], own: list[dict]) -> list[dict]:
    """Operation-level parameters override path-level ones with the same name and location."""
    merged = {(p.get("name"), p.get("in")): p for p in shared if "$ref" not in p}
    for p in own:
        if "$ref" in p:
            continue
        merged[(p.get("name"), p.get("in"))] = p
    return list(merged.values())


def _parse_parameters(params: list[dict]) -> list[Param]:
    result = []
    for p in params:
        location = p.get("in", "query")
        if location in ("body", "formData"):
            continue
        schema = p.get("schema", {})
        result.append(
            Param(
                name=p["name"],
                location=location,
                required=p.get("required", location == "path"),
                param_type=schema.get("type", p.get("type", "string")),
                description=p.get("description", ""),
            )
        )
    return result
