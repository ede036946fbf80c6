"""Postman Collection v2.1 parser.

Parses Postman exported JSON files into EndpointDescriptor models.
Top-level folders become tags, so each folder turns into one SDK service.
"""

import json
from pathlib import Path

from .base import EndpointDescriptor, Param


def parse_postman(file_path: Path) -> list[EndpointDescriptor]:
    """Parse a Postman Collection v2.1 file into a list of EndpointDescriptor."""
    text = file_path.read_text(encoding="utf-8")
    collection = json.loads(text)

    endpoints: list[EndpointDescriptor] = []
    _parse_items(collection.get("item", []), endpoints, tag=None)
    return endpoints


def _parse_items(items: list[dict], endpoints: list[EndpointDescriptor], tag: str | None) -> None:
    """Recursively parse items (supports folders)."""
    for item in items:
        if "item" in item:
            _parse_items(item["item"], endpoints, tag or item.get("name"))
        elif "request" in item:
            endpoints.append(_parse_request(item, tag))


def _parse_request(item: dict, tag: str | None) -> EndpointDescriptor:
    req = item["request"]
    method = req.get("method", "GET").upper()
    url = req.get("url", {})
    if isinstance(url, str):
        url = {"path": _split_raw_url(url)}

    segments, path_params = _parse_path(url.get("path", []))
    params = path_params + _parse_query_params(url.get("query", []))

    return EndpointDescriptor(
        method=method,
        path="/" + "/".join(segments),
        summary=item.get("name", ""),
        parameters=params,
        has_request_body=bool(req.get("body")),
        tags=[tag] if tag else [],
    )


def _split_raw_url(raw: str) -> list[str]:
    """Path segments of a raw URL string such as 'https://host/users' or '{{baseUrl}}/users'."""
    path = raw.split("?")[0]
    if "://" in path:
        path = path.split("://", 1)[1].partition("/")[2]
    return path.strip("/").split("/")


def _parse_path(parts: list[str]) -> tuple[list[str], list[Param]]:
    """Rewrite Postman ':var' segments into '{var}' placeholders."""
    segments = []
    params = []
    for part in parts:
        if part.startswith(":"):
            name = part[1:]
            segments.append(f"{{{name}}}")
            params.append(Param(name=name, location="path", required=True))
        elif part.startswith("{{") and part.endswith("}}"):
            # Postman environment variable, e.g. {{baseUrl}}
            continue
        elif part:
            segments.append(part)
    return segments, params


def _parse_query_params(query: list[dict]) -> list[Param]:
    return [
        Param(
            name=q["key"],
            location="query",
            required=False,
            description=q.get("description", ""),
        )
        for q in query
        if not q.get("disabled")
    ]
