"""Markdown/text API documentation parser.

An LLM reads the free-form document and answers with endpoint
descriptors as JSON; the answer is then normalized so every path
placeholder has a declared path parameter.
"""

import logging
import re
from pathlib import Path

from api_sdk_builder.llm import LlmClient
from api_sdk_builder.parser.base import EndpointDescriptor, Param

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are an API documentation parser. Extract all API endpoints from the given document.

Output a JSON array of endpoint objects. Each object must have these fields:
- method: HTTP method (GET/POST/PUT/DELETE/PATCH)
- path: URL path with placeholders in braces (e.g., /api/users/{id})
- summary: Brief description
- parameters: Array of {name, in (path/query/header), required (bool)}
- hasRequestBody: boolean, true when the operation accepts a body payload
- tags: Array of strings, the resource group the endpoint belongs to

Output ONLY the JSON array, no other text."""

COLON_PARAM_RE = re.compile(r"/:([A-Za-z_][A-Za-z0-9_]*)")
PLACEHOLDER_RE = re.compile(r"\{([^}]+)\}")


def parse_markdown(file_path: Path, model: str | None = None) -> list[EndpointDescriptor]:
    """Parse a Markdown/text API document using LLM extraction."""
    text = file_path.read_text(encoding="utf-8")

    client = LlmClient(model=model)
    data = client.call_json(system=SYSTEM_PROMPT, user=text)
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of endpoints, got {type(data).__name__}")

    endpoints = [_normalize(EndpointDescriptor.model_validate(item)) for item in data]
    logger.debug("LLM extracted %d endpoints from %s", len(endpoints), file_path)
    return endpoints


def _normalize(ep: EndpointDescriptor) -> EndpointDescriptor:
    """Rewrite ':id' segments to '{id}' and declare placeholders the model left out."""
    path = COLON_PARAM_RE.sub(r"/{\1}", ep.path)
    declared = {p.name for p in ep.path_params}
    missing = []
    for name in PLACEHOLDER_RE.findall(path):
        if name not in declared:
            declared.add(name)
            missing.append(Param(name=name, location="path", required=True))

    if path == ep.path and not missing:
        return ep
    return ep.model_copy(update={"path": path, "parameters": ep.parameters + missing})
