"""LLM client wrapper around litellm.

The Markdown importer is its only caller: it sends a whole document and
expects a JSON array of endpoints back.
"""

import json
import logging
import re

from litellm import completion

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-20250514"

FENCE_RE = re.compile(r"```(?:json)?\s*\n(.*?)```", re.DOTALL)


class LlmClient:
    """Wrapper for LLM API calls via litellm."""

    def __init__(self, model: str | None = None, temperature: float = 0):
        self.model = model or DEFAULT_MODEL
        self.temperature = temperature

    def call(self, system: str, user: str) -> str:
        """Send a system+user message to the LLM and return the response text."""
        logger.debug("Calling %s with %d characters of input", self.model, len(user))
        response = completion(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            temperature=self.temperature,
        )
        return response.choices[0].message.content

    def call_json(self, system: str, user: str):
        """Like call(), but decode the reply as JSON.

        Raises json.JSONDecodeError when the model answers with something else.
        """
        return json.loads(extract_json(self.call(system, user)))


def extract_json(text: str) -> str:
    """Strip a Markdown code fence from a reply, if there is one."""
    match = FENCE_RE.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()
