from __future__ import annotations

import json
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class RoleplayReply(BaseModel):
    response: str = Field(..., description="In-character reply to the user")
    correction: str = Field("", description="Corrected user message, empty when already correct")

    @field_validator("correction", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


def strip_code_fences(text: str) -> str:
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = stripped[3:]
        if stripped.startswith("json"):
            stripped = stripped[len("json"):].lstrip()
        stripped = stripped.rstrip()
        if stripped.endswith("```"):
            stripped = stripped[:-3]
    return stripped.strip()


def extract_json_object(text: str) -> Optional[str]:
    """Return the first ``{...}`` in ``text`` that decodes as JSON, or None."""
    decoder = json.JSONDecoder()
    start = text.find("{")
    while start != -1:
        try:
            _, end = decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
            continue
        return text[start:end]
    return None


def parse_roleplay_reply(text: str) -> RoleplayReply:
    """Pull the ``{"response", "correction"}`` object out of a model reply.

    Gemini tends to wrap the object in code fences or a sentence of chatter,
    so the whole text is tried first and then the first decodable ``{...}``.
    Raises ValueError when no object can be decoded and pydantic's
    ValidationError when the object has no ``response``.
    """
    cleaned = strip_code_fences(text or "")
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        segment = extract_json_object(cleaned)
        if segment is None:
            if "{" in cleaned:
                raise ValueError(f"Model response is not valid JSON: {exc}") from exc
            raise ValueError("No JSON object found in model response")
        data = json.loads(segment)

    if not isinstance(data, dict):
        raise ValueError("Model response JSON is not an object")
    return RoleplayReply.model_validate(data)
