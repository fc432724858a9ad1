"""
Helpers for pulling JSON out of free-form model output.

Models are asked for bare JSON but sometimes wrap it in a markdown fence or
surround it with prose. Both the text extraction and the file classification
paths go through here.
"""
from __future__ import annotations

import json
import re
from typing import Any

LEADING_FENCE_PATTERN = re.compile(r"^\s*```(?:json)?[ \t]*\n?", re.IGNORECASE)
TRAILING_FENCE_PATTERN = re.compile(r"\n?```\s*$")
JSON_OBJECT_PATTERN = re.compile(r"\{.*\}", re.DOTALL)


class UnwrapError(ValueError):
    pass


def strip_markdown_fence(text: str) -> str:
    without_leading = LEADING_FENCE_PATTERN.sub("", text, count=1)
    return TRAILING_FENCE_PATTERN.sub("", without_leading, count=1)


def find_json_object(text: str) -> str | None:
    """Return the span from the first ``{`` to the last ``}``, if any."""
    match = JSON_OBJECT_PATTERN.search(text)
    return match.group(0) if match else None


def parse_json_object(text: str) -> dict[str, Any]:
    try:
        payload = json.loads(text)
    except (TypeError, json.JSONDecodeError) as error:
        raise UnwrapError(f"Response is not valid JSON: {error}") from error

    if not isinstance(payload, dict):
        raise UnwrapError("Response JSON is not an object.")
    return payload


def parse_embedded_json(text: str) -> dict[str, Any]:
    span = find_json_object(text)
    if span is None:
        raise UnwrapError("No JSON object found in response.")
    return parse_json_object(span)
