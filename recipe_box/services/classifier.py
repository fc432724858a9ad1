from __future__ import annotations

import logging
from typing import Any

from recipe_box.services.errors import ClassificationError
from recipe_box.services.types import ClassificationKind, ClassificationResult
from recipe_box.services.unwrap import UnwrapError, parse_embedded_json

logger = logging.getLogger(__name__)


def _clean_urls(data: Any) -> tuple[str, ...]:
    if not isinstance(data, list):
        return ()
    # Unusable entries stay in place as "" so the batch still counts them.
    return tuple(item.strip() if isinstance(item, str) else "" for item in data)


def classification_from_payload(payload: dict[str, Any]) -> ClassificationResult:
    kind = payload.get("type")
    data = payload.get("data")

    if kind == ClassificationKind.RECIPE.value and isinstance(data, dict):
        return ClassificationResult(kind=ClassificationKind.RECIPE, recipe=data)
    if kind == ClassificationKind.URL_LIST.value:
        return ClassificationResult(kind=ClassificationKind.URL_LIST, urls=_clean_urls(data))

    if kind != ClassificationKind.UNKNOWN.value:
        logger.info("classify.unexpected_type type=%r", kind)
    return ClassificationResult.unknown()


def parse_classification(raw: str | None) -> ClassificationResult:
    try:
        payload = parse_embedded_json(raw or "")
    except UnwrapError as error:
        raise ClassificationError(f"Invalid JSON response from AI: {error}") from error
    return classification_from_payload(payload)
