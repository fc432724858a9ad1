from __future__ import annotations

import logging
from typing import Any

from recipe_box.services.errors import ExtractionError
from recipe_box.services.persist_models import RecipeRecord
from recipe_box.services.unwrap import UnwrapError, parse_json_object

logger = logging.getLogger(__name__)

USER_PROMPT_TEMPLATE = "以下のテキストからレシピ情報を抽出してください：\n\n{text}"
REQUIRED_FIELDS = ("name", "ingredients", "instructions")


def build_user_prompt(text: str) -> str:
    return USER_PROMPT_TEMPLATE.format(text=text)


def _coerce_field(value: Any) -> str | None:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    if isinstance(value, list):
        lines = [str(item).strip() for item in value if isinstance(item, (str, int, float))]
        joined = "\n".join(line for line in lines if line)
        return joined or None
    return None


def recipe_from_payload(payload: dict[str, Any]) -> RecipeRecord:
    if payload.get("error"):
        raise ExtractionError("No valid recipe found in the text.")

    fields = {name: _coerce_field(payload.get(name)) for name in REQUIRED_FIELDS}
    missing = [name for name, value in fields.items() if not value]
    if missing:
        logger.info("extraction.missing_fields fields=%s", ",".join(missing))
        raise ExtractionError("No valid recipe found in the text.")

    return RecipeRecord(**fields)


def parse_recipe_payload(raw: str | None) -> RecipeRecord:
    if not raw or not raw.strip():
        raise ExtractionError("AI model did not return a result.")

    try:
        payload = parse_json_object(raw)
    except UnwrapError as error:
        raise ExtractionError(f"Failed to parse AI response: {error}") from error

    return recipe_from_payload(payload)
