from __future__ import annotations

import logging
from typing import Any, Optional

from supabase import Client

from recipe_box.app.infra.db.base import RecipeRepository, UserSettingsRepository
from recipe_box.services.persist_models import RecipeRecord, UserSettings

logger = logging.getLogger(__name__)

SETTINGS_TABLE = "user_settings"
RECIPES_TABLE = "recipes"


def _safe_str(value: object) -> str | None:
    return str(value) if value else None


def _row_to_settings(row: dict[str, Any]) -> UserSettings:
    return UserSettings(
        provider=row.get("ai_provider"),
        openai_api_key=_safe_str(row.get("openai_api_key")),
        gemini_api_key=_safe_str(row.get("gemini_api_key")),
    )


class SupabaseUserSettingsRepository(UserSettingsRepository):
    def __init__(self, client: Client) -> None:
        self._client = client

    def get_user_settings(self, user_id: str) -> Optional[UserSettings]:
        response = (
            self._client.table(SETTINGS_TABLE)
            .select("ai_provider, openai_api_key, gemini_api_key")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        rows = response.data or []
        if not rows:
            return None
        return _row_to_settings(rows[0])


class SupabaseRecipeRepository(RecipeRepository):
    def __init__(self, client: Client) -> None:
        self._client = client

    def create_recipe(self, user_id: str, recipe: RecipeRecord) -> Optional[str]:
        response = self._client.table(RECIPES_TABLE).insert(recipe.to_row(user_id)).execute()
        rows = response.data or []
        recipe_id = _safe_str(rows[0].get("id")) if rows else None
        logger.info("recipes.created user=%s recipe=%s source=%s", user_id, recipe_id, recipe.source_url)
        return recipe_id
