# recipe_box/app/deps.py (Supabase singleton exposed as a dependency)

from __future__ import annotations

from fastapi import Depends
from supabase import Client, create_client

from recipe_box.app.config import settings
from recipe_box.app.infra.db.supabase_repo import (
    SupabaseRecipeRepository,
    SupabaseUserSettingsRepository,
)
from recipe_box.services.ingest import RecipeImportService

_client: Client | None = None


def get_supabase() -> Client:
    global _client
    if _client is None:
        _client = create_client(str(settings.SUPABASE_URL),
                                settings.SUPABASE_SERVICE_ROLE_KEY)
    return _client


def get_import_service(supa: Client = Depends(get_supabase)) -> RecipeImportService:
    return RecipeImportService(
        settings_repository=SupabaseUserSettingsRepository(supa),
        recipe_repository=SupabaseRecipeRepository(supa),
    )
