# recipe_box/app/infra/db/base.py
"""
Abstract interfaces for the stores the import pipeline talks to.
User settings and recipes live in Supabase; tests swap in stubs.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from recipe_box.services.persist_models import RecipeRecord, UserSettings


class UserSettingsRepository(ABC):
    """
    Read-only access to per-user AI settings.

    Implementations:
    - SupabaseUserSettingsRepository: `user_settings` table
    """

    @abstractmethod
    def get_user_settings(self, user_id: str) -> Optional[UserSettings]:
        """
        Look up the provider choice and API keys of a user.

        Args:
            user_id: Owner of the settings row

        Returns:
            The user's settings, or None when no row exists
        """
        pass


class RecipeRepository(ABC):
    """
    Write access to the user's recipe collection.

    Implementations:
    - SupabaseRecipeRepository: `recipes` table
    """

    @abstractmethod
    def create_recipe(self, user_id: str, recipe: RecipeRecord) -> Optional[str]:
        """
        Persist a recipe for a user.

        Args:
            user_id: Owner of the recipe
            recipe: Validated recipe fields, with its source URL if any

        Returns:
            The new recipe id when the store reports one
        """
        pass
