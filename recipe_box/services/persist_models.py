from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator


class ProviderKind(str, Enum):
    OPENAI = "openai"
    GEMINI = "gemini"


class RecipeRecord(BaseModel):
    name: str
    ingredients: str
    instructions: str
    source_url: Optional[str] = None

    def to_row(self, user_id: str) -> dict[str, Optional[str]]:
        return {
            "user_id": user_id,
            "name": self.name,
            "ingredients": self.ingredients,
            "instructions": self.instructions,
            "source_url": self.source_url,
        }


class UserSettings(BaseModel):
    provider: ProviderKind = ProviderKind.OPENAI
    openai_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None

    @field_validator("provider", mode="before")
    @classmethod
    def _normalize_provider(cls, value: object) -> ProviderKind:
        if isinstance(value, str) and value.strip().lower() == ProviderKind.GEMINI.value:
            return ProviderKind.GEMINI
        if value is ProviderKind.GEMINI:
            return ProviderKind.GEMINI
        return ProviderKind.OPENAI

    def api_key_for(self, provider: ProviderKind) -> Optional[str]:
        key = self.gemini_api_key if provider is ProviderKind.GEMINI else self.openai_api_key
        if key is None:
            return None
        return key.strip() or None
