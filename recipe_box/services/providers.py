"""
AI providers behind a single recipe-extraction interface.

Callers work with ``RecipeProvider`` and ask it for capabilities instead of
checking which backend a user picked. Only Gemini can read uploaded files.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum

import httpx
import openai
from google.genai import errors as genai_errors

from recipe_box.app.config import settings
from recipe_box.prompts import FILE_CLASSIFICATION_PROMPT, RECIPE_SYSTEM_PROMPT
from recipe_box.services.classifier import parse_classification
from recipe_box.services.errors import (
    ClassificationError,
    ExtractionError,
    InvalidRequestError,
    UnsupportedOperationError,
)
from recipe_box.services.extraction import build_user_prompt, parse_recipe_payload
from recipe_box.services.gemini_client import GeminiClient
from recipe_box.services.openai_client import OpenAIClient
from recipe_box.services.persist_models import ProviderKind, RecipeRecord
from recipe_box.services.types import ClassificationResult
from recipe_box.services.unwrap import strip_markdown_fence

logger = logging.getLogger(__name__)


class Capability(str, Enum):
    EXTRACT_TEXT = "extract_text"
    CLASSIFY_FILE = "classify_file"


class RecipeProvider(ABC):
    kind: ProviderKind
    label: str
    capabilities: frozenset[Capability] = frozenset({Capability.EXTRACT_TEXT})
    api_errors: tuple[type[Exception], ...] = ()
    _client = None
    _owns_client = False

    def __enter__(self) -> "RecipeProvider":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        # Injected clients belong to the caller.
        if self._owns_client and self._client is not None:
            self._client.close()

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities

    def require(self, capability: Capability) -> None:
        if not self.supports(capability):
            raise UnsupportedOperationError(
                "File analysis is currently only supported for Gemini. "
                "Please select Gemini in settings."
            )

    @abstractmethod
    def _complete_text(self, user_prompt: str) -> str:
        """Send the recipe prompt and return the raw model text."""

    def _complete_file(self, file_bytes: bytes, mime_type: str) -> str:
        raise UnsupportedOperationError(f"{self.label} cannot analyze files.")

    def extract_recipe(self, text: str) -> RecipeRecord:
        if not text or not text.strip():
            raise ExtractionError("Input text is empty.")

        try:
            raw = self._complete_text(build_user_prompt(text))
        except self.api_errors as error:
            logger.warning("extract.api_error provider=%s error=%s", self.kind.value, error)
            raise ExtractionError(f"{self.label} API error: {error}") from error

        try:
            return parse_recipe_payload(raw)
        except ExtractionError as error:
            logger.warning("extract.invalid_payload provider=%s error=%s", self.kind.value, error)
            raise

    def classify_file(self, file_bytes: bytes, mime_type: str) -> ClassificationResult:
        self.require(Capability.CLASSIFY_FILE)
        if not file_bytes:
            raise InvalidRequestError("Uploaded file is empty.")

        try:
            raw = self._complete_file(file_bytes, mime_type)
        except self.api_errors as error:
            logger.warning("classify.api_error provider=%s error=%s", self.kind.value, error)
            raise ClassificationError(f"Failed to analyze file with {self.label}: {error}") from error

        return parse_classification(raw)


class OpenAIRecipeProvider(RecipeProvider):
    kind = ProviderKind.OPENAI
    label = "OpenAI"
    api_errors = (openai.OpenAIError,)

    def __init__(self, api_key: str, client: OpenAIClient | None = None) -> None:
        self._owns_client = client is None
        self._client = client or OpenAIClient(
            api_key,
            model_name=settings.OPENAI_MODEL,
            temperature=settings.OPENAI_TEMPERATURE,
        )

    def _complete_text(self, user_prompt: str) -> str:
        return self._client.generate_json(user_prompt, RECIPE_SYSTEM_PROMPT)


class GeminiRecipeProvider(RecipeProvider):
    kind = ProviderKind.GEMINI
    label = "Gemini"
    capabilities = frozenset({Capability.EXTRACT_TEXT, Capability.CLASSIFY_FILE})
    api_errors = (genai_errors.APIError, httpx.HTTPError)

    def __init__(self, api_key: str, client: GeminiClient | None = None) -> None:
        self._owns_client = client is None
        self._client = client or GeminiClient(api_key, model_name=settings.GEMINI_MODEL)

    def _complete_text(self, user_prompt: str) -> str:
        # Gemini sometimes wraps the JSON in a markdown fence.
        return strip_markdown_fence(self._client.generate_content(user_prompt, RECIPE_SYSTEM_PROMPT))

    def _complete_file(self, file_bytes: bytes, mime_type: str) -> str:
        return self._client.generate_from_file(FILE_CLASSIFICATION_PROMPT, file_bytes, mime_type)


PROVIDERS: dict[ProviderKind, type[RecipeProvider]] = {
    ProviderKind.OPENAI: OpenAIRecipeProvider,
    ProviderKind.GEMINI: GeminiRecipeProvider,
}


def get_provider(kind: ProviderKind | str, api_key: str) -> RecipeProvider:
    try:
        provider_kind = ProviderKind(kind)
    except ValueError as error:
        raise UnsupportedOperationError(f"Unknown AI provider: {kind}") from error
    return PROVIDERS[provider_kind](api_key)


def extract_recipe(text: str, provider: ProviderKind | str, api_key: str) -> RecipeRecord:
    with get_provider(provider, api_key) as recipe_provider:
        return recipe_provider.extract_recipe(text)


def classify_file(
    api_key: str,
    file_bytes: bytes,
    mime_type: str,
    provider: ProviderKind | str = ProviderKind.GEMINI,
) -> ClassificationResult:
    with get_provider(provider, api_key) as recipe_provider:
        return recipe_provider.classify_file(file_bytes, mime_type)
