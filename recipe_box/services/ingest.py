from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, Optional

from recipe_box.app.infra.db.base import RecipeRepository, UserSettingsRepository
from recipe_box.services.errors import (
    ApiKeyNotConfiguredError,
    EmptyContentError,
    InvalidRequestError,
    SettingsNotFoundError,
    UnrecognizedContentError,
)
from recipe_box.services.fetcher import fetch_text
from recipe_box.services.persist_models import ProviderKind, RecipeRecord, UserSettings
from recipe_box.services.providers import Capability, RecipeProvider, get_provider
from recipe_box.services.types import BatchSummary, ClassificationKind, FileImportOutcome

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], str]
ProviderFactory = Callable[[ProviderKind, str], RecipeProvider]


def import_url(
    url: str,
    user_id: str,
    provider: RecipeProvider,
    recipes: RecipeRepository,
    fetcher: Fetcher = fetch_text,
) -> RecipeRecord:
    if not url:
        raise InvalidRequestError("Empty URL entry.")
    text = fetcher(url)
    recipe = provider.extract_recipe(text).model_copy(update={"source_url": url})
    recipes.create_recipe(user_id, recipe)
    return recipe


def import_urls(
    urls: Iterable[str],
    user_id: str,
    provider: RecipeProvider,
    recipes: RecipeRepository,
    fetcher: Fetcher = fetch_text,
) -> BatchSummary:
    summary = BatchSummary()
    t0 = time.time()

    # One URL at a time; a failing URL never stops the batch.
    for url in urls:
        try:
            import_url(url, user_id, provider, recipes, fetcher)
        except Exception as exc:
            logger.warning("import.url_fail url=%s error=%s", url, exc)
            summary.record_failure(url)
            continue
        summary.record_success()

    logger.info(
        "import.done total=%d success=%d errors=%d dt=%.2fs",
        summary.total_urls,
        summary.success_count,
        summary.error_count,
        time.time() - t0,
    )
    return summary


class RecipeImportService:
    """
    Request-level use cases for turning URLs, text and files into recipes.

    Responsibilities:
    - Resolve the user's provider and API key
    - Single-source extraction for review (nothing is persisted)
    - File classification, with automatic import of URL lists
    """

    def __init__(
        self,
        settings_repository: UserSettingsRepository,
        recipe_repository: RecipeRepository,
        fetcher: Fetcher = fetch_text,
        provider_factory: ProviderFactory = get_provider,
    ):
        self._settings = settings_repository
        self._recipes = recipe_repository
        self._fetch = fetcher
        self._provider_factory = provider_factory

    def resolve_provider(self, user_id: str, *, allow_missing_settings: bool = False) -> RecipeProvider:
        """
        Build the provider the user picked, with their key.

        Args:
            user_id: The user
            allow_missing_settings: Fall back to default settings when the user
                has no settings row instead of failing

        Raises:
            SettingsNotFoundError: No settings row and no fallback allowed
            ApiKeyNotConfiguredError: The chosen provider has no key
        """
        user_settings = self._settings.get_user_settings(user_id)
        if user_settings is None:
            if not allow_missing_settings:
                raise SettingsNotFoundError(user_id)
            user_settings = UserSettings()

        api_key = user_settings.api_key_for(user_settings.provider)
        if not api_key:
            raise ApiKeyNotConfiguredError(user_settings.provider.value)

        return self._provider_factory(user_settings.provider, api_key)

    def scrape_recipe(
        self,
        user_id: str,
        *,
        url: Optional[str] = None,
        text: Optional[str] = None,
    ) -> RecipeRecord:
        if not user_id or not (url or text):
            raise InvalidRequestError("URL and User ID are required")

        with self.resolve_provider(user_id, allow_missing_settings=True) as provider:
            if url:
                logger.info("scrape.start url=%s user=%s provider=%s", url, user_id, provider.kind.value)
                text = self._fetch(url)
                if not text:
                    raise EmptyContentError(url)
            else:
                logger.info("scrape.start source=text user=%s provider=%s", user_id, provider.kind.value)

            return provider.extract_recipe(text or "")

    def import_file(self, user_id: str, file_bytes: bytes, mime_type: str) -> FileImportOutcome:
        with self.resolve_provider(user_id) as provider:
            provider.require(Capability.CLASSIFY_FILE)

            classification = provider.classify_file(file_bytes, mime_type)
            logger.info(
                "ocr.classified user=%s kind=%s urls=%d",
                user_id,
                classification.kind.value,
                len(classification.urls),
            )

            if classification.kind is ClassificationKind.RECIPE:
                return FileImportOutcome(kind=classification.kind, recipe=classification.recipe)

            if classification.kind is ClassificationKind.URL_LIST:
                summary = import_urls(classification.urls, user_id, provider, self._recipes, self._fetch)
                return FileImportOutcome(kind=classification.kind, summary=summary)

        raise UnrecognizedContentError(
            "The uploaded file does not appear to be a recipe or a list of recipe URLs."
        )
