from __future__ import annotations

from recipe_box.services.persist_models import ProviderKind, RecipeRecord, UserSettings
from recipe_box.services.types import BatchSummary


class TestProviderKind:
    def test_values(self) -> None:
        assert ProviderKind.OPENAI.value == "openai"
        assert ProviderKind.GEMINI.value == "gemini"

    def test_is_string_enum(self) -> None:
        assert isinstance(ProviderKind.GEMINI, str)
        assert ProviderKind.GEMINI == "gemini"


class TestUserSettings:
    def test_defaults_to_openai(self) -> None:
        settings = UserSettings()

        assert settings.provider is ProviderKind.OPENAI
        assert settings.api_key_for(settings.provider) is None

    def test_gemini_provider(self) -> None:
        settings = UserSettings(provider="gemini", gemini_api_key="g-key", openai_api_key="sk-key")

        assert settings.provider is ProviderKind.GEMINI
        assert settings.api_key_for(settings.provider) == "g-key"

    def test_unknown_or_missing_provider_falls_back_to_openai(self) -> None:
        assert UserSettings(provider=None).provider is ProviderKind.OPENAI
        assert UserSettings(provider="mistral").provider is ProviderKind.OPENAI
        assert UserSettings(provider=" Gemini ").provider is ProviderKind.GEMINI

    def test_blank_key_counts_as_missing(self) -> None:
        settings = UserSettings(provider="openai", openai_api_key="   ")

        assert settings.api_key_for(ProviderKind.OPENAI) is None


class TestRecipeRecord:
    def test_to_row(self) -> None:
        record = RecipeRecord(
            name="Soup",
            ingredients="water\nsalt",
            instructions="boil",
            source_url="https://example.com/soup",
        )

        assert record.to_row("u1") == {
            "user_id": "u1",
            "name": "Soup",
            "ingredients": "water\nsalt",
            "instructions": "boil",
            "source_url": "https://example.com/soup",
        }


class TestBatchSummary:
    def test_counts_and_message(self) -> None:
        summary = BatchSummary()
        summary.record_success()
        summary.record_failure("https://bad.example")
        summary.record_success()

        assert summary.total_urls == 3
        assert summary.success_count == 2
        assert summary.error_count == 1
        assert summary.failed_urls == ["https://bad.example"]
        assert summary.message == "処理が完了しました。3件中、2件のレシピを追加しました。"

    def test_empty_batch(self) -> None:
        assert BatchSummary().message == "処理が完了しました。0件中、0件のレシピを追加しました。"
