from __future__ import annotations

from pathlib import Path

import httpx
from google import genai
from google.genai import types

from recipe_box.services.errors import ApiKeyNotConfiguredError, PromptLoadError

DEFAULT_MODEL_NAME = "gemini-2.5-flash"
DEFAULT_TIMEOUT_SECONDS = 120.0


def load_prompt(file_path: Path) -> str:
    try:
        return file_path.read_text(encoding="utf-8")
    except FileNotFoundError as not_found_error:
        raise PromptLoadError(f"Prompt file not found: {file_path}") from not_found_error
    except OSError as io_error:
        raise PromptLoadError(f"Unable to read prompt file: {io_error}") from io_error


class GeminiClient:
    def __init__(
        self,
        api_key: str,
        model_name: str = DEFAULT_MODEL_NAME,
        http_client: httpx.Client | None = None,
    ) -> None:
        if not api_key:
            raise ApiKeyNotConfiguredError("gemini")
        self.model_name = model_name
        self._owns_http = http_client is None
        self._http = http_client or httpx.Client(timeout=DEFAULT_TIMEOUT_SECONDS)
        self._client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(httpx_client=self._http),
        )

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def generate_content(self, user_prompt: str, system_prompt_path: Path) -> str:
        response = self._client.models.generate_content(
            model=self.model_name,
            contents=user_prompt,
            config=types.GenerateContentConfig(
                system_instruction=load_prompt(system_prompt_path),
            ),
        )
        return response.text or ""

    def generate_from_file(self, prompt_path: Path, file_bytes: bytes, mime_type: str) -> str:
        file_part = types.Part.from_bytes(data=file_bytes, mime_type=mime_type)
        response = self._client.models.generate_content(
            model=self.model_name,
            contents=[load_prompt(prompt_path), file_part],
        )
        return response.text or ""
