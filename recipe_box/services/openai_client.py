from __future__ import annotations

from pathlib import Path

import httpx
from openai import OpenAI

from recipe_box.services.errors import ApiKeyNotConfiguredError
from recipe_box.services.gemini_client import load_prompt

DEFAULT_MODEL_NAME = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.3


class OpenAIClient:
    def __init__(
        self,
        api_key: str,
        model_name: str = DEFAULT_MODEL_NAME,
        temperature: float = DEFAULT_TEMPERATURE,
        http_client: httpx.Client | None = None,
    ) -> None:
        if not api_key:
            raise ApiKeyNotConfiguredError("openai")
        self.model_name = model_name
        self.temperature = temperature
        self._owns_http = http_client is None
        self._client = OpenAI(api_key=api_key, http_client=http_client)

    def close(self) -> None:
        if self._owns_http:
            self._client.close()

    def generate_json(self, user_prompt: str, system_prompt_path: Path) -> str:
        completion = self._client.chat.completions.create(
            model=self.model_name,
            messages=[
                {"role": "system", "content": load_prompt(system_prompt_path)},
                {"role": "user", "content": user_prompt},
            ],
            temperature=self.temperature,
            response_format={"type": "json_object"},
        )
        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""
