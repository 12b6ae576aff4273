"""
LiteLLM provider implementation.

Reaches OpenAI (the default planner model) and other backends through LiteLLM,
optionally via a proxy server (api_base).
"""

import json
import os
from typing import Optional

import litellm

from timebox.core.config import get_settings
from timebox.interfaces.llm_provider import ILLMProvider


class LiteLLMProvider(ILLMProvider):
    """LiteLLM provider with custom endpoint support."""

    backend = "litellm"

    def __init__(
        self,
        model_name: str,
        api_base: Optional[str] = None,
        api_key: Optional[str] = None,
    ):
        """
        Args:
            model_name: LiteLLM model identifier (e.g., "openai/gpt-4o-2024-08-06")
            api_base: Proxy endpoint without the /v1 suffix
            api_key: Key overriding LITELLM_API_KEY
        """
        settings = get_settings()
        self._model_name = model_name
        self._api_base = api_base or settings.LITELLM_API_BASE or None
        self._api_key = api_key or settings.LITELLM_API_KEY or None
        self._configured_models = settings.available_models

        if settings.DEBUG:
            os.environ["LITELLM_LOG"] = "DEBUG"

    def get_model(self) -> str:
        return self._model_name

    def get_available_models(self) -> list[str]:
        return [self._model_name] + [m for m in self._configured_models if m != self._model_name]

    def complete(
        self,
        prompt: str,
        *,
        temperature: float,
        max_output_tokens: int,
        response_schema: Optional[dict] = None,
        system_instruction: Optional[str] = None,
    ) -> str:
        messages = []
        if system_instruction:
            messages.append({"role": "system", "content": system_instruction})
        if response_schema:
            # Not every backend honours a schema, so it is spelled out in the prompt too
            schema_text = json.dumps(response_schema, ensure_ascii=False)
            prompt = f"{prompt}\n\nReturn JSON only. Schema:\n{schema_text}"
        messages.append({"role": "user", "content": prompt})

        kwargs: dict = {
            "model": self._model_name,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_output_tokens,
        }
        if response_schema:
            kwargs["response_format"] = {"type": "json_object"}
        if self._api_base:
            kwargs["api_base"] = self._api_base
        if self._api_key:
            kwargs["api_key"] = self._api_key

        response = litellm.completion(**kwargs)
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    def with_model(self, model_id: str) -> "LiteLLMProvider":
        if model_id == self._model_name:
            return self
        return LiteLLMProvider(model_id, api_base=self._api_base, api_key=self._api_key)
