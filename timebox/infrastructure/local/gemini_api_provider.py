"""
Gemini API provider (google-genai, API key auth).
"""

from typing import Optional

from google import genai
from google.genai.types import Content, GenerateContentConfig, Part

from timebox.core.config import get_settings
from timebox.core.exceptions import LLMError
from timebox.interfaces.llm_provider import ILLMProvider


class GeminiAPIProvider(ILLMProvider):
    """Calls Gemini models through the google-genai client."""

    backend = "genai"

    def __init__(self, model_name: str, api_key: Optional[str] = None):
        settings = get_settings()
        self._model_name = model_name
        self._api_key = api_key or settings.GOOGLE_API_KEY
        self._configured_models = settings.available_models

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
        if not self._api_key:
            raise LLMError("GOOGLE_API_KEY is not set", details="missing_google_api_key")

        config = GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=max_output_tokens,
            system_instruction=system_instruction,
            response_schema=response_schema,
            response_mime_type="application/json" if response_schema else None,
        )
        client = genai.Client(api_key=self._api_key)
        response = client.models.generate_content(
            model=self._model_name,
            contents=[Content(role="user", parts=[Part(text=prompt)])],
            config=config,
        )
        return response.text or ""

    def with_model(self, model_id: str) -> "GeminiAPIProvider":
        if model_id == self._model_name:
            return self
        return GeminiAPIProvider(model_id, api_key=self._api_key)
