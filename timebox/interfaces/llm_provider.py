"""
LLM provider interface.

A provider turns one planner prompt into raw model text.
Implementations: Gemini API (google-genai), LiteLLM (OpenAI and other backends).
"""

from abc import ABC, abstractmethod
from typing import Optional


class ILLMProvider(ABC):
    """Abstract interface for LLM providers."""

    # Short backend tag used in error codes ("genai", "litellm")
    backend: str = "llm"

    @abstractmethod
    def get_model(self) -> str:
        """
        Get the model identifier passed to the client library.

        Returns:
            Model identifier string
        """
        pass

    @abstractmethod
    def get_available_models(self) -> list[str]:
        """Model identifiers a request may select, default model first."""
        pass

    @abstractmethod
    def complete(
        self,
        prompt: str,
        *,
        temperature: float,
        max_output_tokens: int,
        response_schema: Optional[dict] = None,
        system_instruction: Optional[str] = None,
    ) -> str:
        """
        Run one blocking completion.

        Args:
            prompt: User prompt text
            temperature: Sampling temperature
            max_output_tokens: Output token cap
            response_schema: JSON schema the answer must follow, if any
            system_instruction: System prompt, if any

        Returns:
            Model text, possibly empty

        Raises:
            LLMError: If the provider is not usable (missing credentials etc.)
        """
        pass

    def with_model(self, model_id: str) -> "ILLMProvider":
        """
        Create a new provider instance using a different model.

        Default implementation returns self (no override).
        """
        return self
