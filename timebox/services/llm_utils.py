"""
Shared LLM invocation utilities for the planner.
"""

from __future__ import annotations

import json
import re
from typing import NamedTuple, Optional

from timebox.core.config import get_settings
from timebox.core.exceptions import LLMError
from timebox.core.logger import logger
from timebox.interfaces.llm_provider import ILLMProvider

_FENCED_JSON = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
_BARE_OBJECT = re.compile(r"\{[\s\S]*\}")


class GenerationOutcome(NamedTuple):
    """Result of one provider call: text on success, else an error code."""

    text: Optional[str]
    error_code: Optional[str] = None
    error_detail: Optional[str] = None


def generate_text_with_status(
    llm_provider: ILLMProvider,
    prompt: str,
    temperature: float = 0.2,
    max_output_tokens: int = 600,
    response_schema: Optional[dict] = None,
    system_instruction: Optional[str] = None,
) -> GenerationOutcome:
    """
    Run a blocking completion and fold every failure into an error code.

    Error codes: empty_prompt, <backend>_not_configured, <backend>_request_failed,
    <backend>_empty_response.
    """
    if not prompt:
        return GenerationOutcome(None, "empty_prompt")

    backend = llm_provider.backend
    try:
        text = llm_provider.complete(
            prompt,
            temperature=temperature,
            max_output_tokens=max_output_tokens,
            response_schema=response_schema,
            system_instruction=system_instruction,
        )
    except LLMError as exc:
        logger.warning(f"{backend} provider not usable: {exc.message}")
        return GenerationOutcome(None, f"{backend}_not_configured", _maybe_detail(exc))
    except Exception as exc:
        logger.warning(f"{backend} request failed ({llm_provider.get_model()}): {exc}")
        return GenerationOutcome(None, f"{backend}_request_failed", _maybe_detail(exc))

    text = (text or "").strip()
    if not text:
        return GenerationOutcome(None, f"{backend}_empty_response")
    return GenerationOutcome(text)


def extract_json(raw_output: str) -> dict:
    """
    Pull a JSON object out of model output.

    Accepts a fenced ```json block or the first {...} span.

    Raises:
        ValueError: If no JSON object can be found or decoded
    """
    fenced = _FENCED_JSON.search(raw_output)
    if fenced:
        candidate = fenced.group(1).strip()
    else:
        bare = _BARE_OBJECT.search(raw_output)
        if not bare:
            raise ValueError("No JSON found in output")
        candidate = bare.group(0)
    data = json.loads(candidate)
    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object")
    return data


def _maybe_detail(exc: Exception) -> Optional[str]:
    if not get_settings().DEBUG:
        return None
    return f"{type(exc).__name__}: {exc}"
