"""
Available models endpoint.

Lists the models a generation request may pick through its `model` field.
"""

import time
from typing import Optional

import httpx
from fastapi import APIRouter

from timebox.api.deps import CurrentUser, LLMProvider
from timebox.core.config import Settings, get_settings
from timebox.core.logger import logger
from timebox.models.generation import ModelListResponse, ModelOption

router = APIRouter()

_PROXY_CACHE_TTL = 300


class _ProxyModelCache:
    """Last model list fetched from the LiteLLM proxy."""

    def __init__(self):
        self.models: list[ModelOption] = []
        self.fetched_at = 0.0

    def fresh(self, now: float) -> Optional[list[ModelOption]]:
        if self.models and now - self.fetched_at < _PROXY_CACHE_TTL:
            return self.models
        return None


_proxy_cache = _ProxyModelCache()


async def _fetch_proxy_models(settings: Settings) -> list[ModelOption]:
    """Read the OpenAI-compatible /models listing of the LiteLLM proxy."""
    now = time.time()
    cached = _proxy_cache.fresh(now)
    if cached is not None:
        return cached

    headers = {}
    if settings.LITELLM_API_KEY:
        headers["Authorization"] = f"Bearer {settings.LITELLM_API_KEY}"
    try:
        async with httpx.AsyncClient(timeout=10.0) as client:
            resp = await client.get(f"{settings.LITELLM_API_BASE}/models", headers=headers)
            resp.raise_for_status()
            entries = resp.json().get("data", [])
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(f"Could not list LiteLLM proxy models: {e}")
        return _proxy_cache.models

    _proxy_cache.models = [ModelOption(id=e["id"], name=e["id"]) for e in entries if e.get("id")]
    _proxy_cache.fetched_at = now
    return _proxy_cache.models


@router.get("", response_model=ModelListResponse)
async def list_available_models(
    user: CurrentUser,
    llm_provider: LLMProvider,
):
    settings = get_settings()

    models: list[ModelOption] = []
    if settings.LLM_PROVIDER == "litellm" and settings.LITELLM_API_BASE:
        models = await _fetch_proxy_models(settings)
    if not models:
        models = [ModelOption(id=m, name=m) for m in llm_provider.get_available_models()]

    return ModelListResponse(
        provider=settings.LLM_PROVIDER,
        default_model_id=llm_provider.get_model(),
        models=models,
    )
