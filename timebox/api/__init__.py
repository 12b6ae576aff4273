"""API routers."""

from timebox.api import (
    generation,
    models,
    schedule,
    settings,
)

__all__ = [
    "settings",
    "schedule",
    "generation",
    "models",
]
