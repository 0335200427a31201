"""Settings read from environment variables.

Values are read when :meth:`Settings.from_env` is called, so tests can set
variables with ``monkeypatch.setenv`` before building an application.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

_TRUTHY = {"1", "true", "yes", "on"}


def _positive_int(variable: str, default: int) -> int:
    raw = os.environ.get(variable)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{variable} must be a positive integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{variable} must be a positive integer, got {raw!r}")
    return value


@dataclass
class Settings:
    """Application settings."""

    gcp_project: Optional[str] = None
    collection_name: str = "recipes"
    names_collection_name: str = "recipe_names"
    default_amount: int = 10
    max_amount: int = 100
    # Listing an empty collection raises NotFoundError instead of returning [].
    empty_list_is_error: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        default_amount = _positive_int("RECIPES_DEFAULT_AMOUNT", 10)
        max_amount = _positive_int("RECIPES_MAX_AMOUNT", 100)
        if default_amount > max_amount:
            raise ValueError(
                f"RECIPES_DEFAULT_AMOUNT ({default_amount}) must not exceed "
                f"RECIPES_MAX_AMOUNT ({max_amount})"
            )

        return cls(
            gcp_project=os.environ.get("GCP_PROJECT"),
            collection_name=os.environ.get("RECIPES_COLLECTION", "recipes"),
            names_collection_name=os.environ.get("RECIPE_NAMES_COLLECTION", "recipe_names"),
            default_amount=default_amount,
            max_amount=max_amount,
            empty_list_is_error=os.environ.get("RECIPES_EMPTY_LIST_IS_ERROR", "true").lower()
            in _TRUTHY,
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
        )


__all__ = ["Settings"]
