from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

from .models import Recipe


class DuplicateNameError(Exception):
    """Raised by a store when a write would break name uniqueness."""


class RecipeRepository(Protocol):
    """Protocol describing the store behaviour required by the service layer.

    Each method is a single logical round trip to the backing store.
    """

    def find_by_id(self, recipe_id: str) -> Optional[Recipe]:
        """Return the recipe with ``recipe_id`` or ``None``."""

    def find_by_name(self, name: str) -> Optional[Recipe]:
        """Return the recipe stored under the normalized ``name`` or ``None``."""

    def list_recent(self, limit: int) -> List[Recipe]:
        """Return at most ``limit`` recipes ordered newest first."""

    def insert(self, document: Dict[str, Any]) -> Optional[str]:
        """Persist a new recipe document and return its assigned id.

        Raises :class:`DuplicateNameError` if the name is already taken.
        """

    def update(self, recipe_id: str, fields: Dict[str, Any]) -> int:
        """Apply a partial update and return the number of modified recipes.

        Raises :class:`DuplicateNameError` if a new name is already taken.
        """

    def delete(self, recipe_id: str) -> int:
        """Remove a recipe and return the number of deleted recipes."""


__all__ = ["DuplicateNameError", "RecipeRepository"]
