"""Operation handlers for recipes.

Each public method of :class:`RecipeService` validates its input, checks
the store for the record or name it depends on and then issues at most one
mutating store call. Failures are reported with the exceptions in
:mod:`recipe_api.errors`.

The duplicate-name lookups give callers a clear error in the common case.
They are not atomic with the write that follows; the store enforces name
uniqueness itself and reports a clash as :class:`DuplicateNameError`.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional

from .errors import ConflictError, NotFoundError, PersistenceError, RecipeError
from .models import Recipe
from .storage import DuplicateNameError, RecipeRepository
from .validation import (
    parse_amount,
    require_fields,
    require_id,
    sanitize_description,
    sanitize_name,
)

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "A recipe with this name already exists"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecipeService:
    def __init__(
        self,
        storage: RecipeRepository,
        *,
        default_amount: int = 10,
        max_amount: int = 100,
        empty_list_is_error: bool = True,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._storage = storage
        self._default_amount = default_amount
        self._max_amount = max_amount
        self._empty_list_is_error = empty_list_is_error
        self._clock = clock

    def get_recipe(self, recipe_id: Any) -> Recipe:
        recipe_id = require_id(recipe_id, "fetch")
        recipe = self._storage.find_by_id(recipe_id)
        if recipe is None:
            raise NotFoundError("Recipe not found")
        return recipe

    def list_recent(self, amount: Any = None) -> List[Recipe]:
        limit = parse_amount(amount, self._default_amount, self._max_amount)
        recipes = list(self._storage.list_recent(limit))
        if not recipes and self._empty_list_is_error:
            raise NotFoundError("No recipes found")
        return recipes

    def create_recipe(self, name: Any, description: Any) -> Recipe:
        require_fields(name, description)
        name = sanitize_name(name)
        description = sanitize_description(description)
        recipe = Recipe(id="", name=name, description=description, created_at=self._clock())

        try:
            if self._storage.find_by_name(name) is not None:
                raise ConflictError(DUPLICATE_NAME_MESSAGE)
            recipe_id = self._storage.insert(recipe.to_document())
        except RecipeError:
            raise
        except DuplicateNameError as exc:
            raise ConflictError(DUPLICATE_NAME_MESSAGE) from exc
        except Exception as exc:
            logger.exception("Database error while creating recipe %r", name)
            raise PersistenceError("Failed to create recipe due to a database error") from exc

        if not recipe_id:
            raise PersistenceError("Failed to create recipe")

        recipe.id = recipe_id
        logger.info("Created recipe %s (%s)", recipe_id, name)
        return recipe

    def delete_recipe(self, recipe_id: Any) -> bool:
        recipe_id = require_id(recipe_id, "delete")

        try:
            if self._storage.find_by_id(recipe_id) is None:
                raise NotFoundError("Recipe with this ID does not exist")
            deleted = self._storage.delete(recipe_id)
        except RecipeError:
            raise
        except Exception as exc:
            logger.exception("Database error while deleting recipe %s", recipe_id)
            raise PersistenceError("Failed to delete recipe due to a database error") from exc

        if not deleted:
            raise PersistenceError("Failed to delete recipe")

        logger.info("Deleted recipe %s", recipe_id)
        return True

    def edit_recipe(
        self,
        recipe_id: Any,
        name: Optional[Any] = None,
        description: Optional[Any] = None,
    ) -> bool:
        """Update the supplied fields of a recipe.

        Empty values (``None``, ``""``) leave the field unchanged.
        """

        recipe_id = require_id(recipe_id, "edit")

        try:
            if self._storage.find_by_id(recipe_id) is None:
                raise NotFoundError("Recipe with this ID does not exist")

            fields = {}
            if name:
                fields["name"] = sanitize_name(name)
                existing = self._storage.find_by_name(fields["name"])
                if existing is not None and existing.id != recipe_id:
                    raise ConflictError(DUPLICATE_NAME_MESSAGE)
            if description:
                fields["description"] = sanitize_description(description)

            modified = self._storage.update(recipe_id, fields)
        except RecipeError:
            raise
        except DuplicateNameError as exc:
            raise ConflictError(DUPLICATE_NAME_MESSAGE) from exc
        except Exception as exc:
            logger.exception("Database error while editing recipe %s", recipe_id)
            raise PersistenceError("Failed to edit recipe due to a database error") from exc

        if not modified:
            raise PersistenceError("Failed to edit recipe")

        logger.info("Edited recipe %s: %s", recipe_id, ", ".join(sorted(fields)))
        return True


__all__ = ["RecipeService"]
