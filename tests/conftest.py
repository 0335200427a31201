from __future__ import annotations

from pathlib import Path
import sys
import uuid
from datetime import datetime, timedelta, timezone

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from recipe_api import create_app
from recipe_api.config import Settings
from recipe_api.models import Recipe
from recipe_api.service import RecipeService
from recipe_api.storage import DuplicateNameError


class InMemoryRecipeStorage:
    """Simple storage backend used for tests.

    Mirrors the document store: names are unique and updates that change
    nothing report zero modified records.
    """

    def __init__(self) -> None:
        self._documents: dict[str, dict] = {}

    def find_by_id(self, recipe_id: str):
        document = self._documents.get(recipe_id)
        if document is None:
            return None
        return self._to_recipe(recipe_id, document)

    def find_by_name(self, name: str):
        recipe_id = self._owner_of(name)
        if recipe_id is None:
            return None
        return self._to_recipe(recipe_id, self._documents[recipe_id])

    def list_recent(self, limit: int):
        ordered = sorted(
            self._documents.items(),
            key=lambda item: item[1]["createdAt"],
            reverse=True,
        )
        return [self._to_recipe(recipe_id, document) for recipe_id, document in ordered[:limit]]

    def insert(self, document: dict):
        if self._owner_of(document["name"]) is not None:
            raise DuplicateNameError(document["name"])
        recipe_id = uuid.uuid4().hex
        self._documents[recipe_id] = dict(document)
        return recipe_id

    def update(self, recipe_id: str, fields: dict) -> int:
        document = self._documents.get(recipe_id)
        if document is None:
            return 0
        changed = {key: value for key, value in fields.items() if document.get(key) != value}
        if not changed:
            return 0
        if "name" in changed:
            owner = self._owner_of(changed["name"])
            if owner is not None and owner != recipe_id:
                raise DuplicateNameError(changed["name"])
        document.update(changed)
        return 1

    def delete(self, recipe_id: str) -> int:
        return 0 if self._documents.pop(recipe_id, None) is None else 1

    def _owner_of(self, name: str):
        # Backs the unique name constraint, independent of find_by_name.
        for recipe_id, document in self._documents.items():
            if document["name"] == name:
                return recipe_id
        return None

    def _to_recipe(self, recipe_id: str, document: dict) -> Recipe:
        return Recipe(
            id=recipe_id,
            name=document["name"],
            description=document["description"],
            created_at=document["createdAt"],
            thumbs_up=document["thumbsUp"],
            thumbs_down=document["thumbsDown"],
        )


class TickingClock:
    """Clock that advances one second per call so creation order is strict."""

    def __init__(self) -> None:
        self._now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self._now += timedelta(seconds=1)
        return self._now


@pytest.fixture
def storage() -> InMemoryRecipeStorage:
    return InMemoryRecipeStorage()


@pytest.fixture
def service(storage: InMemoryRecipeStorage) -> RecipeService:
    return RecipeService(storage, clock=TickingClock())


@pytest.fixture
def client(storage: InMemoryRecipeStorage):
    app = create_app(storage=storage, settings=Settings())
    app.config.update(TESTING=True)
    app.config["RECIPE_SERVICE"] = RecipeService(storage, clock=TickingClock())
    return app.test_client()
