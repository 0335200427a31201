from __future__ import annotations

import hashlib
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from google.api_core import exceptions as gcloud_exceptions
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from .config import Settings
from .models import Recipe
from .storage import DuplicateNameError, RecipeRepository

logger = logging.getLogger(__name__)


def _name_key(name: str) -> str:
    # Names may contain "/", which Firestore forbids in document ids.
    return hashlib.sha256(name.encode("utf-8")).hexdigest()


class FirestoreRecipeStorage(RecipeRepository):
    """GCP backed recipe storage using Firestore.

    Every recipe name is also reserved as a document in a companion
    collection, keyed by a digest of the name. Reservations are written in
    the same batch or transaction as the recipe, so two recipes can never
    hold the same name even when requests race.
    """

    def __init__(
        self,
        *,
        project: Optional[str] = None,
        collection_name: str = "recipes",
        names_collection_name: str = "recipe_names",
    ) -> None:
        self._project = project
        self._collection_name = collection_name
        self._names_collection_name = names_collection_name

        self._firestore_client = firestore.Client(project=project)
        self._collection = self._firestore_client.collection(collection_name)
        self._names = self._firestore_client.collection(names_collection_name)

    @classmethod
    def from_env(cls) -> "FirestoreRecipeStorage":
        """Build a storage instance from environment variables."""

        return cls.from_settings(Settings.from_env())

    @classmethod
    def from_settings(cls, settings: Settings) -> "FirestoreRecipeStorage":
        return cls(
            project=settings.gcp_project,
            collection_name=settings.collection_name,
            names_collection_name=settings.names_collection_name,
        )

    def find_by_id(self, recipe_id: str) -> Optional[Recipe]:
        snapshot = self._collection.document(recipe_id).get()
        if not snapshot.exists:
            return None
        return self._doc_to_recipe(snapshot.id, snapshot.to_dict() or {})

    def find_by_name(self, name: str) -> Optional[Recipe]:
        query = self._collection.where(filter=FieldFilter("name", "==", name)).limit(1)
        for doc in query.stream():
            return self._doc_to_recipe(doc.id, doc.to_dict() or {})
        return None

    def list_recent(self, limit: int) -> List[Recipe]:
        query = self._collection.order_by("createdAt", direction=firestore.Query.DESCENDING)
        docs = query.limit(limit).stream()
        return [self._doc_to_recipe(doc.id, doc.to_dict() or {}) for doc in docs]

    def insert(self, document: Dict[str, Any]) -> Optional[str]:
        doc_ref = self._collection.document()

        batch = self._firestore_client.batch()
        batch.create(self._names.document(_name_key(document["name"])), {"recipeId": doc_ref.id})
        batch.create(doc_ref, document)

        try:
            batch.commit()
        except gcloud_exceptions.AlreadyExists as exc:
            raise DuplicateNameError(document["name"]) from exc

        return doc_ref.id

    def update(self, recipe_id: str, fields: Dict[str, Any]) -> int:
        if not fields:
            return 0

        doc_ref = self._collection.document(recipe_id)
        names = self._names

        @firestore.transactional
        def apply(transaction: firestore.Transaction) -> int:
            snapshot = doc_ref.get(transaction=transaction)
            if not snapshot.exists:
                return 0

            current = snapshot.to_dict() or {}
            changed = {key: value for key, value in fields.items() if current.get(key) != value}
            if not changed:
                return 0

            if "name" in changed:
                transaction.create(names.document(_name_key(changed["name"])), {"recipeId": recipe_id})
                if current.get("name"):
                    transaction.delete(names.document(_name_key(current["name"])))

            transaction.update(doc_ref, changed)
            return 1

        try:
            return apply(self._firestore_client.transaction())
        except gcloud_exceptions.AlreadyExists as exc:
            raise DuplicateNameError(fields.get("name")) from exc

    def delete(self, recipe_id: str) -> int:
        doc_ref = self._collection.document(recipe_id)
        names = self._names

        @firestore.transactional
        def apply(transaction: firestore.Transaction) -> int:
            snapshot = doc_ref.get(transaction=transaction)
            if not snapshot.exists:
                return 0

            name = (snapshot.to_dict() or {}).get("name")
            if name:
                transaction.delete(names.document(_name_key(name)))
            transaction.delete(doc_ref)
            return 1

        return apply(self._firestore_client.transaction())

    def _doc_to_recipe(self, doc_id: str, data: dict) -> Recipe:
        created_at = data.get("createdAt")
        if isinstance(created_at, str):
            # Older records store an ISO-8601 string.
            try:
                created_at = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
            except ValueError:
                logger.warning("Recipe %s has an unparseable createdAt %r", doc_id, created_at)
                created_at = None
        elif not isinstance(created_at, datetime):
            created_at = None

        return Recipe(
            id=doc_id,
            name=data.get("name", ""),
            description=data.get("description", ""),
            created_at=created_at,
            thumbs_up=int(data.get("thumbsUp") or 0),
            thumbs_down=int(data.get("thumbsDown") or 0),
        )


__all__ = ["FirestoreRecipeStorage"]
