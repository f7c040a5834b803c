from __future__ import annotations

import os
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional, Tuple

import structlog
from google.api_core import exceptions as gcloud_exceptions
from google.cloud import firestore

from .models import Recipe, RecipePatch
from .query import RecipeQuery
from .storage import RecipeRepository

logger = structlog.get_logger(__name__)


class FirestoreRecipeStorage(RecipeRepository):
    """Recipe storage backed by a Cloud Firestore collection.

    Unfiltered list requests page on the server. Firestore has no
    case-insensitive substring queries, so filtered requests stream the
    collection in creation order and filter in process.
    """

    def __init__(
        self,
        *,
        project: Optional[str] = None,
        collection_name: str = "recipes",
        client: Optional[firestore.Client] = None,
    ) -> None:
        self._project = project
        self._collection_name = collection_name

        self._firestore_client = client or firestore.Client(project=project)
        self._collection = self._firestore_client.collection(collection_name)

    @classmethod
    def from_env(cls) -> "FirestoreRecipeStorage":
        """Build a storage instance from environment variables."""

        project = os.environ.get("GCP_PROJECT")
        collection_name = os.environ.get("RECIPES_COLLECTION", "recipes")
        logger.info("firestore_storage_configured", project=project, collection=collection_name)
        return cls(project=project, collection_name=collection_name)

    def find_recipes(self, query: RecipeQuery) -> Tuple[List[Recipe], int]:
        ordered = self._collection.order_by("created_at")

        if not query.has_filters:
            total = self._collection.count().get()[0][0].value
            docs = ordered.offset(query.skip).limit(query.limit).stream()
            recipes = [self._doc_to_recipe(doc.id, doc.to_dict() or {}) for doc in docs]
            return recipes, int(total)

        recipes = (self._doc_to_recipe(doc.id, doc.to_dict() or {}) for doc in ordered.stream())
        return query.apply(recipes)

    def get_recipe(self, recipe_id: str) -> Recipe:
        with _missing_as_key_error(recipe_id):
            snapshot = self._document(recipe_id).get()

        if not snapshot.exists:
            raise KeyError(f"Recipe '{recipe_id}' does not exist.")

        return self._doc_to_recipe(snapshot.id, snapshot.to_dict() or {})

    def add_recipe(
        self,
        *,
        name: str,
        description: Optional[str],
        ingredients: List[str],
    ) -> Recipe:
        # Both timestamps resolve to the same commit time.
        doc = {
            "name": name,
            "description": description,
            "ingredients": ingredients,
            "created_at": firestore.SERVER_TIMESTAMP,
            "updated_at": firestore.SERVER_TIMESTAMP,
            "version": 0,
        }

        doc_ref = self._collection.document()
        doc_ref.set(doc)

        snapshot = doc_ref.get()
        return self._doc_to_recipe(snapshot.id, snapshot.to_dict() or {})

    def update_recipe(self, recipe_id: str, patch: RecipePatch) -> None:
        update_doc: Dict[str, Any] = dict(patch.values)
        update_doc["updated_at"] = firestore.SERVER_TIMESTAMP
        update_doc["version"] = firestore.Increment(1)

        with _missing_as_key_error(recipe_id):
            self._document(recipe_id).update(update_doc)

    def delete_recipe(self, recipe_id: str) -> None:
        # The exists precondition makes a second delete of the same id fail.
        with _missing_as_key_error(recipe_id):
            self._document(recipe_id).delete(
                option=self._firestore_client.write_option(exists=True)
            )

    def _document(self, recipe_id: str) -> firestore.DocumentReference:
        try:
            return self._collection.document(recipe_id)
        except ValueError as exc:
            raise KeyError(f"Recipe '{recipe_id}' does not exist.") from exc

    def _doc_to_recipe(self, doc_id: str, data: dict) -> Recipe:
        ingredients = data.get("ingredients")
        if isinstance(ingredients, list):
            parsed_ingredients = [str(item) for item in ingredients]
        elif isinstance(ingredients, str):
            parsed_ingredients = [ingredients]
        else:
            parsed_ingredients = []

        return Recipe(
            id=doc_id,
            name=data.get("name") or "",
            description=data.get("description"),
            ingredients=parsed_ingredients,
            created_at=_as_datetime(data.get("created_at")),
            updated_at=_as_datetime(data.get("updated_at")),
            version=int(data.get("version") or 0),
        )


@contextmanager
def _missing_as_key_error(recipe_id: str) -> Iterator[None]:
    """Report missing documents and ids Firestore rejects (reserved names,
    "." or "..", over-long ids) as a missing recipe."""

    try:
        yield
    except (gcloud_exceptions.NotFound, gcloud_exceptions.InvalidArgument) as exc:
        raise KeyError(f"Recipe '{recipe_id}' does not exist.") from exc


def _as_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    return None


__all__ = ["FirestoreRecipeStorage"]
