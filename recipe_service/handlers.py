"""Recipe CRUD operations.

Each handler takes the repository plus the already-parsed request input and
either returns the payload for a successful response or raises one of the
errors from :mod:`recipe_service.errors`. Failures coming out of the
repository never escape untranslated.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import structlog

from .errors import NotFoundError, StorageError, ValidationError
from .models import Recipe, RecipePatch
from .query import Page, RecipeQuery
from .storage import RecipeRepository

logger = structlog.get_logger(__name__)

RECIPE_UPDATED = "Recipe has been updated."
RECIPE_DELETED = "Recipe has been deleted"


def create_recipe(storage: RecipeRepository, body: Optional[Mapping[str, Any]]) -> Recipe:
    if not isinstance(body, Mapping):
        body = {}

    name = body.get("name")
    if not name:
        raise ValidationError("Name can not be empty!")

    ingredients = body.get("ingredients")
    if not ingredients:
        raise ValidationError("Ingredients can not be empty!")
    if not isinstance(ingredients, list):
        raise ValidationError("Ingredients must be a list!")

    description = body.get("description")

    try:
        recipe = storage.add_recipe(
            name=str(name),
            description=None if description is None else str(description),
            ingredients=[str(item) for item in ingredients],
        )
    except Exception as exc:
        logger.exception("recipe_create_failed")
        raise StorageError(str(exc) or "Some error occurred while creating the Recipe.") from exc

    logger.info("recipe_created", recipe_id=recipe.id)
    return recipe


def list_recipes(storage: RecipeRepository, query: RecipeQuery) -> Page:
    try:
        recipes, total = storage.find_recipes(query)
    except Exception as exc:
        logger.exception("recipe_list_failed", name=query.name, ingredient=query.ingredient)
        raise StorageError("Error while retrieving recipes") from exc

    return Page(recipes=recipes, total=total, limit=query.limit, page=query.page)


def get_recipe(storage: RecipeRepository, recipe_id: str) -> Recipe:
    try:
        return storage.get_recipe(recipe_id)
    except KeyError as exc:
        raise NotFoundError(f"Recipe with id {recipe_id} not found") from exc
    except Exception as exc:
        logger.exception("recipe_get_failed", recipe_id=recipe_id)
        raise StorageError(f"Error while retrieving recipe with id {recipe_id}") from exc


def update_recipe(
    storage: RecipeRepository, recipe_id: str, body: Optional[Mapping[str, Any]]
) -> str:
    if not body or not isinstance(body, Mapping):
        raise ValidationError("Data can not be empty!")

    patch = RecipePatch.from_body(body)

    try:
        storage.update_recipe(recipe_id, patch)
    except KeyError as exc:
        raise NotFoundError(f"Recipe with id {recipe_id} not found") from exc
    except Exception as exc:
        logger.exception("recipe_update_failed", recipe_id=recipe_id)
        raise StorageError(f"Error while updating recipe with id {recipe_id}") from exc

    logger.info("recipe_updated", recipe_id=recipe_id, fields=sorted(patch.values))
    return RECIPE_UPDATED


def delete_recipe(storage: RecipeRepository, recipe_id: str) -> str:
    try:
        storage.delete_recipe(recipe_id)
    except KeyError as exc:
        raise NotFoundError(f"Recipe with id {recipe_id} not found") from exc
    except Exception as exc:
        logger.exception("recipe_delete_failed", recipe_id=recipe_id)
        raise StorageError(f"Error while deleting recipe with id {recipe_id}") from exc

    logger.info("recipe_deleted", recipe_id=recipe_id)
    return RECIPE_DELETED


__all__ = [
    "create_recipe",
    "list_recipes",
    "get_recipe",
    "update_recipe",
    "delete_recipe",
    "RECIPE_UPDATED",
    "RECIPE_DELETED",
]
