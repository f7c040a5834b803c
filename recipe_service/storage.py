from __future__ import annotations

from typing import List, Optional, Protocol, Tuple

from .models import Recipe, RecipePatch
from .query import RecipeQuery


class RecipeRepository(Protocol):
    """Protocol describing the behaviour required by the request handlers."""

    def find_recipes(self, query: RecipeQuery) -> Tuple[List[Recipe], int]:
        """Return the page of recipes matching ``query`` and the total match count.

        Recipes are returned in insertion order, oldest first.
        """

    def get_recipe(self, recipe_id: str) -> Recipe:
        """Return a single recipe or raise :class:`KeyError` if missing."""

    def add_recipe(
        self,
        *,
        name: str,
        description: Optional[str],
        ingredients: List[str],
    ) -> Recipe:
        """Persist a new recipe and return the stored instance."""

    def update_recipe(self, recipe_id: str, patch: RecipePatch) -> None:
        """Apply ``patch`` to an existing recipe or raise :class:`KeyError`."""

    def delete_recipe(self, recipe_id: str) -> None:
        """Remove a recipe or raise :class:`KeyError` if missing."""


__all__ = ["RecipeRepository"]
