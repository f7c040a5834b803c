from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import pytest

from recipe_service import create_app
from recipe_service.models import Recipe, RecipePatch
from recipe_service.query import RecipeQuery


class InMemoryRecipeStorage:
    """Simple storage backend used for tests."""

    def __init__(self) -> None:
        self._recipes: list[Recipe] = []
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.calls: list[str] = []

    def _now(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def find_recipes(self, query: RecipeQuery):
        self.calls.append("find_recipes")
        return query.apply(self._recipes)

    def get_recipe(self, recipe_id: str) -> Recipe:
        self.calls.append("get_recipe")
        for recipe in self._recipes:
            if recipe.id == recipe_id:
                return recipe
        raise KeyError(recipe_id)

    def add_recipe(
        self,
        *,
        name: str,
        description: Optional[str] = None,
        ingredients: List[str],
    ) -> Recipe:
        self.calls.append("add_recipe")
        now = self._now()
        recipe = Recipe(
            id=uuid.uuid4().hex,
            name=name,
            description=description,
            ingredients=list(ingredients),
            created_at=now,
            updated_at=now,
        )
        self._recipes.append(recipe)
        return recipe

    def update_recipe(self, recipe_id: str, patch: RecipePatch) -> None:
        self.calls.append("update_recipe")
        recipe = self.get_recipe(recipe_id)
        for key, value in patch.values.items():
            setattr(recipe, key, value)
        recipe.updated_at = self._now()
        recipe.version += 1

    def delete_recipe(self, recipe_id: str) -> None:
        self.calls.append("delete_recipe")
        for index, recipe in enumerate(self._recipes):
            if recipe.id == recipe_id:
                self._recipes.pop(index)
                return
        raise KeyError(recipe_id)


class BrokenRecipeStorage:
    """Storage backend whose every call fails."""

    def __init__(self, message: str = "connection refused") -> None:
        self.message = message

    def _fail(self, *args, **kwargs):
        raise RuntimeError(self.message)

    find_recipes = get_recipe = add_recipe = update_recipe = delete_recipe = _fail


@pytest.fixture
def storage() -> InMemoryRecipeStorage:
    return InMemoryRecipeStorage()


@pytest.fixture
def client(storage):
    app = create_app(storage=storage)
    app.config.update(TESTING=True)
    return app.test_client()


@pytest.fixture
def broken_client():
    app = create_app(storage=BrokenRecipeStorage())
    app.config.update(TESTING=True)
    return app.test_client()


@pytest.fixture
def make_broken_client():
    def _make(message: str = "connection refused"):
        app = create_app(storage=BrokenRecipeStorage(message=message))
        app.config.update(TESTING=True)
        return app.test_client()

    return _make
