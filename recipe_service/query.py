"""Filtering and pagination for the recipe list endpoint."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .models import Recipe

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 5


@dataclass(frozen=True)
class RecipeQuery:
    """Filter predicate plus the page window for a list request.

    ``name`` and ``ingredient`` are case-insensitive substring filters. A
    filter that is ``None`` imposes no constraint; all supplied filters must
    match.
    """

    name: Optional[str] = None
    ingredient: Optional[str] = None
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "RecipeQuery":
        """Build a query from request query-string arguments."""

        return cls(
            name=_clean_filter(args.get("name")),
            ingredient=_clean_filter(args.get("ingredient")),
            page=_positive_int(args.get("page"), DEFAULT_PAGE),
            limit=_positive_int(args.get("limit"), DEFAULT_LIMIT),
        )

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def has_filters(self) -> bool:
        return self.name is not None or self.ingredient is not None

    def matches(self, recipe: Recipe) -> bool:
        if self.name is not None and not _contains(recipe.name, self.name):
            return False
        if self.ingredient is not None and not any(
            _contains(item, self.ingredient) for item in recipe.ingredients
        ):
            return False
        return True

    def apply(self, recipes: Iterable[Recipe]) -> Tuple[List[Recipe], int]:
        """Filter ``recipes`` and cut out the requested page.

        Returns the recipes on the page and the total number of matches.
        """

        matched = [recipe for recipe in recipes if self.matches(recipe)]
        return matched[self.skip : self.skip + self.limit], len(matched)


@dataclass(frozen=True)
class Page:
    recipes: Sequence[Recipe]
    total: int
    limit: int
    page: int

    @property
    def total_pages(self) -> int:
        return max(math.ceil(self.total / self.limit), 1)

    @property
    def paging_counter(self) -> int:
        return (self.page - 1) * self.limit + 1

    @property
    def has_prev_page(self) -> bool:
        return self.page > 1

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recipes": [recipe.to_dict() for recipe in self.recipes],
            "totalRecipes": self.total,
            "limit": self.limit,
            "page": self.page,
            "totalPages": self.total_pages,
            "pagingCounter": self.paging_counter,
            "hasPrevPage": self.has_prev_page,
            "hasNextPage": self.has_next_page,
            "prevPage": self.page - 1 if self.has_prev_page else None,
            "nextPage": self.page + 1 if self.has_next_page else None,
        }


def _contains(value: Optional[str], needle: str) -> bool:
    if not value:
        return False
    return needle.casefold() in str(value).casefold()


def _clean_filter(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


__all__ = ["RecipeQuery", "Page", "DEFAULT_PAGE", "DEFAULT_LIMIT"]
