from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

PATCHABLE_FIELDS = ("name", "description", "ingredients")


@dataclass
class Recipe:
    """Domain object representing a stored recipe."""

    id: str
    name: str
    ingredients: List[str]
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    version: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "ingredients": list(self.ingredients),
            "createdAt": _isoformat(self.created_at),
            "updatedAt": _isoformat(self.updated_at),
            "version": self.version,
        }


@dataclass(frozen=True)
class RecipePatch:
    """Partial update for a recipe. Only fields present in ``values`` are applied."""

    values: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_body(cls, body: Mapping[str, Any]) -> "RecipePatch":
        """Keep the known recipe fields from a request body and drop the rest."""

        values = {key: body[key] for key in PATCHABLE_FIELDS if key in body}
        if "ingredients" in values and isinstance(values["ingredients"], list):
            values["ingredients"] = [str(item) for item in values["ingredients"]]
        return cls(values=values)


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat()


__all__ = ["Recipe", "RecipePatch", "PATCHABLE_FIELDS"]
