import json
import logging
from pathlib import Path
from typing import Any, Iterable, Iterator

from domain.models import RecipeRecord


logger = logging.getLogger(__name__)


class CatalogError(Exception):
    pass


class RecipeNotFound(Exception):
    pass


def _strings(raw: dict[str, Any], key: str, index: int) -> list[str]:
    value = raw.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise CatalogError(f"Recipe {index}: '{key}' must be a list of strings.")
    return value


def record_from_dict(raw: Any, index: int = 0) -> RecipeRecord:
    if not isinstance(raw, dict):
        raise CatalogError(f"Recipe {index}: expected an object.")
    for key in ("id", "name"):
        if not isinstance(raw.get(key), str) or not raw[key].strip():
            raise CatalogError(f"Recipe {index}: '{key}' must be a non-empty string.")
    return RecipeRecord(
        id=raw["id"],
        name=raw["name"],
        tags=_strings(raw, "tags", index),
        ingredients=_strings(raw, "ingredients", index),
        steps=_strings(raw, "steps", index),
    )


class RecipeCatalog:
    """Read-only recipe catalog. Iteration order is match priority."""

    def __init__(self, records: Iterable[RecipeRecord]) -> None:
        self._records = tuple(records)
        if not self._records:
            raise CatalogError("Recipe catalog is empty.")
        self._by_id: dict[str, RecipeRecord] = {}
        for record in self._records:
            if record.id in self._by_id:
                raise CatalogError(f"Duplicate recipe id: {record.id}")
            self._by_id[record.id] = record

    @classmethod
    def from_path(cls, path: Path) -> "RecipeCatalog":
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogError(f"Could not load recipe catalog from {path}: {e}") from e

        if not isinstance(data, list):
            raise CatalogError(f"{path}: expected a list of recipes.")

        catalog = cls(record_from_dict(raw, i) for i, raw in enumerate(data))
        logger.info("Loaded %d recipes from %s", len(catalog), path)
        return catalog

    def __iter__(self) -> Iterator[RecipeRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    @property
    def names(self) -> list[str]:
        return [r.name for r in self._records]

    def get(self, id: str) -> RecipeRecord:
        try:
            return self._by_id[id]
        except KeyError:
            raise RecipeNotFound(id) from None
