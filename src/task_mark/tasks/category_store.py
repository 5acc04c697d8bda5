# src/task_mark/tasks/category_store.py

from __future__ import annotations

import logging
from typing import Any

from ..core.ports import Preferences
from .task_models import CustomCategory, category_key, parse_uuid_string

logger = logging.getLogger(__name__)

CATEGORIES_KEY = "savedCustomCategories"


def category_to_dict(category: CustomCategory) -> dict[str, str]:
    return {"id": str(category.id), "name": category.name}


def category_from_dict(raw: Any) -> CustomCategory | None:
    """Decode one stored entry; None if it is not a well-formed {id, name} mapping."""
    if not isinstance(raw, dict):
        return None
    id_str = raw.get("id")
    name = raw.get("name")
    if not isinstance(id_str, str) or not isinstance(name, str):
        return None
    cat_id = parse_uuid_string(id_str)
    if cat_id is None:
        return None
    return CustomCategory(id=cat_id, name=name)


class CategoryStore:
    """
    User-defined categories, persisted as one snapshot.

    Names are the effective primary key (see `category_key`); the stored id is
    kept but never used for matching. Only `upsert` deduplicates: code that
    appends to `categories` directly bypasses that.

    Loading is best-effort per entry: malformed entries are dropped and their
    siblings survive.
    """

    def __init__(self, prefs: Preferences) -> None:
        self._prefs = prefs
        self.categories: list[CustomCategory] = []

    def load_all(self) -> list[CustomCategory]:
        raw = self._prefs.get_value(CATEGORIES_KEY)
        if raw is None:
            self.categories = []
            return []
        if not isinstance(raw, list):
            logger.warning("Stored categories are not a list (%s); starting empty.", type(raw).__name__)
            self.categories = []
            return []

        out: list[CustomCategory] = []
        for entry in raw:
            cat = category_from_dict(entry)
            if cat is None:
                logger.debug("Dropping malformed category entry: %r", entry)
                continue
            out.append(cat)

        self.categories = out
        logger.info("Loaded %d custom categories (%d stored entries).", len(out), len(raw))
        return list(out)

    def contains_name(self, name: str) -> bool:
        return any(category_key(c) == name for c in self.categories)

    def find(self, name: str) -> CustomCategory | None:
        for c in self.categories:
            if category_key(c) == name:
                return c
        return None

    def upsert(self, category: CustomCategory) -> None:
        key = category_key(category)
        for i, existing in enumerate(self.categories):
            if category_key(existing) == key:
                self.categories[i] = category
                break
        else:
            self.categories.append(category)
        self.save()

    def save(self) -> None:
        """Write the whole list. Failures are logged, never raised."""
        payload = [category_to_dict(c) for c in self.categories]
        try:
            self._prefs.set_value(CATEGORIES_KEY, payload)
        except Exception:
            logger.exception("Failed to persist %d custom categories.", len(payload))
