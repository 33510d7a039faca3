# recipe_book/scripts/seed_vocabulary.py
# Seed the cuisines/tags reference collections (idempotent upserts).
# usage: python -m recipe_book.scripts.seed_vocabulary

from __future__ import annotations
from typing import Dict, Iterable, List
import asyncio
import logging

from pymongo import UpdateOne

from recipe_book.core.config import settings
from recipe_book.core.log import configure_logging
from recipe_book.db.indexes import ensure_vocabulary_indexes
from recipe_book.db.init import CUISINES, TAGS, RecipeStore

log = logging.getLogger(__name__)

# display casing is what validation matches against
CUISINE_NAMES = [
    "Chinese", "French", "Greek", "Indian", "Italian", "Japanese",
    "Korean", "Malay", "Mexican", "Spanish", "Thai", "Vietnamese",
]

TAG_NAMES = [
    "quick", "easy", "healthy", "light", "spicy", "vegetarian", "vegan",
    "breakfast", "lunch", "dinner", "dessert", "soup", "popular", "comfort food",
]


def _upserts(names: Iterable[str]) -> List[UpdateOne]:
    return [
        UpdateOne({"name": n}, {"$setOnInsert": {"name": n}}, upsert=True)
        for n in dict.fromkeys(names)
    ]


async def seed(store: RecipeStore) -> Dict[str, int]:
    await ensure_vocabulary_indexes(store)
    out: Dict[str, int] = {}
    for collection, names in ((CUISINES, CUISINE_NAMES), (TAGS, TAG_NAMES)):
        res = await store.db[collection].bulk_write(_upserts(names), ordered=False)
        out[collection] = res.upserted_count
        log.info("%s: %d inserted, %d already present", collection, res.upserted_count, len(names) - res.upserted_count)
    return out


async def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    store = RecipeStore.connect(settings.MONGO_URI, settings.MONGO_DB)
    try:
        await store.ping()
        await seed(store)
    finally:
        store.close()


if __name__ == "__main__":
    asyncio.run(main())
