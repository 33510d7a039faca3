# recipe_book/services/validation.py
# Referential checks for a recipe payload before it is written.
# Used by POST /recipes/create, PUT /recipes/update/{id} and POST /ai/recipes.

from __future__ import annotations
from typing import Any, Dict, List, Mapping
import logging

from recipe_book.core.errors import InvalidCuisine, InvalidTags, MissingFields
from recipe_book.db.init import CUISINES, TAGS, RecipeStore

log = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    "name", "cuisine", "ingredients", "instructions",
    "tags", "prepTime", "cookTime", "servings",
)


def missing_fields(candidate: Mapping[str, Any]) -> List[str]:
    # "", [], 0 and None all count as missing
    return [f for f in REQUIRED_FIELDS if not candidate.get(f)]


async def validate_recipe(store: RecipeStore, candidate: Mapping[str, Any]) -> Dict[str, Any]:
    """Check a candidate recipe and return it in its stored shape.

    Steps run in order and stop at the first failure:

    1. every required field present and non-empty -> ``MissingFields``
    2. cuisine resolved by exact name -> ``InvalidCuisine``
    3. tags resolved with one ``$in`` lookup; the number of documents found
       must equal the number of names requested -> ``InvalidTags``

    On success ``cuisine`` becomes an ``{_id, name}`` snapshot and ``tags``
    the resolved tag documents, in lookup order. Nothing is written.

    Duplicate tag names fail step 3: ``["spicy", "spicy"]`` resolves to a
    single document, which does not match the two names requested.
    """
    missing = missing_fields(candidate)
    if missing:
        raise MissingFields(missing)

    cuisine = candidate["cuisine"]
    cuisine_doc = await store.find_one(CUISINES, {"name": cuisine})
    if not cuisine_doc:
        raise InvalidCuisine(cuisine)

    tags = list(candidate["tags"])
    tag_docs = await store.find(TAGS, {"name": {"$in": tags}})
    if len(tag_docs) != len(tags):
        raise InvalidTags(tags, [t.get("name") for t in tag_docs])

    recipe = {
        "name": candidate["name"],
        "cuisine": {"_id": cuisine_doc["_id"], "name": cuisine_doc["name"]},
        "prepTime": candidate["prepTime"],
        "cookTime": candidate["cookTime"],
        "servings": candidate["servings"],
        "ingredients": [dict(i) for i in candidate["ingredients"]],
        "instructions": list(candidate["instructions"]),
        "tags": tag_docs,
    }
    log.debug("validated recipe %r (cuisine=%s, tags=%d)", recipe["name"], cuisine_doc["name"], len(tag_docs))
    return recipe
