# recipe_book/db/indexes.py
# Collection indexes. Awaited once from the startup hook.

from recipe_book.db.init import CUISINES, RECIPES, TAGS, RecipeStore


async def ensure_vocabulary_indexes(store: RecipeStore) -> None:
    # exact-name lookups during validation
    await store.db[CUISINES].create_index("name", unique=True)
    await store.db[TAGS].create_index("name", unique=True)


async def ensure_indexes(store: RecipeStore) -> None:
    await ensure_vocabulary_indexes(store)

    # search paths
    recipes = store.db[RECIPES]
    await recipes.create_index("name")
    await recipes.create_index("tags.name")
    await recipes.create_index("cuisine.name")
    await recipes.create_index("ingredients.name")
