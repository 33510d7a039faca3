# recipe_book/api/routes_ai.py
# AI-assisted endpoints
# GET  /ai/recipes?q=...  natural language search -> translated text
# POST /ai/recipes        recipe description -> stored recipe

from __future__ import annotations
import logging

from bson import ObjectId
from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from recipe_book.api.errors import http_error
from recipe_book.core.deps import get_llm, get_store
from recipe_book.core.errors import MissingFields, RecipeBookError
from recipe_book.db.init import RECIPES, RecipeStore
from recipe_book.db.models.recipe import AIRecipeIn
from recipe_book.services.ai_recipes import (
    extract_recipe,
    load_vocabulary,
    localize_recipes,
    reconcile_query,
    rejected_filters,
    translate_query,
)
from recipe_book.services.criteria import build_ai_criteria
from recipe_book.services.llm import LLMBackend
from recipe_book.services.validation import validate_recipe

log = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])


@router.get("/recipes", response_class=PlainTextResponse)
async def ai_search_recipes(
    q: str = Query(..., min_length=1, description="natural language query, any language"),
    store: RecipeStore = Depends(get_store),
    llm: LLMBackend = Depends(get_llm),
):
    """
    1) vocabulary (cuisines/tags/ingredients) from the database
    2) AI: query -> structured search params + user language
    3) snap params onto the vocabulary, build the predicate, fetch recipes
       (a requested cuisine/tag filter with no known value matches nothing)
    4) AI: recipes -> readable text in the user's language
    """
    try:
        voc = await load_vocabulary(store)
        requested = await translate_query(llm, q, voc.tags, voc.cuisines, voc.ingredients)
        params = reconcile_query(requested, voc)

        rejected = rejected_filters(requested, params)
        if rejected:
            log.info("ai search: no known %s, nothing matches", " or ".join(rejected))
            recipes = []
        else:
            criteria = build_ai_criteria(params)
            log.info("ai search language=%s criteria=%s", params.userLanguage, criteria)
            recipes = await store.find(RECIPES, criteria)

        text = await localize_recipes(llm, recipes, params.userLanguage)
    except RecipeBookError as e:
        raise http_error(e)
    return PlainTextResponse(text)


@router.post("/recipes", status_code=201)
async def ai_create_recipe(
    payload: AIRecipeIn,
    store: RecipeStore = Depends(get_store),
    llm: LLMBackend = Depends(get_llm),
):
    try:
        text = (payload.recipeText or "").strip()
        if not text:
            raise MissingFields(["recipeText"])

        voc = await load_vocabulary(store, with_ingredients=False)
        draft = await extract_recipe(llm, text, voc.cuisines, voc.tags)
        # the AI may still pick values outside the lists
        recipe = await validate_recipe(store, draft.model_dump())
    except RecipeBookError as e:
        raise http_error(e)

    recipe["_id"] = ObjectId()
    recipe_id = await store.insert_one(RECIPES, recipe)
    log.info("ai recipe created: %s (%s)", recipe_id, recipe["name"])
    return {"message": "Recipe created", "recipeId": str(recipe_id)}
