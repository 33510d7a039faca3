# recipe_book/api/routes_recipes.py
# Recipe CRUD + reviews over the recipes collection.

from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional
import logging

from bson import ObjectId
from fastapi import APIRouter, Depends, Query

from recipe_book.api.errors import http_error, not_found
from recipe_book.core.deps import get_store
from recipe_book.core.errors import MissingFields, RecipeBookError
from recipe_book.db.init import RECIPES, RecipeStore, parse_object_id, to_jsonable
from recipe_book.db.models.recipe import RecipeIn, ReviewIn
from recipe_book.services.criteria import build_criteria, split_csv
from recipe_book.services.validation import validate_recipe

log = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes", tags=["recipes"])

# search results carry summary fields only; full document via /detail
SEARCH_PROJECTION = {"name": 1, "cuisine": 1, "tags": 1, "prepTime": 1}


# example: ?name=chicken&tags=popular,spicy&ingredients=chicken,yogurt
@router.get("/search")
async def search_recipes(
    name: Optional[str] = Query(None, description="case-insensitive substring of the recipe name"),
    tags: Optional[str] = Query(None, description="comma-separated, recipe has ANY"),
    ingredients: Optional[str] = Query(None, description="comma-separated, recipe has ALL"),
    store: RecipeStore = Depends(get_store),
):
    criteria = build_criteria(name, split_csv(tags), split_csv(ingredients))
    log.debug("search criteria: %s", criteria)

    recipes = await store.find(RECIPES, criteria, SEARCH_PROJECTION)
    return {"recipes": to_jsonable(recipes)}


# example: ?id=695f64e320c0ab9c7a35125d
@router.get("/detail")
async def get_recipe_detail(
    id: str = Query(..., description="recipe ObjectId"),
    store: RecipeStore = Depends(get_store),
):
    try:
        oid = parse_object_id(id)
    except RecipeBookError as e:
        raise http_error(e)

    recipe = await store.find_one(RECIPES, {"_id": oid})
    if not recipe:
        raise not_found()
    return {"recipe": to_jsonable(recipe)}


@router.post("/create", status_code=201)
async def create_recipe(payload: RecipeIn, store: RecipeStore = Depends(get_store)):
    try:
        recipe = await validate_recipe(store, payload.to_candidate())
    except RecipeBookError as e:
        raise http_error(e)

    recipe["_id"] = ObjectId()
    recipe_id = await store.insert_one(RECIPES, recipe)
    log.info("recipe created: %s (%s)", recipe_id, recipe["name"])
    return {"message": "Recipe created", "recipeId": str(recipe_id)}


@router.put("/update/{recipe_id}")
async def update_recipe(
    recipe_id: str,
    payload: RecipeIn,
    store: RecipeStore = Depends(get_store),
):
    try:
        oid = parse_object_id(recipe_id)
        recipe = await validate_recipe(store, payload.to_candidate())
    except RecipeBookError as e:
        raise http_error(e)

    # last write wins; reviews are not part of the payload and survive
    matched = await store.update_one(RECIPES, {"_id": oid}, {"$set": recipe})
    if matched == 0:
        raise not_found("Recipe not found")
    return {"message": "Recipe has been updated successfully"}


@router.delete("/delete/{recipe_id}")
async def delete_recipe(recipe_id: str, store: RecipeStore = Depends(get_store)):
    try:
        oid = parse_object_id(recipe_id)
    except RecipeBookError as e:
        raise http_error(e)

    deleted = await store.delete_one(RECIPES, {"_id": oid})
    if deleted == 0:
        raise not_found("Not found")
    return {"message": "Deleted successfully"}


@router.post("/{recipe_id}/reviews", status_code=201)
async def add_review(
    recipe_id: str,
    payload: ReviewIn,
    store: RecipeStore = Depends(get_store),
):
    try:
        oid = parse_object_id(recipe_id)
        missing = [f for f in ("user", "rating", "comment") if not getattr(payload, f)]
        if missing:
            raise MissingFields(missing)
    except RecipeBookError as e:
        raise http_error(e)

    review = {
        "id": ObjectId(),
        "user": payload.user,
        "rating": payload.rating,
        "comment": payload.comment,
        "timestamp": datetime.now(timezone.utc),
    }
    matched = await store.update_one(RECIPES, {"_id": oid}, {"$push": {"reviews": review}})
    if matched == 0:
        raise not_found("Recipe not found")

    return {"message": "Review added successfully", "reviewId": str(review["id"])}
