# recipe_book/db/models/recipe.py
# Request bodies for the recipe routes.
# Fields stay optional here: presence is checked by the validator so a
# missing field is reported as MissingFields (400), not as a 422.

from __future__ import annotations
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class IngredientIn(BaseModel):
    name: str
    quantity: str = ""
    unit: str = ""

    @field_validator("quantity", "unit", mode="before")
    @classmethod
    def _v_text(cls, v):
        # "200" and 200 are the same quantity
        if v is None:
            return ""
        if isinstance(v, float) and v.is_integer():
            return str(int(v))
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class RecipeIn(BaseModel):
    # frontend sends camelCase; keep the stored field names identical
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    cuisine: Optional[str] = None
    prepTime: Optional[int] = Field(default=None, ge=0)
    cookTime: Optional[int] = Field(default=None, ge=0)
    servings: Optional[int] = Field(default=None, ge=0)
    ingredients: Optional[List[IngredientIn]] = None
    instructions: Optional[List[str]] = None
    tags: Optional[List[str]] = None

    def to_candidate(self) -> Dict[str, Any]:
        return self.model_dump()


class ReviewIn(BaseModel):
    user: Optional[str] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    comment: Optional[str] = None


class AIRecipeIn(BaseModel):
    recipeText: Optional[str] = None
