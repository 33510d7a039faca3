# recipe_book/models/schemas.py
# Structured AI outputs + the JSON schemas sent to the model.
# The schemas are written by hand (not model_json_schema()) so they stay
# inside what strict structured outputs accepts.

from __future__ import annotations
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

# --- natural language query -> search filter ---------------------------------

class StructuredAIQuery(BaseModel):
    model_config = ConfigDict(extra="forbid")

    cuisines: List[str]
    tags: List[str]
    ingredients: List[str]
    userLanguage: str


SEARCH_PARAMS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "ingredients": {"type": "array", "items": {"type": "string"}},
        "tags": {"type": "array", "items": {"type": "string"}},
        "cuisines": {"type": "array", "items": {"type": "string"}},
        "userLanguage": {"type": "string"},
    },
    "required": ["ingredients", "tags", "cuisines", "userLanguage"],
    "additionalProperties": False,
}

# --- recipe prose -> recipe draft ---------------------------------------------

class DraftIngredient(BaseModel):
    name: str
    quantity: str
    unit: str


class RecipeDraft(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    cuisine: str
    prepTime: int = Field(ge=0)
    cookTime: int = Field(ge=0)
    servings: int = Field(ge=0)
    ingredients: List[DraftIngredient]
    instructions: List[str]
    tags: List[str]


RECIPE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "cuisine": {"type": "string"},
        "prepTime": {"type": "integer"},
        "cookTime": {"type": "integer"},
        "servings": {"type": "integer"},
        "ingredients": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "quantity": {"type": "string"},
                    "unit": {"type": "string"},
                },
                "required": ["name", "quantity", "unit"],
                "additionalProperties": False,
            },
        },
        "instructions": {"type": "array", "items": {"type": "string"}},
        "tags": {"type": "array", "items": {"type": "string"}},
    },
    "required": [
        "name", "cuisine", "prepTime", "cookTime",
        "servings", "ingredients", "instructions", "tags",
    ],
    "additionalProperties": False,
}
