# recipe_book/services/ai_recipes.py
# AI-assisted search and recipe creation.
# 1) translate_query: natural language (any language) -> StructuredAIQuery
# 2) reconcile_query: snap AI output back onto the stored vocabulary
# 3) extract_recipe: recipe prose -> RecipeDraft (validated downstream)
# 4) localize_recipes: records -> display text in the user's language

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence, Type, TypeVar
import json
import logging

from pydantic import BaseModel, ValidationError

from recipe_book.core.errors import MalformedAIOutput
from recipe_book.db.init import CUISINES, RECIPES, TAGS, RecipeStore, to_jsonable
from recipe_book.models.schemas import (
    RECIPE_SCHEMA,
    SEARCH_PARAMS_SCHEMA,
    RecipeDraft,
    StructuredAIQuery,
)
from recipe_book.services.llm import LLMBackend
from recipe_book.services.prompts import RECIPE_PROMPT, SEARCH_PARAMS_PROMPT, TRANSLATE_PROMPT

log = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


@dataclass
class Vocabulary:
    cuisines: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    ingredients: List[str] = field(default_factory=list)


async def load_vocabulary(store: RecipeStore, with_ingredients: bool = True) -> Vocabulary:
    # fetched per request, never cached
    voc = Vocabulary(
        cuisines=await store.find_distinct_names(CUISINES, "name"),
        tags=await store.find_distinct_names(TAGS, "name"),
    )
    if with_ingredients:
        voc.ingredients = await store.find_distinct_names(RECIPES, "ingredients.name")
    return voc


def _parse(raw: str, model: Type[M]) -> M:
    try:
        data = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as e:
        raise MalformedAIOutput(f"AI returned non-JSON content: {e}", raw=raw or "")
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise MalformedAIOutput(
            f"AI output does not match {model.__name__}: {e.error_count()} error(s)", raw=raw
        )


# --- query translation ----------------------------------------------------------

async def translate_query(
    llm: LLMBackend,
    query: str,
    tags: Sequence[str],
    cuisines: Sequence[str],
    ingredients: Sequence[str],
) -> StructuredAIQuery:
    prompt = SEARCH_PARAMS_PROMPT.format(
        tags=", ".join(tags),
        cuisines=", ".join(cuisines),
        ingredients=", ".join(ingredients),
        query=query,
    )
    raw = await llm.generate(prompt, schema=SEARCH_PARAMS_SCHEMA, schema_name="search_params")
    return _parse(raw, StructuredAIQuery)


def _snap(values: Iterable[str], known: Sequence[str], kind: str) -> List[str]:
    """Case-insensitive match onto the stored spelling; unknown values dropped."""
    by_fold = {k.casefold(): k for k in known}
    out: List[str] = []
    dropped: List[str] = []
    for v in values:
        hit = by_fold.get(str(v).strip().casefold())
        if hit is None:
            dropped.append(v)
        elif hit not in out:
            out.append(hit)
    if dropped:
        log.info("dropped out-of-vocabulary %s from AI output: %s", kind, dropped)
    return out


def reconcile_query(query: StructuredAIQuery, vocabulary: Vocabulary) -> StructuredAIQuery:
    ingredients: List[str] = []
    for i in query.ingredients:
        s = str(i).strip().lower()
        if s and s not in ingredients:
            ingredients.append(s)

    return StructuredAIQuery(
        cuisines=_snap(query.cuisines, vocabulary.cuisines, "cuisines"),
        tags=_snap(query.tags, vocabulary.tags, "tags"),
        ingredients=ingredients,
        userLanguage=query.userLanguage.strip() or "English",
    )


def rejected_filters(requested: StructuredAIQuery, reconciled: StructuredAIQuery) -> List[str]:
    """Dimensions the AI asked for where every value fell outside the vocabulary.

    Such a filter can match nothing; it must not widen to the whole catalog.
    """
    return [
        kind
        for kind in ("cuisines", "tags")
        if getattr(requested, kind) and not getattr(reconciled, kind)
    ]


# --- recipe extraction ------------------------------------------------------------

async def extract_recipe(
    llm: LLMBackend,
    text: str,
    cuisines: Sequence[str],
    tags: Sequence[str],
) -> RecipeDraft:
    prompt = RECIPE_PROMPT.format(
        cuisines=", ".join(cuisines),
        tags=", ".join(tags),
        text=text,
    )
    raw = await llm.generate(prompt, schema=RECIPE_SCHEMA, schema_name="recipe")
    return _parse(raw, RecipeDraft)


# --- localization -------------------------------------------------------------------

def serialize_recipes(recipes: Sequence[Dict[str, Any]]) -> str:
    return json.dumps(to_jsonable(list(recipes)), ensure_ascii=False)


async def localize_recipes(llm: LLMBackend, recipes: Sequence[Dict[str, Any]], language: str) -> str:
    # free text, never parsed back
    prompt = TRANSLATE_PROMPT.format(language=language, recipes=serialize_recipes(recipes))
    return await llm.generate(prompt)
