# recipe_book/services/criteria.py
# Search filter -> Mongo predicate.
# - name: case-insensitive substring on recipes.name
# - tags: OR (recipe has ANY of them)
# - ingredients: AND across names, each a case-insensitive substring of
#   some ingredients.name
# Absent/empty inputs are left out so "no filter" matches everything.

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional
import re

from recipe_book.models.schemas import StructuredAIQuery


def _contains(text: str) -> re.Pattern:
    # literal substring, unanchored
    return re.compile(re.escape(text), re.I)


def _clean(values: Optional[Iterable[str]]) -> List[str]:
    out: List[str] = []
    for v in values or []:
        s = str(v).strip()
        if s and s not in out:
            out.append(s)
    return out


def split_csv(value: Optional[str]) -> Optional[List[str]]:
    """"chicken, yogurt," -> ["chicken", "yogurt"]; blank -> None."""
    if value is None:
        return None
    items = _clean(value.split(","))
    return items or None


def _ingredient_clause(ingredients: List[str]) -> Dict[str, Any]:
    # one clause per name so each must hit some ingredient on its own
    clauses = [{"ingredients.name": _contains(i)} for i in ingredients]
    if len(clauses) == 1:
        return clauses[0]
    return {"$and": clauses}


def build_criteria(
    name: Optional[str] = None,
    tags: Optional[Iterable[str]] = None,
    ingredients: Optional[Iterable[str]] = None,
) -> Dict[str, Any]:
    criteria: Dict[str, Any] = {}

    name = (name or "").strip()
    if name:
        criteria["name"] = _contains(name)

    tag_names = _clean(tags)
    if tag_names:
        criteria["tags.name"] = {"$in": tag_names}

    ing_names = _clean(ingredients)
    if ing_names:
        criteria.update(_ingredient_clause(ing_names))

    return criteria


def build_ai_criteria(query: StructuredAIQuery) -> Dict[str, Any]:
    """Predicate for the natural-language search path."""
    criteria: Dict[str, Any] = {}

    cuisines = _clean(query.cuisines)
    if cuisines:
        criteria["cuisine.name"] = {"$in": cuisines}

    criteria.update(build_criteria(tags=query.tags, ingredients=query.ingredients))
    return criteria
