"""Shared fixtures.

- ``store``: RecipeStore over mongomock-motor's in-memory client
- ``fake_llm``: scripted stand-in for the AI backend
- ``client``: TestClient for an app wired to a seeded store and fake_llm
"""

import asyncio
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from bson import ObjectId
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from recipe_book.db.init import CUISINES, RECIPES, TAGS, RecipeStore
from recipe_book.main import create_app


class FakeLLM:
    """Returns queued responses in order and records every prompt.

    A queued exception instance is raised instead of returned.
    """

    def __init__(self, *responses: Any) -> None:
        self.responses: List[Any] = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def queue(self, *responses: Any) -> None:
        self.responses.extend(responses)

    async def generate(
        self,
        prompt: str,
        schema: Optional[Dict[str, Any]] = None,
        schema_name: str = "response",
    ) -> str:
        self.calls.append({"prompt": prompt, "schema": schema, "schema_name": schema_name})
        if not self.responses:
            raise AssertionError("unexpected LLM call")
        nxt = self.responses.pop(0)
        if isinstance(nxt, Exception):
            raise nxt
        return nxt


CUISINE_DOCS = [
    {"_id": ObjectId(), "name": "Thai"},
    {"_id": ObjectId(), "name": "Italian"},
    {"_id": ObjectId(), "name": "Indian"},
]

TAG_DOCS = [
    {"_id": ObjectId(), "name": "spicy"},
    {"_id": ObjectId(), "name": "quick"},
    {"_id": ObjectId(), "name": "vegan"},
    {"_id": ObjectId(), "name": "healthy"},
]


def _ref(docs: List[Dict[str, Any]], name: str) -> Dict[str, Any]:
    d = next(d for d in docs if d["name"] == name)
    return {"_id": d["_id"], "name": d["name"]}


def _recipe(name: str, cuisine: str, ingredients: List[str], tags: List[str], prep: int = 10) -> Dict[str, Any]:
    return {
        "_id": ObjectId(),
        "name": name,
        "cuisine": _ref(CUISINE_DOCS, cuisine),
        "prepTime": prep,
        "cookTime": 20,
        "servings": 2,
        "ingredients": [{"name": i, "quantity": "1", "unit": ""} for i in ingredients],
        "instructions": ["Cook everything."],
        "tags": [_ref(TAG_DOCS, t) for t in tags],
    }


def fixture_recipes() -> List[Dict[str, Any]]:
    return [
        _recipe("Butter Chicken", "Indian", ["chicken breast", "yogurt", "garlic", "butter"], ["spicy"]),
        _recipe("Garlic Chicken", "Italian", ["chicken breast", "garlic", "salt"], ["quick"]),
        _recipe("Chicken Stir Fry", "Thai", ["chicken", "onion"], ["spicy"], prep=5),
        _recipe("Tofu Green Curry", "Thai", ["Coconut Milk", "tofu"], ["vegan", "healthy"]),
        _recipe("Yogurt Dip", "Indian", ["Greek Yogurt", "cucumber"], ["quick"]),
    ]


async def seed(store: RecipeStore, recipes: Optional[List[Dict[str, Any]]] = None) -> List[Dict[str, Any]]:
    await store.db[CUISINES].insert_many([dict(d) for d in CUISINE_DOCS])
    await store.db[TAGS].insert_many([dict(d) for d in TAG_DOCS])
    recipes = fixture_recipes() if recipes is None else recipes
    if recipes:
        await store.db[RECIPES].insert_many([dict(r) for r in recipes])
    return recipes


def make_store() -> RecipeStore:
    return RecipeStore(AsyncMongoMockClient()["recipe_book_test"])


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()


@pytest_asyncio.fixture
async def store() -> RecipeStore:
    """Seeded in-memory store."""
    s = make_store()
    await seed(s)
    return s


@pytest_asyncio.fixture
async def empty_store() -> RecipeStore:
    """Vocabulary only, no recipes."""
    s = make_store()
    await seed(s, recipes=[])
    return s


@pytest.fixture
def app_store() -> RecipeStore:
    # seeded outside any running loop; TestClient runs the app on its own
    s = make_store()
    asyncio.run(seed(s))
    return s


@pytest.fixture
def client(app_store: RecipeStore, fake_llm: FakeLLM) -> TestClient:
    app = create_app(store=app_store, llm=fake_llm)
    return TestClient(app, raise_server_exceptions=False)
