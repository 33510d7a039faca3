# recipe_book/core/deps.py
# Shared dependencies: storage handle and AI backend live on app.state,
# set by the app factory / startup hook.
from fastapi import Request

from recipe_book.db.init import RecipeStore
from recipe_book.services.llm import LLMBackend


def get_store(request: Request) -> RecipeStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("MongoDB is not initialized yet.")
    return store


def get_llm(request: Request) -> LLMBackend:
    llm = getattr(request.app.state, "llm", None)
    if llm is None:
        raise RuntimeError("AI backend is not initialized yet.")
    return llm
