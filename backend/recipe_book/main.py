# recipe_book/main.py
# FastAPI app factory + router wiring.
# The storage handle and AI backend are created here (or injected by
# tests) and stored on app.state for the dependencies in core/deps.py.

from __future__ import annotations
from asyncio import sleep
from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from recipe_book.api.routes_ai import router as ai_router
from recipe_book.api.routes_recipes import router as recipes_router
from recipe_book.core.config import Settings, settings as default_settings
from recipe_book.core.log import configure_logging
from recipe_book.db.indexes import ensure_indexes
from recipe_book.db.init import RecipeStore
from recipe_book.services.llm import LLMBackend, OpenAIBackend

log = logging.getLogger(__name__)


async def open_store(cfg: Settings) -> RecipeStore:
    # Mongo may come up after the API container; retry once per second
    store = RecipeStore.connect(cfg.MONGO_URI, cfg.MONGO_DB)
    attempts = max(cfg.DB_CONNECT_RETRIES, 1)
    for i in range(attempts):
        try:
            await store.ping()
            log.info("db ready (%s)", cfg.MONGO_DB)
            return store
        except Exception as e:
            log.warning("db init retry %d/%d: %s", i + 1, attempts, e)
            await sleep(1.0)
    store.close()
    raise RuntimeError(f"MongoDB not reachable after {attempts} attempts")


def create_app(
    store: Optional[RecipeStore] = None,
    llm: Optional[LLMBackend] = None,
    cfg: Optional[Settings] = None,
) -> FastAPI:
    cfg = cfg or default_settings
    configure_logging(cfg.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = app.state.store is None
        if owned:
            app.state.store = await open_store(cfg)
            try:
                await ensure_indexes(app.state.store)
                log.info("indexes ensured")
            except Exception as e:
                log.warning("ensure_indexes failed: %s", e)
        try:
            yield
        finally:
            if owned and app.state.store is not None:
                app.state.store.close()
                app.state.store = None

    app = FastAPI(title="Recipe Book - API", version="0.1.0", lifespan=lifespan)
    app.state.store = store
    app.state.llm = llm or OpenAIBackend.from_settings(cfg)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ServerErrorMiddleware re-raises after this response; uvicorn logs the traceback
    @app.exception_handler(Exception)
    async def unexpected_failure(request: Request, exc: Exception):
        return JSONResponse(
            status_code=500,
            content={"detail": {"error": "UnexpectedFailure", "message": "Internal server error"}},
        )

    @app.get("/")
    async def root():
        return {"message": "Hello world"}

    @app.get("/health")
    async def health():
        ok = {"status": "ok", "db": "skip"}
        if app.state.store is not None:
            try:
                await app.state.store.ping()
                ok["db"] = "ok"
            except Exception as e:
                ok["db"] = f"error: {e}"
        return ok

    # prefixes are declared in each router module
    app.include_router(recipes_router)
    app.include_router(ai_router)
    return app


def run() -> None:
    import uvicorn

    uvicorn.run(
        "recipe_book.main:create_app",
        factory=True,
        host=default_settings.HOST,
        port=default_settings.PORT,
    )


if __name__ == "__main__":
    run()
