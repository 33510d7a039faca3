# recipe_book/services/llm.py
# Text generation backend (OpenAI Chat Completions).
# - generate(prompt) -> free text
# - generate(prompt, schema) -> JSON text constrained by the schema
#   (structured outputs, strict json_schema)

from __future__ import annotations
from typing import Any, Dict, Optional, Protocol
import logging

from openai import AsyncOpenAI

from recipe_book.core.config import Settings, settings as default_settings
from recipe_book.core.errors import AINotReady

log = logging.getLogger(__name__)


class LLMBackend(Protocol):
    async def generate(
        self,
        prompt: str,
        schema: Optional[Dict[str, Any]] = None,
        schema_name: str = "response",
    ) -> str:
        ...


class OpenAIBackend:
    def __init__(
        self,
        client: Optional[AsyncOpenAI] = None,
        model: str = "gpt-4o-mini",
        temperature: float = 0.2,
    ) -> None:
        self._client = client
        self.model = model
        self.temperature = temperature

    @classmethod
    def from_settings(cls, cfg: Optional[Settings] = None) -> "OpenAIBackend":
        cfg = cfg or default_settings
        client = AsyncOpenAI(api_key=cfg.OPENAI_API_KEY) if cfg.OPENAI_API_KEY else None
        return cls(client=client, model=cfg.OPENAI_MODEL, temperature=cfg.OPENAI_TEMPERATURE)

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            raise AINotReady("OPENAI_API_KEY not set")
        return self._client

    async def generate(
        self,
        prompt: str,
        schema: Optional[Dict[str, Any]] = None,
        schema_name: str = "response",
    ) -> str:
        kwargs: Dict[str, Any] = {}
        if schema is not None:
            kwargs["response_format"] = {
                "type": "json_schema",
                "json_schema": {"name": schema_name, "schema": schema, "strict": True},
            }

        chat = await self.client.chat.completions.create(
            model=self.model,
            temperature=self.temperature,
            messages=[{"role": "user", "content": prompt}],
            **kwargs,
        )
        text = chat.choices[0].message.content if chat and chat.choices else ""
        log.debug("llm %s (%s) -> %d chars", self.model, schema_name if schema else "text", len(text or ""))
        return text or ""
