# recipe_book/db/init.py
# Mongo storage handle (motor). Built once at startup, closed at shutdown,
# handed to routers through Depends(get_store).

from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional

from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from recipe_book.core.errors import InvalidIdentifier

RECIPES = "recipes"
CUISINES = "cuisines"
TAGS = "tags"


class RecipeStore:
    """Thin async wrapper over one Mongo database.

    Only the operations the service needs are exposed; every call goes
    straight to the driver, nothing is cached between requests.
    """

    def __init__(self, db: AsyncIOMotorDatabase, client: Optional[AsyncIOMotorClient] = None):
        self.db = db
        self._client = client

    @classmethod
    def connect(cls, uri: str, name: str) -> "RecipeStore":
        client = AsyncIOMotorClient(uri)
        return cls(client[name], client=client)

    async def ping(self) -> None:
        # raises if the server is not reachable yet
        await self.db.command("ping")

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
        self._client = None

    # --- reads ---------------------------------------------------------------

    async def find_distinct_names(self, collection: str, field: str = "name") -> List[str]:
        values = await self.db[collection].distinct(field)
        return [v for v in values if isinstance(v, str) and v]

    async def find(
        self,
        collection: str,
        predicate: Mapping[str, Any],
        projection: Optional[Mapping[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        cur = self.db[collection].find(dict(predicate), projection)
        return await cur.to_list(length=None)

    async def find_one(
        self,
        collection: str,
        predicate: Mapping[str, Any],
        projection: Optional[Mapping[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        return await self.db[collection].find_one(dict(predicate), projection)

    # --- writes --------------------------------------------------------------

    async def insert_one(self, collection: str, doc: Dict[str, Any]) -> ObjectId:
        res = await self.db[collection].insert_one(doc)
        return res.inserted_id

    async def update_one(
        self, collection: str, predicate: Mapping[str, Any], update: Mapping[str, Any]
    ) -> int:
        res = await self.db[collection].update_one(dict(predicate), dict(update))
        return res.matched_count

    async def delete_one(self, collection: str, predicate: Mapping[str, Any]) -> int:
        res = await self.db[collection].delete_one(dict(predicate))
        return res.deleted_count


def parse_object_id(value: Any) -> ObjectId:
    # 24-hex string only; anything else is a client error, not a miss
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise InvalidIdentifier(str(value))
    return ObjectId(value)


def to_jsonable(doc: Any) -> Any:
    """ObjectId -> str, datetime -> ISO string, recursively."""
    return jsonable_encoder(doc, custom_encoder={ObjectId: str})
