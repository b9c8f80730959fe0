"""Shared helpers for the MongoDB-backed stores."""

from typing import Annotated, Optional, Union

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BeforeValidator


def _stringify_object_id(value):
    return str(value) if isinstance(value, ObjectId) else value


# ObjectId on the way in, plain string on the way out
PyObjectId = Annotated[str, BeforeValidator(_stringify_object_id)]


def to_object_id(value: Union[str, ObjectId, None]) -> Optional[ObjectId]:
    """Convert a string id to ObjectId, returning None for anything malformed."""
    if value is None:
        return None
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str):
        try:
            return ObjectId(value)
        except (InvalidId, TypeError):
            return None
    return None


class MongoStore:
    """Base class holding one collection of the injected database."""

    collection_name: str = None

    def __init__(self, db):
        self.db = db
        self.collection = db[self.collection_name]

    async def count(self, query: dict = None) -> int:
        return await self.collection.count_documents(query or {})
