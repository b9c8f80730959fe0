# app/models/tasks.py
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from bson import ObjectId

from app.models.base import MongoStore
from app.models.user import UserStore


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# createdAt ties fall back to insertion order
NEWEST_FIRST = [("createdAt", -1), ("_id", 1)]

REFERENCE_FIELDS = ("createdBy", "assignedTo")


class TaskStore(MongoStore):
    """Reads and writes task documents.

    Stored documents keep ``createdBy``/``assignedTo`` as bare ObjectId
    references. Everything returned to callers outside this class goes through
    ``populate`` first, which swaps each reference for the user's
    ``{_id, name, email}`` (or None when the user is gone).
    """

    collection_name = "tasks"

    def __init__(self, db, users: UserStore = None):
        super().__init__(db)
        self.users = users or UserStore(db)

    async def find_many(self, query: dict) -> List[dict]:
        cursor = self.collection.find(query).sort(NEWEST_FIRST)
        return await self.populate(await cursor.to_list(length=None))

    async def find_one(self, query: dict) -> Optional[dict]:
        """Raw document, references left unresolved."""
        return await self.collection.find_one(query)

    async def insert(self, fields: dict) -> dict:
        now = datetime.now(timezone.utc)
        doc = {**fields, "createdAt": now, "updatedAt": now}
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return (await self.populate([doc]))[0]

    async def update(self, task_id: ObjectId, changes: dict) -> Optional[dict]:
        changes = {**changes, "updatedAt": datetime.now(timezone.utc)}
        await self.collection.update_one({"_id": task_id}, {"$set": changes})
        doc = await self.collection.find_one({"_id": task_id})
        if doc is None:
            return None
        return (await self.populate([doc]))[0]

    async def delete_one(self, query: dict) -> bool:
        # match and delete in one step so the ownership check cannot go stale
        return await self.collection.find_one_and_delete(query) is not None

    async def populate(self, docs: List[dict]) -> List[dict]:
        ids = [doc.get(field) for doc in docs for field in REFERENCE_FIELDS]
        users = await self.users.summaries(ids)
        return [
            {**doc, **{field: users.get(doc.get(field)) for field in REFERENCE_FIELDS}}
            for doc in docs
        ]
