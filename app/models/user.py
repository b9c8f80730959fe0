# app/models/user.py
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Iterable, List, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from app.models.base import MongoStore, PyObjectId, to_object_id


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


class User(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: Optional[PyObjectId] = Field(default=None, alias="_id")
    email: EmailStr
    name: str
    password: str
    role: Role = Role.USER
    created_at: Optional[datetime] = None


PUBLIC_FIELDS = {"name": 1, "email": 1, "role": 1}
SUMMARY_FIELDS = {"name": 1, "email": 1}


class UserStore(MongoStore):
    collection_name = "users"

    async def find_by_email(self, email: str) -> Optional[User]:
        doc = await self.collection.find_one({"email": email})
        return User.model_validate(doc) if doc else None

    async def exists(self, user_id) -> bool:
        oid = to_object_id(user_id)
        if oid is None:
            return False
        return await self.collection.find_one({"_id": oid}, {"_id": 1}) is not None

    async def create(self, name: str, email: str, password_hash: str, role: Role = Role.USER) -> str:
        doc = {
            "name": name,
            "email": email,
            "password": password_hash,
            "role": Role(role).value,
            "createdAt": datetime.now(timezone.utc),
        }
        result = await self.collection.insert_one(doc)
        return str(result.inserted_id)

    async def list_public(self) -> List[dict]:
        """All users without their password hash, sorted by name."""
        cursor = self.collection.find({}, PUBLIC_FIELDS).sort([("name", 1)])
        return await cursor.to_list(length=None)

    async def summaries(self, ids: Iterable[ObjectId]) -> Dict[ObjectId, dict]:
        wanted = list({oid for oid in ids if oid is not None})
        if not wanted:
            return {}
        cursor = self.collection.find({"_id": {"$in": wanted}}, SUMMARY_FIELDS)
        return {doc["_id"]: doc for doc in await cursor.to_list(length=None)}
