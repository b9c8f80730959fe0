# app/database.py
import certifi
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from app.core.config import settings


def _client_options() -> dict:
    # Atlas clusters need a CA bundle on hosts without system certs
    if settings.MONGO_TLS:
        return {"tls": True, "tlsCAFile": certifi.where()}
    return {}


client = AsyncIOMotorClient(settings.MONGO_URL, **_client_options())
db = client[settings.MONGO_DB_NAME]


def get_database() -> AsyncIOMotorDatabase:
    return db


async def ensure_indexes(database: AsyncIOMotorDatabase):
    await database.users.create_index([("email", ASCENDING)], unique=True)
    await database.tasks.create_index([("createdAt", DESCENDING)])
    await database.tasks.create_index([("assignedTo", ASCENDING)])
    await database.tasks.create_index([("createdBy", ASCENDING)])
