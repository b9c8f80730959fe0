# app/main.py

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.exceptions import register_exception_handlers
from app.core.logging import setup_logging
from app.database import client, db, ensure_indexes
from app.routes.auth import auth_router
from app.routes.tasks import task_router
from app.schemas.tasks import MessageResponse

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Task management with user authentication and role-based access control",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)

app.include_router(auth_router, prefix="/api/v1/auth")
app.include_router(task_router, prefix="/api/v1/tasks")


@app.get("/api/v1/health", response_model=MessageResponse, tags=["Health"])
async def health():
    return {"message": "Server is running!"}


# DB connectivity check
@app.on_event("startup")
async def startup_db_check():
    try:
        await db.command("ping")
        await ensure_indexes(db)
        logger.info("✅ MongoDB connected successfully.")
    except Exception:
        logger.exception("❌ MongoDB connection failed")


@app.on_event("shutdown")
async def shutdown_db_client():
    client.close()
