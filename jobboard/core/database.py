from __future__ import annotations

import logging
from typing import AsyncGenerator

import motor.motor_asyncio
from fastapi import FastAPI, Request
from pymongo import ASCENDING, DESCENDING

from .config import settings

logger = logging.getLogger(__name__)


async def ensure_indexes(db: motor.motor_asyncio.AsyncIOMotorDatabase) -> None:
    """Create the indexes the services rely on. Safe to call repeatedly."""
    await db.jobs.create_index([("status", ASCENDING), ("posted_at", DESCENDING), ("_id", DESCENDING)])
    await db.jobs.create_index("applicants")
    # One application per (job, user); duplicate inserts surface as DuplicateKeyError
    await db.applications.create_index(
        [("job_id", ASCENDING), ("user_id", ASCENDING)], unique=True
    )
    await db.applications.create_index("user_id")
    await db.accounts.create_index("email", unique=True)
    await db.users.create_index([("created_at", DESCENDING)])


async def init_db(app: FastAPI) -> None:
    """Create the Motor client once and attach it to the application state."""
    client = motor.motor_asyncio.AsyncIOMotorClient(settings.MONGO_URI)
    db = client[settings.MONGO_DB_NAME]
    app.state.motor_client = client
    app.state.db = db
    await ensure_indexes(db)
    logger.info(f"Connected to MongoDB database '{settings.MONGO_DB_NAME}'")


async def close_db(app: FastAPI) -> None:
    """Close Motor client (call on shutdown)."""
    client = getattr(app.state, "motor_client", None)
    if client is not None:
        client.close()


async def get_db_session(request: Request) -> AsyncGenerator:
    """FastAPI dependency: yields the Motor database bound to this application."""
    yield request.app.state.db

