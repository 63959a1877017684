import logging

from fastapi import APIRouter, status, Depends

from jobboard.core import get_db_session

logger = logging.getLogger(__name__)

health_check = APIRouter()


@health_check.get("/ping", tags=["Health check"], status_code=status.HTTP_200_OK)
async def ping(db = Depends(get_db_session)):
    """health check endpoint for MongoDB"""
    try:
        await db.command("ping")
        db_status = "reachable"
    except Exception:
        logger.error("Database health check failed", exc_info=True)
        db_status = "unreachable"
    return {"message": "pong", "database": db_status}
