from fastapi import APIRouter

from .auth import auth_router
from .jobs import job_router
from .users import user_router
from .notifications import notification_router


v1_router = APIRouter(prefix="/api/v1", tags=["v1"])
v1_router.include_router(auth_router, prefix="/auth", tags=["auth"])
v1_router.include_router(job_router, prefix="/jobs", tags=["jobs"])
v1_router.include_router(user_router, prefix="/users", tags=["users"])
v1_router.include_router(notification_router, tags=["notifications"])


__all__ = ["v1_router"]
