from typing import List

from fastapi import APIRouter, Depends, Query

from jobboard.api.dependencies import (
    get_admin_user,
    get_application_service,
    get_current_user_id,
    get_user_service,
)
from jobboard.core import settings
from jobboard.models import UserProfile
from jobboard.schemas import UserApplicationsPage
from jobboard.services import ApplicationService, PermissionDeniedError, UserService

user_router = APIRouter()


@user_router.get("", response_model=List[UserProfile])
async def list_users(
    admin: UserProfile = Depends(get_admin_user),
    service: UserService = Depends(get_user_service),
):
    return await service.get_all_users()


@user_router.get("/me/applications", response_model=UserApplicationsPage)
async def my_applications(
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
):
    return await service.get_user_applications(user_id, limit)


@user_router.get("/{user_id}", response_model=UserProfile)
async def get_profile(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
):
    if user_id != current_user_id:
        current = await service.get_user_profile(current_user_id)
        if current.role != "admin":
            raise PermissionDeniedError("You can only view your own profile.")
    return await service.get_user_profile(user_id)
