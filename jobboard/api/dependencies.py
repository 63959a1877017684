from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from jobboard.core import get_db_session
from jobboard.models import UserProfile
from jobboard.services import (
    ApplicationService,
    AuthService,
    ContactService,
    EmailService,
    EngagementService,
    JobService,
    PermissionDeniedError,
    RatingService,
    SearchService,
    UnauthenticatedError,
    UserService,
)

bearer_scheme = HTTPBearer(auto_error=False)


def get_job_service(db=Depends(get_db_session)) -> JobService:
    return JobService(db)


def get_search_service(db=Depends(get_db_session)) -> SearchService:
    return SearchService(db)


def get_rating_service(db=Depends(get_db_session)) -> RatingService:
    return RatingService(db)


def get_application_service(db=Depends(get_db_session)) -> ApplicationService:
    return ApplicationService(db)


def get_engagement_service(db=Depends(get_db_session)) -> EngagementService:
    return EngagementService(db)


def get_user_service(db=Depends(get_db_session)) -> UserService:
    return UserService(db)


def get_auth_service(db=Depends(get_db_session)) -> AuthService:
    return AuthService(db)


def get_email_service(request: Request) -> EmailService:
    return EmailService(request.app.state.http_client)


def get_contact_service(
    db=Depends(get_db_session), email_service: EmailService = Depends(get_email_service)
) -> ContactService:
    return ContactService(db, email_service)


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> str:
    if credentials is None:
        raise UnauthenticatedError()
    return auth_service.verify_token(credentials.credentials)


async def get_admin_user(
    user_id: str = Depends(get_current_user_id),
    user_service: UserService = Depends(get_user_service),
) -> UserProfile:
    profile = await user_service.get_user_profile(user_id)
    if profile.role != "admin":
        raise PermissionDeniedError("Only administrators can access this resource.")
    return profile
