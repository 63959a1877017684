from .job_service import JobService
from .search_service import SearchService
from .rating_service import RatingService
from .application_service import ApplicationService
from .engagement_service import EngagementService
from .user_service import UserService
from .auth_service import AuthService
from .email_service import EmailService
from .contact_service import ContactService
from .exceptions import (
    JobBoardError,
    JobNotFoundError,
    UserNotFoundError,
    AlreadyExistsError,
    AlreadyAppliedError,
    ConcurrentUpdateError,
    InvalidArgumentError,
    UnauthenticatedError,
    PermissionDeniedError,
    ServiceUnavailableError,
    InternalServiceError,
    EmailDeliveryError,
)

__all__ = [
    "JobService",
    "SearchService",
    "RatingService",
    "ApplicationService",
    "EngagementService",
    "UserService",
    "AuthService",
    "EmailService",
    "ContactService",
    "JobBoardError",
    "JobNotFoundError",
    "UserNotFoundError",
    "AlreadyExistsError",
    "AlreadyAppliedError",
    "ConcurrentUpdateError",
    "InvalidArgumentError",
    "UnauthenticatedError",
    "PermissionDeniedError",
    "ServiceUnavailableError",
    "InternalServiceError",
    "EmailDeliveryError",
]
