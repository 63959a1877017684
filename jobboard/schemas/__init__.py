from .job import (
    ActiveJobsPage,
    ApplyRequest,
    JobApplicationsResponse,
    JobCountResponse,
    JobCreatedResponse,
    JobCreateRequest,
    JobSearchFilters,
    RateJobRequest,
    SaveJobResponse,
    SuccessResponse,
    UserApplication,
    UserApplicationsPage,
)
from .user import AuthResponse, ProfileData, SignInRequest, SignUpRequest, UserDocumentCreate
from .email import ContactRequest, ContactResponse, SendEmailRequest, SendEmailResponse

__all__ = [
    "ActiveJobsPage",
    "ApplyRequest",
    "AuthResponse",
    "ContactRequest",
    "ContactResponse",
    "JobApplicationsResponse",
    "JobCountResponse",
    "JobCreatedResponse",
    "JobCreateRequest",
    "JobSearchFilters",
    "ProfileData",
    "RateJobRequest",
    "SaveJobResponse",
    "SendEmailRequest",
    "SendEmailResponse",
    "SignInRequest",
    "SignUpRequest",
    "SuccessResponse",
    "UserApplication",
    "UserApplicationsPage",
    "UserDocumentCreate",
]
