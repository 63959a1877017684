from typing import Any, Optional


class JobBoardError(Exception):
    """Base class for errors raised by the job board services."""

    code = "internal"
    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class JobNotFoundError(JobBoardError):
    """Raised when a job listing does not exist."""

    code = "not-found"
    status_code = 404

    def __init__(self, job_id: Optional[str] = None, message: Optional[str] = None):
        self.job_id = job_id
        super().__init__(message or "Job not found")


class UserNotFoundError(JobBoardError):
    """Raised when a user profile does not exist."""

    code = "not-found"
    status_code = 404

    def __init__(self, user_id: Optional[str] = None, message: Optional[str] = None):
        self.user_id = user_id
        super().__init__(message or "User profile not found")


class AlreadyExistsError(JobBoardError):
    code = "already-exists"
    status_code = 409
    default_message = "Resource already exists"


class AlreadyAppliedError(AlreadyExistsError):
    """Raised when a user applies to the same job twice."""

    default_message = "You have already applied to this job"

    def __init__(self, job_id: Optional[str] = None, user_id: Optional[str] = None):
        self.job_id = job_id
        self.user_id = user_id
        super().__init__()


class ConcurrentUpdateError(JobBoardError):
    code = "aborted"
    status_code = 409
    default_message = "The job was modified concurrently, please retry"


class InvalidArgumentError(JobBoardError):
    code = "invalid-argument"
    status_code = 400
    default_message = "Invalid argument"


class UnauthenticatedError(JobBoardError):
    code = "unauthenticated"
    status_code = 401
    default_message = "You must be logged in to perform this action."


class PermissionDeniedError(JobBoardError):
    code = "permission-denied"
    status_code = 403
    default_message = "Permission denied."


class ServiceUnavailableError(JobBoardError):
    code = "unavailable"
    status_code = 503
    default_message = "Service unavailable"


class InternalServiceError(JobBoardError):
    """Uncategorized provider failure; `details` keeps the original payload."""

    code = "internal"
    status_code = 500


class EmailDeliveryError(JobBoardError):
    """The email provider rejected the message."""

    code = "email-rejected"
    status_code = 502
    default_message = "Failed to send email"

    def __init__(self, message: Optional[str] = None, details: Any = None, provider_status: Optional[int] = None):
        self.provider_status = provider_status
        super().__init__(message, details)
