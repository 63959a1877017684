from .job import (
    ApplicationStatus,
    CompanySize,
    ExperienceLevel,
    JobApplication,
    JobListing,
    JobListingBase,
    JobRating,
    JobStatus,
    JobType,
    Location,
    PublicJobListing,
    SalaryPeriod,
    SalaryRange,
)
from .user import Account, ContactSubmission, UserProfile

__all__ = [
    "Account",
    "ApplicationStatus",
    "CompanySize",
    "ContactSubmission",
    "ExperienceLevel",
    "JobApplication",
    "JobListing",
    "JobListingBase",
    "JobRating",
    "JobStatus",
    "JobType",
    "Location",
    "PublicJobListing",
    "SalaryPeriod",
    "SalaryRange",
    "UserProfile",
]
