from __future__ import annotations

import enum
from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field


class CompanySize(str, enum.Enum):
    STARTUP = "startup"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    ENTERPRISE = "enterprise"


class JobType(str, enum.Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"
    FREELANCE = "freelance"


class ExperienceLevel(str, enum.Enum):
    ENTRY = "entry"
    JUNIOR = "junior"
    MID = "mid"
    SENIOR = "senior"
    EXECUTIVE = "executive"


class SalaryPeriod(str, enum.Enum):
    HOURLY = "hourly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class JobStatus(str, enum.Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    CLOSED = "closed"
    EXPIRED = "expired"


class ApplicationStatus(str, enum.Enum):
    PENDING = "pending"
    REVIEWED = "reviewed"
    SHORTLISTED = "shortlisted"
    REJECTED = "rejected"
    ACCEPTED = "accepted"


class Location(BaseModel):
    city: str
    state: Optional[str] = None
    country: str
    remote: bool = False
    hybrid: Optional[bool] = None


class SalaryRange(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    min: float
    max: float
    currency: str = "USD"
    period: SalaryPeriod = SalaryPeriod.YEARLY


class JobRating(BaseModel):
    user_id: str
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None
    created_at: datetime


class JobListingBase(BaseModel):
    """Fields a poster supplies when creating a listing."""

    model_config = ConfigDict(use_enum_values=True)

    title: str
    description: str
    company_name: str
    company_logo: Optional[str] = None
    company_website: Optional[str] = None
    company_size: Optional[CompanySize] = None

    location: Location
    job_type: JobType
    experience_level: ExperienceLevel

    salary: Optional[SalaryRange] = None
    benefits: Optional[List[str]] = None

    required_skills: List[str] = Field(default_factory=list)
    preferred_skills: Optional[List[str]] = None
    attributes: List[str] = Field(default_factory=list)
    requirements: Optional[List[str]] = None
    responsibilities: Optional[List[str]] = None

    application_instructions: Optional[str] = None
    application_url: Optional[str] = None
    application_deadline: Optional[datetime] = None

    status: JobStatus = JobStatus.ACTIVE
    featured: bool = False
    priority: int = 0
    industry: Optional[str] = None
    category: Optional[str] = None
    posted_by: str
    contact_email: Optional[str] = None
    expires_at: Optional[datetime] = None


class PublicJobListing(JobListingBase):
    """A listing as shown to anyone: aggregates, but no member ids."""

    id: Optional[str] = None

    applicant_count: int = 0

    ratings: List[JobRating] = Field(default_factory=list)
    average_rating: float = 0
    rating_count: int = 0

    views: int = 0
    saves: int = 0

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    posted_at: Optional[datetime] = None


class JobListing(PublicJobListing):
    """A stored job listing, including the membership sets maintained by the services."""

    applicants: List[str] = Field(default_factory=list)
    ratings_version: int = 0
    saves_user_ids: List[str] = Field(default_factory=list)


class JobApplication(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    id: Optional[str] = None
    job_id: str
    user_id: str
    applied_at: datetime
    status: ApplicationStatus = ApplicationStatus.PENDING
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = None
