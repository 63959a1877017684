from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from jobboard.models import ExperienceLevel, JobApplication, JobListingBase, JobType, PublicJobListing


class JobCreateRequest(JobListingBase):
    # Filled in from the authenticated user by the router
    posted_by: Optional[str] = None


class JobCreatedResponse(BaseModel):
    success: bool = True
    id: str


class JobSearchFilters(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    skills: Optional[List[str]] = None
    location: Optional[str] = None
    job_type: Optional[JobType] = None
    experience_level: Optional[ExperienceLevel] = None
    min_salary: Optional[float] = None
    remote: Optional[bool] = None
    limit_count: Optional[int] = Field(None, gt=0)


class ActiveJobsPage(BaseModel):
    jobs: List[PublicJobListing]
    has_more: bool
    last_doc: Optional[str] = None
    first_doc: Optional[str] = None


class JobCountResponse(BaseModel):
    count: int


class ApplyRequest(BaseModel):
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = None


class RateJobRequest(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None


class SuccessResponse(BaseModel):
    success: bool = True


class SaveJobResponse(BaseModel):
    success: bool = True
    saved: bool


class UserApplication(BaseModel):
    id: str
    job_id: str
    job: PublicJobListing
    application: JobApplication


class UserApplicationsPage(BaseModel):
    applications: List[UserApplication]
    total: int
    has_more: bool
    limit: int


class JobApplicationsResponse(BaseModel):
    job_id: str
    applications: List[JobApplication]
