from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from jobboard.api.dependencies import (
    get_application_service,
    get_current_user_id,
    get_engagement_service,
    get_job_service,
    get_rating_service,
    get_search_service,
)
from jobboard.core import settings
from jobboard.models import ExperienceLevel, JobType, PublicJobListing
from jobboard.schemas import (
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
)
from jobboard.services import (
    ApplicationService,
    EngagementService,
    JobService,
    PermissionDeniedError,
    RatingService,
    SearchService,
)

job_router = APIRouter()


@job_router.get("", response_model=ActiveJobsPage)
async def list_active_jobs(
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    cursor: Optional[str] = Query(None, description="last_doc of the previous page"),
    service: JobService = Depends(get_job_service),
):
    return await service.get_active_jobs(limit, cursor)


@job_router.get("/count", response_model=JobCountResponse)
async def count_active_jobs(service: JobService = Depends(get_job_service)):
    return JobCountResponse(count=await service.get_active_jobs_count())


@job_router.get("/search", response_model=List[PublicJobListing])
async def search_jobs(
    skills: Optional[List[str]] = Query(None),
    location: Optional[str] = None,
    job_type: Optional[JobType] = None,
    experience_level: Optional[ExperienceLevel] = None,
    min_salary: Optional[float] = None,
    remote: Optional[bool] = None,
    limit_count: Optional[int] = Query(None, ge=1),
    service: SearchService = Depends(get_search_service),
):
    filters = JobSearchFilters(
        skills=skills,
        location=location,
        job_type=job_type,
        experience_level=experience_level,
        min_salary=min_salary,
        remote=remote,
        limit_count=limit_count,
    )
    return await service.search_jobs(filters)


@job_router.post("", response_model=JobCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    payload: JobCreateRequest,
    user_id: str = Depends(get_current_user_id),
    service: JobService = Depends(get_job_service),
):
    payload.posted_by = user_id
    return await service.create_job_listing(payload)


@job_router.get("/{job_id}", response_model=PublicJobListing)
async def get_job(job_id: str, service: JobService = Depends(get_job_service)):
    return await service.get_job_by_id(job_id)


@job_router.post("/{job_id}/views", status_code=status.HTTP_204_NO_CONTENT)
async def record_view(job_id: str, service: EngagementService = Depends(get_engagement_service)):
    await service.increment_job_views(job_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@job_router.post("/{job_id}/apply", response_model=SuccessResponse, status_code=status.HTTP_201_CREATED)
async def apply_to_job(
    job_id: str,
    payload: Optional[ApplyRequest] = None,
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
):
    payload = payload or ApplyRequest()
    return await service.apply_to_job(
        job_id, user_id, cover_letter=payload.cover_letter, resume_url=payload.resume_url
    )


@job_router.get("/{job_id}/applications", response_model=JobApplicationsResponse)
async def list_job_applications(
    job_id: str,
    user_id: str = Depends(get_current_user_id),
    job_service: JobService = Depends(get_job_service),
    service: ApplicationService = Depends(get_application_service),
):
    job = await job_service.get_job_by_id(job_id)
    if job.posted_by != user_id:
        raise PermissionDeniedError("Only the poster of this job can view its applications.")
    return JobApplicationsResponse(job_id=job_id, applications=await service.get_job_applications(job_id))


@job_router.post("/{job_id}/rate", response_model=SuccessResponse)
async def rate_job(
    job_id: str,
    payload: RateJobRequest,
    user_id: str = Depends(get_current_user_id),
    service: RatingService = Depends(get_rating_service),
):
    return await service.rate_job(job_id, user_id, payload.rating, payload.comment)


@job_router.post("/{job_id}/save", response_model=SaveJobResponse)
async def save_job(
    job_id: str,
    user_id: str = Depends(get_current_user_id),
    service: EngagementService = Depends(get_engagement_service),
):
    return await service.save_job(job_id, user_id)
