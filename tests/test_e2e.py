import pytest

from jobboard.schemas import JobCreateRequest, JobSearchFilters
from jobboard.services import (
    AlreadyAppliedError,
    ApplicationService,
    JobService,
    RatingService,
    SearchService,
)

from .conftest import job_payload


@pytest.mark.asyncio
async def test_cleaning_job_lifecycle(db):
    """Post, apply, re-apply, rate twice, then find the job by skill."""
    jobs = JobService(db)
    created = await jobs.create_job_listing(
        JobCreateRequest(**job_payload(title="Office Cleaner", required_skills=["Cleaning & Sanitation"]))
    )
    job_id = created["id"]

    applications = ApplicationService(db)
    await applications.apply_to_job(job_id, "worker-1")
    with pytest.raises(AlreadyAppliedError):
        await applications.apply_to_job(job_id, "worker-1")

    ratings = RatingService(db)
    await ratings.rate_job(job_id, "worker-1", 5)
    await ratings.rate_job(job_id, "worker-1", 3)

    job = await jobs.get_job_by_id(job_id)
    assert job.applicant_count == 1
    assert job.applicants == ["worker-1"]
    assert job.rating_count == 1
    assert job.average_rating == 3.0
    assert job.ratings[0].rating == 3

    found = await SearchService(db).search_jobs(JobSearchFilters(skills=["Cleaning & Sanitation"]))
    assert [j.id for j in found] == [job_id]

    page = await applications.get_user_applications("worker-1")
    assert page.total == 1
    assert page.applications[0].job.title == "Office Cleaner"
