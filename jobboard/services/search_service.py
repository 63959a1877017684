import logging
from typing import Any, Dict, List

from jobboard.models import JobListing, JobStatus
from jobboard.schemas import JobSearchFilters
from .job_service import ACTIVE_JOBS_SORT, to_job_listing
from .store import translate_store_errors

logger = logging.getLogger(__name__)


def matches_skills(job: Dict[str, Any], skills: List[str]) -> bool:
    """True when the job requires at least one of the given skills."""
    job_skills = set(job.get("required_skills") or [])
    return any(skill in job_skills for skill in skills)


def matches_location(job: Dict[str, Any], location: str) -> bool:
    """Case-insensitive substring match against the job's city or country."""
    needle = location.lower()
    loc = job.get("location") or {}
    city = (loc.get("city") or "").lower()
    country = (loc.get("country") or "").lower()
    return needle in city or needle in country


def matches_min_salary(job: Dict[str, Any], min_salary: float) -> bool:
    salary = job.get("salary")
    return bool(salary) and salary.get("max") is not None and salary["max"] >= min_salary


class SearchService:
    """
    Job search over active listings.

    Equality filters (remote, job type, experience level) run in MongoDB.
    Skills overlap, location substring and minimum salary are applied to the
    fetched page in memory, in that order. `limit_count` bounds the fetch,
    not the final result, so a limited search with residual filters can
    return fewer than `limit_count` jobs.
    """

    def __init__(self, db: object):
        self.db = db

    def build_query(self, filters: JobSearchFilters) -> Dict[str, Any]:
        query: Dict[str, Any] = {"status": JobStatus.ACTIVE.value}
        if filters.remote is not None:
            query["location.remote"] = filters.remote
        if filters.job_type:
            query["job_type"] = filters.job_type
        if filters.experience_level:
            query["experience_level"] = filters.experience_level
        return query

    def apply_residual_filters(self, docs: List[Dict[str, Any]], filters: JobSearchFilters) -> List[Dict[str, Any]]:
        results = docs
        if filters.skills:
            results = [job for job in results if matches_skills(job, filters.skills)]
        if filters.location:
            results = [job for job in results if matches_location(job, filters.location)]
        if filters.min_salary:
            results = [job for job in results if matches_min_salary(job, filters.min_salary)]
        return results

    async def search_jobs(self, filters: JobSearchFilters) -> List[JobListing]:
        query = self.build_query(filters)
        async with translate_store_errors("search jobs"):
            docs = await self.db.jobs.find(
                query, sort=ACTIVE_JOBS_SORT, limit=filters.limit_count or 0
            ).to_list(length=None)

        results = self.apply_residual_filters(docs, filters)
        logger.debug(f"Search {filters.model_dump(exclude_none=True)} fetched {len(docs)}, kept {len(results)}")
        return [to_job_listing(doc) for doc in results]
