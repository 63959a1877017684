import base64
import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId
from pymongo import DESCENDING

from jobboard.models import JobListing, JobStatus
from jobboard.schemas import ActiveJobsPage, JobCreateRequest
from .exceptions import InvalidArgumentError, JobNotFoundError
from .store import serialize_document, to_object_id, translate_store_errors, utcnow

logger = logging.getLogger(__name__)

ACTIVE_JOBS_SORT = [("posted_at", DESCENDING), ("_id", DESCENDING)]


def encode_cursor(doc: Dict[str, Any]) -> str:
    """Opaque page marker for a job document: its posted_at and id."""
    raw = json.dumps({"p": doc["posted_at"].isoformat(), "i": str(doc["_id"])})
    return base64.urlsafe_b64encode(raw.encode()).decode()


def decode_cursor(cursor: str) -> Tuple[datetime, ObjectId]:
    try:
        raw = json.loads(base64.urlsafe_b64decode(cursor.encode()).decode())
        posted_at = datetime.fromisoformat(raw["p"])
        oid = ObjectId(raw["i"])
    except (ValueError, KeyError, TypeError) as e:
        raise InvalidArgumentError("Invalid pagination cursor") from e
    return posted_at, oid


def to_job_listing(doc: Dict[str, Any]) -> JobListing:
    return JobListing.model_validate(serialize_document(doc))


class JobService:
    """Create and read job listings stored in the `jobs` collection."""

    def __init__(self, db: object):
        self.db = db

    async def load_job_document(self, job_id: str, action: str) -> Dict[str, Any]:
        """
        Fetch the raw job document or raise JobNotFoundError.

        Malformed ids are reported as not found rather than as bad input,
        since callers only ever get ids from earlier reads.
        """
        oid = to_object_id(job_id)
        if oid is None:
            raise JobNotFoundError(job_id=job_id)
        async with translate_store_errors(action):
            doc = await self.db.jobs.find_one({"_id": oid})
        if doc is None:
            raise JobNotFoundError(job_id=job_id)
        return doc

    async def create_job_listing(self, job_data: JobCreateRequest) -> Dict[str, Any]:
        """
        Insert a new listing with zeroed engagement counters.

        Args:
            job_data: Listing fields supplied by the poster (posted_by must be set)

        Returns:
            {"success": True, "id": <new job id>}
        """
        if not job_data.posted_by:
            raise InvalidArgumentError("posted_by is required to create a job listing")

        now = utcnow()
        listing = JobListing(
            **job_data.model_dump(),
            created_at=now,
            updated_at=now,
            posted_at=now,
        )
        document = listing.model_dump(exclude={"id"})

        async with translate_store_errors("create job listing"):
            result = await self.db.jobs.insert_one(document)

        job_id = str(result.inserted_id)
        logger.info(f"Created job listing {job_id} '{listing.title}' for {listing.posted_by}")
        return {"success": True, "id": job_id}

    async def get_job_by_id(self, job_id: str) -> JobListing:
        doc = await self.load_job_document(job_id, "fetch job")
        return to_job_listing(doc)

    async def get_active_jobs_count(self) -> int:
        async with translate_store_errors("fetch job count"):
            return await self.db.jobs.count_documents({"status": JobStatus.ACTIVE.value})

    async def get_active_jobs(self, limit_count: int = 10, cursor: Optional[str] = None) -> ActiveJobsPage:
        """
        One page of active jobs, newest first.

        One extra document is fetched as a probe so that `has_more` is exact:
        a page that happens to end on the last active job reports False.

        Args:
            limit_count: Page size
            cursor: `last_doc` value from the previous page, if any

        Returns:
            ActiveJobsPage with the jobs and the cursors of the first and last job.
            `last_doc` is only set when another page exists.
        """
        if limit_count < 1:
            raise InvalidArgumentError("limit_count must be a positive integer")

        query: Dict[str, Any] = {"status": JobStatus.ACTIVE.value}
        if cursor:
            posted_at, oid = decode_cursor(cursor)
            query["$or"] = [
                {"posted_at": {"$lt": posted_at}},
                {"posted_at": posted_at, "_id": {"$lt": oid}},
            ]

        async with translate_store_errors("fetch jobs"):
            docs: List[Dict[str, Any]] = await self.db.jobs.find(
                query, sort=ACTIVE_JOBS_SORT, limit=limit_count + 1
            ).to_list(length=None)

        has_more = len(docs) > limit_count
        docs = docs[:limit_count]

        return ActiveJobsPage(
            jobs=[to_job_listing(doc) for doc in docs],
            has_more=has_more,
            last_doc=encode_cursor(docs[-1]) if has_more else None,
            first_doc=encode_cursor(docs[0]) if docs else None,
        )
