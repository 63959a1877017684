import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from jobboard.models import JobApplication, ApplicationStatus
from jobboard.schemas import UserApplication, UserApplicationsPage
from .exceptions import AlreadyAppliedError, InvalidArgumentError, JobBoardError, JobNotFoundError
from .job_service import JobService, to_job_listing
from .store import serialize_document, to_object_id, translate_store_errors, utcnow

logger = logging.getLogger(__name__)


def normalize_timestamp(value: Any) -> datetime:
    """Coerce a stored applied_at value into a naive UTC datetime."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, str):
        try:
            return normalize_timestamp(datetime.fromisoformat(value.replace("Z", "+00:00")))
        except ValueError:
            logger.warning(f"Unparseable applied_at value: {value!r}")
    return datetime.min


def to_job_application(doc: Dict[str, Any]) -> JobApplication:
    record = serialize_document(doc)
    record["applied_at"] = normalize_timestamp(record.get("applied_at"))
    return JobApplication.model_validate(record)


class ApplicationService:
    """
    Job applications.

    Membership in `jobs.applicants` and `applicant_count` are updated by a
    single conditional update, and the `applications` collection carries a
    unique (job_id, user_id) index, so a user can hold at most one
    application per job even under concurrent requests.
    """

    def __init__(self, db: object):
        self.db = db
        self.job_service = JobService(db)

    async def apply_to_job(
        self,
        job_id: str,
        user_id: str,
        cover_letter: Optional[str] = None,
        resume_url: Optional[str] = None,
    ) -> Dict[str, bool]:
        """
        Apply `user_id` to a job.

        Raises:
            JobNotFoundError: If the job does not exist
            AlreadyAppliedError: If the user already applied to this job
        """
        oid = to_object_id(job_id)
        if oid is None:
            raise JobNotFoundError(job_id=job_id)

        now = utcnow()
        async with translate_store_errors("apply to job"):
            result = await self.db.jobs.update_one(
                {"_id": oid, "applicants": {"$ne": user_id}},
                {
                    "$addToSet": {"applicants": user_id},
                    "$inc": {"applicant_count": 1},
                    "$set": {"updated_at": now},
                },
            )
            if not result.matched_count:
                exists = await self.db.jobs.find_one({"_id": oid}, {"_id": 1})
                if exists is None:
                    raise JobNotFoundError(job_id=job_id)
                raise AlreadyAppliedError(job_id=job_id, user_id=user_id)

        application = JobApplication(
            job_id=job_id,
            user_id=user_id,
            applied_at=now,
            status=ApplicationStatus.PENDING,
            cover_letter=cover_letter,
            resume_url=resume_url,
        )
        try:
            async with translate_store_errors("apply to job"):
                try:
                    await self.db.applications.insert_one(application.model_dump(exclude={"id"}))
                except DuplicateKeyError as e:
                    raise AlreadyAppliedError(job_id=job_id, user_id=user_id) from e
        except JobBoardError:
            # The membership update above matched, so it is undone on every failure
            await self._release_applicant(oid, user_id)
            raise

        logger.info(f"User {user_id} applied to job {job_id}")
        return {"success": True}

    async def _release_applicant(self, oid: ObjectId, user_id: str) -> None:
        """Undo the membership update when the application document could not be written."""
        try:
            await self.db.jobs.update_one(
                {"_id": oid, "applicants": user_id},
                {"$pull": {"applicants": user_id}, "$inc": {"applicant_count": -1}},
            )
        except PyMongoError:
            logger.error(f"Could not roll back applicant {user_id} on job {oid}", exc_info=True)

    async def get_user_applications(self, user_id: str, limit_count: int = 10) -> UserApplicationsPage:
        """
        The user's applications across all jobs, most recent first.

        Two queries regardless of how many jobs the user applied to: the jobs
        whose applicants contain the user, then the user's application
        documents for those jobs.

        Returns:
            UserApplicationsPage where `total` counts every application and
            `applications` holds at most `limit_count` of them.
        """
        if limit_count < 1:
            raise InvalidArgumentError("limit_count must be a positive integer")

        async with translate_store_errors("fetch user applications"):
            job_docs = await self.db.jobs.find({"applicants": user_id}).to_list(length=None)
            jobs_by_id = {str(doc["_id"]): doc for doc in job_docs}
            app_docs: List[Dict[str, Any]] = []
            if jobs_by_id:
                app_docs = await self.db.applications.find(
                    {"user_id": user_id, "job_id": {"$in": list(jobs_by_id)}}
                ).to_list(length=None)

        applications = []
        for app_doc in app_docs:
            job_doc = jobs_by_id.get(app_doc["job_id"])
            if job_doc is None:
                continue
            application = to_job_application(app_doc)
            applications.append(
                UserApplication(
                    id=application.id,
                    job_id=application.job_id,
                    job=to_job_listing(job_doc),
                    application=application,
                )
            )

        applications.sort(key=lambda item: item.application.applied_at, reverse=True)

        total = len(applications)
        return UserApplicationsPage(
            applications=applications[:limit_count],
            total=total,
            has_more=total > limit_count,
            limit=limit_count,
        )

    async def get_job_applications(self, job_id: str) -> List[JobApplication]:
        await self.job_service.load_job_document(job_id, "fetch job applications")
        async with translate_store_errors("fetch job applications"):
            docs = await self.db.applications.find(
                {"job_id": job_id}, sort=[("applied_at", DESCENDING)]
            ).to_list(length=None)
        return [to_job_application(doc) for doc in docs]
