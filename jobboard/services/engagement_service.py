import logging
from typing import Dict, Optional

from jobboard.core.config import settings
from .exceptions import ConcurrentUpdateError, JobNotFoundError
from .store import to_object_id, translate_store_errors, utcnow

logger = logging.getLogger(__name__)


class EngagementService:
    """Bookmarks and view counts on job listings."""

    def __init__(self, db: object, max_attempts: Optional[int] = None):
        self.db = db
        self.max_attempts = max_attempts or settings.SAVE_MAX_ATTEMPTS

    async def save_job(self, job_id: str, user_id: str) -> Dict[str, bool]:
        """
        Toggle the user's bookmark on a job.

        Each branch is one conditional update, so `saves` always moves
        together with `saves_user_ids`. When a concurrent toggle slips in
        between the two branches neither matches, and the toggle is retried.

        Returns:
            {"success": True, "saved": True} after bookmarking,
            {"success": True, "saved": False} after removing the bookmark.

        Raises:
            JobNotFoundError: If the job does not exist
            ConcurrentUpdateError: If every attempt lost the race to other toggles
        """
        oid = to_object_id(job_id)
        if oid is None:
            raise JobNotFoundError(job_id=job_id)

        for attempt in range(1, self.max_attempts + 1):
            async with translate_store_errors("save job"):
                result = await self.db.jobs.update_one(
                    {"_id": oid, "saves_user_ids": {"$ne": user_id}},
                    {
                        "$addToSet": {"saves_user_ids": user_id},
                        "$inc": {"saves": 1},
                        "$set": {"updated_at": utcnow()},
                    },
                )
                if result.matched_count:
                    return {"success": True, "saved": True}

                result = await self.db.jobs.update_one(
                    {"_id": oid, "saves_user_ids": user_id},
                    {
                        "$pull": {"saves_user_ids": user_id},
                        "$inc": {"saves": -1},
                        "$set": {"updated_at": utcnow()},
                    },
                )
                if result.matched_count:
                    return {"success": True, "saved": False}

                exists = await self.db.jobs.find_one({"_id": oid}, {"_id": 1})
            if exists is None:
                raise JobNotFoundError(job_id=job_id)

            logger.warning(f"Save toggle for job {job_id} lost a race (attempt {attempt}/{self.max_attempts})")

        raise ConcurrentUpdateError()

    async def increment_job_views(self, job_id: str) -> None:
        """Best effort: failures are logged and never reach the caller."""
        oid = to_object_id(job_id)
        if oid is None:
            logger.warning(f"Ignoring view for malformed job id {job_id!r}")
            return
        try:
            result = await self.db.jobs.update_one({"_id": oid}, {"$inc": {"views": 1}})
            if not result.matched_count:
                logger.warning(f"Ignoring view for unknown job {job_id}")
        except Exception:
            logger.error(f"Failed to increment views for job {job_id}", exc_info=True)
