import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional

from jobboard.core.config import settings
from .exceptions import ConcurrentUpdateError, InvalidArgumentError
from .job_service import JobService
from .store import translate_store_errors, utcnow

logger = logging.getLogger(__name__)


def average_rating(ratings: List[Dict[str, Any]]) -> float:
    """Mean of the rating values rounded half-up to one decimal; 0 when empty."""
    if not ratings:
        return 0.0
    total = sum(Decimal(r["rating"]) for r in ratings)
    mean = total / Decimal(len(ratings))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def upsert_rating(ratings: List[Dict[str, Any]], new_rating: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Replace the author's previous rating in place, or append."""
    updated = list(ratings)
    for index, existing in enumerate(updated):
        if existing.get("user_id") == new_rating["user_id"]:
            updated[index] = new_rating
            return updated
    updated.append(new_rating)
    return updated


class RatingService:
    """
    Star ratings on job listings.

    The ratings array is rewritten as a whole, so each write is a
    compare-and-swap on `ratings_version`: if another rating landed between
    our read and our write, the update matches nothing and the
    read-modify-write runs again against the fresh document.
    """

    def __init__(self, db: object, max_attempts: Optional[int] = None):
        self.db = db
        self.job_service = JobService(db)
        self.max_attempts = max_attempts or settings.RATING_MAX_ATTEMPTS

    async def rate_job(self, job_id: str, user_id: str, rating: int, comment: Optional[str] = None) -> Dict[str, bool]:
        """
        Record `user_id`'s rating for a job and refresh the aggregates.

        Args:
            job_id: Job to rate
            user_id: Rating author; a second rating by the same user replaces the first
            rating: Integer from 1 to 5
            comment: Optional free text

        Raises:
            InvalidArgumentError: If rating is not an integer between 1 and 5
            JobNotFoundError: If the job does not exist
            ConcurrentUpdateError: If every attempt lost the race to other writers
        """
        if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
            raise InvalidArgumentError("Rating must be an integer between 1 and 5")

        for attempt in range(1, self.max_attempts + 1):
            doc = await self.job_service.load_job_document(job_id, "rate job")
            now = utcnow()
            ratings = upsert_rating(
                doc.get("ratings") or [],
                {"user_id": user_id, "rating": rating, "comment": comment, "created_at": now},
            )

            version = doc.get("ratings_version") or 0
            # Listings written before versioning carry no ratings_version field
            version_filter = version if version else {"$in": [0, None]}

            async with translate_store_errors("rate job"):
                result = await self.db.jobs.update_one(
                    {"_id": doc["_id"], "ratings_version": version_filter},
                    {
                        "$set": {
                            "ratings": ratings,
                            "average_rating": average_rating(ratings),
                            "rating_count": len(ratings),
                            "updated_at": now,
                        },
                        "$inc": {"ratings_version": 1},
                    },
                )

            if result.matched_count:
                logger.info(f"User {user_id} rated job {job_id}: {rating}")
                return {"success": True}

            logger.warning(f"Rating write for job {job_id} lost a race (attempt {attempt}/{self.max_attempts})")

        raise ConcurrentUpdateError()
