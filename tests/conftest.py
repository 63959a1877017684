"""
Shared fixtures.

`db` is an in-memory Motor-compatible database from mongomock-motor with the
production indexes applied, so the unique (job_id, user_id) constraint on
applications behaves as it does against MongoDB.
"""

from datetime import datetime, timedelta

import pytest
from mongomock_motor import AsyncMongoMockClient

from jobboard.core.database import ensure_indexes
from jobboard.models import JobListing
from jobboard.schemas import JobCreateRequest

BASE_TIME = datetime(2025, 3, 1, 9, 0, 0)


def job_payload(**overrides) -> dict:
    data = {
        "title": "Line Cook",
        "description": "Prep and cook in a busy kitchen.",
        "company_name": "Harbour Bistro",
        "location": {"city": "Melbourne", "state": "VIC", "country": "Australia", "remote": False},
        "job_type": "full-time",
        "experience_level": "junior",
        "salary": {"min": 55000, "max": 65000, "currency": "AUD", "period": "yearly"},
        "required_skills": ["Cooking", "Driving"],
        "attributes": ["fast-paced"],
        "status": "active",
        "posted_by": "employer-1",
    }
    data.update(overrides)
    return data


@pytest.fixture
async def db():
    client = AsyncMongoMockClient()
    database = client["jobboard_test"]
    await ensure_indexes(database)
    yield database


@pytest.fixture
def make_job(db):
    """Insert a job directly, with a controllable posted_at, and return its id."""
    counter = {"n": 0}

    async def _make_job(posted_at: datetime = None, **overrides) -> str:
        counter["n"] += 1
        posted_at = posted_at or BASE_TIME + timedelta(minutes=counter["n"])
        listing = JobListing(
            **JobCreateRequest(**job_payload(**overrides)).model_dump(),
            created_at=posted_at,
            updated_at=posted_at,
            posted_at=posted_at,
        )
        result = await db.jobs.insert_one(listing.model_dump(exclude={"id"}))
        return str(result.inserted_id)

    return _make_job
