from datetime import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from bson import ObjectId
from pymongo.errors import PyMongoError

from jobboard.services import (
    AlreadyAppliedError,
    ApplicationService,
    InternalServiceError,
    InvalidArgumentError,
    JobNotFoundError,
    JobService,
)
from jobboard.services.application_service import normalize_timestamp


class TestApplyToJob:
    @pytest.mark.asyncio
    async def test_applicant_count_tracks_distinct_applicants(self, db, make_job):
        job_id = await make_job()
        service = ApplicationService(db)

        for user_id in ("u1", "u2", "u3"):
            assert await service.apply_to_job(job_id, user_id) == {"success": True}

        job = await JobService(db).get_job_by_id(job_id)
        assert job.applicant_count == len(job.applicants) == 3
        assert set(job.applicants) == {"u1", "u2", "u3"}

    @pytest.mark.asyncio
    async def test_second_application_is_rejected(self, db, make_job):
        job_id = await make_job()
        service = ApplicationService(db)
        await service.apply_to_job(job_id, "u1")

        with pytest.raises(AlreadyAppliedError) as exc_info:
            await service.apply_to_job(job_id, "u1")

        assert exc_info.value.message == "You have already applied to this job"
        job = await JobService(db).get_job_by_id(job_id)
        assert job.applicant_count == 1
        assert await db.applications.count_documents({"job_id": job_id}) == 1

    @pytest.mark.asyncio
    async def test_application_document_is_pending_with_attachments(self, db, make_job):
        job_id = await make_job()
        await ApplicationService(db).apply_to_job(
            job_id, "u1", cover_letter="Hire me", resume_url="https://files.example/u1.pdf"
        )

        doc = await db.applications.find_one({"job_id": job_id, "user_id": "u1"})
        assert doc["status"] == "pending"
        assert doc["cover_letter"] == "Hire me"
        assert doc["resume_url"] == "https://files.example/u1.pdf"
        assert isinstance(doc["applied_at"], datetime)

    @pytest.mark.asyncio
    async def test_missing_job(self, db):
        with pytest.raises(JobNotFoundError):
            await ApplicationService(db).apply_to_job("64b000000000000000000000", "u1")
        with pytest.raises(JobNotFoundError):
            await ApplicationService(db).apply_to_job("nope", "u1")

    @pytest.mark.asyncio
    async def test_existing_application_document_counts_as_applied(self, db, make_job):
        job_id = await make_job()
        await db.applications.insert_one(
            {"job_id": job_id, "user_id": "u1", "applied_at": datetime(2025, 1, 1), "status": "pending"}
        )

        with pytest.raises(AlreadyAppliedError):
            await ApplicationService(db).apply_to_job(job_id, "u1")

        job = await JobService(db).get_job_by_id(job_id)
        assert job.applicants == []
        assert job.applicant_count == 0

    @pytest.mark.asyncio
    async def test_membership_is_rolled_back_when_application_insert_fails(self, db, make_job):
        job_id = await make_job()
        failing_applications = SimpleNamespace(insert_one=AsyncMock(side_effect=PyMongoError("disk full")))
        service = ApplicationService(db)
        service.db = SimpleNamespace(jobs=db.jobs, applications=failing_applications)

        with pytest.raises(InternalServiceError) as exc_info:
            await service.apply_to_job(job_id, "u1")

        assert exc_info.value.message == "disk full"
        job = await JobService(db).get_job_by_id(job_id)
        assert job.applicants == []
        assert job.applicant_count == 0


class TestGetUserApplications:
    @pytest.mark.asyncio
    async def test_most_recent_application_comes_first(self, db, make_job):
        older_job = await make_job(title="older")
        newer_job = await make_job(title="newer")
        for job_id, applied_at in ((older_job, datetime(2025, 1, 1)), (newer_job, datetime(2025, 2, 1))):
            await db.jobs.update_one(
                {"_id": ObjectId(job_id)},
                {"$addToSet": {"applicants": "u1"}, "$inc": {"applicant_count": 1}},
            )
            await db.applications.insert_one(
                {"job_id": job_id, "user_id": "u1", "applied_at": applied_at, "status": "pending"}
            )

        page = await ApplicationService(db).get_user_applications("u1")

        assert [item.job.title for item in page.applications] == ["newer", "older"]
        assert page.total == 2
        assert page.has_more is False
        assert page.limit == 10
        first = page.applications[0]
        assert first.job_id == newer_job == first.job.id
        assert first.id == first.application.id

    @pytest.mark.asyncio
    async def test_truncates_to_limit_but_reports_total(self, db, make_job):
        service = ApplicationService(db)
        for _ in range(3):
            await service.apply_to_job(await make_job(), "u1")
        await service.apply_to_job(await make_job(), "someone-else")

        page = await service.get_user_applications("u1", limit_count=2)

        assert len(page.applications) == 2
        assert page.total == 3
        assert page.has_more is True
        assert page.limit == 2

    @pytest.mark.asyncio
    async def test_string_timestamps_are_normalized(self, db, make_job):
        job_a = await make_job(title="a")
        job_b = await make_job(title="b")
        for job_id, applied_at in ((job_a, "2025-05-02T10:00:00Z"), (job_b, datetime(2025, 5, 1))):
            await db.jobs.update_one({"_id": ObjectId(job_id)}, {"$addToSet": {"applicants": "u1"}})
            await db.applications.insert_one(
                {"job_id": job_id, "user_id": "u1", "applied_at": applied_at, "status": "reviewed"}
            )

        page = await ApplicationService(db).get_user_applications("u1")

        assert [item.job.title for item in page.applications] == ["a", "b"]
        assert page.applications[0].application.applied_at == datetime(2025, 5, 2, 10, 0, 0)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit_count", [0, -1])
    async def test_rejects_non_positive_limit(self, db, limit_count):
        with pytest.raises(InvalidArgumentError):
            await ApplicationService(db).get_user_applications("u1", limit_count=limit_count)

    @pytest.mark.asyncio
    async def test_user_without_applications(self, db, make_job):
        await make_job()
        page = await ApplicationService(db).get_user_applications("nobody")
        assert page.applications == []
        assert page.total == 0
        assert page.has_more is False


class TestGetJobApplications:
    @pytest.mark.asyncio
    async def test_lists_applications_for_one_job(self, db, make_job):
        job_id = await make_job()
        other_job = await make_job()
        service = ApplicationService(db)
        await service.apply_to_job(job_id, "u1")
        await service.apply_to_job(job_id, "u2")
        await service.apply_to_job(other_job, "u3")

        applications = await service.get_job_applications(job_id)

        assert {a.user_id for a in applications} == {"u1", "u2"}
        assert all(a.job_id == job_id for a in applications)

    @pytest.mark.asyncio
    async def test_missing_job(self, db):
        with pytest.raises(JobNotFoundError):
            await ApplicationService(db).get_job_applications("64b000000000000000000000")


def test_normalize_timestamp_variants():
    assert normalize_timestamp(datetime(2025, 1, 1, 12)) == datetime(2025, 1, 1, 12)
    assert normalize_timestamp("2025-01-01T12:00:00+02:00") == datetime(2025, 1, 1, 10)
    assert normalize_timestamp("garbage") == datetime.min
    assert normalize_timestamp(None) == datetime.min
