import pytest

from jobboard.schemas import JobSearchFilters
from jobboard.services import SearchService
from jobboard.services.search_service import matches_location, matches_min_salary, matches_skills


async def search(db, **filters):
    jobs = await SearchService(db).search_jobs(JobSearchFilters(**filters))
    return [job.title for job in jobs]


class TestResidualPredicates:
    def test_skills_match_on_any_overlap(self):
        job = {"required_skills": ["Cooking", "Driving"]}
        assert matches_skills(job, ["Driving", "Painting"])
        assert not matches_skills(job, ["Painting"])

    def test_skills_match_is_exact_per_skill(self):
        assert not matches_skills({"required_skills": ["Cooking"]}, ["cooking"])

    def test_location_matches_city_or_country_substring(self):
        job = {"location": {"city": "Melbourne", "country": "Australia"}}
        assert matches_location(job, "melb")
        assert matches_location(job, "AUSTRAL")
        assert not matches_location(job, "Sydney")

    def test_location_tolerates_missing_fields(self):
        assert not matches_location({}, "Melbourne")

    def test_min_salary_uses_salary_max(self):
        assert matches_min_salary({"salary": {"min": 40, "max": 60}}, 60)
        assert not matches_min_salary({"salary": {"min": 40, "max": 59}}, 60)
        assert not matches_min_salary({}, 1)


class TestSearchJobs:
    @pytest.mark.asyncio
    async def test_skill_search_is_any_match(self, db, make_job):
        await make_job(title="Cook", required_skills=["Cooking", "Driving"])

        assert await search(db, skills=["Driving", "Painting"]) == ["Cook"]
        assert await search(db, skills=["Painting"]) == []

    @pytest.mark.asyncio
    async def test_only_active_jobs_are_returned(self, db, make_job):
        await make_job(title="Open")
        await make_job(title="Draft", status="draft")
        await make_job(title="Closed", status="closed")
        await make_job(title="Expired", status="expired")

        assert await search(db) == ["Open"]

    @pytest.mark.asyncio
    async def test_results_are_newest_first(self, db, make_job):
        await make_job(title="first")
        await make_job(title="second")
        await make_job(title="third")

        assert await search(db) == ["third", "second", "first"]

    @pytest.mark.asyncio
    async def test_equality_filters(self, db, make_job):
        await make_job(title="remote senior contract", job_type="contract", experience_level="senior",
                       location={"city": "Perth", "country": "Australia", "remote": True})
        await make_job(title="onsite senior contract", job_type="contract", experience_level="senior")
        await make_job(title="remote junior full-time",
                       location={"city": "Hobart", "country": "Australia", "remote": True})

        assert await search(db, remote=True, job_type="contract") == ["remote senior contract"]
        assert await search(db, remote=False) == ["onsite senior contract"]
        assert await search(db, experience_level="junior") == ["remote junior full-time"]

    @pytest.mark.asyncio
    async def test_location_and_salary_filters(self, db, make_job):
        await make_job(title="Melbourne well paid", salary={"min": 80000, "max": 90000, "currency": "AUD", "period": "yearly"})
        await make_job(title="Melbourne unpaid", salary=None)
        await make_job(title="Auckland", location={"city": "Auckland", "country": "New Zealand", "remote": False})

        assert await search(db, location="MELBOURNE", min_salary=85000) == ["Melbourne well paid"]
        assert await search(db, location="zealand") == ["Auckland"]

    @pytest.mark.asyncio
    async def test_zero_and_empty_filters_are_ignored(self, db, make_job):
        await make_job(title="No salary", salary=None)

        assert await search(db, skills=[], location="", min_salary=0) == ["No salary"]

    @pytest.mark.asyncio
    async def test_limit_applies_before_residual_filters(self, db, make_job):
        await make_job(title="old match", required_skills=["Welding"])
        await make_job(title="new miss", required_skills=["Typing"])
        await make_job(title="newest miss", required_skills=["Typing"])

        # The two newest jobs are fetched and neither matches; the older match is never seen.
        assert await search(db, skills=["Welding"], limit_count=2) == []
        assert await search(db, skills=["Welding"]) == ["old match"]
