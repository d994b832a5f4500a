import pytest
from fastapi import status

from tracker.business.services import (
    calculate_status_counts,
    determine_current_phase,
    progress_percentage,
    update_status_service,
)
from tracker.data.schemas import PhaseResponse, ProblemStatus

from tests.conftest import TEST_USER_ID


def test_progress_percentage_rounds_half_up():
    assert progress_percentage(1, 8) == 13
    assert progress_percentage(1, 3) == 33
    assert progress_percentage(2, 3) == 67
    assert progress_percentage(0, 0) == 0


def test_untouched_is_derived_from_total():
    counts = calculate_status_counts(
        {ProblemStatus.SOLVED: 3, ProblemStatus.SKIPPED: 1}, total_problems=10
    )

    assert counts.solved == 3
    assert counts.skipped == 1
    assert counts.attempting == 0
    assert counts.untouched == 6


def test_current_phase_is_first_unfinished():
    phases = [
        PhaseResponse(id=1, name="One", target_rating_end=1000, problem_start=1, problem_end=2),
        PhaseResponse(id=2, name="Two", target_rating_end=1200, problem_start=3, problem_end=4),
    ]

    assert determine_current_phase(phases, {1: 2, 2: 2}, {1: 2}) == (2, "1200+")
    assert determine_current_phase(phases, {1: 2, 2: 2}, {}) == (1, "1000+")
    assert determine_current_phase(phases, {1: 2, 2: 2}, {1: 2, 2: 2}) == (0, "1000+")


@pytest.mark.asyncio
async def test_phases_for_guest(client, ladder):
    response = await client.get("/api/v1/phases")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [phase["name"] for phase in data["phases"]] == ["Foundations", "Intermediate"]
    assert data["totalProblems"] == 5
    assert data["phaseCounts"] == [{"phaseId": 1, "count": 3}, {"phaseId": 2, "count": 2}]
    assert "s-maxage" in response.headers["cache-control"]


@pytest.mark.asyncio
async def test_problems_for_guest_by_phase(client, ladder):
    response = await client.get("/api/v1/problems", params={"phaseId": 2})

    assert response.status_code == status.HTTP_200_OK
    problems = response.json()["problems"]
    assert [problem["number"] for problem in problems] == [44, 45]
    assert all(problem["userStatus"] == "untouched" for problem in problems)
    assert all(problem["isFavorite"] is False for problem in problems)


@pytest.mark.asyncio
async def test_problems_carry_user_data(client, auth_headers, test_db, ladder, test_user):
    await update_status_service(test_db, TEST_USER_ID, 43, "revisit")
    await client.post("/api/v1/favorites", json={"problemId": 1}, headers=auth_headers)

    response = await client.get("/api/v1/problems", headers=auth_headers)

    problems = {problem["number"]: problem for problem in response.json()["problems"]}
    assert len(problems) == 5
    assert problems[43]["userStatus"] == "revisit"
    assert problems[43]["isStarred"] is True
    assert problems[41]["isFavorite"] is True
    assert problems[42]["userStatus"] == "untouched"
    assert response.headers["cache-control"] == "private, no-store"


@pytest.mark.asyncio
async def test_stats_for_guest(client, ladder):
    response = await client.get("/api/v1/stats")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["totalProblems"] == 5
    assert data["userStats"] is None


@pytest.mark.asyncio
async def test_stats_for_user(client, auth_headers, test_db, ladder, test_user):
    await update_status_service(test_db, TEST_USER_ID, 41, "solved")
    await update_status_service(test_db, TEST_USER_ID, 44, "solved")
    await update_status_service(test_db, TEST_USER_ID, 42, "attempting")
    await client.post("/api/v1/favorites", json={"problemId": 5}, headers=auth_headers)

    response = await client.get("/api/v1/stats", headers=auth_headers)

    user_stats = response.json()["userStats"]
    assert user_stats["solved"] == 2
    assert user_stats["attempting"] == 1
    assert user_stats["untouched"] == 2
    assert user_stats["favoritesCount"] == 1
    assert user_stats["phaseStats"] == [
        {"phaseId": 1, "status": "solved", "count": 1},
        {"phaseId": 2, "status": "solved", "count": 1},
    ]
