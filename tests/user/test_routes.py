import pytest
from fastapi import status

from tracker.business.services import is_valid_username, update_status_service

from tests.conftest import TEST_USER_ID


@pytest.mark.parametrize(
    "username, valid",
    [("abc", True), ("Tourist_42", True), ("ab", False), ("a" * 21, False), ("no-dash", False)],
)
def test_username_rules(username, valid):
    assert is_valid_username(username) is valid


@pytest.mark.asyncio
async def test_get_current_user(client, auth_headers, test_user):
    response = await client.get("/api/v1/user", headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["id"] == TEST_USER_ID
    assert data["name"] == "Test User"
    assert data["username"] is None
    assert "email" not in data


@pytest.mark.asyncio
async def test_get_current_user_without_row(client, auth_headers):
    response = await client.get("/api/v1/user", headers=auth_headers)

    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_update_username_is_trimmed_and_lowercased(client, auth_headers, test_user):
    response = await client.patch(
        "/api/v1/user", json={"username": " CP_Fan "}, headers=auth_headers
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"success": True, "username": "cp_fan"}

    response = await client.get("/api/v1/user", headers=auth_headers)
    assert response.json()["username"] == "cp_fan"


@pytest.mark.asyncio
async def test_update_username_rejects_invalid(client, auth_headers, test_user):
    response = await client.patch(
        "/api/v1/user", json={"username": "bad name"}, headers=auth_headers
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "BAD_REQUEST"


@pytest.mark.asyncio
async def test_update_username_conflict(client, auth_headers, test_user, other_user):
    response = await client.patch(
        "/api/v1/user", json={"username": "Taken_Name"}, headers=auth_headers
    )

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["code"] == "CONFLICT"


@pytest.mark.asyncio
async def test_update_username_keeps_own_name(client, auth_headers, test_user):
    for _ in range(2):
        response = await client.patch(
            "/api/v1/user", json={"username": "same_name"}, headers=auth_headers
        )
        assert response.status_code == status.HTTP_200_OK


@pytest.mark.asyncio
async def test_public_profile_by_username(client, test_db, ladder, other_user):
    await update_status_service(test_db, other_user.id, 41, "solved")
    await update_status_service(test_db, other_user.id, 42, "solved")
    await update_status_service(test_db, other_user.id, 43, "solved")
    await update_status_service(test_db, other_user.id, 44, "skipped")

    response = await client.get("/api/v1/users/taken_name/profile")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["id"] == other_user.id
    assert data["stats"]["solved"] == 3
    assert data["stats"]["skipped"] == 1
    assert data["stats"]["untouched"] == 1
    assert data["progressPercentage"] == 60
    assert data["currentPhase"] == 2
    assert data["targetRating"] == "1200+"
    assert [phase["progressPercentage"] for phase in data["phases"]] == [100, 0]
    assert "email" not in data


@pytest.mark.asyncio
async def test_public_profile_by_id(client, ladder, test_user):
    response = await client.get(f"/api/v1/users/{TEST_USER_ID}/profile")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["currentPhase"] == 1


@pytest.mark.asyncio
async def test_public_profile_not_found(client, ladder):
    response = await client.get("/api/v1/users/nobody/profile")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["code"] == "NOT_FOUND"
