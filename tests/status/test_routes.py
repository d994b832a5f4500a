import pytest
from fastapi import status


@pytest.mark.asyncio
async def test_update_status_success(client, auth_headers, ladder, test_user):
    response = await client.post(
        "/api/v1/status",
        json={"problemNumber": 42, "status": "attempting"},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "problemNumber": 42,
        "status": "attempting",
        "previousStatus": "untouched",
        "message": "Status updated",
    }
    assert response.headers["cache-control"] == "private, no-store"


@pytest.mark.asyncio
async def test_update_status_requires_session(client, ladder):
    response = await client.post(
        "/api/v1/status", json={"problemNumber": 42, "status": "solved"}
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_update_status_rejects_invalid_token(client, ladder):
    response = await client.post(
        "/api/v1/status",
        json={"problemNumber": 42, "status": "solved"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_update_status_rejects_unknown_status(client, auth_headers, ladder, test_user):
    response = await client.post(
        "/api/v1/status",
        json={"problemNumber": 42, "status": "finished"},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "BAD_REQUEST"


@pytest.mark.asyncio
async def test_update_status_rejects_bad_problem_number(client, auth_headers, ladder, test_user):
    response = await client.post(
        "/api/v1/status",
        json={"problemNumber": 0, "status": "solved"},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.asyncio
async def test_update_status_unknown_problem(client, auth_headers, ladder, test_user):
    response = await client.post(
        "/api/v1/status",
        json={"problemNumber": 4242, "status": "solved"},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"detail": "Problem not found", "code": "NOT_FOUND"}


@pytest.mark.asyncio
async def test_session_cookie_is_accepted(client, auth_headers, ladder, test_user):
    token = auth_headers["Authorization"].split(" ", 1)[1]
    client.cookies.set("session_token", token)

    response = await client.post(
        "/api/v1/status", json={"problemNumber": 41, "status": "solved"}
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "solved"


@pytest.mark.asyncio
async def test_list_statuses(client, auth_headers, ladder, test_user):
    for number, value in ((43, "revisit"), (41, "solved")):
        await client.post(
            "/api/v1/status",
            json={"problemNumber": number, "status": value},
            headers=auth_headers,
        )

    response = await client.get("/api/v1/status", headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    statuses = response.json()["statuses"]
    assert [(entry["problemNumber"], entry["status"]) for entry in statuses] == [
        (41, "solved"),
        (43, "revisit"),
    ]
    assert all("updatedAt" in entry for entry in statuses)
