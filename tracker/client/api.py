import logging
from typing import Any, Dict, Optional, Union

import httpx

from tracker.data.schemas.enums import ProblemStatus

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


class ProgressApiError(Exception):
    """A non-2xx answer from the tracker API."""

    def __init__(self, status_code: int, code: Optional[str], detail: Any):
        super().__init__(f"{status_code} {code}: {detail}")
        self.status_code = status_code
        self.code = code
        self.detail = detail

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ProgressApiError":
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        return cls(
            status_code=response.status_code,
            code=body.get("code"),
            detail=body.get("detail") or response.reason_phrase,
        )


class ProgressApiClient:
    """Async transport for the tracker API used by the client store."""

    def __init__(
        self,
        base_url: str = "",
        token: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        **client_kwargs,
    ):
        if client is None:
            headers = {"Authorization": f"Bearer {token}"} if token else None
            client = httpx.AsyncClient(base_url=base_url, headers=headers, **client_kwargs)
        self._client = client

    async def __aenter__(self) -> "ProgressApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        response = await self._client.request(method, f"{API_PREFIX}{path}", **kwargs)
        if not response.is_success:
            error = ProgressApiError.from_response(response)
            logger.warning(f"{method} {path} failed: {error}")
            raise error
        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"{method} {path} returned a body that is not JSON")
            raise ProgressApiError(
                status_code=response.status_code,
                code=None,
                detail="Response body is not valid JSON",
            ) from e

    async def update_status(
        self, problem_number: int, status: Union[ProblemStatus, str]
    ) -> Dict[str, Any]:
        return await self._request(
            "POST",
            "/status",
            json={"problemNumber": problem_number, "status": ProblemStatus(status).value},
        )

    async def add_favorite(self, problem_id: int) -> Dict[str, Any]:
        return await self._request("POST", "/favorites", json={"problemId": problem_id})

    async def remove_favorite(self, problem_id: int) -> Dict[str, Any]:
        return await self._request("DELETE", "/favorites", params={"problemId": problem_id})

    async def fetch_statuses(self) -> Dict[str, Any]:
        return await self._request("GET", "/status")

    async def fetch_init(self) -> Dict[str, Any]:
        return await self._request("GET", "/init")
