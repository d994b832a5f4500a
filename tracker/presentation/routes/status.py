from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.business.services import (
    CurrentUser,
    get_all_statuses_service,
    get_current_user,
    update_status_service,
)
from tracker.config import logger
from tracker.data.repositories import get_session
from tracker.data.schemas import (
    StatusListResponse,
    StatusUpdateRequest,
    StatusUpdateResponse,
)
from tracker.presentation.cache import apply_cache_headers

status_logger = logger.getChild("status")

router = APIRouter(prefix="/status", tags=["status"])


@router.post(
    "",
    response_model=StatusUpdateResponse,
    summary="Update a problem status",
    description="Sets the caller's status for a problem and records the transition in history.",
)
async def update_status(
    payload: StatusUpdateRequest,
    response: Response,
    db: AsyncSession = Depends(get_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    status_logger.info(
        f"Status update request: user {current_user.id}, problem #{payload.problem_number} -> {payload.status.value}"
    )
    result = await update_status_service(
        db, current_user.id, payload.problem_number, payload.status
    )
    apply_cache_headers(response, "private")
    return StatusUpdateResponse(**result.model_dump())


@router.get(
    "",
    response_model=StatusListResponse,
    summary="List the caller's statuses",
    description="Returns every stored status of the caller, used to seed the client store.",
)
async def list_statuses(
    response: Response,
    db: AsyncSession = Depends(get_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    statuses = await get_all_statuses_service(db, current_user.id)
    apply_cache_headers(response, "private")
    return StatusListResponse(statuses=statuses)
