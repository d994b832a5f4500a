from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.business.services import (
    CurrentUser,
    get_optional_user,
    get_phase_summary_service,
    get_problems_service,
    get_problems_with_user_data_service,
)
from tracker.config import logger
from tracker.data.repositories import get_session
from tracker.data.schemas import PhaseCount, PhaseSummaryResponse, ProblemListResponse
from tracker.presentation.cache import apply_cache_headers

problem_logger = logger.getChild("problem")

problem_router = APIRouter(prefix="/problems", tags=["problems"])
phase_router = APIRouter(prefix="/phases", tags=["phases"])


@phase_router.get(
    "",
    response_model=PhaseSummaryResponse,
    summary="List phases",
    description="Lists every phase with the number of problems it contains.",
)
async def list_phases(response: Response, db: AsyncSession = Depends(get_session)):
    summary = await get_phase_summary_service(db)
    apply_cache_headers(response, "public_guest")
    return PhaseSummaryResponse(
        phases=summary.phases,
        total_problems=summary.total_problems,
        phase_counts=[
            PhaseCount(phase_id=phase_id, count=count)
            for phase_id, count in sorted(summary.phase_counts.items())
        ],
    )


@problem_router.get(
    "",
    response_model=ProblemListResponse,
    summary="List problems",
    description="Lists all problems, or those of one phase, with the caller's status and favorite flag.",
)
async def list_problems(
    response: Response,
    phase_id: Optional[int] = Query(None, alias="phaseId"),
    db: AsyncSession = Depends(get_session),
    current_user: Optional[CurrentUser] = Depends(get_optional_user),
):
    user_id = current_user.id if current_user else None
    problem_logger.info(f"Listing problems, phase: {phase_id}, user: {user_id}")
    problems = await get_problems_service(db, phase_id)
    enriched = await get_problems_with_user_data_service(db, problems, user_id)
    apply_cache_headers(response, "private" if user_id else "public_long")
    return ProblemListResponse(problems=enriched)
