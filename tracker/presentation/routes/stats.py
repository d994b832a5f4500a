from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.business.services import (
    CurrentUser,
    get_optional_user,
    get_phase_summary_service,
    get_user_stats_service,
)
from tracker.config import logger
from tracker.data.repositories import get_session
from tracker.data.schemas import PhaseCount, PhaseSolvedCount, StatsResponse, UserStatsSummary
from tracker.presentation.cache import apply_cache_headers

stats_logger = logger.getChild("stats")

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=StatsResponse)
async def get_stats(
    response: Response,
    db: AsyncSession = Depends(get_session),
    current_user: Optional[CurrentUser] = Depends(get_optional_user),
):
    """Totals for everyone; status counts and per-phase progress for signed-in callers."""
    summary = await get_phase_summary_service(db)
    phase_counts = [
        PhaseCount(phase_id=phase_id, count=count)
        for phase_id, count in sorted(summary.phase_counts.items())
    ]

    if current_user is None:
        apply_cache_headers(response, "public_long")
        return StatsResponse(total_problems=summary.total_problems, phase_counts=phase_counts)

    stats = await get_user_stats_service(db, current_user.id, summary.total_problems)
    stats_logger.info(f"Stats request successful for user {current_user.id}")
    apply_cache_headers(response, "private")
    return StatsResponse(
        total_problems=summary.total_problems,
        phase_counts=phase_counts,
        user_stats=UserStatsSummary(
            solved=stats.solved,
            attempting=stats.attempting,
            revisit=stats.revisit,
            skipped=stats.skipped,
            untouched=stats.untouched,
            favorites_count=stats.favorites_count,
            phase_stats=[
                PhaseSolvedCount(phase_id=phase_id, count=count)
                for phase_id, count in sorted(stats.phase_solved.items())
            ],
        ),
    )
