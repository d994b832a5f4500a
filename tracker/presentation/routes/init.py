from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.business.services import (
    CurrentUser,
    get_favorites_service,
    get_history_service,
    get_optional_user,
    get_phase_summary_service,
    get_problems_service,
    get_all_statuses_service,
    get_user_stats_service,
)
from tracker.config import logger
from tracker.data.repositories import get_session, get_user_by_id
from tracker.data.schemas import (
    InitFavorite,
    InitResponse,
    InitStatus,
    StatusCounts,
)
from tracker.presentation.cache import apply_cache_headers

init_logger = logger.getChild("init")

router = APIRouter(prefix="/init", tags=["init"])


@router.get("", response_model=InitResponse, response_model_exclude_none=True)
async def get_init_payload(
    response: Response,
    db: AsyncSession = Depends(get_session),
    current_user: Optional[CurrentUser] = Depends(get_optional_user),
):
    """
    Everything a client needs on session start.

    Guests receive phases, problems and counts. Signed-in callers also
    receive their statuses, favorites, history and stats, which seed the
    client store.
    """
    summary = await get_phase_summary_service(db)
    problems = await get_problems_service(db)
    payload = InitResponse(
        phases=summary.phases,
        problems=problems,
        phase_counts=summary.phase_counts,
        total_problems=summary.total_problems,
    )

    if current_user is None:
        apply_cache_headers(response, "public_guest")
        return payload

    user_id = current_user.id
    number_to_id = {problem.number: problem.id for problem in problems}
    statuses = await get_all_statuses_service(db, user_id)
    favorites = await get_favorites_service(db, user_id)
    history = await get_history_service(db, user_id)
    stats = await get_user_stats_service(db, user_id, summary.total_problems)

    user = await get_user_by_id(db, user_id)
    if user is None:
        init_logger.warning(f"Init for user {user_id} without a stored account row")

    payload.is_authenticated = True
    payload.user = user
    payload.statuses = [
        InitStatus(
            problem_number=entry.problem_number,
            problem_id=number_to_id[entry.problem_number],
            status=entry.status,
        )
        for entry in statuses
        if entry.problem_number in number_to_id
    ]
    payload.favorites = [
        InitFavorite(problem_id=favorite.id, favorited_at=favorite.favorited_at)
        for favorite in favorites
    ]
    payload.history = history
    payload.status_counts = StatusCounts(
        solved=stats.solved,
        attempting=stats.attempting,
        revisit=stats.revisit,
        skipped=stats.skipped,
        untouched=stats.untouched,
    )
    payload.phase_solved = stats.phase_solved

    init_logger.info(
        f"Init payload for user {user_id}: {len(payload.statuses)} statuses, "
        f"{len(payload.favorites)} favorites, {len(history)} history entries"
    )
    apply_cache_headers(response, "private")
    return payload
