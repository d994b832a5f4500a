from typing import Dict

from sqlalchemy.ext.asyncio import AsyncSession

from tracker.config import logger
from tracker.business.services.phase import progress_percentage
from tracker.data.repositories.favorite import get_favorites_count
from tracker.data.repositories.status import (
    get_solved_by_phase_for_user,
    get_status_counts_for_user,
)
from tracker.data.schemas import ProblemStatus, StatusCounts, UserStats

stats_logger = logger.getChild("stats")


def calculate_status_counts(
    counts: Dict[ProblemStatus, int], total_problems: int
) -> StatusCounts:
    """Untouched is derived: every problem without a stored row counts as untouched."""
    stats = create_default_stats(total_problems)
    touched = 0
    for status, count in counts.items():
        if status == ProblemStatus.UNTOUCHED:
            continue
        setattr(stats, status.value, count)
        touched += count
    stats.untouched = total_problems - touched
    return stats


def create_default_stats(total_problems: int) -> StatusCounts:
    return StatusCounts(untouched=total_problems)


async def get_user_stats_service(
    db: AsyncSession, user_id: str, total_problems: int
) -> UserStats:
    counts = await get_status_counts_for_user(db, user_id)
    phase_solved = await get_solved_by_phase_for_user(db, user_id)
    favorites_count = await get_favorites_count(db, user_id)

    stats = calculate_status_counts(counts, total_problems)
    stats_logger.info(
        f"Stats for user {user_id}: {stats.solved}/{total_problems} solved, "
        f"{favorites_count} favorites"
    )
    return UserStats(
        **stats.model_dump(),
        total_problems=total_problems,
        progress_percentage=progress_percentage(stats.solved, total_problems),
        phase_solved=phase_solved,
        favorites_count=favorites_count,
    )
