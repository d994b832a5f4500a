from typing import List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.config import logger
from tracker.data.schemas import HistoryEntry, Problem, StatusHistory
from tracker.errors import DatabaseException

history_logger = logger.getChild("history_repository")


async def get_history_for_user(
    db: AsyncSession, user_id: str, limit: int = 500, offset: int = 0
) -> List[HistoryEntry]:
    """
    Get status history for a user with problem details, newest first.

    Args:
        db: Database session
        user_id: ID of the user
        limit: Maximum number of entries to return
        offset: Number of entries to skip

    Returns:
        List of history entries
    """
    try:
        result = await db.execute(
            select(StatusHistory, Problem)
            .join(Problem, StatusHistory.problem_id == Problem.id)
            .where(StatusHistory.user_id == user_id)
            .order_by(StatusHistory.changed_at.desc(), StatusHistory.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return [
            HistoryEntry(
                id=entry.id,
                problem_id=entry.problem_id,
                problem_number=problem.number,
                problem_name=problem.name,
                problem_url=problem.url,
                platform=problem.platform,
                from_status=entry.from_status,
                to_status=entry.to_status,
                changed_at=entry.changed_at,
            )
            for entry, problem in result.all()
        ]
    except Exception as e:
        history_logger.error(f"Error retrieving history for user {user_id}: {str(e)}")
        raise DatabaseException(detail="Failed to retrieve status history")


async def get_history_count_for_user(db: AsyncSession, user_id: str) -> int:
    try:
        result = await db.execute(
            select(func.count())
            .select_from(StatusHistory)
            .where(StatusHistory.user_id == user_id)
        )
        return result.scalar_one()
    except Exception as e:
        history_logger.error(f"Error counting history for user {user_id}: {str(e)}")
        raise DatabaseException(detail="Failed to count status history")
