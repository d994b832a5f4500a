from typing import List, Set

from sqlalchemy import and_, delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.config import logger
from tracker.data.repositories.status import get_user_statuses_for_problems
from tracker.data.schemas import FavoriteProblem, Problem, ProblemStatus, UserFavorite, utc_now
from tracker.errors import DatabaseException

favorite_logger = logger.getChild("favorite_repository")


def _favorite_clause(user_id: str, problem_id: int):
    return and_(UserFavorite.user_id == user_id, UserFavorite.problem_id == problem_id)


async def get_favorites_count(db: AsyncSession, user_id: str) -> int:
    try:
        result = await db.execute(
            select(func.count())
            .select_from(UserFavorite)
            .where(UserFavorite.user_id == user_id)
        )
        return result.scalar_one()
    except Exception as e:
        favorite_logger.error(f"Failed to count favorites for user {user_id}: {str(e)}")
        raise DatabaseException(detail="Failed to count favorites")


async def get_favorites_with_details(db: AsyncSession, user_id: str) -> List[FavoriteProblem]:
    """All favorites of a user joined with problem details and the user's status."""
    try:
        result = await db.execute(
            select(Problem, UserFavorite.created_at)
            .join(UserFavorite, UserFavorite.problem_id == Problem.id)
            .where(UserFavorite.user_id == user_id)
            .order_by(UserFavorite.created_at, UserFavorite.id)
        )
        rows = result.all()
    except Exception as e:
        favorite_logger.error(f"Failed to list favorites for user {user_id}: {str(e)}")
        raise DatabaseException(detail="Failed to retrieve favorites")

    statuses = await get_user_statuses_for_problems(
        db, user_id, [problem.id for problem, _ in rows]
    )
    return [
        FavoriteProblem(
            id=problem.id,
            number=problem.number,
            platform=problem.platform,
            name=problem.name,
            url=problem.url,
            phase_id=problem.phase_id,
            topic=problem.topic,
            is_starred=problem.is_starred,
            note=problem.note,
            favorited_at=favorited_at,
            user_status=statuses.get(problem.id, ProblemStatus.UNTOUCHED),
            is_favorite=True,
        )
        for problem, favorited_at in rows
    ]


async def is_favorited(db: AsyncSession, user_id: str, problem_id: int) -> bool:
    try:
        result = await db.execute(
            select(UserFavorite.id).where(_favorite_clause(user_id, problem_id))
        )
        return result.scalar_one_or_none() is not None
    except Exception as e:
        favorite_logger.error(
            f"Failed to check favorite for user {user_id}, problem {problem_id}: {str(e)}"
        )
        raise DatabaseException(detail="Failed to retrieve favorite")


async def get_user_favorites_for_problems(
    db: AsyncSession, user_id: str, problem_ids: List[int]
) -> Set[int]:
    if not problem_ids:
        return set()
    try:
        result = await db.execute(
            select(UserFavorite.problem_id).where(
                UserFavorite.user_id == user_id,
                UserFavorite.problem_id.in_(problem_ids),
            )
        )
        return set(result.scalars().all())
    except Exception as e:
        favorite_logger.error(f"Failed to read favorites for user {user_id}: {str(e)}")
        raise DatabaseException(detail="Failed to retrieve favorites")


async def add_favorite(db: AsyncSession, user_id: str, problem_id: int) -> None:
    """Insert the favorite row; a concurrent duplicate insert is treated as success."""
    try:
        db.add(UserFavorite(user_id=user_id, problem_id=problem_id, created_at=utc_now()))
        await db.commit()
    except IntegrityError:
        await db.rollback()
        favorite_logger.info(
            f"Favorite already present for user {user_id}, problem {problem_id}"
        )
    except Exception as e:
        await db.rollback()
        favorite_logger.error(
            f"Failed to add favorite for user {user_id}, problem {problem_id}: {str(e)}"
        )
        raise DatabaseException(detail="Failed to add favorite")


async def remove_favorite(db: AsyncSession, user_id: str, problem_id: int) -> int:
    try:
        result = await db.execute(delete(UserFavorite).where(_favorite_clause(user_id, problem_id)))
        await db.commit()
        return result.rowcount or 0
    except Exception as e:
        await db.rollback()
        favorite_logger.error(
            f"Failed to remove favorite for user {user_id}, problem {problem_id}: {str(e)}"
        )
        raise DatabaseException(detail="Failed to remove favorite")
