from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from tracker.config import logger
from tracker.data.repositories.favorite import (
    add_favorite,
    get_favorites_with_details,
    is_favorited,
    remove_favorite,
)
from tracker.data.repositories.problem import find_problem_by_id
from tracker.data.schemas import FavoriteProblem, FavoriteToggleResult
from tracker.errors import ResourceNotFoundException

favorite_logger = logger.getChild("favorite")


async def get_favorites_service(db: AsyncSession, user_id: str) -> List[FavoriteProblem]:
    favorites = await get_favorites_with_details(db, user_id)
    favorite_logger.info(f"Retrieved {len(favorites)} favorites for user {user_id}")
    return favorites


async def add_favorite_service(
    db: AsyncSession, user_id: str, problem_id: int
) -> FavoriteToggleResult:
    """Favorite a problem. Favoriting an already favorited problem succeeds without a write."""
    problem = await find_problem_by_id(db, problem_id)
    if not problem:
        favorite_logger.warning(f"Favorite requested for unknown problem {problem_id}")
        raise ResourceNotFoundException(detail="Problem not found")

    if await is_favorited(db, user_id, problem_id):
        favorite_logger.info(f"Problem {problem_id} already favorited by user {user_id}")
        return FavoriteToggleResult(problem_id=problem_id, is_favorite=True)

    await add_favorite(db, user_id, problem_id)
    favorite_logger.info(f"Problem {problem_id} favorited by user {user_id}")
    return FavoriteToggleResult(problem_id=problem_id, is_favorite=True)


async def remove_favorite_service(
    db: AsyncSession, user_id: str, problem_id: int
) -> FavoriteToggleResult:
    removed = await remove_favorite(db, user_id, problem_id)
    favorite_logger.info(
        f"Problem {problem_id} unfavorited by user {user_id} (rows removed: {removed})"
    )
    return FavoriteToggleResult(problem_id=problem_id, is_favorite=False)
