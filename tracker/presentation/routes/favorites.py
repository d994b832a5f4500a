from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.business.services import (
    CurrentUser,
    add_favorite_service,
    get_current_user,
    get_favorites_service,
    remove_favorite_service,
)
from tracker.config import logger
from tracker.data.repositories import get_session
from tracker.data.schemas import (
    FavoriteListResponse,
    FavoriteRequest,
    FavoriteToggleResponse,
)
from tracker.presentation.cache import apply_cache_headers

favorite_logger = logger.getChild("favorite")

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("", response_model=FavoriteListResponse, summary="List favorites")
async def list_favorites(
    response: Response,
    db: AsyncSession = Depends(get_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Get the caller's favorites with problem details and status."""
    favorites = await get_favorites_service(db, current_user.id)
    apply_cache_headers(response, "private")
    return FavoriteListResponse(favorites=favorites)


@router.post("", response_model=FavoriteToggleResponse, summary="Add a favorite")
async def add_favorite(
    payload: FavoriteRequest,
    response: Response,
    db: AsyncSession = Depends(get_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    favorite_logger.info(f"Add favorite: user {current_user.id}, problem {payload.problem_id}")
    result = await add_favorite_service(db, current_user.id, payload.problem_id)
    apply_cache_headers(response, "private")
    return FavoriteToggleResponse(message="Added to favorites", **result.model_dump())


@router.delete("", response_model=FavoriteToggleResponse, summary="Remove a favorite")
async def remove_favorite(
    response: Response,
    problem_id: int = Query(..., alias="problemId", gt=0),
    db: AsyncSession = Depends(get_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    favorite_logger.info(f"Remove favorite: user {current_user.id}, problem {problem_id}")
    result = await remove_favorite_service(db, current_user.id, problem_id)
    apply_cache_headers(response, "private")
    return FavoriteToggleResponse(message="Removed from favorites", **result.model_dump())
