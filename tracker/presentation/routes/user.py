from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.business.services import (
    CurrentUser,
    get_current_user,
    get_public_profile_service,
    get_user_profile_service,
    update_username_service,
)
from tracker.config import logger
from tracker.data.repositories import get_session
from tracker.data.schemas import (
    PublicProfile,
    UsernameUpdateRequest,
    UsernameUpdateResponse,
    UserProfile,
)
from tracker.errors import AppException, DatabaseException
from tracker.presentation.cache import apply_cache_headers

# Create a module-specific logger
user_logger = logger.getChild("user")

router = APIRouter(tags=["user"])


@router.get("/user", response_model=UserProfile)
async def get_me(
    response: Response,
    db: AsyncSession = Depends(get_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    profile = await get_user_profile_service(db, current_user.id)
    apply_cache_headers(response, "private")
    return profile


@router.patch("/user", response_model=UsernameUpdateResponse)
async def update_username(
    payload: UsernameUpdateRequest,
    response: Response,
    db: AsyncSession = Depends(get_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Change the caller's public username.

    Returns:
        The stored (lower-cased) username
    """
    user_logger.info(f"Username update request for user {current_user.id}")
    result = await update_username_service(db, current_user.id, payload.username)
    apply_cache_headers(response, "private")
    return result


@router.get("/users/{identifier}/profile", response_model=PublicProfile)
async def get_public_profile(
    identifier: str,
    response: Response,
    db: AsyncSession = Depends(get_session),
):
    """
    Get the shareable profile of a user.

    Args:
        identifier: Username or user ID

    Returns:
        Profile with status counts and per-phase progress
    """
    user_logger.info(f"Public profile request for: {identifier}")

    try:
        profile = await get_public_profile_service(db, identifier)
    except AppException:
        raise
    except Exception as e:
        user_logger.error(f"Unexpected error during public profile request: {str(e)}")
        raise DatabaseException(detail="An unexpected error occurred")

    apply_cache_headers(response, "public_short")
    return profile
