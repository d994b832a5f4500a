import re

from sqlalchemy.ext.asyncio import AsyncSession

from tracker.business.services.phase import (
    calculate_phases_with_progress,
    determine_current_phase,
    get_phase_summary_service,
    progress_percentage,
)
from tracker.business.services.stats import get_user_stats_service
from tracker.config import logger
from tracker.data.repositories.user_repository import (
    get_user_by_id,
    get_user_by_username_or_id,
    is_username_taken,
    update_username,
)
from tracker.data.schemas import (
    USERNAME_PATTERN,
    PublicProfile,
    StatusCounts,
    UsernameUpdateResponse,
    UserProfile,
)
from tracker.errors import BadRequestException, ConflictException, ResourceNotFoundException

user_logger = logger.getChild("user")

USERNAME_REGEX = re.compile(USERNAME_PATTERN)


def is_valid_username(username: str) -> bool:
    return bool(USERNAME_REGEX.match(username))


async def get_user_profile_service(db: AsyncSession, user_id: str) -> UserProfile:
    user = await get_user_by_id(db, user_id)
    if not user:
        user_logger.warning(f"User not found: ID {user_id}")
        raise ResourceNotFoundException(detail="User not found")
    return user


async def update_username_service(
    db: AsyncSession, user_id: str, username: str
) -> UsernameUpdateResponse:
    """Usernames are 3-20 letters, digits or underscores, stored lower-cased."""
    candidate = username.strip()
    if not is_valid_username(candidate):
        raise BadRequestException(
            detail="Username must be 3-20 characters and contain only letters, numbers, and underscores"
        )
    candidate = candidate.lower()

    if await is_username_taken(db, candidate, exclude_user_id=user_id):
        user_logger.warning(f"Username already taken: {candidate}")
        raise ConflictException(detail="Username is already taken")

    await update_username(db, user_id, candidate)
    user_logger.info(f"Username updated for user {user_id}: {candidate}")
    return UsernameUpdateResponse(success=True, username=candidate)


async def get_public_profile_service(db: AsyncSession, identifier: str) -> PublicProfile:
    """Shareable profile: identity, status counts and per-phase progress."""
    user = await get_user_by_username_or_id(db, identifier)
    if not user:
        user_logger.warning(f"Public profile not found: {identifier}")
        raise ResourceNotFoundException(detail="User not found")

    summary = await get_phase_summary_service(db)
    stats = await get_user_stats_service(db, user.id, summary.total_problems)
    current_phase, target_rating = determine_current_phase(
        summary.phases, summary.phase_counts, stats.phase_solved
    )

    return PublicProfile(
        **user.model_dump(),
        stats=StatusCounts(
            solved=stats.solved,
            attempting=stats.attempting,
            revisit=stats.revisit,
            skipped=stats.skipped,
            untouched=stats.untouched,
        ),
        phase_solved=stats.phase_solved,
        phases=calculate_phases_with_progress(
            summary.phases, summary.phase_counts, stats.phase_solved
        ),
        progress_percentage=progress_percentage(stats.solved, summary.total_problems),
        current_phase=current_phase,
        target_rating=target_rating,
    )
