from typing import Optional

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.config import logger
from tracker.data.schemas import User, UserProfile, utc_now
from tracker.errors import DatabaseException

user_logger = logger.getChild("user")


async def get_user_by_id(db: AsyncSession, user_id: str) -> Optional[UserProfile]:
    """Get a user by ID from the database."""
    try:
        user = await db.get(User, user_id)
        return UserProfile.model_validate(user) if user else None
    except Exception as e:
        user_logger.error(f"Error retrieving user {user_id}: {str(e)}")
        raise DatabaseException(detail="Failed to retrieve user due to database error")


async def get_user_by_username_or_id(db: AsyncSession, identifier: str) -> Optional[UserProfile]:
    """Public profiles are addressable by either the username or the raw user id."""
    try:
        result = await db.execute(
            select(User)
            .where(or_(User.username == identifier, User.id == identifier))
            .limit(1)
        )
        user = result.scalars().first()
        return UserProfile.model_validate(user) if user else None
    except Exception as e:
        user_logger.error(f"Error retrieving user {identifier}: {str(e)}")
        raise DatabaseException(detail="Failed to retrieve user due to database error")


async def is_username_taken(
    db: AsyncSession, username: str, exclude_user_id: Optional[str] = None
) -> bool:
    try:
        result = await db.execute(select(User.id).where(User.username == username).limit(1))
        existing_id = result.scalar_one_or_none()
    except Exception as e:
        user_logger.error(f"Error checking username {username}: {str(e)}")
        raise DatabaseException(detail="Failed to check username due to database error")

    if existing_id is None:
        return False
    return existing_id != exclude_user_id


async def update_username(db: AsyncSession, user_id: str, username: str) -> None:
    try:
        await db.execute(
            update(User)
            .where(User.id == user_id)
            .values(username=username, updated_at=utc_now())
        )
        await db.commit()
    except Exception as e:
        await db.rollback()
        user_logger.error(f"Error updating username for user {user_id}: {str(e)}")
        raise DatabaseException(detail="Failed to update username due to database error")
