from datetime import datetime
from typing import List, Optional

from pydantic import Field as PydanticField
from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from tracker.data.schemas.base import ApiModel, UtcDatetime, timestamp_column, utc_now
from tracker.data.schemas.problem import ProblemWithUserData


class UserFavorite(SQLModel, table=True):
    __tablename__ = "user_favorites"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "problem_id", name="user_favorites_user_id_problem_id_unique"
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", nullable=False, index=True)
    problem_id: int = Field(foreign_key="problems.id", nullable=False)
    created_at: datetime = Field(default_factory=utc_now, sa_column=timestamp_column())


class FavoriteProblem(ProblemWithUserData):
    favorited_at: UtcDatetime
    is_favorite: bool = True


class FavoriteRequest(ApiModel):
    problem_id: int = PydanticField(..., gt=0, examples=[7])


class FavoriteToggleResult(ApiModel):
    problem_id: int
    is_favorite: bool


class FavoriteToggleResponse(FavoriteToggleResult):
    message: str


class FavoriteListResponse(ApiModel):
    favorites: List[FavoriteProblem]
