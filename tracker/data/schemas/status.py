from datetime import datetime
from typing import List, Optional

from pydantic import Field as PydanticField
from sqlalchemy import Column, UniqueConstraint
from sqlalchemy import Enum as SQLEnum
from sqlmodel import Field, SQLModel

from tracker.data.schemas.base import ApiModel, UtcDatetime, timestamp_column, utc_now
from tracker.data.schemas.enums import Platform, ProblemStatus, enum_values


def _status_column(nullable: bool) -> Column:
    return Column(
        SQLEnum(ProblemStatus, name="problem_status", values_callable=enum_values),
        nullable=nullable,
    )


class UserProblem(SQLModel, table=True):
    """Current status of one problem for one user; no row means untouched."""

    __tablename__ = "user_problems"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "problem_id", name="user_problems_user_id_problem_id_unique"
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", nullable=False, index=True)
    problem_id: int = Field(foreign_key="problems.id", nullable=False)
    status: ProblemStatus = Field(sa_column=_status_column(nullable=False))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=timestamp_column())


class StatusHistory(SQLModel, table=True):
    """Append-only record of a committed status transition."""

    __tablename__ = "status_history"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", nullable=False, index=True)
    problem_id: int = Field(foreign_key="problems.id", nullable=False)
    from_status: Optional[ProblemStatus] = Field(
        default=None, sa_column=_status_column(nullable=True)
    )
    to_status: ProblemStatus = Field(sa_column=_status_column(nullable=False))
    changed_at: datetime = Field(default_factory=utc_now, sa_column=timestamp_column(index=True))


class StatusUpdateRequest(ApiModel):
    problem_number: int = PydanticField(..., gt=0, examples=[42])
    status: ProblemStatus


class StatusUpdateResult(ApiModel):
    problem_number: int
    status: ProblemStatus
    previous_status: ProblemStatus


class StatusUpdateResponse(StatusUpdateResult):
    message: str = "Status updated"


class StatusEntry(ApiModel):
    problem_number: int
    status: ProblemStatus
    updated_at: UtcDatetime


class StatusListResponse(ApiModel):
    statuses: List[StatusEntry]


class HistoryEntry(ApiModel):
    id: int
    problem_id: int
    problem_number: int
    problem_name: str
    problem_url: str
    platform: Platform
    from_status: Optional[ProblemStatus] = None
    to_status: ProblemStatus
    changed_at: UtcDatetime


class HistoryPage(ApiModel):
    entries: List[HistoryEntry]
    page: int
    page_size: int
    total_count: int
    total_pages: int
    has_more: bool
