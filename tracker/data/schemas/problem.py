from typing import Dict, List, Optional

from sqlalchemy import Column
from sqlalchemy import Enum as SQLEnum
from sqlmodel import Field, SQLModel

from tracker.data.schemas.base import ApiModel
from tracker.data.schemas.enums import Platform, ProblemStatus, enum_values


class Phase(SQLModel, table=True):
    """A rating band of the ladder, covering a contiguous range of problem numbers."""

    __tablename__ = "phases"

    id: int = Field(primary_key=True)
    name: str = Field(nullable=False)
    description: Optional[str] = Field(default=None, nullable=True)
    target_rating_start: Optional[int] = Field(default=None, nullable=True)
    target_rating_end: Optional[int] = Field(default=None, nullable=True)
    focus: Optional[str] = Field(default=None, nullable=True)
    problem_start: int = Field(nullable=False)
    problem_end: int = Field(nullable=False)


class Problem(SQLModel, table=True):
    __tablename__ = "problems"

    id: Optional[int] = Field(default=None, primary_key=True)
    number: int = Field(nullable=False, unique=True, index=True)
    platform: Platform = Field(
        sa_column=Column(
            SQLEnum(Platform, name="platform", values_callable=enum_values),
            nullable=False,
        )
    )
    name: str = Field(nullable=False)
    url: str = Field(nullable=False)
    phase_id: int = Field(foreign_key="phases.id", nullable=False, index=True)
    topic: str = Field(nullable=False)
    is_starred: bool = Field(default=False)
    note: Optional[str] = Field(default=None, nullable=True)


class PhaseResponse(ApiModel):
    id: int
    name: str
    description: Optional[str] = None
    target_rating_start: Optional[int] = None
    target_rating_end: Optional[int] = None
    focus: Optional[str] = None
    problem_start: int
    problem_end: int


class PhaseWithProgress(PhaseResponse):
    total_problems: int
    solved_count: int
    progress_percentage: int


class PhaseCount(ApiModel):
    phase_id: int
    count: int


class PhaseSummary(ApiModel):
    phases: List[PhaseResponse]
    total_problems: int
    phase_counts: Dict[int, int]


class PhaseSummaryResponse(ApiModel):
    phases: List[PhaseResponse]
    total_problems: int
    phase_counts: List[PhaseCount]


class ProblemResponse(ApiModel):
    id: int
    number: int
    platform: Platform
    name: str
    url: str
    phase_id: int
    topic: str
    is_starred: bool
    note: Optional[str] = None


class ProblemWithUserData(ProblemResponse):
    user_status: ProblemStatus = ProblemStatus.UNTOUCHED
    is_favorite: bool = False


class ProblemListResponse(ApiModel):
    problems: List[ProblemWithUserData]
