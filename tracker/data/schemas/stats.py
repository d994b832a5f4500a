from typing import Dict, List, Optional

from tracker.data.schemas.base import ApiModel, UtcDatetime
from tracker.data.schemas.enums import ProblemStatus
from tracker.data.schemas.problem import PhaseCount, PhaseResponse, PhaseWithProgress, ProblemResponse
from tracker.data.schemas.status import HistoryEntry
from tracker.data.schemas.user import UserProfile


class StatusCounts(ApiModel):
    solved: int = 0
    attempting: int = 0
    revisit: int = 0
    skipped: int = 0
    untouched: int = 0


class UserStats(StatusCounts):
    total_problems: int
    progress_percentage: int
    phase_solved: Dict[int, int]
    favorites_count: int


class PhaseSolvedCount(ApiModel):
    phase_id: int
    status: ProblemStatus = ProblemStatus.SOLVED
    count: int


class UserStatsSummary(StatusCounts):
    favorites_count: int
    phase_stats: List[PhaseSolvedCount]


class StatsResponse(ApiModel):
    total_problems: int
    phase_counts: List[PhaseCount]
    user_stats: Optional[UserStatsSummary] = None


class PublicProfile(UserProfile):
    stats: StatusCounts
    phase_solved: Dict[int, int]
    phases: List[PhaseWithProgress]
    progress_percentage: int
    current_phase: int
    target_rating: str


class InitStatus(ApiModel):
    problem_number: int
    problem_id: int
    status: ProblemStatus


class InitFavorite(ApiModel):
    problem_id: int
    favorited_at: UtcDatetime


class InitResponse(ApiModel):
    phases: List[PhaseResponse]
    problems: List[ProblemResponse]
    phase_counts: Dict[int, int]
    total_problems: int
    is_authenticated: bool = False
    user: Optional[UserProfile] = None
    statuses: Optional[List[InitStatus]] = None
    favorites: Optional[List[InitFavorite]] = None
    history: Optional[List[HistoryEntry]] = None
    status_counts: Optional[StatusCounts] = None
    phase_solved: Optional[Dict[int, int]] = None
