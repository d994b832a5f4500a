from .base import ApiModel, UtcDatetime, as_utc, utc_now
from .enums import Platform, ProblemStatus, is_valid_status
from .favorite import (
    FavoriteListResponse,
    FavoriteProblem,
    FavoriteRequest,
    FavoriteToggleResponse,
    FavoriteToggleResult,
    UserFavorite,
)
from .problem import (
    Phase,
    PhaseCount,
    PhaseResponse,
    PhaseSummary,
    PhaseSummaryResponse,
    PhaseWithProgress,
    Problem,
    ProblemListResponse,
    ProblemResponse,
    ProblemWithUserData,
)
from .stats import (
    InitFavorite,
    InitResponse,
    InitStatus,
    PhaseSolvedCount,
    PublicProfile,
    StatsResponse,
    StatusCounts,
    UserStats,
    UserStatsSummary,
)
from .status import (
    HistoryEntry,
    HistoryPage,
    StatusEntry,
    StatusHistory,
    StatusListResponse,
    StatusUpdateRequest,
    StatusUpdateResponse,
    StatusUpdateResult,
    UserProblem,
)
from .user import (
    USERNAME_PATTERN,
    User,
    UsernameUpdateRequest,
    UsernameUpdateResponse,
    UserProfile,
)

__all__ = [
    "ApiModel",
    "utc_now",
    "as_utc",
    "UtcDatetime",
    "Platform",
    "ProblemStatus",
    "is_valid_status",
    "User",
    "UserProfile",
    "UsernameUpdateRequest",
    "UsernameUpdateResponse",
    "USERNAME_PATTERN",
    "Phase",
    "PhaseCount",
    "PhaseResponse",
    "PhaseSummary",
    "PhaseSummaryResponse",
    "PhaseWithProgress",
    "Problem",
    "ProblemListResponse",
    "ProblemResponse",
    "ProblemWithUserData",
    "UserProblem",
    "StatusHistory",
    "StatusUpdateRequest",
    "StatusUpdateResult",
    "StatusUpdateResponse",
    "StatusEntry",
    "StatusListResponse",
    "HistoryEntry",
    "HistoryPage",
    "UserFavorite",
    "FavoriteProblem",
    "FavoriteRequest",
    "FavoriteToggleResult",
    "FavoriteToggleResponse",
    "FavoriteListResponse",
    "StatusCounts",
    "UserStats",
    "PhaseSolvedCount",
    "UserStatsSummary",
    "StatsResponse",
    "PublicProfile",
    "InitStatus",
    "InitFavorite",
    "InitResponse",
]
