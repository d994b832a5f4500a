from .favorites import router as favorites_router
from .history import router as history_router
from .init import router as init_router
from .problem import phase_router, problem_router
from .stats import router as stats_router
from .status import router as status_router
from .user import router as user_router

__all__ = [
    "status_router",
    "history_router",
    "favorites_router",
    "problem_router",
    "phase_router",
    "stats_router",
    "user_router",
    "init_router",
]
