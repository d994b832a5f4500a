from .database import async_engine, async_session_factory, get_session, init_db
from .favorite import (
    add_favorite,
    get_favorites_count,
    get_favorites_with_details,
    get_user_favorites_for_problems,
    is_favorited,
    remove_favorite,
)
from .history import get_history_count_for_user, get_history_for_user
from .phase import (
    find_all_phases,
    get_problem_counts_by_phase,
    get_total_problem_count,
)
from .problem import (
    find_all_problems,
    find_problem_by_id,
    find_problem_by_number,
    find_problems_by_phase,
)
from .redis import RedisClient, RedisUnavailableError, get_redis_client, redis_client
from .status import (
    delete_status,
    get_all_user_statuses,
    get_solved_by_phase_for_user,
    get_status_counts_for_user,
    get_user_problem_status,
    get_user_statuses_for_problems,
    log_status_change,
    upsert_status,
)
from .user_repository import (
    get_user_by_id,
    get_user_by_username_or_id,
    is_username_taken,
    update_username,
)

__all__ = [
    "async_engine",
    "async_session_factory",
    "get_session",
    "init_db",
    "RedisClient",
    "RedisUnavailableError",
    "redis_client",
    "get_redis_client",
    "find_all_problems",
    "find_problems_by_phase",
    "find_problem_by_number",
    "find_problem_by_id",
    "find_all_phases",
    "get_problem_counts_by_phase",
    "get_total_problem_count",
    "get_user_problem_status",
    "upsert_status",
    "delete_status",
    "log_status_change",
    "get_all_user_statuses",
    "get_status_counts_for_user",
    "get_solved_by_phase_for_user",
    "get_user_statuses_for_problems",
    "get_history_for_user",
    "get_history_count_for_user",
    "get_favorites_count",
    "get_favorites_with_details",
    "get_user_favorites_for_problems",
    "is_favorited",
    "add_favorite",
    "remove_favorite",
    "get_user_by_id",
    "get_user_by_username_or_id",
    "is_username_taken",
    "update_username",
]
