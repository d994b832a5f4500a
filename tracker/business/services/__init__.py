from .auth_dependency import (
    CurrentUser,
    TokenFromRequest,
    get_current_user,
    get_optional_user,
)
from .auth_util import create_access_token, decode_token, encode_token
from .favorite import (
    add_favorite_service,
    get_favorites_service,
    remove_favorite_service,
)
from .history import get_history_page_service, get_history_service, max_history_page
from .phase import (
    calculate_phases_with_progress,
    determine_current_phase,
    get_phase_summary_service,
    get_problems_service,
    get_problems_with_user_data_service,
    progress_percentage,
)
from .stats import (
    calculate_status_counts,
    create_default_stats,
    get_user_stats_service,
)
from .status import get_all_statuses_service, update_status_service
from .user import (
    get_public_profile_service,
    get_user_profile_service,
    is_valid_username,
    update_username_service,
)

__all__ = [
    "CurrentUser",
    "TokenFromRequest",
    "get_current_user",
    "get_optional_user",
    "create_access_token",
    "decode_token",
    "encode_token",
    "update_status_service",
    "get_all_statuses_service",
    "get_favorites_service",
    "add_favorite_service",
    "remove_favorite_service",
    "get_history_service",
    "get_history_page_service",
    "max_history_page",
    "get_phase_summary_service",
    "get_problems_service",
    "get_problems_with_user_data_service",
    "calculate_phases_with_progress",
    "determine_current_phase",
    "progress_percentage",
    "calculate_status_counts",
    "create_default_stats",
    "get_user_stats_service",
    "get_user_profile_service",
    "update_username_service",
    "get_public_profile_service",
    "is_valid_username",
]
