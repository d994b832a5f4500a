from .api import ProgressApiClient, ProgressApiError
from .storage import MemorySessionStorage, RedisSessionStorage, SessionStorage
from .store import (
    ProblemStore,
    StoreSnapshot,
    create_problem_store,
    favorite_tag,
    status_tag,
)

__all__ = [
    "ProgressApiClient",
    "ProgressApiError",
    "SessionStorage",
    "MemorySessionStorage",
    "RedisSessionStorage",
    "ProblemStore",
    "StoreSnapshot",
    "create_problem_store",
    "status_tag",
    "favorite_tag",
]
