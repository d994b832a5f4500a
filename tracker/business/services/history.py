import math
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from tracker.config import Config, logger
from tracker.data.repositories.history import (
    get_history_count_for_user,
    get_history_for_user,
)
from tracker.data.schemas import HistoryEntry, HistoryPage

history_logger = logger.getChild("history")


def max_history_page() -> int:
    return math.ceil(Config.HISTORY_MAX_ENTRIES / Config.HISTORY_PAGE_SIZE)


async def get_history_service(
    db: AsyncSession, user_id: str, limit: Optional[int] = None, offset: int = 0
) -> List[HistoryEntry]:
    if limit is None:
        limit = Config.HISTORY_RETAINED_ENTRIES
    limit = min(limit, Config.HISTORY_RETAINED_ENTRIES)
    return await get_history_for_user(db, user_id, limit, offset)


async def get_history_page_service(db: AsyncSession, user_id: str, page: int = 1) -> HistoryPage:
    """
    One page of the user's history, newest first.

    Pages are clamped to [1, max page]; only the most recent
    HISTORY_MAX_ENTRIES entries are reachable through pagination.
    """
    page_size = Config.HISTORY_PAGE_SIZE
    max_page = max_history_page()
    safe_page = min(max(page, 1), max_page)
    offset = (safe_page - 1) * page_size

    entries = await get_history_for_user(db, user_id, page_size, offset)
    total_count = await get_history_count_for_user(db, user_id)

    history_logger.info(
        f"History page {safe_page} for user {user_id}: {len(entries)} of {total_count} entries"
    )
    return HistoryPage(
        entries=entries,
        page=safe_page,
        page_size=page_size,
        total_count=total_count,
        total_pages=min(math.ceil(total_count / page_size), max_page),
        has_more=safe_page < max_page and offset + len(entries) < total_count,
    )
