from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.business.services import CurrentUser, get_current_user, get_history_page_service
from tracker.config import logger
from tracker.data.repositories import get_session
from tracker.data.schemas import HistoryPage
from tracker.errors import AppException, DatabaseException
from tracker.presentation.cache import apply_cache_headers

history_logger = logger.getChild("history")

router = APIRouter(prefix="/history", tags=["history"])


@router.get("", response_model=HistoryPage)
async def get_history(
    response: Response,
    page: int = Query(1),
    db: AsyncSession = Depends(get_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Get a page of the caller's status history, newest first.

    Args:
        page: 1-based page number; values outside the reachable range are clamped

    Returns:
        History page with pagination metadata
    """
    history_logger.info(f"History request for user {current_user.id}, page {page}")

    try:
        history_page = await get_history_page_service(db, current_user.id, page)
    except AppException:
        raise
    except Exception as e:
        history_logger.error(f"Unexpected error during history request: {str(e)}")
        raise DatabaseException(detail="An unexpected error occurred")

    apply_cache_headers(response, "private")
    return history_page
