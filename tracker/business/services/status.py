from typing import List, Union

from sqlalchemy.ext.asyncio import AsyncSession

from tracker.config import logger
from tracker.data.repositories.problem import find_problem_by_number
from tracker.data.repositories.status import (
    delete_status,
    get_all_user_statuses,
    get_user_problem_status,
    log_status_change,
    upsert_status,
)
from tracker.data.schemas import (
    ProblemStatus,
    StatusEntry,
    StatusUpdateResult,
    is_valid_status,
    utc_now,
)
from tracker.errors import (
    BadRequestException,
    DatabaseException,
    ResourceNotFoundException,
)

status_logger = logger.getChild("status")


async def update_status_service(
    db: AsyncSession,
    user_id: str,
    problem_number: int,
    status: Union[ProblemStatus, str],
) -> StatusUpdateResult:
    """
    Move one of the user's problems to a new status.

    The status row and its history entry are written in the same transaction.
    A transition to the stored status is a no-op and leaves no history entry.
    Moving back to untouched deletes the status row.

    Args:
        db: Database session, owned by the request
        user_id: ID of the authenticated user
        problem_number: Ladder number of the problem
        status: Requested status value

    Returns:
        The new status together with the status stored before the call
    """
    if not is_valid_status(status):
        status_logger.warning(f"Rejected status value {status!r} for user {user_id}")
        raise BadRequestException(detail="Invalid status")
    new_status = ProblemStatus(status)

    problem = await find_problem_by_number(db, problem_number)
    if not problem:
        status_logger.warning(f"Status update for unknown problem #{problem_number}")
        raise ResourceNotFoundException(detail="Problem not found")

    current_status = await get_user_problem_status(db, user_id, problem.id)
    previous_status = current_status or ProblemStatus.UNTOUCHED

    if previous_status == new_status:
        status_logger.info(
            f"Status unchanged for user {user_id}, problem #{problem_number}: {new_status.value}"
        )
        return StatusUpdateResult(
            problem_number=problem_number,
            status=new_status,
            previous_status=previous_status,
        )

    now = utc_now()
    try:
        if new_status == ProblemStatus.UNTOUCHED:
            await delete_status(db, user_id, problem.id)
        else:
            await upsert_status(db, user_id, problem.id, new_status, now)
        await log_status_change(db, user_id, problem.id, current_status, new_status, now)
        await db.commit()
    except Exception as e:
        await db.rollback()
        status_logger.error(
            f"Status update failed for user {user_id}, problem #{problem_number}: {str(e)}"
        )
        raise DatabaseException(detail="Failed to update status")

    status_logger.info(
        f"Status changed for user {user_id}, problem #{problem_number}: "
        f"{previous_status.value} -> {new_status.value}"
    )
    return StatusUpdateResult(
        problem_number=problem_number,
        status=new_status,
        previous_status=previous_status,
    )


async def get_all_statuses_service(db: AsyncSession, user_id: str) -> List[StatusEntry]:
    statuses = await get_all_user_statuses(db, user_id)
    status_logger.info(f"Retrieved {len(statuses)} statuses for user {user_id}")
    return statuses
