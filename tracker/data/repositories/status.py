"""
Queries over the current status rows and their append-only history.

Write helpers here only stage changes on the session. The caller owns the
transaction so that a status row and its history entry commit together.
"""
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import and_, delete, func, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.config import logger
from tracker.data.schemas import (
    Problem,
    ProblemStatus,
    StatusEntry,
    StatusHistory,
    UserProblem,
)
from tracker.errors import DatabaseException

status_logger = logger.getChild("status_repository")

UPSERT_INSERTS = {"postgresql": postgresql_insert, "sqlite": sqlite_insert}


def _user_problem_clause(user_id: str, problem_id: int):
    return and_(UserProblem.user_id == user_id, UserProblem.problem_id == problem_id)


async def get_user_problem_status(
    db: AsyncSession, user_id: str, problem_id: int
) -> Optional[ProblemStatus]:
    """Current stored status, or None when the user has no row for the problem."""
    try:
        result = await db.execute(
            select(UserProblem.status).where(_user_problem_clause(user_id, problem_id))
        )
        return result.scalar_one_or_none()
    except Exception as e:
        status_logger.error(
            f"Failed to read status for user {user_id}, problem {problem_id}: {str(e)}"
        )
        raise DatabaseException(detail="Failed to retrieve problem status")


async def upsert_status(
    db: AsyncSession,
    user_id: str,
    problem_id: int,
    status: ProblemStatus,
    now: datetime,
) -> None:
    """Insert the row or overwrite its status; concurrent first writes cannot collide."""
    dialect = db.get_bind().dialect.name
    insert = UPSERT_INSERTS.get(dialect)
    if insert is None:
        raise DatabaseException(detail=f"Status upsert is not supported on {dialect}")

    statement = insert(UserProblem).values(
        user_id=user_id,
        problem_id=problem_id,
        status=status,
        updated_at=now,
    )
    statement = statement.on_conflict_do_update(
        index_elements=[UserProblem.user_id, UserProblem.problem_id],
        set_={
            "status": statement.excluded.status,
            "updated_at": statement.excluded.updated_at,
        },
    )
    await db.execute(statement)


async def delete_status(db: AsyncSession, user_id: str, problem_id: int) -> int:
    """Remove the row, returning how many rows were deleted (0 or 1)."""
    result = await db.execute(
        delete(UserProblem).where(_user_problem_clause(user_id, problem_id))
    )
    return result.rowcount or 0


async def log_status_change(
    db: AsyncSession,
    user_id: str,
    problem_id: int,
    from_status: Optional[ProblemStatus],
    to_status: ProblemStatus,
    changed_at: datetime,
) -> StatusHistory:
    entry = StatusHistory(
        user_id=user_id,
        problem_id=problem_id,
        from_status=from_status,
        to_status=to_status,
        changed_at=changed_at,
    )
    db.add(entry)
    await db.flush()
    return entry


async def get_all_user_statuses(db: AsyncSession, user_id: str) -> List[StatusEntry]:
    try:
        result = await db.execute(
            select(Problem.number, UserProblem.status, UserProblem.updated_at)
            .join(Problem, UserProblem.problem_id == Problem.id)
            .where(UserProblem.user_id == user_id)
            .order_by(Problem.number)
        )
        return [
            StatusEntry(problem_number=number, status=status, updated_at=updated_at)
            for number, status, updated_at in result.all()
        ]
    except Exception as e:
        status_logger.error(f"Failed to list statuses for user {user_id}: {str(e)}")
        raise DatabaseException(detail="Failed to retrieve statuses")


async def get_status_counts_for_user(
    db: AsyncSession, user_id: str
) -> Dict[ProblemStatus, int]:
    try:
        result = await db.execute(
            select(UserProblem.status, func.count())
            .where(UserProblem.user_id == user_id)
            .group_by(UserProblem.status)
        )
        return {ProblemStatus(status): count for status, count in result.all()}
    except Exception as e:
        status_logger.error(f"Failed to count statuses for user {user_id}: {str(e)}")
        raise DatabaseException(detail="Failed to retrieve status counts")


async def get_solved_by_phase_for_user(db: AsyncSession, user_id: str) -> Dict[int, int]:
    try:
        result = await db.execute(
            select(Problem.phase_id, func.count())
            .select_from(UserProblem)
            .join(Problem, UserProblem.problem_id == Problem.id)
            .where(
                UserProblem.user_id == user_id,
                UserProblem.status == ProblemStatus.SOLVED,
            )
            .group_by(Problem.phase_id)
        )
        return {phase_id: count for phase_id, count in result.all()}
    except Exception as e:
        status_logger.error(f"Failed to count solved by phase for user {user_id}: {str(e)}")
        raise DatabaseException(detail="Failed to retrieve solved counts")


async def get_user_statuses_for_problems(
    db: AsyncSession, user_id: str, problem_ids: List[int]
) -> Dict[int, ProblemStatus]:
    if not problem_ids:
        return {}
    try:
        result = await db.execute(
            select(UserProblem.problem_id, UserProblem.status).where(
                UserProblem.user_id == user_id,
                UserProblem.problem_id.in_(problem_ids),
            )
        )
        return {problem_id: status for problem_id, status in result.all()}
    except Exception as e:
        status_logger.error(f"Failed to read statuses for user {user_id}: {str(e)}")
        raise DatabaseException(detail="Failed to retrieve statuses")
