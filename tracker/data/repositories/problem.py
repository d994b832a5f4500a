from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.config import logger
from tracker.data.schemas import Problem, ProblemResponse
from tracker.errors import DatabaseException

problem_logger = logger.getChild("problem_repository")


async def find_all_problems(db: AsyncSession) -> List[ProblemResponse]:
    """Returns every problem ordered by its ladder number."""
    try:
        result = await db.execute(select(Problem).order_by(Problem.number))
        problems = result.scalars().all()
        return [ProblemResponse.model_validate(problem) for problem in problems]
    except Exception as e:
        problem_logger.error(f"Failed to list problems: {str(e)}")
        raise DatabaseException(detail="Failed to retrieve problems")


async def find_problems_by_phase(db: AsyncSession, phase_id: int) -> List[ProblemResponse]:
    try:
        result = await db.execute(
            select(Problem).where(Problem.phase_id == phase_id).order_by(Problem.number)
        )
        problems = result.scalars().all()
        return [ProblemResponse.model_validate(problem) for problem in problems]
    except Exception as e:
        problem_logger.error(f"Failed to list problems for phase {phase_id}: {str(e)}")
        raise DatabaseException(detail="Failed to retrieve problems")


async def find_problem_by_number(db: AsyncSession, number: int) -> Optional[Problem]:
    try:
        result = await db.execute(select(Problem).where(Problem.number == number))
        return result.scalar_one_or_none()
    except Exception as e:
        problem_logger.error(f"Failed to get problem #{number}: {str(e)}")
        raise DatabaseException(detail="Failed to retrieve problem")


async def find_problem_by_id(db: AsyncSession, problem_id: int) -> Optional[Problem]:
    try:
        return await db.get(Problem, problem_id)
    except Exception as e:
        problem_logger.error(f"Failed to get problem {problem_id}: {str(e)}")
        raise DatabaseException(detail="Failed to retrieve problem")
