from typing import Dict, List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.config import logger
from tracker.data.schemas import Phase, PhaseResponse, Problem
from tracker.errors import DatabaseException

phase_logger = logger.getChild("phase_repository")


async def find_all_phases(db: AsyncSession) -> List[PhaseResponse]:
    """Get all phases ordered by ID."""
    try:
        result = await db.execute(select(Phase).order_by(Phase.id))
        return [PhaseResponse.model_validate(phase) for phase in result.scalars().all()]
    except Exception as e:
        phase_logger.error(f"Failed to list phases: {str(e)}")
        raise DatabaseException(detail="Failed to retrieve phases")


async def get_problem_counts_by_phase(db: AsyncSession) -> Dict[int, int]:
    """Get problem counts grouped by phase."""
    try:
        result = await db.execute(
            select(Problem.phase_id, func.count()).group_by(Problem.phase_id)
        )
        return {phase_id: count for phase_id, count in result.all()}
    except Exception as e:
        phase_logger.error(f"Failed to count problems by phase: {str(e)}")
        raise DatabaseException(detail="Failed to retrieve phase counts")


async def get_total_problem_count(db: AsyncSession) -> int:
    try:
        result = await db.execute(select(func.count()).select_from(Problem))
        return result.scalar_one()
    except Exception as e:
        phase_logger.error(f"Failed to count problems: {str(e)}")
        raise DatabaseException(detail="Failed to retrieve problem count")
