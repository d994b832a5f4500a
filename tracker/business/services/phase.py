import math
from typing import Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from tracker.config import logger
from tracker.data.repositories.favorite import get_user_favorites_for_problems
from tracker.data.repositories.phase import (
    find_all_phases,
    get_problem_counts_by_phase,
    get_total_problem_count,
)
from tracker.data.repositories.problem import find_all_problems, find_problems_by_phase
from tracker.data.repositories.status import get_user_statuses_for_problems
from tracker.data.schemas import (
    PhaseResponse,
    PhaseSummary,
    PhaseWithProgress,
    ProblemResponse,
    ProblemStatus,
    ProblemWithUserData,
)

phase_logger = logger.getChild("phase")

DEFAULT_TARGET_RATING = 1000


def progress_percentage(solved: int, total: int) -> int:
    return math.floor(solved / total * 100 + 0.5) if total > 0 else 0


async def get_phase_summary_service(db: AsyncSession) -> PhaseSummary:
    """All phases with the total problem count and per-phase counts."""
    phases = await find_all_phases(db)
    total_problems = await get_total_problem_count(db)
    phase_counts = await get_problem_counts_by_phase(db)
    return PhaseSummary(phases=phases, total_problems=total_problems, phase_counts=phase_counts)


async def get_problems_service(
    db: AsyncSession, phase_id: Optional[int] = None
) -> List[ProblemResponse]:
    if phase_id is not None:
        return await find_problems_by_phase(db, phase_id)
    return await find_all_problems(db)


async def get_problems_with_user_data_service(
    db: AsyncSession, problems: List[ProblemResponse], user_id: Optional[str]
) -> List[ProblemWithUserData]:
    """Attach the caller's status and favorite flag; guests get defaults."""
    if not user_id:
        return [ProblemWithUserData(**problem.model_dump()) for problem in problems]

    problem_ids = [problem.id for problem in problems]
    statuses = await get_user_statuses_for_problems(db, user_id, problem_ids)
    favorites = await get_user_favorites_for_problems(db, user_id, problem_ids)
    phase_logger.info(
        f"Enriched {len(problems)} problems for user {user_id}: "
        f"{len(statuses)} statuses, {len(favorites)} favorites"
    )
    return [
        ProblemWithUserData(
            **problem.model_dump(),
            user_status=statuses.get(problem.id, ProblemStatus.UNTOUCHED),
            is_favorite=problem.id in favorites,
        )
        for problem in problems
    ]


def calculate_phases_with_progress(
    phases: List[PhaseResponse],
    phase_counts: Dict[int, int],
    phase_solved: Dict[int, int],
) -> List[PhaseWithProgress]:
    result = []
    for phase in phases:
        total = phase_counts.get(phase.id, 0)
        solved = phase_solved.get(phase.id, 0)
        result.append(
            PhaseWithProgress(
                **phase.model_dump(),
                total_problems=total,
                solved_count=solved,
                progress_percentage=progress_percentage(solved, total),
            )
        )
    return result


def determine_current_phase(
    phases: List[PhaseResponse],
    phase_counts: Dict[int, int],
    phase_solved: Dict[int, int],
) -> Tuple[int, str]:
    """The first phase with unsolved problems, and its target rating label."""
    for phase in phases:
        if phase_solved.get(phase.id, 0) < phase_counts.get(phase.id, 0):
            return phase.id, f"{phase.target_rating_end or DEFAULT_TARGET_RATING}+"
    return 0, f"{DEFAULT_TARGET_RATING}+"
