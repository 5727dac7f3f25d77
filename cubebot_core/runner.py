from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional

from .config import RunConfig
from .facelets import parse_faces
from .moves import Actuation, apply_moves, format_actuations
from .scramble import encode_scramble
from .solver_cli import Solver
from .state import CubeState

logger = logging.getLogger(__name__)


@dataclass
class SolveOutcome:
    """Everything one solve request produced."""
    scramble: str
    moves: List[str]
    actuations: List[Actuation]
    state: CubeState


def state_from_faces(faces: Mapping[str, str]) -> CubeState:
    """Parse six face strings keyed by letter into a validated CubeState."""
    return CubeState.from_colors(parse_faces(faces))


def solve_cube(state: CubeState, solver: Solver, config: Optional[RunConfig] = None) -> SolveOutcome:
    """
    Encode ``state``, ask ``solver`` for a solution and translate it.

    ``state`` is advanced move by move. If translation fails half way the
    TranslationError propagates and ``state`` keeps the moves already applied.
    """
    config = config or RunConfig()
    scramble = encode_scramble(state, realign=True)
    moves = solver.solve(scramble)
    actuations = apply_moves(state, moves, config)
    logger.info('move: %s', format_actuations(actuations))
    return SolveOutcome(scramble=scramble, moves=moves, actuations=actuations, state=state)


def format_outcome(outcome: SolveOutcome) -> str:
    return f"OK: step={len(outcome.moves)}: {' '.join(outcome.moves)} {format_actuations(outcome.actuations)}"
