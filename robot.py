from __future__ import annotations

# Facade module that re-exports the cubebot core.
# Used by the Flask app, the tools and the tests.
# Single-responsibility modules live under cubebot_core/*.

# Keep subprocess import here so tests can patch robot.subprocess.run
# (the default runner in cubebot_core.solver_cli shares the module).
import subprocess  # noqa: F401
from typing import List, Optional

from cubebot_core.actuation import (  # noqa: F401
    ActuationSink,
    ActuatorDriver,
    RecordingSink,
    SimulatedSink,
    drive,
)
from cubebot_core.calibration import CalibrationMap  # noqa: F401
from cubebot_core.config import RunConfig, setup_logging  # noqa: F401
from cubebot_core.errors import (  # noqa: F401
    ActuatorTimeoutError,
    CubeError,
    ExternalToolError,
    SolverTimeoutError,
    TranslationError,
    ValidationError,
)
from cubebot_core.facelets import (  # noqa: F401
    FACES,
    SOLVER_ORDER,
    Color,
    parse_color,
    parse_face,
    parse_faces,
)
from cubebot_core.grid import FaceletGrid  # noqa: F401
from cubebot_core.moves import (  # noqa: F401
    REORIENTATIONS,
    Actuation,
    Move,
    apply_moves,
    format_actuations,
    parse_move,
    perform,
    split_moves,
    translate_move,
)
from cubebot_core.runner import SolveOutcome, format_outcome, solve_cube, state_from_faces  # noqa: F401
from cubebot_core.scramble import decode_scramble, encode_scramble, validate_scramble  # noqa: F401
from cubebot_core.solver_cli import (  # noqa: F401
    ExternalSolver,
    Solver,
    _find_solver_exe,
    _run_solver_default,
    parse_solution,
    solve_impl,
)
from cubebot_core.state import DEFAULT_SCHEME, CubeState  # noqa: F401


def solve(scramble: str, exe: Optional[str] = None, timeout: Optional[float] = None) -> List[str]:
    # Forward with patchable hooks so tests can stub robot._find_solver_exe / robot.subprocess.run
    return solve_impl(
        scramble,
        exe=exe,
        timeout=timeout,
        find_exe=lambda p: _find_solver_exe(p),
    )


class PatchableSolver:
    """Solver capability that routes through this module's hooks."""

    def __init__(self, exe: Optional[str] = None, timeout: Optional[float] = None):
        self.exe = exe
        self.timeout = timeout

    def solve(self, scramble: str) -> List[str]:
        return solve(scramble, exe=self.exe, timeout=self.timeout)


def main() -> None:
    # CLI driver delegated to cubebot_core.cli
    from cubebot_core.cli import main as _main
    raise SystemExit(_main())


if __name__ == '__main__':
    main()
