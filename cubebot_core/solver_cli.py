from __future__ import annotations

import logging
import os
import shutil
import subprocess
from typing import Callable, List, Optional, Protocol

from .errors import ExternalToolError, SolverTimeoutError
from .moves import split_moves
from .scramble import validate_scramble

logger = logging.getLogger(__name__)

RunProc = Callable[[str, str, Optional[float]], str]


class Solver(Protocol):
    """Anything that turns a 54-letter facelet string into an algebraic move list."""

    def solve(self, scramble: str) -> List[str]:
        ...


def _find_solver_exe(explicit: Optional[str] = None) -> Optional[str]:
    """
    Resolve the two-phase solver binary.
    Order:
    1) An explicit path (from --solver / RunConfig.solver_exe)
    2) CUBEBOT_SOLVER_EXE
    3) Common build outputs relative to the working directory and the codebase
    4) PATH lookup (kociemba[.exe])
    """

    def _ok(path: str) -> bool:
        return os.path.isfile(path) and os.access(path, os.X_OK)

    for label, p in (('explicit', explicit), ('CUBEBOT_SOLVER_EXE', os.getenv('CUBEBOT_SOLVER_EXE'))):
        if not p:
            continue
        if _ok(p):
            logger.debug('solver: using %s=%s', label, p)
            return p
        logger.debug('solver: %s set but not executable: %s', label, p)

    base = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    candidates = []
    for root in (os.getcwd(), base):
        candidates.extend([
            os.path.join(root, 'kociemba', 'bin', 'kociemba'),
            os.path.join(root, 'kociemba', 'bin', 'kociemba.exe'),
            os.path.join(root, 'bin', 'kociemba'),
        ])
    for p in candidates:
        if _ok(p):
            logger.debug('solver: found candidate %s', p)
            return p

    for name in ('kociemba', 'kociemba.exe'):
        found = shutil.which(name)
        if found:
            logger.debug('solver: found in PATH: %s', found)
            return found

    logger.debug('solver: resolution failed; cwd=%s', os.getcwd())
    return None


def _run_solver_default(exe: str, scramble: str, timeout: Optional[float] = None) -> str:
    """Run ``<exe> <scramble>`` and return its trimmed stdout; kills the process on timeout."""
    try:
        proc = subprocess.run([exe, scramble], capture_output=True, text=True, timeout=timeout, check=False)
    except subprocess.TimeoutExpired as e:
        raise SolverTimeoutError(f'solver {exe} timed out after {timeout}s', exe=exe) from e
    except OSError as e:
        raise ExternalToolError(f'failed to run {exe!r}: {e}', exe=exe) from e
    out = (proc.stdout or '').strip()
    if proc.returncode != 0:
        err = (proc.stderr or '').strip() or out
        raise ExternalToolError(f'solver {exe} exited with status {proc.returncode}: {err}', exe=exe, output=out)
    return out


def parse_solution(line: str) -> List[str]:
    """
    Split solver stdout into algebraic tokens.
    Empty output is an empty solution (the cube is already solved). Output the
    solver uses to report an error raises ExternalToolError. Token syntax is
    not checked here; the apply loop reports malformed tokens itself.
    """
    text = (line or '').strip()
    if text.lower().startswith('error'):
        raise ExternalToolError(f'solver reported: {text}', output=text)
    return split_moves(text)


def solve_impl(
    scramble: str,
    *,
    exe: Optional[str] = None,
    timeout: Optional[float] = None,
    find_exe: Optional[Callable[[Optional[str]], Optional[str]]] = None,
    run_proc: Optional[RunProc] = None,
) -> List[str]:
    """Canonical solver call: resolve the binary, run it on ``scramble``, parse the move list."""
    validate_scramble(scramble)
    find_exe = find_exe or _find_solver_exe
    run_proc = run_proc or _run_solver_default

    resolved = find_exe(exe)
    if not resolved:
        raise ExternalToolError('solver executable not found. Build it and/or set CUBEBOT_SOLVER_EXE.', exe=exe)
    logger.info('exec: %s %s', resolved, scramble)
    line = run_proc(resolved, scramble, timeout)
    moves = parse_solution(line)
    logger.info('solution: step=%d: %s', len(moves), ' '.join(moves))
    return moves


class ExternalSolver:
    """Solver backed by the two-phase binary; the lookup and process hooks can be swapped for tests."""

    def __init__(
        self,
        exe: Optional[str] = None,
        timeout: Optional[float] = None,
        find_exe: Optional[Callable[[Optional[str]], Optional[str]]] = None,
        run_proc: Optional[RunProc] = None,
    ):
        self.exe = exe
        self.timeout = timeout
        self.find_exe = find_exe
        self.run_proc = run_proc

    @classmethod
    def from_config(cls, config) -> 'ExternalSolver':
        return cls(exe=config.solver_exe, timeout=config.solver_timeout)

    def solve(self, scramble: str) -> List[str]:
        return solve_impl(
            scramble,
            exe=self.exe,
            timeout=self.timeout,
            find_exe=self.find_exe,
            run_proc=self.run_proc,
        )
