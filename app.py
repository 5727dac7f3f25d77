from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, jsonify, request

from cubebot_core.config import LOGGER_NAMES
from robot import (
    CubeError,
    ExternalToolError,
    PatchableSolver,
    RunConfig,
    SolveOutcome,
    SolverTimeoutError,
    TranslationError,
    ValidationError,
    format_outcome,
    setup_logging,
    solve_cube,
    state_from_faces,
)

logger = logging.getLogger(__name__)

FACE_KEYS = ('U', 'L', 'F', 'R', 'B', 'D')

CONFIG = RunConfig.from_env()
SOLVER = PatchableSolver(CONFIG.solver_exe, CONFIG.solver_timeout)

app = Flask(__name__)


def _status_for(err: CubeError) -> int:
    if isinstance(err, ValidationError):
        return 400
    if isinstance(err, SolverTimeoutError):
        return 504
    if isinstance(err, ExternalToolError):
        return 502
    if isinstance(err, TranslationError):
        return 422
    return 500


def _error_json(err: CubeError) -> Dict[str, Any]:
    body: Dict[str, Any] = {"ok": False, "error": str(err), "kind": type(err).__name__}
    if isinstance(err, ValidationError) and err.face:
        body["face"] = err.face
    if isinstance(err, TranslationError):
        body["index"] = err.index
        body["token"] = err.token
        body["emitted"] = [str(t) for t in err.emitted]
    return body


def _solve_faces(faces: Dict[str, str]) -> SolveOutcome:
    # Fresh state per request; nothing is shared between requests but the solver hook.
    state = state_from_faces(faces)
    logger.debug("input cube:\n%s", state.pretty())
    return solve_cube(state, SOLVER, CONFIG)


def _outcome_to_json(outcome: SolveOutcome) -> Dict[str, Any]:
    return {
        "ok": True,
        "scramble": outcome.scramble,
        "steps": len(outcome.moves),
        "moves": list(outcome.moves),
        "actuations": [str(t) for t in outcome.actuations],
    }


@app.get("/cube")
def cube() -> Any:
    logger.info("%s: %s %s", request.remote_addr, request.method, request.path)
    faces: Dict[str, str] = {}
    for k in FACE_KEYS:
        v = request.args.get(k)
        if v is None:
            msg = f"face {k} must contain only [wrboyg], and must be 9 chars."
            logger.error("invalid arg %s=%s", k, v)
            return msg, 400, {"Content-Type": "text/plain; charset=utf-8"}
        faces[k] = v
    try:
        outcome = _solve_faces(faces)
    except CubeError as e:
        logger.error("request failed: %s", e)
        return f"ERROR: {e}", _status_for(e), {"Content-Type": "text/plain; charset=utf-8"}
    logger.info("SUCCEEDED: move: %s", [str(t) for t in outcome.actuations])
    return format_outcome(outcome), 200, {"Content-Type": "text/plain; charset=utf-8"}


@app.post("/api/solve")
def api_solve() -> Any:
    body = request.get_json(force=True, silent=True)
    faces_in = body.get("faces") if isinstance(body, dict) else None
    if not isinstance(faces_in, dict):
        return jsonify({"ok": False, "error": "faces required"}), 400
    faces: Dict[str, str] = {}
    for k, v in faces_in.items():
        if not isinstance(v, str):
            face = str(k).strip().upper()
            return jsonify({"ok": False, "error": f"face {face} must be a string of 9 colors",
                            "kind": "ValidationError", "face": face}), 400
        faces[str(k)] = v
    try:
        outcome = _solve_faces(faces)
    except CubeError as e:
        logger.error("request failed: %s", e)
        return jsonify(_error_json(e)), _status_for(e)
    return jsonify(_outcome_to_json(outcome))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rubik's cube solver server")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8080, help="http server port")
    parser.add_argument("--solver", default=None, help="Path to the Kociemba two-phase solver binary")
    parser.add_argument("--timeout", type=float, default=None, help="Seconds to wait for the solver")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log the cube for each step")
    parser.add_argument("--debug", action="store_true", help="debug mode")
    return parser


def configure(argv: Optional[List[str]] = None) -> Tuple[RunConfig, argparse.Namespace]:
    """Rebuild the module config and solver from the command line."""
    global CONFIG, SOLVER
    args = build_parser().parse_args(argv)
    CONFIG = RunConfig.from_env().with_overrides(
        solver_exe=args.solver,
        solver_timeout=args.timeout,
        verbose=args.verbose or None,
        debug=args.debug or None,
    )
    SOLVER = PatchableSolver(CONFIG.solver_exe, CONFIG.solver_timeout)
    return CONFIG, args


def main(argv: Optional[List[str]] = None) -> None:
    config, args = configure(argv)
    setup_logging(config, names=LOGGER_NAMES + (__name__,))
    logger.info("Starting http server on port %d", args.port)
    app.run(host=args.host, port=args.port, debug=False)


if __name__ == "__main__":
    main()
