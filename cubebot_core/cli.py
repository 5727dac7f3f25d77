from __future__ import annotations

import argparse
import sys
from typing import Dict, List, Optional, TextIO

from .actuation import SimulatedSink, drive
from .config import RunConfig, setup_logging
from .errors import CubeError, TranslationError, ValidationError
from .facelets import FACE_NAMES, FACES, Color, parse_color
from .moves import apply_moves, format_actuations, split_moves
from .runner import solve_cube, state_from_faces
from .solver_cli import ExternalSolver, Solver


def _expand(token: str) -> List[str]:
    """A token is one color, or several one-letter codes run together ("wwr")."""
    if parse_color(token) is not Color.UNKNOWN or len(token) == 1:
        return [token]
    if all(parse_color(ch) is not Color.UNKNOWN for ch in token):
        return list(token)
    return [token]


def read_face(face: str, reader: TextIO, out: TextIO) -> str:
    """Prompt until nine colors for ``face`` were typed; extra input on the last line is dropped."""
    out.write(f"\n  {FACE_NAMES[face]}: ")
    out.flush()
    pieces: List[str] = []
    while len(pieces) < 9:
        line = reader.readline()
        if not line:
            raise ValidationError(f"face {face}: input ended after {len(pieces)} colors", face=face)
        for tok in line.split():
            for piece in _expand(tok):
                if len(pieces) == 9:
                    out.write("WARNING: read 9 pieces already, discards rest of the input line.\n")
                    break
                pieces.append(piece)
        if len(pieces) < 9:
            out.write(f"{9 - len(pieces)} remain> ")
            out.flush()
    return ' '.join(pieces)


def _parse_face_args(values: List[str]) -> Dict[str, str]:
    faces: Dict[str, str] = {}
    for item in values:
        if '=' not in item:
            raise ValidationError(f"--face expects LETTER=COLORS, got {item!r}")
        k, v = item.split('=', 1)
        faces[k.strip().upper()] = v
    return faces


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rubik's cube solver for a flip/turn/spin rig")
    parser.add_argument('--solver', default=None, help="Path to the Kociemba two-phase solver binary")
    parser.add_argument('--timeout', type=float, default=None, help='Seconds to wait for the solver')
    parser.add_argument('--face', action='append', default=[], metavar='X=COLORS',
                        help='Face colors, e.g. U=yyoyygbwo (repeat for all six faces); prompts when omitted')
    parser.add_argument('--init-moves', default='', help='Comma-separated moves to apply and show, for testing only')
    parser.add_argument('--simulate', action='store_true', help='Replay the actuation on a simulated cube')
    parser.add_argument('-v', '--verbose', action='store_true', help='Print the cube for each step')
    parser.add_argument('--debug', action='store_true', help='Also print every flip and turn')
    return parser


def main(argv: Optional[List[str]] = None, solver: Optional[Solver] = None,
         stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> int:
    args = build_parser().parse_args(argv)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    config = RunConfig.from_env().with_overrides(
        solver_exe=args.solver,
        solver_timeout=args.timeout,
        verbose=args.verbose or None,
        debug=args.debug or None,
    )
    setup_logging(config, stream=stdout)

    try:
        if args.face:
            faces = _parse_face_args(args.face)
        else:
            print('Please set colors of each pieces on each face.', file=stdout)
            print('Colors are: White Red Green Blue Yellow Orange, or w r g b y o.', file=stdout)
            print('(input 9 whitespace-separated colors for each face):', file=stdout)
            faces = {face: read_face(face, stdin, stdout) for face in FACES}
        state = state_from_faces(faces)
    except ValidationError as e:
        print(f'error: {e}', file=stdout)
        return 2

    print('\n\nINPUT:', file=stdout)
    print(state.pretty(), file=stdout)

    if args.init_moves:
        print('-' * 54, file=stdout)
        print('INITIAL MOVES:', file=stdout)
        for i, m in enumerate(split_moves(args.init_moves, sep=',')):
            slot = state.calibration.physical(m[0]) if m[0] in FACES else "?"
            print(f"\nmove={m} (->{slot}{m[1:]}):", file=stdout)
            print(f'calibs: {state.calibration}', file=stdout)
            try:
                tokens = apply_moves(state, [m], config)
            except TranslationError as e:
                # apply_moves only saw this one move; report its place in the whole list
                err = TranslationError(i, e.token, e.reason, e.emitted)
                print(f'error: {err}', file=stdout)
                return 255
            print(format_actuations(tokens), file=stdout)
            print(state.pretty(), file=stdout)
        return 0

    solver = solver or ExternalSolver.from_config(config)
    start = state.copy()
    try:
        outcome = solve_cube(state, solver, config)
    except CubeError as e:
        print(f'error: {e}', file=stdout)
        return 255

    print('-' * 54, file=stdout)
    print(f"SOLUTION: step={len(outcome.moves)}: {' '.join(outcome.moves)}", file=stdout)
    print(f'ACTUATION: {format_actuations(outcome.actuations)}', file=stdout)
    if not config.verbose:
        print(state.pretty(), file=stdout)

    if args.simulate:
        sim = SimulatedSink(start, show=config.verbose)
        n = drive(outcome.actuations, sim)
        verdict = 'solved' if sim.state.is_solved() else 'NOT solved'
        print(f'simulated {n} actuations: cube {verdict}', file=stdout)

    print('\nDONE', file=stdout)
    return 0


if __name__ == '__main__':
    sys.exit(main())
