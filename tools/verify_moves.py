from __future__ import annotations

import argparse
import os
import sys
from typing import List

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from robot import FACES, CubeState, apply_moves, format_actuations  # type: ignore

SUFFIXES = ('', '2', "'")


def all_moves() -> List[str]:
    return [f + s for f in FACES for s in SUFFIXES]


def check_periods(verbose: bool = False) -> int:
    """Apply each of the 18 moves four times from solved; every one must come back solved."""
    failures = 0
    for move in all_moves():
        state = CubeState.solved()
        tokens = apply_moves(state, [move] * 4)
        ok = state.is_solved()
        if not ok:
            failures += 1
        if verbose or not ok:
            print(f"{move:3s} x4 -> {'ok' if ok else 'FAILED'} {format_actuations(tokens)}")
    return failures


def check_commutator(times: int = 6) -> bool:
    state = CubeState.solved()
    apply_moves(state, ["R", "U", "R'", "U'"] * times)
    return state.is_solved()


def main() -> None:
    ap = argparse.ArgumentParser(description="Check the reorientation table against the cube model")
    ap.add_argument('-v', '--verbose', action='store_true', help='Print every move, not only failures')
    args = ap.parse_args()

    failures = check_periods(args.verbose)
    comm_ok = check_commutator()
    print(f"period-4 failures: {failures}/18")
    print(f"(R U R' U')^6 -> {'solved' if comm_ok else 'NOT solved'}")
    sys.exit(0 if failures == 0 and comm_ok else 1)


if __name__ == '__main__':
    main()
