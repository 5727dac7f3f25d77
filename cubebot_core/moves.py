from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from aenum import Enum

from .config import RunConfig
from .errors import TranslationError
from .facelets import BACK, DOWN, FACES, FRONT, LEFT, RIGHT, UP, Face
from .state import CubeState

logger = logging.getLogger(__name__)


class Actuation(Enum):
    """Mechanically atomic rig actions; the value is the wire spelling."""
    FLIP = 'flip'
    TURN = 'turn'
    TURN2 = 'turn2'
    TURN_REVERSE = "turn'"
    D = 'D'
    D2 = 'D2'
    D_REVERSE = "D'"

    def __str__(self) -> str:
        return self.value


# Whole-cube reorientation that brings the grid in a given physical slot down.
REORIENTATIONS: Dict[Face, Tuple[Actuation, ...]] = {
    DOWN: (),
    BACK: (Actuation.FLIP,),
    UP: (Actuation.FLIP, Actuation.FLIP),
    LEFT: (Actuation.TURN, Actuation.FLIP),
    RIGHT: (Actuation.TURN_REVERSE, Actuation.FLIP),
    FRONT: (Actuation.TURN2, Actuation.FLIP),
}

SPINS: Dict[int, Actuation] = {1: Actuation.D, 2: Actuation.D2, 3: Actuation.D_REVERSE}
SUFFIXES: Dict[str, int] = {'': 1, '2': 2, "'": 3}


@dataclass(frozen=True)
class Move:
    """An algebraic move in the solver's frame: ``spins`` clockwise quarter turns of ``face``."""
    face: Face
    spins: int  # 1, 2 or 3

    def __str__(self) -> str:
        suffix = {1: '', 2: '2', 3: "'"}[self.spins]
        return f'{self.face}{suffix}'

    def inverse(self) -> 'Move':
        return Move(self.face, 4 - self.spins)


def parse_move(token: str, index: int = 0) -> Move:
    """Parse 'R', 'R2' or "R'" into a Move; anything else raises TranslationError."""
    text = token.strip()
    if not text:
        raise TranslationError(index, token, 'empty move')
    face, suffix = text[0], text[1:]
    if face not in FACES:
        raise TranslationError(index, token, f'unknown face {face!r}')
    if suffix not in SUFFIXES:
        raise TranslationError(index, token, f'malformed suffix {suffix!r}')
    return Move(face, SUFFIXES[suffix])


def perform(state: CubeState, token: Actuation) -> CubeState:
    """Carry out one actuation on the model, exactly as the rig would."""
    if token is Actuation.FLIP:
        state.flip()
    elif token is Actuation.TURN:
        state.turn(1)
    elif token is Actuation.TURN2:
        state.turn(2)
    elif token is Actuation.TURN_REVERSE:
        state.turn(3)
    else:
        for _ in range(_spin_count(token)):
            state.spin_down()
    return state


def _spin_count(token: Actuation) -> int:
    for n, spin in SPINS.items():
        if spin is token:
            return n
    raise ValueError(f'{token} is not a Down spin')


def translate_move(state: CubeState, move: Move, debug: bool = False) -> List[Actuation]:
    """
    Bring the grid the solver calls ``move.face`` to the bottom, then spin it.

    The calibration is consulted once, before reorienting; every flip/turn
    updates it as it is performed.
    """
    slot = state.calibration.physical(move.face)
    tokens: List[Actuation] = []
    for token in REORIENTATIONS[slot]:
        perform(state, token)
        tokens.append(token)
        if debug:
            logger.debug('%s:\n%s', token, state.pretty())
    spin = SPINS[move.spins]
    perform(state, spin)
    tokens.append(spin)
    return tokens


def apply_moves(state: CubeState, moves: Sequence[str], config: Optional[RunConfig] = None) -> List[Actuation]:
    """
    Apply a solver move list to ``state`` in order and return the actuation stream.

    Blank tokens are skipped. The first malformed token raises TranslationError
    with its index and the actuation already emitted; earlier moves stay
    applied, so callers that need atomicity should pass ``state.copy()``.
    """
    config = config or RunConfig()
    out: List[Actuation] = []
    for i, raw in enumerate(moves):
        if not raw.strip():
            continue
        if config.verbose:
            logger.info('calibration: %s', state.calibration)
        try:
            move = parse_move(raw, i)
        except TranslationError as e:
            e.emitted = list(out)
            logger.error('cannot translate move #%d %r: %s', i, raw, e.reason)
            raise
        tokens = translate_move(state, move, debug=config.debug)
        out.extend(tokens)
        if config.verbose:
            logger.info('step[%d]: move=%s %s\n%s', i + 1, move, format_actuations(tokens), state.pretty())
    return out


def format_actuations(tokens: Iterable[Actuation]) -> str:
    return '[' + ' '.join(str(t) for t in tokens) + ']'


def split_moves(text: str, sep: str = ' ') -> List[str]:
    """Split a move list on ``sep``, dropping empty tokens from repeated or trailing separators."""
    return [t.strip() for t in (text or '').split(sep) if t.strip()]
