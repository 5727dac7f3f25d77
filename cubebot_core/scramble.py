from __future__ import annotations

from collections import Counter
from typing import Dict, List, Mapping, Optional

from .errors import ValidationError
from .facelets import FACES, SOLVER_ORDER, Color, Face
from .grid import FaceletGrid
from .state import DEFAULT_SCHEME, CubeState

SCRAMBLE_LENGTH = 54


def encode_scramble(state: CubeState, realign: bool = False) -> str:
    """
    Describe ``state`` as the 54-letter facelet string the solver expects.

    Grids are read in U, R, F, D, L, B order, nine stickers each. A sticker is
    written as the letter of the virtual face whose center has its color, so a
    grid's letters follow the solver's frame rather than the slot it sits in.
    With ``realign`` the cube is first brought back to that frame.
    """
    if realign:
        state = state.realigned()
    inverse = state.calibration.inverse()

    centers = {face: state.grids[face].center for face in FACES}
    if len(set(centers.values())) != 6:
        named = {f: c.name.lower() for f, c in centers.items()}
        raise ValidationError(f'centers must be six distinct colors, got {named}')
    color_to_code: Dict[Color, Face] = {color: inverse[face] for face, color in centers.items()}

    buf: List[str] = []
    for face in SOLVER_ORDER:
        for pos, color in enumerate(state.grids[face].facelets, start=1):
            code = color_to_code.get(color)
            if code is None:
                raise ValidationError(
                    f'face {face}: color {color.name.lower()} at position {pos} matches no center', face=face)
            buf.append(code)
    return ''.join(buf)


def validate_scramble(scramble: str) -> str:
    """Check length, alphabet and letter counts of a facelet string; returns it unchanged."""
    if len(scramble) != SCRAMBLE_LENGTH:
        raise ValidationError(f'scramble must be {SCRAMBLE_LENGTH} characters, got {len(scramble)}')
    bad = sorted(set(scramble) - set(FACES))
    if bad:
        raise ValidationError(f'scramble contains letters outside URFDLB: {"".join(bad)}')
    counts = Counter(scramble)
    wrong = {f: counts.get(f, 0) for f in FACES if counts.get(f, 0) != 9}
    if wrong:
        raise ValidationError(f'each face letter must appear 9 times, got {wrong}')
    return scramble


def decode_scramble(scramble: str, scheme: Optional[Mapping[Face, Color]] = None) -> CubeState:
    """Build a CubeState (home orientation) from a facelet string and a letter-to-color scheme."""
    validate_scramble(scramble)
    scheme = scheme or DEFAULT_SCHEME
    grids: Dict[Face, FaceletGrid] = {}
    for n, face in enumerate(SOLVER_ORDER):
        chunk = scramble[n * 9:(n + 1) * 9]
        grids[face] = FaceletGrid([scheme[letter] for letter in chunk])
    return CubeState(grids)
