from __future__ import annotations

from collections import Counter, deque
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .calibration import FLIP_MOVES, TURN_MOVES, CalibrationMap
from .errors import ValidationError
from .facelets import (
    BACK, DOWN, FACES, FRONT, KNOWN_COLORS, LEFT, RIGHT, UP,
    Color, Face,
)
from .grid import BOTTOM_ROW, FaceletGrid

# Colors of a solved cube held in the home orientation.
DEFAULT_SCHEME: Dict[Face, Color] = {
    UP: Color.WHITE,
    LEFT: Color.GREEN,
    FRONT: Color.BLUE,
    RIGHT: Color.ORANGE,
    BACK: Color.RED,
    DOWN: Color.YELLOW,
}

# Bottom rows travel Front -> Right -> Back -> Left -> Front on a Down spin.
SPIN_MOVES: Dict[Face, Face] = {FRONT: RIGHT, RIGHT: BACK, BACK: LEFT, LEFT: FRONT}


class CubeState:
    """
    Live model of the physical cube: six grids keyed by the slot they occupy,
    plus the calibration back to the solver's frame.

    Only three primitives change it: ``flip`` and ``turn`` reorient the whole
    cube, ``spin_down`` turns the bottom layer.
    """

    def __init__(
        self,
        grids: Mapping[Face, FaceletGrid],
        calibration: Optional[CalibrationMap] = None,
        validate: bool = True,
    ):
        if set(grids.keys()) != set(FACES):
            raise ValidationError(f'a cube needs exactly the faces {FACES}, got {sorted(grids.keys())}')
        self.grids: Dict[Face, FaceletGrid] = {f: grids[f].copy() for f in FACES}
        self.calibration = calibration.copy() if calibration is not None else CalibrationMap()
        if validate:
            self.validate()

    @classmethod
    def from_colors(cls, faces: Mapping[Face, Sequence[Color]], validate: bool = True) -> 'CubeState':
        return cls({f: FaceletGrid(list(colors)) for f, colors in faces.items()}, validate=validate)

    @classmethod
    def solved(cls, scheme: Optional[Mapping[Face, Color]] = None) -> 'CubeState':
        scheme = scheme or DEFAULT_SCHEME
        return cls({f: FaceletGrid.solid(scheme[f]) for f in FACES})

    def validate(self) -> None:
        """Check the 54-facelet invariant: six known colors, nine of each, distinct centers."""
        for face in FACES:
            for pos, color in enumerate(self.grids[face].facelets, start=1):
                if color is Color.UNKNOWN:
                    raise ValidationError(f'face {face}: unknown color at position {pos}', face=face)
        counts = Counter(self.facelets())
        wrong = {c.name.lower(): counts.get(c, 0) for c in KNOWN_COLORS if counts.get(c, 0) != 9}
        if wrong:
            raise ValidationError(f'each color must appear 9 times, got {wrong}')
        centers = [self.grids[f].center for f in FACES]
        if len(set(centers)) != 6:
            raise ValidationError(f'centers must be six distinct colors, got {[c.name.lower() for c in centers]}')

    def grid(self, face: Face) -> FaceletGrid:
        return self.grids[face]

    def _move_grids(self, moves: Mapping[Face, Face]) -> None:
        old = dict(self.grids)
        for src, dst in moves.items():
            self.grids[dst] = old[src]

    def flip(self) -> 'CubeState':
        """Tip the cube over its Left-Right axis: Up->Back->Down->Front->Up."""
        self._move_grids(FLIP_MOVES)
        self.grids[BACK].invert()
        self.grids[DOWN].invert()
        self.grids[RIGHT].rotate_clockwise()
        self.grids[LEFT].rotate_counterclockwise()
        self.calibration.flip()
        return self

    def turn(self, n: int = 1) -> 'CubeState':
        """Rotate the whole cube about the vertical axis ``n`` quarter turns (Front->Left)."""
        if n not in (0, 1, 2, 3):
            raise ValueError(f'turn count must be 0..3, got {n}')
        for _ in range(n):
            self._move_grids(TURN_MOVES)
            self.grids[UP].rotate_clockwise()
            self.grids[DOWN].rotate_counterclockwise()
            self.calibration.turn()
        return self

    def spin_down(self) -> 'CubeState':
        """One clockwise quarter turn of the Down layer; the calibration is untouched."""
        saved = {f: [self.grids[f].facelets[i] for i in BOTTOM_ROW] for f in SPIN_MOVES}
        for src, dst in SPIN_MOVES.items():
            for k, i in enumerate(BOTTOM_ROW):
                self.grids[dst].facelets[i] = saved[src][k]
        self.grids[DOWN].rotate_clockwise()
        return self

    def facelets(self) -> Tuple[Color, ...]:
        out: List[Color] = []
        for face in FACES:
            out.extend(self.grids[face].facelets)
        return tuple(out)

    def is_solved(self) -> bool:
        return all(self.grids[f].is_uniform() for f in FACES)

    def copy(self) -> 'CubeState':
        return CubeState(self.grids, self.calibration, validate=False)

    def realigned(self) -> 'CubeState':
        """Copy brought back to the solver's frame (identity calibration) by flips and turns only."""
        out = self.copy()
        for step in _reorientation_path(self.calibration):
            if step == 'flip':
                out.flip()
            else:
                out.turn(1)
        return out

    def pretty(self) -> str:
        """One-letter net: Up on top, Left/Front/Right/Back in a band, Down below."""
        lines: List[str] = []
        pad = ' ' * 7
        for r in range(3):
            lines.append(pad + ' '.join(c.code for c in self.grids[UP].row(r)))
        for r in range(3):
            lines.append('  '.join(' '.join(c.code for c in self.grids[f].row(r)) for f in (LEFT, FRONT, RIGHT, BACK)))
        for r in range(3):
            lines.append(pad + ' '.join(c.code for c in self.grids[DOWN].row(r)))
        return '\n'.join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CubeState):
            return NotImplemented
        return self.grids == other.grids and self.calibration == other.calibration

    def __repr__(self) -> str:
        faces = ' '.join(f'{f}={self.grids[f].codes()}' for f in FACES)
        return f'CubeState({faces}, calibration={self.calibration})'


def _reorientation_path(calibration: CalibrationMap) -> List[str]:
    """Shortest flip/turn sequence taking ``calibration`` back to the identity."""
    start = calibration.copy()
    seen: Dict[Tuple[Face, ...], List[str]] = {start.key(): []}
    queue = deque([start])
    while queue:
        cal = queue.popleft()
        path = seen[cal.key()]
        if cal.is_identity():
            return path
        for step in ('flip', 'turn'):
            nxt = cal.copy()
            if step == 'flip':
                nxt.flip()
            else:
                nxt.turn()
            if nxt.key() not in seen:
                seen[nxt.key()] = path + [step]
                queue.append(nxt)
    raise ValueError(f'calibration {calibration} is not reachable by whole-cube reorientation')
