from __future__ import annotations

from typing import Dict, Mapping, Optional, Tuple

from .facelets import BACK, DOWN, FACES, FRONT, LEFT, RIGHT, UP, Face

# Where each physical slot's grid ends up after one whole-cube reorientation.
# Slots not listed keep their grid.
FLIP_MOVES: Dict[Face, Face] = {UP: BACK, BACK: DOWN, DOWN: FRONT, FRONT: UP}
TURN_MOVES: Dict[Face, Face] = {LEFT: BACK, FRONT: LEFT, RIGHT: FRONT, BACK: RIGHT}


class CalibrationMap:
    """
    Bijection from the solver's virtual face labels to physical slots.

    ``physical(X)`` answers "which slot currently hosts the grid the solver
    calls X". Starts as the identity and follows every flip and turn; a spin
    of the Down layer leaves it alone.
    """

    def __init__(self, slots: Optional[Mapping[Face, Face]] = None):
        self._slots: Dict[Face, Face] = dict(slots) if slots is not None else {f: f for f in FACES}
        if not self.is_bijection():
            raise ValueError(f'calibration must be a bijection over {FACES}: {self._slots}')

    def physical(self, virtual: Face) -> Face:
        return self._slots[virtual]

    def virtual(self, physical: Face) -> Face:
        """Inverse lookup: the virtual face whose grid sits in ``physical``."""
        for v, p in self._slots.items():
            if p == physical:
                return v
        raise KeyError(physical)

    def inverse(self) -> Dict[Face, Face]:
        return {p: v for v, p in self._slots.items()}

    def follow(self, moves: Mapping[Face, Face]) -> None:
        """Update after the grids moved slot-to-slot according to ``moves``."""
        for v, p in self._slots.items():
            self._slots[v] = moves.get(p, p)

    def flip(self) -> None:
        self.follow(FLIP_MOVES)

    def turn(self) -> None:
        self.follow(TURN_MOVES)

    def is_identity(self) -> bool:
        return all(v == p for v, p in self._slots.items())

    def is_bijection(self) -> bool:
        return set(self._slots.keys()) == set(FACES) and set(self._slots.values()) == set(FACES)

    def key(self) -> Tuple[Face, ...]:
        return tuple(self._slots[f] for f in FACES)

    def as_dict(self) -> Dict[Face, Face]:
        return dict(self._slots)

    def copy(self) -> 'CalibrationMap':
        return CalibrationMap(self._slots)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CalibrationMap):
            return NotImplemented
        return self._slots == other._slots

    def __repr__(self) -> str:
        return f'CalibrationMap({self._slots!r})'

    def __str__(self) -> str:
        return '{ ' + ' '.join(f'{f}->{self._slots[f]}' for f in FACES) + ' }'
