from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from .facelets import Color

# new[i] = old[PERM[i]] for a row-major 3x3 grid.
_CLOCKWISE = (6, 3, 0, 7, 4, 1, 8, 5, 2)
_COUNTERCLOCKWISE = (2, 5, 8, 1, 4, 7, 0, 3, 6)
_INVERT = (8, 7, 6, 5, 4, 3, 2, 1, 0)

CENTER = 4
BOTTOM_ROW = (6, 7, 8)


@dataclass(eq=True)
class FaceletGrid:
    """One face's 3x3 stickers, row-major. Index 4 is the center and never moves."""
    facelets: List[Color] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.facelets = list(self.facelets)
        if len(self.facelets) != 9:
            raise ValueError(f'a face has 9 facelets, got {len(self.facelets)}')

    @classmethod
    def solid(cls, color: Color) -> 'FaceletGrid':
        return cls([color] * 9)

    @property
    def center(self) -> Color:
        return self.facelets[CENTER]

    def at(self, row: int, col: int) -> Color:
        return self.facelets[row * 3 + col]

    def row(self, r: int) -> Tuple[Color, ...]:
        return tuple(self.facelets[r * 3:r * 3 + 3])

    def is_uniform(self) -> bool:
        return all(c == self.center for c in self.facelets)

    def copy(self) -> 'FaceletGrid':
        return FaceletGrid(list(self.facelets))

    def _permute(self, perm: Iterable[int]) -> 'FaceletGrid':
        old = self.facelets
        self.facelets = [old[i] for i in perm]
        return self

    def rotate_clockwise(self) -> 'FaceletGrid':
        """Quarter turn clockwise, seen from outside the face."""
        return self._permute(_CLOCKWISE)

    def rotate_counterclockwise(self) -> 'FaceletGrid':
        return self._permute(_COUNTERCLOCKWISE)

    def invert(self) -> 'FaceletGrid':
        """Half turn."""
        return self._permute(_INVERT)

    def codes(self) -> str:
        return ''.join(c.code for c in self.facelets)
