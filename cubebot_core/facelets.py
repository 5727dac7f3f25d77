from __future__ import annotations

from typing import Dict, List, Mapping, Sequence

from aenum import Enum

from .errors import ValidationError

Face = str  # 'U', 'L', 'F', 'R', 'B', 'D'

UP: Face = 'U'
LEFT: Face = 'L'
FRONT: Face = 'F'
RIGHT: Face = 'R'
BACK: Face = 'B'
DOWN: Face = 'D'

# Order faces are collected in, and the order the solver reads them in.
FACES = (UP, LEFT, FRONT, RIGHT, BACK, DOWN)
SOLVER_ORDER = (UP, RIGHT, FRONT, DOWN, LEFT, BACK)

FACE_NAMES: Dict[Face, str] = {
    UP: 'up',
    LEFT: 'left',
    FRONT: 'front',
    RIGHT: 'right',
    BACK: 'back',
    DOWN: 'down',
}


class Color(Enum):
    """Sticker colors; the value is the one-letter input code."""
    WHITE = 'w'
    RED = 'r'
    GREEN = 'g'
    BLUE = 'b'
    YELLOW = 'y'
    ORANGE = 'o'
    UNKNOWN = '?'

    @property
    def code(self) -> str:
        return self.value


KNOWN_COLORS = (Color.WHITE, Color.RED, Color.GREEN, Color.BLUE, Color.YELLOW, Color.ORANGE)


def parse_color(text: str) -> Color:
    """Parse a one-letter code or a full color name, case-insensitively. Unknown input maps to UNKNOWN."""
    t = (text or '').strip().lower()
    for color in KNOWN_COLORS:
        if t == color.value or t == color.name.lower():
            return color
    return Color.UNKNOWN


def parse_face(face: Face, text: str) -> List[Color]:
    """
    Parse one face's nine colors.

    Accepts either a compact 9-letter string ("wwrgbyoow") or nine
    whitespace-separated codes/names ("white red ..."). Raises ValidationError
    naming the face on a wrong count or an unknown color.
    """
    raw = (text or '').strip()
    if any(ch.isspace() for ch in raw):
        tokens: Sequence[str] = raw.split()
        unit = 'colors'
    else:
        tokens = list(raw)
        unit = 'characters'

    n = len(tokens)
    if n < 9:
        raise ValidationError(f"face {face}: {n} {unit}, {9 - n} short", face=face)
    if n > 9:
        raise ValidationError(f"face {face}: {n} {unit}, {n - 9} too many", face=face)

    colors: List[Color] = []
    for pos, tok in enumerate(tokens, start=1):
        color = parse_color(tok)
        if color is Color.UNKNOWN:
            raise ValidationError(f"face {face}: unknown color {tok!r} at position {pos}", face=face)
        colors.append(color)
    return colors


def parse_faces(faces: Mapping[str, str]) -> Dict[Face, List[Color]]:
    """Parse all six faces from a mapping keyed by face letter (either case)."""
    by_letter = {str(k).strip().upper(): v for k, v in faces.items()}
    out: Dict[Face, List[Color]] = {}
    for face in FACES:
        text = by_letter.get(face)
        if text is None:
            raise ValidationError(f"face {face} is missing", face=face)
        out[face] = parse_face(face, text)
    return out
