from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from element_decoder.errors import UnsupportedCharacter

MARK = "x"


# =========================================================
# Glyph model
# =========================================================
@dataclass(frozen=True)
class Glyph:
    char: str
    rows: Tuple[Tuple[bool, ...], ...]

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        # Ragged rows: the widest row decides
        return max((len(r) for r in self.rows), default=0)

    def is_on(self, row: int, col: int) -> bool:
        if row < 0 or row >= len(self.rows):
            return False
        r = self.rows[row]
        return 0 <= col < len(r) and r[col]

    def on_cells(self) -> List[Tuple[int, int]]:
        return [(r, c) for r in range(self.height) for c in range(self.width) if self.is_on(r, c)]

    @property
    def on_count(self) -> int:
        return len(self.on_cells())


def normalize(char: str, source: str) -> Glyph:
    """
    Turn an authored pattern into a Glyph.

    A single leading line break is dropped, then every line becomes a row and
    every character position becomes True iff it is the mark symbol.
    """
    if source.startswith("\n"):
        source = source[1:]
    rows = tuple(tuple(ch == MARK for ch in line) for line in source.split("\n"))
    return Glyph(char=char, rows=rows)


# =========================================================
# Letter patterns (authoring table, parsed once at import)
# =========================================================
GLYPH_SOURCES: Dict[str, str] = {
    "A": """
xxx
x x
xxx
x x""",
    "B": """
xx
x x
xx
x x
xx""",
    "C": """
xxx
x
xxx""",
    "D": """
xxx
x  x
x  x
xxx""",
    "E": """
xxx
xx
x
xxx""",
    "F": """
xxx
x
xx
x""",
    "G": """
xxxx
x
x xx
xxxx""",
    "H": """
x x
xxx
x x""",
    "I": """
xxx
 x
 x
xxx""",
    # J and K are stored without blank edge rows: J is 4 rows tall, K is 3
    "J": """
xxx
  x
x x
xxx""",
    "K": """
x x
xx
x x""",
    "L": """
x
x
xxx""",
    "M": """
xxxxx
x x x
x   x""",
    "N": """
x  x
xx x
x xx""",
    "O": """
 xx
x  x
x  x
 xx""",
    "P": """
xx
x x
xx
x""",
    "Q": """
xxx
x x
xxx
   x""",
    "R": """
xx
x x
xx
x x""",
    "S": """
xxx
x
 xx
xxx""",
    "T": """
xxx
 x
 x""",
    "U": """
x  x
x  x
 xx""",
    "V": """
x   x
 x x
  x""",
    "W": """
x   x
x x x
xxxxx""",
    "X": """
x x
 x
x x""",
    "Y": """
x x
x x
 x
 x""",
    "Z": """
xxxx
  x
 x
xxxx""",
    # end-of-message emphasis
    "!": """
x
x
x

x""",
}

LETTERS: Dict[str, Glyph] = {c: normalize(c, s) for c, s in GLYPH_SOURCES.items()}


def supported_characters() -> List[str]:
    return sorted(LETTERS)


def glyph_for(char: str) -> Glyph:
    g = LETTERS.get(char.upper())
    if g is None:
        raise UnsupportedCharacter(char)
    return g


def unsupported_characters(word: str) -> List[str]:
    # de-dupe while keeping order
    out: List[str] = []
    for ch in word:
        if ch.upper() not in LETTERS and ch not in out:
            out.append(ch)
    return out
