from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Collection, Dict, List, Optional, Tuple

from element_decoder.errors import LayoutError, WordTooLarge
from element_decoder.letters import Glyph, glyph_for

logger = logging.getLogger(__name__)

Pos = Tuple[int, int]

DEFAULT_TOP_MARGIN = 3
DEFAULT_LEFT_MARGIN = 3
LETTER_GAP = 1


# =========================================================
# Word layout
# =========================================================
@dataclass(frozen=True)
class WordLayout:
    word: str
    rows: int
    cols: int
    # cells[r][c] is the index of the letter owning that cell, None if untouched
    cells: Tuple[Tuple[Optional[int], ...], ...]

    def letter_at(self, row: int, col: int) -> Optional[int]:
        if 0 <= row < self.rows and 0 <= col < self.cols:
            return self.cells[row][col]
        return None


def build_layout(
    word: str,
    grid_rows: int,
    grid_cols: int,
    top_margin: int = DEFAULT_TOP_MARGIN,
    left_margin: int = DEFAULT_LEFT_MARGIN,
    occupied: Optional[Collection[Pos]] = None,
) -> WordLayout:
    """
    Stamp the glyphs of `word` left to right onto a grid_rows x grid_cols grid.

    Glyphs start at (top_margin, cursor); the cursor starts at left_margin and
    advances by glyph width plus LETTER_GAP. Raises WordTooLarge when a glyph
    runs past the bottom or right edge, or (when `occupied` is given) when a
    lit pixel falls on a position that holds no element.
    """
    if not word:
        raise LayoutError("Cannot lay out an empty word")

    # Resolve every glyph first so an unsupported character fails before any placement
    glyphs: List[Glyph] = [glyph_for(ch) for ch in word]

    available_rows = grid_rows - top_margin
    grid: List[List[Optional[int]]] = [[None] * grid_cols for _ in range(grid_rows)]
    cursor = left_margin

    for idx, g in enumerate(glyphs):
        if g.height > available_rows:
            raise WordTooLarge(
                f"{word!r}: letter {g.char!r} is {g.height} rows tall, only {max(available_rows, 0)} available"
            )
        if cursor + g.width > grid_cols:
            raise WordTooLarge(
                f"{word!r}: letter {g.char!r} at column {cursor} needs {g.width} columns, grid has {grid_cols}"
            )

        for r, c in g.on_cells():
            row, col = top_margin + r, cursor + c
            if occupied is not None and (row, col) not in occupied:
                raise WordTooLarge(f"{word!r}: letter {g.char!r} lands on an empty table position {(row, col)}")
            if grid[row][col] is None:
                grid[row][col] = idx

        cursor += g.width + LETTER_GAP

    logger.debug("Laid out %r on %dx%d grid (margins %d/%d)", word, grid_rows, grid_cols, top_margin, left_margin)
    return WordLayout(
        word=word,
        rows=grid_rows,
        cols=grid_cols,
        cells=tuple(tuple(r) for r in grid),
    )


# =========================================================
# Activation index
# =========================================================
@dataclass(frozen=True)
class CellQuery:
    active: bool
    letter_index: Optional[int] = None


INACTIVE = CellQuery(active=False)


class GridActivationIndex:
    def __init__(self, layout: WordLayout):
        self.layout = layout
        self._by_letter: Dict[int, List[Pos]] = {i: [] for i in range(len(layout.word))}
        for r, row in enumerate(layout.cells):
            for c, idx in enumerate(row):
                if idx is not None:
                    self._by_letter[idx].append((r, c))

    @property
    def word(self) -> str:
        return self.layout.word

    @property
    def active_count(self) -> int:
        return sum(len(v) for v in self._by_letter.values())

    def query(self, row: int, col: int) -> CellQuery:
        idx = self.layout.letter_at(row, col)
        if idx is None:
            return INACTIVE
        return CellQuery(active=True, letter_index=idx)

    def cells_for_letter(self, letter_index: int) -> List[Pos]:
        return list(self._by_letter.get(letter_index, []))

    def contains(self, pos: Pos) -> bool:
        r, c = pos
        return 0 <= r < self.layout.rows and 0 <= c < self.layout.cols
