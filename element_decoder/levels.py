from __future__ import annotations

import datetime as dt
import hashlib
import logging
import random
from enum import Enum
from typing import List, Optional

from element_decoder.config import Settings
from element_decoder.elements import Element, PeriodicGrid
from element_decoder.errors import LayoutError, UnsupportedCharacter
from element_decoder.layout import GridActivationIndex, Pos, WordLayout, build_layout
from element_decoder.letters import unsupported_characters

logger = logging.getLogger(__name__)


# =========================================================
# Levels: how the element to find is described
# =========================================================
class Level(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


LEVEL_HELP = {
    Level.EASY: "The element to find is shown by its symbol.",
    Level.MEDIUM: "The element to find is shown by its name.",
    Level.HARD: "The element to find is shown by its atomic number.",
}


def clue_for(e: Element, level: Level) -> str:
    if level == Level.EASY:
        return e.symbol
    if level == Level.MEDIUM:
        return e.name
    return f"#{e.atomic_number}"


# =========================================================
# Words (all fit the default 3/3 margins on the standard table)
# =========================================================
WORDS = [
    "CAT",
    "GAS",
    "ION",
    "HOT",
    "ICE",
    "AIR",
    "TIN",
    "ORE",
    "SALT",
    "HEAT",
    "FIRE",
]

DAILY_EPOCH = dt.date(2026, 1, 1)


def day_number(date: Optional[dt.date] = None) -> int:
    date = date or dt.date.today()
    return abs((date - DAILY_EPOCH).days) + 1


def daily_fingerprint(word: str, date: Optional[dt.date] = None) -> str:
    date = date or dt.date.today()
    s = f"{date.isoformat()}|{word.upper()}|element-decoder"
    h = hashlib.sha256(s.encode("utf-8")).hexdigest()
    return h[:4].upper()


def pick_daily(words: List[str], date: Optional[dt.date] = None) -> str:
    date = date or dt.date.today()
    idx = abs((date - DAILY_EPOCH).days) % len(words)
    return words[idx]


def pick_endless(words: List[str], seed: int) -> str:
    return random.Random(seed).choice(words)


# =========================================================
# Word validation (level-selection time)
# =========================================================
def validate_word(word: str, grid: PeriodicGrid, settings: Settings) -> WordLayout:
    word = (word or "").strip()
    bad = unsupported_characters(word)
    if bad:
        logger.warning("Rejected word %r: unsupported characters %s", word, bad)
        raise UnsupportedCharacter(bad[0])
    try:
        return build_layout(
            word,
            grid.rows,
            grid.cols,
            top_margin=settings.top_margin,
            left_margin=settings.left_margin,
            occupied=grid.occupied,
        )
    except LayoutError as exc:
        logger.warning("Rejected word %r: %s", word, exc)
        raise


def hint_position(index: GridActivationIndex, letter_index: int, seed: int) -> Optional[Pos]:
    """One lit cell of the current letter, stable for a given seed."""
    cells = index.cells_for_letter(letter_index)
    if not cells:
        return None
    return random.Random(f"{seed}:{letter_index}").choice(cells)
