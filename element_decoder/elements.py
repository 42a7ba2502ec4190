from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Tuple, Union

from element_decoder.errors import DatasetError

logger = logging.getLogger(__name__)

Pos = Tuple[int, int]

DATA_FILE = "PeriodicTableJSON.json"

# Main table: 7 periods x 18 groups, then a spacer row and the two f-block strips
TABLE_ROWS = 10
TABLE_COLS = 18
LANTH_ROW = 8
ACTIN_ROW = 9
STRIP_COL = 2
# Periods past 7 (e.g. the dataset's element 119) have no row on the board
MAX_PERIOD = 7


# =========================================================
# Data model
# =========================================================
@dataclass(frozen=True)
class Element:
    name: str
    symbol: str
    atomic_number: int
    atomic_mass: Optional[float]
    classification: str  # metal / metalloid / nonmetal
    group: Optional[int]
    period: Optional[int]


NOBLE_GAS_NAMES = {"Helium", "Neon", "Argon", "Krypton", "Xenon", "Radon", "Oganesson"}
CATEGORY_OVERRIDES = {"Hydrogen": "nonmetal", **{n: "nonmetal" for n in NOBLE_GAS_NAMES}}


def normalize_classification(raw_category: str, name: str) -> str:
    if name in CATEGORY_OVERRIDES:
        return CATEGORY_OVERRIDES[name]

    t = (raw_category or "").lower()
    if "metalloid" in t:
        return "metalloid"
    if "nonmetal" in t:
        return "nonmetal"
    return "metal"


def is_lanthanoid(n: int) -> bool:
    return 57 <= n <= 71


def is_actinoid(n: int) -> bool:
    return 89 <= n <= 103


def format_mass(mass: Optional[float]) -> str:
    if mass is None:
        return "?"
    return f"{mass:.3f}".rstrip("0").rstrip(".")


# =========================================================
# Load elements
# =========================================================
def _optional_int(v) -> Optional[int]:
    return int(v) if isinstance(v, (int, float)) else None


def parse_elements(data: dict) -> List[Element]:
    raw = data.get("elements") if isinstance(data, dict) else None
    if not isinstance(raw, list):
        raise DatasetError("Expected data['elements'] to be a list")

    out: List[Element] = []
    for r in raw:
        name = (r.get("name") or "").strip()
        symbol = (r.get("symbol") or "").strip()
        number = r.get("number")
        if not name or not symbol or not isinstance(number, int):
            raise DatasetError(f"Malformed element entry: {r!r}")

        mass = r.get("atomic_mass")
        out.append(
            Element(
                name=name,
                symbol=symbol,
                atomic_number=number,
                atomic_mass=float(mass) if isinstance(mass, (int, float)) else None,
                classification=normalize_classification(r.get("category"), name),
                group=_optional_int(r.get("group")),
                period=_optional_int(r.get("period")),
            )
        )

    return sorted(out, key=lambda e: e.atomic_number)


def load_elements(path: Union[str, Path] = DATA_FILE) -> List[Element]:
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise DatasetError(f"{p} not found — run `python setup_data.py` to download it") from exc
    except json.JSONDecodeError as exc:
        raise DatasetError(f"{p} is not valid JSON: {exc}") from exc

    elements = parse_elements(data)
    logger.info("Loaded %d elements from %s", len(elements), p)
    return elements


# =========================================================
# Tile placement
# =========================================================
def grid_position(e: Element) -> Optional[Pos]:
    n = e.atomic_number
    if is_lanthanoid(n):
        return (LANTH_ROW, STRIP_COL + (n - 57))
    if is_actinoid(n):
        return (ACTIN_ROW, STRIP_COL + (n - 89))
    if e.period is not None and e.group is not None and e.period <= MAX_PERIOD:
        return (e.period - 1, e.group - 1)
    return None


class PeriodicGrid:
    """Element lookup by (row, col) over the TABLE_ROWS x TABLE_COLS board."""

    def __init__(self, elements: Iterable[Element], rows: int = TABLE_ROWS, cols: int = TABLE_COLS):
        self.rows = rows
        self.cols = cols
        self.cells: Dict[Pos, Element] = {}
        for e in elements:
            pos = grid_position(e)
            if pos is None:
                logger.warning("No table position for %s (%s)", e.name, e.symbol)
                continue
            r, c = pos
            if not (0 <= r < rows and 0 <= c < cols):
                logger.warning("%s (%s) falls outside the %dx%d table", e.name, e.symbol, rows, cols)
                continue
            self.cells[pos] = e

    def element_at(self, row: int, col: int) -> Optional[Element]:
        return self.cells.get((row, col))

    @property
    def occupied(self) -> Set[Pos]:
        return set(self.cells)


def build_grid(elements: Iterable[Element]) -> PeriodicGrid:
    return PeriodicGrid(elements)
