from typing import List

import pytest

from element_decoder.config import Settings
from element_decoder.elements import Element, PeriodicGrid, build_grid
from element_decoder.layout import GridActivationIndex, build_layout


def _period_group(z: int):
    if z == 1:
        return 1, 1
    if z == 2:
        return 1, 18
    for period, start in ((2, 3), (3, 11)):
        if start <= z < start + 8:
            off = z - start
            return period, (off + 1 if off < 2 else off + 11)
    if 19 <= z <= 36:
        return 4, z - 18
    if 37 <= z <= 54:
        return 5, z - 36
    if 55 <= z <= 86:
        if z <= 56:
            return 6, z - 54
        if z <= 71:
            return 6, None
        return 6, z - 68
    if z <= 88:
        return 7, z - 86
    if z <= 103:
        return 7, None
    return 7, z - 100


def make_elements() -> List[Element]:
    out = []
    for z in range(1, 119):
        period, group = _period_group(z)
        out.append(
            Element(
                name=f"Element{z}",
                symbol=f"E{z}",
                atomic_number=z,
                atomic_mass=float(z) * 2.0,
                classification="metal",
                group=group,
                period=period,
            )
        )
    return out


class FakeClock:
    def __init__(self, t: float = 1000.0):
        self.t = t

    def __call__(self) -> float:
        return self.t

    def tick(self, seconds: float):
        self.t += seconds


@pytest.fixture
def elements() -> List[Element]:
    return make_elements()


@pytest.fixture
def grid(elements) -> PeriodicGrid:
    return build_grid(elements)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cat_layout():
    return build_layout("CAT", 10, 18, top_margin=3, left_margin=3)


@pytest.fixture
def cat_index(cat_layout) -> GridActivationIndex:
    return GridActivationIndex(cat_layout)
