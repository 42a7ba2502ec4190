import json

import pytest

from element_decoder.elements import (
    ACTIN_ROW,
    LANTH_ROW,
    Element,
    build_grid,
    format_mass,
    grid_position,
    load_elements,
    normalize_classification,
    parse_elements,
)
from element_decoder.errors import DatasetError

SAMPLE = {
    "elements": [
        {"name": "Iron", "symbol": "Fe", "number": 26, "atomic_mass": 55.845,
         "category": "transition metal", "period": 4, "group": 8},
        {"name": "Hydrogen", "symbol": "H", "number": 1, "atomic_mass": 1.008,
         "category": "diatomic nonmetal", "period": 1, "group": 1},
        {"name": "Helium", "symbol": "He", "number": 2, "atomic_mass": 4.0026022,
         "category": "noble gas", "period": 1, "group": 18},
        {"name": "Silicon", "symbol": "Si", "number": 14, "atomic_mass": 28.085,
         "category": "metalloid", "period": 3, "group": 14},
        {"name": "Lanthanum", "symbol": "La", "number": 57, "atomic_mass": 138.90547,
         "category": "lanthanide", "period": 6, "group": 3},
    ]
}


def _element(z, period=None, group=None):
    return Element(name="X", symbol="X", atomic_number=z, atomic_mass=None,
                   classification="metal", group=group, period=period)


def test_parse_sorts_and_normalizes():
    elements = parse_elements(SAMPLE)
    assert [e.symbol for e in elements] == ["H", "He", "Si", "Fe", "La"]
    by_symbol = {e.symbol: e for e in elements}
    assert by_symbol["H"].classification == "nonmetal"
    assert by_symbol["He"].classification == "nonmetal"
    assert by_symbol["Si"].classification == "metalloid"
    assert by_symbol["Fe"].classification == "metal"
    assert by_symbol["La"].classification == "metal"
    assert by_symbol["Fe"].atomic_mass == pytest.approx(55.845)


@pytest.mark.parametrize("raw,name,expected", [
    ("polyatomic nonmetal", "Carbon", "nonmetal"),
    ("unknown, probably metalloid", "Tennessine", "metalloid"),
    ("alkali metal", "Sodium", "metal"),
    (None, "Oganesson", "nonmetal"),
    (None, "Mystery", "metal"),
])
def test_normalize_classification(raw, name, expected):
    assert normalize_classification(raw, name) == expected


def test_load_from_file(tmp_path):
    path = tmp_path / "table.json"
    path.write_text(json.dumps(SAMPLE), encoding="utf-8")
    assert len(load_elements(path)) == 5


def test_missing_file(tmp_path):
    with pytest.raises(DatasetError):
        load_elements(tmp_path / "nope.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "table.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(DatasetError):
        load_elements(path)


@pytest.mark.parametrize("data", [{}, {"elements": {}}, [], {"elements": [{"name": "Iron"}]}])
def test_malformed_dataset(data):
    with pytest.raises(DatasetError):
        parse_elements(data)


@pytest.mark.parametrize("element,expected", [
    (_element(1, period=1, group=1), (0, 0)),
    (_element(26, period=4, group=8), (3, 7)),
    (_element(57, period=6, group=3), (LANTH_ROW, 2)),
    (_element(71, period=6, group=3), (LANTH_ROW, 16)),
    (_element(89, period=7, group=3), (ACTIN_ROW, 2)),
    (_element(103, period=7, group=3), (ACTIN_ROW, 16)),
    (_element(200), None),
])
def test_grid_position(element, expected):
    assert grid_position(element) == expected


def test_full_grid_places_every_element(elements, grid):
    assert len(grid.cells) == len(elements) == 118
    assert grid.rows == 10
    assert grid.cols == 18
    # spacer row between the main table and the f-block strips
    assert all(grid.element_at(7, c) is None for c in range(18))
    assert grid.element_at(3, 7).atomic_number == 26
    assert grid.element_at(7, 0) is None


def test_period_past_the_table_gets_no_position():
    assert grid_position(_element(119, period=8, group=1)) is None


def test_element_119_leaves_the_spacer_row_empty(elements):
    grid = build_grid(elements + [_element(119, period=8, group=1)])
    assert len(grid.cells) == 118
    assert all(grid.element_at(7, c) is None for c in range(18))


def test_word_area_is_fully_occupied(grid):
    for r in range(3, 7):
        for c in range(3, 18):
            assert (r, c) in grid.occupied


def test_elements_off_the_board_are_skipped():
    grid = build_grid([_element(1, period=1, group=1), _element(300, period=12, group=40), _element(5)])
    assert list(grid.cells) == [(0, 0)]


@pytest.mark.parametrize("mass,expected", [
    (1.008, "1.008"), (55.845, "55.845"), (4.0026022, "4.003"), (12.0, "12"), (None, "?"),
])
def test_format_mass(mass, expected):
    assert format_mass(mass) == expected
