import json
from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from tests.conftest import make_elements

APP_FILE = str(Path(__file__).resolve().parent.parent / "app.py")


@pytest.fixture
def app(tmp_path, monkeypatch):
    rows = [
        {
            "name": e.name,
            "symbol": e.symbol,
            "number": e.atomic_number,
            "atomic_mass": e.atomic_mass,
            "category": "transition metal",
            "period": e.period,
            "group": e.group,
        }
        for e in make_elements()
    ]
    data_file = tmp_path / "elements.json"
    data_file.write_text(json.dumps({"elements": rows}), encoding="utf-8")
    monkeypatch.setenv("DECODER_DATA_FILE", str(data_file))

    at = AppTest.from_file(APP_FILE, default_timeout=30)
    at.run()
    assert not at.exception
    return at


def solve(machine):
    while not machine.state.solved:
        gs = machine.state
        if gs.phase.value == "completed_word":
            machine.submit_guess(gs.word)
        else:
            machine.handle_click(*machine.index.cells_for_letter(gs.letter_index)[0])
            machine.advance()


def test_first_run_starts_a_game(app):
    machine = app.session_state["machine"]
    assert machine is not None
    assert not machine.state.solved


def test_solved_game_offers_play_again(app):
    old = app.session_state["machine"]
    solve(old)
    app.run()
    assert not app.exception

    app.button(key="play_again").click().run()
    assert not app.exception

    new = app.session_state["machine"]
    assert new is not old
    assert not new.state.solved
    assert new.state.score == 0
