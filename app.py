from __future__ import annotations

import datetime as dt
import logging
import random
import time
from typing import Dict, List, Optional

import streamlit as st

from element_decoder.config import configure_logging, load_settings, Settings
from element_decoder.elements import Element, PeriodicGrid, build_grid, format_mass, load_elements
from element_decoder.errors import ConfigError, DatasetError, LayoutError
from element_decoder.game import ElementState, GamePhase, GameStateMachine
from element_decoder.layout import Pos
from element_decoder.letters import supported_characters
from element_decoder.levels import (
    LEVEL_HELP,
    WORDS,
    Level,
    clue_for,
    daily_fingerprint,
    day_number,
    hint_position,
    pick_daily,
    pick_endless,
    validate_word,
)

APP_VERSION = "v1.0.0"

logger = logging.getLogger("element_decoder.app")


# =========================================================
# Settings + logging
# Secrets are optional; a missing secrets.toml is the same as no secrets
# =========================================================
def _secrets() -> dict:
    try:
        return dict(st.secrets)
    except FileNotFoundError:
        return {}


def get_settings() -> Settings:
    if "settings" not in st.session_state:
        st.session_state.settings = load_settings(secrets=_secrets())
        configure_logging(st.session_state.settings.log_level)
    return st.session_state.settings


# =========================================================
# Load elements
# =========================================================
@st.cache_data
def load_table(path: str) -> List[Element]:
    return load_elements(path)


# =========================================================
# Game lifecycle
# =========================================================
def _bump_board_nonce():
    st.session_state.board_nonce = int(st.session_state.get("board_nonce", 0)) + 1


def pick_word(game_mode: str) -> str:
    if game_mode == "Daily":
        st.session_state.seed = None
        return pick_daily(WORDS)
    seed = random.randrange(1_000_000_000)
    st.session_state.seed = seed
    return pick_endless(WORDS, seed)


def start_new_game(grid: PeriodicGrid, word: str, settings: Settings):
    st.session_state.machine = None
    st.session_state.setup_error = None
    st.session_state.hint_seed = random.randrange(1_000_000_000)
    _bump_board_nonce()

    try:
        layout = validate_word(word, grid, settings)
    except LayoutError as exc:
        # Level-selection time error; nothing to play
        st.session_state.setup_error = f"Can't play {word!r}: {exc}"
        return

    st.session_state.machine = GameStateMachine(layout, clock=time.time, policy=settings.scoring)
    logger.info("Started %s game (%s)", st.session_state.game_mode, st.session_state.level.value)


def ensure_state(grid: PeriodicGrid, settings: Settings):
    if "game_mode" not in st.session_state:
        st.session_state.game_mode = "Daily"
        st.session_state.level = Level.EASY
        st.session_state.board_nonce = 0
        start_new_game(grid, pick_word(st.session_state.game_mode), settings)

    st.session_state.setdefault("setup_error", None)
    st.session_state.setdefault("show_clock", False)
    st.session_state.setdefault("hint_seed", 0)


# =========================================================
# UI helpers
# =========================================================
def inject_css():
    st.markdown(
        """
        <style>
          .block-container { padding-top: 1rem; padding-bottom: 2rem; }
          div[data-testid="column"] button { padding: 0.2rem 0.1rem; min-height: 2.2rem; font-size: 0.8rem; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def how_to_play():
    with st.expander("❓ How to play", expanded=False):
        st.markdown(
            """
**Goal:** A hidden word is drawn across the periodic table, one letter at a time.

- Each step shows an **element to find**. Click an element that belongs to the **current letter**.
- ✅ **Green** — found; ❌ — not part of the current letter (your streak resets).
- After every letter is found, type the word you see to finish.

**Scoring:** base points for each match, a **streak bonus** for consecutive hits, and a **time bonus** for fast matches.

**Levels:**
- **Easy:** element shown by symbol
- **Medium:** element shown by name
- **Hard:** element shown by atomic number
"""
        )


def tooltip(e: Element) -> str:
    return f"{e.name} ({e.symbol}) — atomic #{e.atomic_number}, mass {format_mass(e.atomic_mass)}, {e.classification}"


def tile_label(e: Element, state: ElementState) -> str:
    if state == ElementState.FOUND_ELEMENT:
        return f"✅ {e.symbol}"
    if state == ElementState.WRONG_ELEMENT_CLICKED:
        return f"❌ {e.symbol}"
    return e.symbol


# =========================================================
# Info box
# =========================================================
def render_info_box(machine: GameStateMachine, grid: PeriodicGrid, level: Level, settings: Settings):
    gs = machine.state

    if gs.error:
        st.error(gs.error)

    if gs.phase == GamePhase.COMPLETED_WORD:
        render_guess_form(machine, grid, settings)
        return

    hint: Optional[Pos] = hint_position(machine.index, gs.letter_index, st.session_state.hint_seed)
    target = grid.element_at(*hint) if hint else None
    if target is not None and gs.phase == GamePhase.FINDING_LETTERS:
        st.subheader(f"🎯 Find: {clue_for(target, level)}")
        st.caption(f"Letter {gs.letter_index + 1} of {len(gs.word)}")

    if gs.feedback:
        if gs.feedback.kind == "good":
            st.success(gs.feedback.text)
        else:
            st.error(gs.feedback.text)

    st.write(f"**Score:** {gs.score}   |   🔥 **Streak:** {gs.streak}")

    # score breakdown while showing a correct match
    if gs.phase == GamePhase.SHOWING_CORRECT and gs.last_score:
        parts = []
        if gs.last_score.base:
            parts.append(f"+ {gs.last_score.base} (base)")
        if gs.last_score.streak_bonus:
            parts.append(f"+ {gs.last_score.streak_bonus} (streak bonus)")
        if gs.last_score.time_bonus:
            parts.append(f"+ {gs.last_score.time_bonus} (time bonus)")
        st.markdown("  \n".join(parts))

        if st.button("Next letter ➡️", type="primary"):
            machine.advance()
            st.rerun()

    c1, c2 = st.columns([1, 5])
    with c1:
        st.session_state.show_clock = st.toggle("🕒", value=bool(st.session_state.show_clock), help="Toggle clock")
    with c2:
        if st.session_state.show_clock:
            st.caption(f"{machine.elapsed():.0f} s on this letter")


def render_guess_form(machine: GameStateMachine, grid: PeriodicGrid, settings: Settings):
    gs = machine.state
    if gs.solved:
        st.success(f"🎉 Congrats! The word was **{gs.word.upper()}**. Final score: **{gs.score}**")
        if st.session_state.game_mode == "Daily":
            st.caption(f"Day {day_number()} • #{daily_fingerprint(gs.word)}")
        if st.button("Play again", key="play_again", type="primary", use_container_width=True):
            start_new_game(grid, pick_word(st.session_state.game_mode), settings)
            st.rerun()
        return

    with st.form("user_guess", clear_on_submit=True):
        if gs.guesses == 0:
            st.write("You have filled in the word! Type it out in the text box.")
        else:
            st.write("Not quite! Try guessing the word again.")
        guess = st.text_input("Your guess", placeholder="Enter here", max_chars=max(len(gs.word), 1) + 5)
        submitted = st.form_submit_button("Check")

    if submitted:
        machine.submit_guess(guess)
        st.rerun()


# =========================================================
# Board
# =========================================================
def render_board(machine: GameStateMachine, grid: PeriodicGrid):
    gs = machine.state
    board: Dict[Pos, ElementState] = machine.board()
    clickable = (gs.phase == GamePhase.FINDING_LETTERS) and not gs.solved
    nonce = st.session_state.board_nonce

    for r in range(grid.rows):
        row_elements = [grid.element_at(r, c) for c in range(grid.cols)]
        if not any(row_elements):
            st.write("")
            continue

        cols = st.columns(grid.cols)
        for c, e in enumerate(row_elements):
            if e is None:
                continue
            state = board.get((r, c), ElementState.UNCLICKED)
            with cols[c]:
                if st.button(
                    tile_label(e, state),
                    key=f"tile_{nonce}_{r}_{c}",
                    help=tooltip(e),
                    type="primary" if state == ElementState.FOUND_ELEMENT else "secondary",
                    disabled=not clickable,
                    use_container_width=True,
                ):
                    machine.handle_click(r, c)
                    st.rerun()


# =========================================================
# Main
# =========================================================
def main():
    st.set_page_config(page_title="Element Decoder", page_icon="🧪", layout="wide")
    inject_css()

    st.title("🧪 Element Decoder")
    st.caption("Find the hidden word on the periodic table, one letter at a time.")

    how_to_play()

    try:
        settings = get_settings()
        elements = load_table(settings.data_file)
    except (ConfigError, DatasetError) as exc:
        st.error(str(exc))
        st.stop()

    grid = build_grid(elements)
    ensure_state(grid, settings)

    # ---- Sidebar
    with st.sidebar:
        st.subheader("Game")

        mode_choice = st.radio(
            "Mode",
            ["Daily", "Endless"],
            index=["Daily", "Endless"].index(st.session_state.game_mode),
        )
        if mode_choice != st.session_state.game_mode:
            st.session_state.game_mode = mode_choice
            start_new_game(grid, pick_word(mode_choice), settings)
            st.rerun()

        st.subheader("Level")
        levels = list(Level)
        level_choice = st.radio(
            "Level",
            [lv.value for lv in levels],
            index=levels.index(st.session_state.level),
            help="How the element to find is described.",
        )
        st.session_state.level = Level(level_choice)
        st.caption(LEVEL_HELP[st.session_state.level])

        if st.button("🔄 Restart", use_container_width=True):
            start_new_game(grid, pick_word(st.session_state.game_mode), settings)
            st.rerun()

        with st.expander("✏️ Custom word", expanded=False):
            custom = st.text_input("Word", placeholder="e.g. ICE")
            st.caption(f"Letters: {' '.join(supported_characters())}")
            if st.button("Play this word", use_container_width=True, disabled=not custom.strip()):
                start_new_game(grid, custom, settings)
                st.rerun()

        if settings.debug and not settings.production:
            st.divider()
            if st.toggle("🛠 Debug mode", value=False) and st.session_state.machine is not None:
                m = st.session_state.machine
                st.write(f"**Word:** {m.word}")
                st.write(f"**Lit cells:** {m.index.active_count}")
                st.json({"phase": m.phase.value, "letter_index": m.state.letter_index, "streak": m.state.streak})

    if st.session_state.game_mode == "Daily":
        today = dt.date.today()
        st.info(f"📅 Today: {today:%A, %d %B %Y} • Day {day_number()}")

    if st.session_state.setup_error:
        st.error(st.session_state.setup_error)
        st.caption("Pick another word or restart to get a new one.")
        return

    machine: GameStateMachine = st.session_state.machine

    info_col, board_col = st.columns([1, 3])
    with info_col:
        render_info_box(machine, grid, st.session_state.level, settings)
    with board_col:
        render_board(machine, grid)

    st.markdown("---")
    st.caption(f"🧪 Element Decoder • {APP_VERSION}")


if __name__ == "__main__":
    main()
