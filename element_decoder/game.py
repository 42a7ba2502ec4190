from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Dict, Mapping, Optional, Set

from element_decoder.layout import GridActivationIndex, Pos, WordLayout
from element_decoder.scoring import DEFAULT_POLICY, ScoreBreakdown, ScoringPolicy, score

logger = logging.getLogger(__name__)


# =========================================================
# Phases, cell states, feedback
# =========================================================
class GamePhase(str, Enum):
    FINDING_LETTERS = "finding_letters"
    SHOWING_CORRECT = "showing_correct"
    COMPLETED_WORD = "completed_word"


class ElementState(str, Enum):
    UNCLICKED = "unclicked"
    FOUND_ELEMENT = "found"
    WRONG_ELEMENT_CLICKED = "wrong"


@dataclass(frozen=True)
class Feedback:
    kind: str  # "good" | "bad"
    text: str


MISS_TEXT = "Not part of this letter, try another element."
INVALID_CLICK_TEXT = "Received an invalid click from the board."
WRONG_GUESS_TEXT = "Not quite! Try guessing the word again."
SOLVED_TEXT = "Congrats!"


def good_text(streak: int) -> str:
    if streak >= 2:
        return f"Correct! {streak} in a row"
    return "Correct!"


# =========================================================
# Game state (immutable; every transition returns a new value)
# =========================================================
@dataclass(frozen=True)
class GameState:
    word: str
    phase: GamePhase = GamePhase.FINDING_LETTERS
    letter_index: int = 0
    score: int = 0
    streak: int = 0
    start_time: float = 0.0
    feedback: Optional[Feedback] = None
    error: Optional[str] = None
    last_score: Optional[ScoreBreakdown] = None
    # credited cells and the transient miss marker only; see board_states()
    cells: Mapping[Pos, ElementState] = field(default_factory=dict)
    solved: bool = False
    guesses: int = 0


def next_findable_letter(index: GridActivationIndex, start: int) -> Optional[int]:
    # Letters without lit cells can never be clicked, so they are skipped
    for i in range(start, len(index.word)):
        if index.cells_for_letter(i):
            return i
    return None


def new_game(index: GridActivationIndex, now: float) -> GameState:
    first = next_findable_letter(index, 0)
    if first is None:
        return GameState(word=index.word, phase=GamePhase.COMPLETED_WORD, letter_index=len(index.word), start_time=now)
    return GameState(word=index.word, letter_index=first, start_time=now)


def elapsed_seconds(state: GameState, now: float) -> float:
    return max(0.0, now - state.start_time)


def revealed_letters(state: GameState) -> Set[int]:
    if state.phase == GamePhase.COMPLETED_WORD:
        return set(range(len(state.word)))
    out = set(range(state.letter_index))
    if state.phase == GamePhase.SHOWING_CORRECT:
        out.add(state.letter_index)
    return out


def board_states(state: GameState, index: GridActivationIndex) -> Dict[Pos, ElementState]:
    """Per-cell display state; cells missing from the result are Unclicked."""
    out: Dict[Pos, ElementState] = {}
    for i in revealed_letters(state):
        for p in index.cells_for_letter(i):
            out[p] = ElementState.FOUND_ELEMENT
    # a fresh miss on a revealed cell shows as a miss
    out.update(state.cells)
    return out


def handle_click(
    state: GameState,
    index: GridActivationIndex,
    pos: Pos,
    now: float,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> GameState:
    """
    Resolve one click on grid position `pos`.

    Only processed while finding letters. Clicking a cell that was already
    credited is ignored entirely (no score, streak kept, feedback kept); any
    other cell outside the current letter is a miss, including uncredited
    cells of letters found earlier.
    """
    if state.solved or state.phase != GamePhase.FINDING_LETTERS:
        return state
    if not index.contains(pos):
        return replace(state, error=INVALID_CLICK_TEXT)
    if state.cells.get(pos) == ElementState.FOUND_ELEMENT:
        return state

    # Previous miss marker expires on the next processed click
    cells = {p: s for p, s in state.cells.items() if s != ElementState.WRONG_ELEMENT_CLICKED}

    hit = index.query(*pos)
    if not hit.active or hit.letter_index != state.letter_index:
        cells[pos] = ElementState.WRONG_ELEMENT_CLICKED
        return replace(
            state,
            cells=cells,
            streak=0,
            feedback=Feedback("bad", MISS_TEXT),
            error=None,
            last_score=None,
        )

    streak = state.streak + 1
    breakdown = score(elapsed_seconds(state, now), streak, policy)
    cells[pos] = ElementState.FOUND_ELEMENT
    return replace(
        state,
        phase=GamePhase.SHOWING_CORRECT,
        score=state.score + breakdown.total,
        streak=streak,
        last_score=breakdown,
        cells=cells,
        feedback=Feedback("good", good_text(streak)),
        error=None,
    )


def advance(state: GameState, index: GridActivationIndex, now: float) -> GameState:
    if state.phase != GamePhase.SHOWING_CORRECT:
        return state
    nxt = next_findable_letter(index, state.letter_index + 1)
    if nxt is None:
        return replace(
            state,
            phase=GamePhase.COMPLETED_WORD,
            letter_index=len(state.word),
            start_time=now,
            feedback=None,
            last_score=None,
        )
    return replace(
        state,
        phase=GamePhase.FINDING_LETTERS,
        letter_index=nxt,
        start_time=now,
        feedback=None,
        last_score=None,
    )


def is_correct_guess(word: str, guess: Optional[str]) -> bool:
    return (guess or "").strip().lower() == word.lower()


def submit_guess(state: GameState, guess: Optional[str]) -> GameState:
    if state.solved or state.phase != GamePhase.COMPLETED_WORD:
        return state
    if is_correct_guess(state.word, guess):
        return replace(state, solved=True, guesses=state.guesses + 1, feedback=Feedback("good", SOLVED_TEXT))
    return replace(state, guesses=state.guesses + 1, feedback=Feedback("bad", WRONG_GUESS_TEXT))


# =========================================================
# State machine: holds the current GameState for one word
# =========================================================
class GameStateMachine:
    def __init__(
        self,
        layout: WordLayout,
        clock: Callable[[], float] = time.time,
        policy: ScoringPolicy = DEFAULT_POLICY,
    ):
        self.index = GridActivationIndex(layout)
        self.clock = clock
        self.policy = policy
        self.state = new_game(self.index, self.clock())
        logger.info("New puzzle: %d letters, %d lit cells", len(layout.word), self.index.active_count)

    @property
    def word(self) -> str:
        return self.state.word

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    def restart(self) -> GameState:
        self.state = new_game(self.index, self.clock())
        return self.state

    def elapsed(self) -> float:
        return elapsed_seconds(self.state, self.clock())

    def board(self) -> Dict[Pos, ElementState]:
        return board_states(self.state, self.index)

    def handle_click(self, row: int, col: int) -> GameState:
        before = self.state
        self.state = handle_click(before, self.index, (row, col), self.clock(), self.policy)
        if self.state.error and self.state.error != before.error:
            logger.warning("Invalid click at %s", (row, col))
        elif self.state is not before:
            logger.debug(
                "Click %s for letter %d -> %s (score %d, streak %d)",
                (row, col), before.letter_index, self.state.feedback.kind if self.state.feedback else "-",
                self.state.score, self.state.streak,
            )
        return self.state

    def advance(self) -> GameState:
        before = self.state
        self.state = advance(before, self.index, self.clock())
        if self.state.phase == GamePhase.COMPLETED_WORD and before.phase != GamePhase.COMPLETED_WORD:
            logger.info("All letters found (score %d)", self.state.score)
        return self.state

    def submit_guess(self, guess: Optional[str]) -> GameState:
        before = self.state
        self.state = submit_guess(before, guess)
        if self.state.solved and not before.solved:
            logger.info("Word solved after %d guess(es), final score %d", self.state.guesses, self.state.score)
        return self.state
