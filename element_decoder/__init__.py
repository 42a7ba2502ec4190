from element_decoder.errors import ConfigError, DatasetError, LayoutError, UnsupportedCharacter, WordTooLarge
from element_decoder.game import ElementState, Feedback, GamePhase, GameState, GameStateMachine
from element_decoder.layout import CellQuery, GridActivationIndex, WordLayout, build_layout
from element_decoder.letters import Glyph, glyph_for, normalize
from element_decoder.scoring import ScoreBreakdown, ScoringPolicy, score

__version__ = "1.0.0"

__all__ = [
    "CellQuery",
    "ConfigError",
    "DatasetError",
    "ElementState",
    "Feedback",
    "GamePhase",
    "GameState",
    "GameStateMachine",
    "Glyph",
    "GridActivationIndex",
    "LayoutError",
    "ScoreBreakdown",
    "ScoringPolicy",
    "UnsupportedCharacter",
    "WordLayout",
    "WordTooLarge",
    "build_layout",
    "glyph_for",
    "normalize",
    "score",
]
