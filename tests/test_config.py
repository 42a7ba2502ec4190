import logging

import pytest

from element_decoder.config import Settings, configure_logging, load_settings
from element_decoder.errors import ConfigError
from element_decoder.scoring import ScoringPolicy


def test_defaults():
    s = load_settings(environ={}, secrets={})
    assert s == Settings()
    assert s.top_margin == 3
    assert s.left_margin == 3
    assert s.scoring == ScoringPolicy()
    assert s.log_level == "INFO"
    assert not s.debug
    assert not s.production


def test_secrets_are_used():
    s = load_settings(environ={}, secrets={"DECODER_TOP_MARGIN": 2, "STREAMLIT_ENV": "prod", "DEBUG": "true"})
    assert s.top_margin == 2
    assert s.production
    assert s.debug


def test_environment_wins_over_secrets():
    s = load_settings(environ={"DECODER_LEFT_MARGIN": "1"}, secrets={"DECODER_LEFT_MARGIN": 5})
    assert s.left_margin == 1


def test_scoring_overrides():
    s = load_settings(environ={"DECODER_BASE_POINTS": "10", "DECODER_TIME_BONUS_WINDOW": "2.5"}, secrets={})
    assert s.scoring.base_points == 10
    assert s.scoring.time_bonus_window == 2.5
    assert s.scoring.streak_step == ScoringPolicy().streak_step


@pytest.mark.parametrize("env", [
    {"DECODER_TOP_MARGIN": "three"},
    {"DECODER_LEFT_MARGIN": "-1"},
    {"DECODER_BASE_POINTS": "0"},
    {"DECODER_TIME_BONUS_WINDOW": "soon"},
    {"DECODER_LOG_LEVEL": "chatty"},
])
def test_invalid_values(env):
    with pytest.raises(ConfigError):
        load_settings(environ=env, secrets={})


def test_log_level_is_upper_cased():
    assert load_settings(environ={"DECODER_LOG_LEVEL": "debug"}, secrets={}).log_level == "DEBUG"


def test_configure_logging_is_idempotent():
    configure_logging("DEBUG")
    logger = configure_logging("WARNING")
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
