from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from element_decoder.elements import DATA_FILE
from element_decoder.errors import ConfigError
from element_decoder.layout import DEFAULT_LEFT_MARGIN, DEFAULT_TOP_MARGIN
from element_decoder.scoring import ScoringPolicy

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


# =========================================================
# Settings
# Streamlit Cloud -> App settings -> Secrets, or environment variables:
# STREAMLIT_ENV = "prod"
# DEBUG = "false"
# DECODER_TOP_MARGIN / DECODER_LEFT_MARGIN = layout offsets on the table
# DECODER_BASE_POINTS, DECODER_STREAK_STEP, DECODER_STREAK_CAP,
# DECODER_TIME_BONUS_MAX, DECODER_TIME_BONUS_WINDOW = scoring policy
# DECODER_DATA_FILE, DECODER_LOG_LEVEL
# Environment wins over secrets.
# =========================================================
@dataclass(frozen=True)
class Settings:
    top_margin: int = DEFAULT_TOP_MARGIN
    left_margin: int = DEFAULT_LEFT_MARGIN
    scoring: ScoringPolicy = field(default_factory=ScoringPolicy)
    data_file: str = DATA_FILE
    log_level: str = "INFO"
    debug: bool = False
    production: bool = False


def _lookup(key: str, environ: Mapping[str, str], secrets: Mapping[str, Any]) -> Optional[Any]:
    if key in environ:
        return environ[key]
    if key in secrets:
        return secrets[key]
    return None


def _as_int(key: str, raw: Any, default: int, minimum: int = 0) -> int:
    if raw is None or raw == "":
        return default
    try:
        v = int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from exc
    if v < minimum:
        raise ConfigError(f"{key} must be >= {minimum}, got {v}")
    return v


def _as_float(key: str, raw: Any, default: float) -> float:
    if raw is None or raw == "":
        return default
    try:
        v = float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from exc
    if v < 0:
        raise ConfigError(f"{key} must be >= 0, got {v}")
    return v


def _as_bool(raw: Any) -> bool:
    return str(raw).strip().lower() in ("1", "true", "yes", "on")


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    secrets: Optional[Mapping[str, Any]] = None,
) -> Settings:
    environ = os.environ if environ is None else environ
    secrets = secrets or {}

    def get(key: str) -> Optional[Any]:
        return _lookup(key, environ, secrets)

    d = Settings()
    p = d.scoring
    scoring = ScoringPolicy(
        base_points=_as_int("DECODER_BASE_POINTS", get("DECODER_BASE_POINTS"), p.base_points, minimum=1),
        streak_step=_as_int("DECODER_STREAK_STEP", get("DECODER_STREAK_STEP"), p.streak_step),
        streak_cap=_as_int("DECODER_STREAK_CAP", get("DECODER_STREAK_CAP"), p.streak_cap),
        time_bonus_max=_as_int("DECODER_TIME_BONUS_MAX", get("DECODER_TIME_BONUS_MAX"), p.time_bonus_max),
        time_bonus_window=_as_float("DECODER_TIME_BONUS_WINDOW", get("DECODER_TIME_BONUS_WINDOW"), p.time_bonus_window),
    )

    level = str(get("DECODER_LOG_LEVEL") or d.log_level).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"DECODER_LOG_LEVEL: unknown level {level!r}")

    return Settings(
        top_margin=_as_int("DECODER_TOP_MARGIN", get("DECODER_TOP_MARGIN"), d.top_margin),
        left_margin=_as_int("DECODER_LEFT_MARGIN", get("DECODER_LEFT_MARGIN"), d.left_margin),
        scoring=scoring,
        data_file=str(get("DECODER_DATA_FILE") or d.data_file),
        log_level=level,
        debug=_as_bool(get("DEBUG") or "false"),
        production=str(get("STREAMLIT_ENV") or "dev") == "prod",
    )


def configure_logging(level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger("element_decoder")
    logger.setLevel(level)

    # Prevent duplicate handlers (Streamlit reruns the script on every interaction)
    if logger.handlers:
        logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    logger.addHandler(handler)
    return logger
