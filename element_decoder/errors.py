from __future__ import annotations


class LayoutError(ValueError):
    """Raised when a word cannot be turned into a playable layout."""


class UnsupportedCharacter(LayoutError):
    def __init__(self, char: str):
        self.char = char
        super().__init__(f"Unsupported character {char!r} — no glyph defined for it")


class WordTooLarge(LayoutError):
    pass


class DatasetError(ValueError):
    pass


class ConfigError(ValueError):
    pass
