class TilesExtError(Exception):
    """Base exception for the tiles-ext project."""


class UnknownLineModeError(TilesExtError, ValueError):
    """Raised when a line mode is neither diagonal nor covering."""

    def __init__(self, mode: object) -> None:
        super().__init__(f"Unknown line mode: {mode!r}")
        self.mode = mode


class MissingTileMapError(TilesExtError):
    """Raised when a map query has no tile map to delegate to."""


class SettingsError(TilesExtError):
    """Raised when a settings file has an unexpected shape or unknown keys."""
