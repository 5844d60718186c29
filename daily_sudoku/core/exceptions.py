"""Custom exception hierarchy for the daily Sudoku game."""


class SudokuError(Exception):
    """Base exception for game failures."""


class ConfigurationError(SudokuError):
    """Raised when a collaborator is missing required configuration."""


class BackendError(SudokuError):
    """Raised when the persistence backend cannot complete a request."""


class PuzzleLoadError(BackendError):
    """Raised when today's puzzle is missing or malformed."""


class ScoreSaveError(BackendError):
    """Raised when a completion time cannot be stored."""


class IdentityResolutionError(SudokuError):
    """Raised when no player nickname could be resolved."""
