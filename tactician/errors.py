"""Exception hierarchy for the tactician engine.

All engine exceptions inherit from TacticianError so callers (the CLI and the
REST API) can catch them in one place.

Usage:
    from tactician.errors import SearchError

    try:
        move = engine.choose_move()
    except SearchError as e:
        logger.error("search failed: %s", e.message)
"""

from typing import Any, Dict, Optional

__all__ = [
    "TacticianError",
    "ConfigurationError",
    "SearchError",
    "SearchInvariantError",
]


class TacticianError(Exception):
    """Base exception for all engine errors.

    Attributes:
        code: Machine-readable error code
        message: Human-readable description
        context: Extra data for debugging
    """
    code: str = "TACTICIAN_ERROR"

    def __init__(self, message: str = "", context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            details = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({details})"
        return f"[{self.code}] {self.message}"


class ConfigurationError(TacticianError):
    """Invalid configuration or static evaluation data."""
    code = "CONFIGURATION_ERROR"


class SearchError(TacticianError):
    """The search engine was invoked in a state it cannot handle."""
    code = "SEARCH_ERROR"


class SearchInvariantError(SearchError):
    """A node has no legal moves although the rules adapter says the game is on."""
    code = "SEARCH_INVARIANT_VIOLATION"
