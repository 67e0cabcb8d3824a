"""
Error types raised by the minigrep search engine.

All failures of a search call derive from SearchError so callers can report
them uniformly and exit with a non-zero status.
"""

from pathlib import Path
from typing import Optional, Union


class SearchError(Exception):
    """Base class for failures of a single search call."""
    pass


class PatternError(SearchError):
    """
    Raised when a pattern cannot be compiled as a regular expression.
    
    Attributes:
        pattern: The pattern text exactly as supplied
        reason: The compiler's description of the problem
    """
    
    def __init__(self, pattern: str, reason: str = ""):
        self.pattern = pattern
        self.reason = reason
        message = f"Invalid regular expression '{pattern}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class SearchIOError(SearchError):
    """
    Raised when the source or destination cannot be opened, read or written.
    
    Attributes:
        path: File involved in the failure, None for the console
    """
    
    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else None
        super().__init__(message)
