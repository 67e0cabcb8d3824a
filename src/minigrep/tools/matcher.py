"""
Line matchers for minigrep.

A matcher answers one question for each line of the scanned file: does it
match the pattern? Literal and regular expression patterns each have their own
matcher, and both support case-sensitive and case-insensitive matching.
"""

import re
from abc import ABC, abstractmethod

from ..errors import PatternError
from ..models.search_config import SearchMode


class Matcher(ABC):
    """Predicate deciding whether a single line matches the search pattern."""
    
    def __init__(self, pattern: str, case_insensitive: bool = False):
        self.pattern = pattern
        self.case_insensitive = case_insensitive
    
    @abstractmethod
    def matches(self, line: str) -> bool:
        """Return True if the line matches the pattern."""
    
    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.pattern!r}, case_insensitive={self.case_insensitive})"


class LiteralMatcher(Matcher):
    """
    Substring matcher without any regular expression semantics.
    
    In case-insensitive mode both the pattern and each line are lowercased
    before the substring test. The pattern is lowercased once, here.
    """
    
    def __init__(self, pattern: str, case_insensitive: bool = False):
        super().__init__(pattern, case_insensitive)
        self._needle = pattern.lower() if case_insensitive else pattern
    
    def matches(self, line: str) -> bool:
        if self.case_insensitive:
            line = line.lower()
        return self._needle in line


class RegexMatcher(Matcher):
    """
    Regular expression matcher.
    
    A line matches if the expression is found anywhere in it. Case-insensitive
    mode compiles the whole expression with re.IGNORECASE instead of
    lowercasing the input, so character classes like ``[A-Z]`` keep working.
    """
    
    def __init__(self, pattern: str, case_insensitive: bool = False):
        super().__init__(pattern, case_insensitive)
        flags = re.IGNORECASE if case_insensitive else 0
        try:
            self._regex = re.compile(pattern, flags)
        except re.error as e:
            raise PatternError(pattern, str(e)) from e
    
    def matches(self, line: str) -> bool:
        return self._regex.search(line) is not None


def build_matcher(pattern: str, mode: SearchMode, case_insensitive: bool = False) -> Matcher:
    """
    Create the matcher for a pattern, mode and case sensitivity.
    
    Args:
        pattern: Pattern text as supplied by the user
        mode: Literal or regular expression interpretation
        case_insensitive: Whether letter case is ignored
        
    Returns:
        Matcher implementing the requested strategy
        
    Raises:
        PatternError: If mode is REGEX and the pattern does not compile
    """
    if mode is SearchMode.REGEX:
        return RegexMatcher(pattern, case_insensitive)
    return LiteralMatcher(pattern, case_insensitive)
