"""
Search tools for minigrep.

This module contains the building blocks of a search: the matchers that decide
whether a line matches, the line scanner and the result sinks.
"""

from .matcher import Matcher, LiteralMatcher, RegexMatcher, build_matcher
from .line_scanner import scan_lines
from .result_sink import ResultSink, ConsoleSink, FileSink, format_match, open_sink

__all__ = [
    'Matcher',
    'LiteralMatcher',
    'RegexMatcher',
    'build_matcher',
    'scan_lines',
    'ResultSink',
    'ConsoleSink',
    'FileSink',
    'format_match',
    'open_sink'
]
