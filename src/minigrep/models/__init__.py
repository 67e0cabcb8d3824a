"""
Data models for minigrep.

This module contains the data structures passed between the configuration
layer, the command line and the search engine.
"""

from .search_config import SearchConfig, SearchMode
from .search_results import Line, ScanResult
from .settings import MinigrepSettings

__all__ = ['SearchConfig', 'SearchMode', 'Line', 'ScanResult', 'MinigrepSettings']
