"""
Settings management package for minigrep.

This package provides settings file parsing, environment overrides and the
construction of validated search configurations.
"""

from .parser import (
    ConfigParser,
    ConfigParseResult,
    ConfigurationError,
    build_search_config,
    load_settings
)

__all__ = [
    'ConfigParser',
    'ConfigParseResult',
    'ConfigurationError',
    'build_search_config',
    'load_settings'
]
