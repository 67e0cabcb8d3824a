"""
minigrep - Core Package

A line-oriented text search utility that reports which lines of a file
match a literal substring or a regular expression.
"""

__version__ = "0.1.0"
__author__ = "minigrep Team"
