"""
Search configuration data models for minigrep.

This module defines the immutable description of a single search: the pattern,
how it is interpreted, the file to scan and where matches are written.
"""

from typing import Any, Dict, Optional
from pathlib import Path
from enum import Enum
import codecs
from pydantic import BaseModel, ConfigDict, Field, field_validator


def check_encoding(encoding: str) -> str:
    """
    Validate a text encoding for line-by-line decoding.
    
    Lines are split on the byte 0x0A before decoding, so the encoding must
    encode a newline as that single byte (UTF-16 and UTF-32 do not).
    
    Raises:
        ValueError: If the encoding is unknown or not ASCII-compatible
    """
    try:
        codecs.lookup(encoding)
        newline = "\n".encode(encoding)
    except LookupError:
        raise ValueError(f"Unknown text encoding: {encoding}")
    if newline != b"\n":
        raise ValueError(f"Unsupported text encoding: {encoding} (newline must be a single 0x0A byte)")
    return encoding


class SearchMode(Enum):
    """How the pattern is interpreted. Values are the command line spellings."""
    LITERAL = "search"
    REGEX = "regex"


class SearchConfig(BaseModel):
    """
    Represents one validated search invocation.
    
    Built once by the command line layer and never modified afterwards. The
    mode and the case-insensitivity flag are independent, so all four
    combinations are valid.
    
    Attributes:
        pattern: Literal text or regular expression to look for
        mode: Whether the pattern is a literal substring or a regular expression
        case_insensitive: Whether letter case is ignored when matching
        source_path: File to scan
        destination: File receiving the matched lines, or None for the console
        encoding: Text encoding of the source and destination files
    """
    
    model_config = ConfigDict(frozen=True)
    
    pattern: str = Field(..., min_length=1, description="Search pattern")
    mode: SearchMode = Field(SearchMode.LITERAL, description="Pattern interpretation")
    case_insensitive: bool = Field(False, description="Ignore letter case")
    source_path: Path = Field(..., description="File to scan")
    destination: Optional[Path] = Field(None, description="Output file, console when unset")
    encoding: str = Field("utf-8", description="Text encoding for source and destination")
    
    @field_validator('mode', mode='before')
    @classmethod
    def validate_mode(cls, v) -> SearchMode:
        """Accept both enum members and their command line spellings."""
        if isinstance(v, str):
            try:
                return SearchMode(v.lower())
            except ValueError:
                raise ValueError(f"Invalid search mode: {v} (expected 'search' or 'regex')")
        return v
    
    @field_validator('encoding')
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Reject unknown encodings and those that cannot be split on newline bytes."""
        return check_encoding(v)
    
    def writes_to_console(self) -> bool:
        """Check if matches go to standard output rather than a file."""
        return self.destination is None
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert the search configuration to a dictionary representation."""
        data = self.model_dump()
        data['mode'] = self.mode.value
        data['source_path'] = str(self.source_path)
        data['destination'] = str(self.destination) if self.destination else None
        return data
    
    def __str__(self) -> str:
        """String representation of the search configuration."""
        parts = [f"Pattern: '{self.pattern}'", f"Mode: {self.mode.value}"]
        if self.case_insensitive:
            parts.append("Case: insensitive")
        parts.append(f"Source: {self.source_path}")
        parts.append(f"Output: {self.destination or 'console'}")
        return " | ".join(parts)
