"""
Settings data model for minigrep.

Settings are the user-level defaults that apply to every search: they come
from an optional YAML file and from environment variables, and the command
line may override them for a single invocation.
"""

from typing import Any, Dict
import logging
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .search_config import check_encoding


class MinigrepSettings(BaseModel):
    """
    Default options applied to every search.
    
    Attributes:
        ignore_case: Match case-insensitively unless told otherwise
        encoding: Text encoding used to read sources and write destinations
        log_level: Threshold for diagnostic messages written to stderr
    """
    
    model_config = ConfigDict(extra='forbid')
    
    ignore_case: bool = Field(False, description="Case-insensitive matching by default")
    encoding: str = Field("utf-8", description="Text encoding for files")
    log_level: str = Field("INFO", description="Diagnostic log level")
    
    @field_validator('encoding')
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Reject unknown encodings and those that cannot be split on newline bytes."""
        return check_encoding(v)
    
    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the level name and make sure logging knows it."""
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Invalid log level: {v}")
        return level
    
    def get_log_level(self) -> int:
        """Get the numeric logging level."""
        return logging.getLevelNamesMapping()[self.log_level]
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MinigrepSettings':
        """Create settings from a dictionary."""
        return cls.model_validate(data)
