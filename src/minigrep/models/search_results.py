"""
Scan result data models for minigrep.

Lines are produced and consumed one at a time during a scan, so they are
plain dataclasses rather than validated models.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Line:
    """
    One line of the scanned file.
    
    Attributes:
        number: 1-based position of the line in the file
        text: Line content without its terminator
    """
    number: int
    text: str


@dataclass
class ScanResult:
    """
    Outcome of one search call.
    
    Attributes:
        any_match_found: Whether at least one line matched
        lines_scanned: Number of lines read from the source
        matches_written: Number of records written to the sink
    """
    any_match_found: bool = False
    lines_scanned: int = 0
    matches_written: int = 0
    
    def record_line(self) -> None:
        self.lines_scanned += 1
    
    def record_match(self) -> None:
        self.any_match_found = True
        self.matches_written += 1
