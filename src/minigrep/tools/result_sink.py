"""
Result sinks for minigrep.

A sink is the destination for matched lines. Every match is written as
``Line {number}: {text}`` and flushed right away, so a destination file
reflects the matches found so far even if the scan is interrupted.
"""

import sys
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, TextIO, Union

from ..errors import SearchIOError


logger = logging.getLogger(__name__)


def format_match(line_number: int, line_text: str) -> str:
    """Render one matched line as a record, without the terminator."""
    return f"Line {line_number}: {line_text}"


class ResultSink(ABC):
    """Destination for matched lines."""
    
    def write_match(self, line_number: int, line_text: str) -> None:
        """
        Append one formatted record followed by a newline.
        
        Raises:
            SearchIOError: If the underlying write fails
        """
        record = format_match(line_number, line_text) + '\n'
        try:
            self._write(record)
        except OSError as e:
            raise SearchIOError(f"cannot write to {self.describe()}: {e}", self._path()) from e
    
    @abstractmethod
    def _write(self, record: str) -> None:
        """Write and flush a complete record."""
    
    @abstractmethod
    def describe(self) -> str:
        """Human readable name of the destination."""
    
    def _path(self) -> Optional[Path]:
        return None
    
    def close(self) -> None:
        """Release the destination."""
    
    def __enter__(self) -> 'ResultSink':
        return self
    
    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


class ConsoleSink(ResultSink):
    """
    Sink writing to standard output.
    
    The process stream is looked up at write time and never closed.
    """
    
    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream
    
    def _write(self, record: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(record)
        stream.flush()
    
    def describe(self) -> str:
        return "console"


class FileSink(ResultSink):
    """
    Sink writing to a file.
    
    The file is created or truncated when the sink is constructed, so its
    previous contents are always replaced.
    """
    
    def __init__(self, path: Union[str, Path], encoding: str = "utf-8"):
        self.path = Path(path)
        try:
            self._file = open(self.path, 'w', encoding=encoding, newline='\n')
        except OSError as e:
            raise SearchIOError(f"cannot open destination {self.path}: {e}", self.path) from e
        logger.debug(f"Opened destination file: {self.path}")
    
    def _write(self, record: str) -> None:
        self._file.write(record)
        self._file.flush()
    
    def describe(self) -> str:
        return str(self.path)
    
    def _path(self) -> Optional[Path]:
        return self.path
    
    def close(self) -> None:
        if self._file.closed:
            return
        try:
            self._file.close()
        except OSError as e:
            raise SearchIOError(f"cannot close destination {self.path}: {e}", self.path) from e


def open_sink(destination: Optional[Union[str, Path]] = None,
              encoding: str = "utf-8",
              console: Optional[TextIO] = None) -> ResultSink:
    """
    Select the sink for a destination.
    
    Args:
        destination: Output file path, or None for standard output
        encoding: Encoding used when writing a file
        console: Stream replacing standard output for the console sink
        
    Returns:
        FileSink if a destination is given, ConsoleSink otherwise
        
    Raises:
        SearchIOError: If the destination file cannot be created
    """
    if destination is not None:
        return FileSink(destination, encoding=encoding)
    return ConsoleSink(console)
