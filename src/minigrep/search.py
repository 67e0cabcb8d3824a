"""
Search orchestration for minigrep.

This module ties the matcher, the line scanner and the result sink together:
it drives one scan of the source file, writes every matching line to the sink
as soon as it is found and reports whether anything matched.
"""

import logging
from contextlib import ExitStack
from typing import BinaryIO, Optional, TextIO

from .errors import SearchIOError
from .models.search_config import SearchConfig
from .models.search_results import ScanResult
from .tools.line_scanner import scan_lines
from .tools.matcher import Matcher, build_matcher
from .tools.result_sink import ResultSink, open_sink


logger = logging.getLogger(__name__)


class SearchRunner:
    """
    Runs a single search described by a SearchConfig.

    The runner exclusively owns the source stream and the sink for the
    duration of run() and releases both on every exit path. Output is written
    incrementally, so partial results stay in the destination when a later
    read or write fails.
    """

    def __init__(self, config: SearchConfig, console: Optional[TextIO] = None):
        """
        Initialize the search runner.

        Args:
            config: Validated search configuration
            console: Stream used instead of standard output when no
                destination is configured
        """
        self.config = config
        self.console = console
        self._stats = ScanResult()

    def run(self) -> ScanResult:
        """
        Scan the source and write matching lines to the sink.

        Returns:
            ScanResult describing the completed scan

        Raises:
            PatternError: If the pattern is not a valid regular expression.
                Raised before the source or destination is touched.
            SearchIOError: If the source cannot be opened or read, or the
                destination cannot be created or written
        """
        config = self.config
        self._stats = ScanResult()
        logger.info(f"Performing search: {config}")
        logger.debug(f"Search configuration: {config.to_dict()}")
        matcher = build_matcher(config.pattern, config.mode, config.case_insensitive)

        with ExitStack() as stack:
            source = stack.enter_context(self._open_source())
            sink = stack.enter_context(self._open_sink())
            self._scan(source, matcher, sink)

        stats = self._stats
        if not stats.any_match_found:
            logger.info(f"No matches found for '{config.pattern}' in {config.source_path}")

        logger.debug(
            f"Search finished: {stats.lines_scanned} lines scanned, "
            f"{stats.matches_written} matches written"
        )
        return stats

    def _open_source(self) -> BinaryIO:
        path = self.config.source_path
        try:
            return open(path, 'rb')
        except OSError as e:
            raise SearchIOError(f"cannot open source {path}: {e}", path) from e

    def _open_sink(self) -> ResultSink:
        if self.config.writes_to_console():
            logger.info("No output file given, results will be printed to the console")
        return open_sink(self.config.destination, self.config.encoding, self.console)

    def _scan(self, source: BinaryIO, matcher: Matcher, sink: ResultSink) -> None:
        for line in scan_lines(source, self.config.encoding):
            self._stats.record_line()
            if matcher.matches(line.text):
                sink.write_match(line.number, line.text)
                self._stats.record_match()


def run(config: SearchConfig, console: Optional[TextIO] = None) -> ScanResult:
    """
    Convenience function to run one search.

    Args:
        config: Validated search configuration
        console: Optional replacement for standard output

    Returns:
        ScanResult of the completed scan

    Raises:
        SearchError: If the pattern is invalid or an I/O operation fails
    """
    return SearchRunner(config, console=console).run()
