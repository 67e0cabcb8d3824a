"""
Unit tests for the search orchestrator.

Exercises complete scans against temporary files: match reporting, output
destinations, informational notices and error propagation.
"""

import io
import logging
import os
import shutil
import tempfile
from pathlib import Path

import pytest

from minigrep.errors import PatternError, SearchIOError
from minigrep.models.search_config import SearchConfig, SearchMode
from minigrep.search import SearchRunner, run
from minigrep.tools.result_sink import FileSink


POEM = "Rust:\nsafe, fast, productive.\nPick three.\nDuct tape."
TRUST = "Rust:\nsafe, fast, productive.\nPick three.\nTrust me."


class TestSearchRunner:
    """Test cases for SearchRunner and run()."""
    
    def setup_method(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.root = Path(self.temp_dir)
        self.poem = self.root / "poem.txt"
        self.poem.write_text(POEM)
        self.console = io.StringIO()
    
    def teardown_method(self):
        """Clean up test fixtures."""
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)
    
    def _config(self, pattern, **kwargs):
        kwargs.setdefault('source_path', self.poem)
        return SearchConfig(pattern=pattern, **kwargs)
    
    def test_literal_case_sensitive(self):
        """Test that only the exact substring is reported."""
        result = run(self._config("duct"), console=self.console)
        
        assert self.console.getvalue() == "Line 2: safe, fast, productive.\n"
        assert result.any_match_found
        assert result.matches_written == 1
        assert result.lines_scanned == 4
    
    def test_literal_case_insensitive(self):
        """Test case-insensitive literal search."""
        run(self._config("rUsT", case_insensitive=True), console=self.console)
        
        assert self.console.getvalue() == "Line 1: Rust:\n"
    
    def test_literal_case_insensitive_multiple_lines(self):
        """Test that every matching line is reported."""
        trust = self.root / "trust.txt"
        trust.write_text(TRUST)
        
        run(self._config("RUST", case_insensitive=True, source_path=trust), console=self.console)
        
        assert self.console.getvalue() == "Line 1: Rust:\nLine 4: Trust me.\n"
    
    def test_regex_case_insensitive(self):
        """Test a case-insensitive regex against an upper case line."""
        log = self.root / "app.log"
        log.write_text("starting\nERROR42 occurred\nerror without code\n")
        
        run(self._config(r"error\d+", mode=SearchMode.REGEX, case_insensitive=True, source_path=log),
            console=self.console)
        
        assert self.console.getvalue() == "Line 2: ERROR42 occurred\n"
    
    def test_regex_case_sensitive(self):
        """Test that regex matches anywhere in the line."""
        run(self._config(r"f\w+t", mode=SearchMode.REGEX), console=self.console)
        
        assert self.console.getvalue() == "Line 2: safe, fast, productive.\n"
    
    def test_invalid_pattern_fails_before_io(self):
        """Test that PatternError is raised before the source or destination is touched."""
        destination = self.root / "out.txt"
        destination.write_text("keep me\n")
        config = self._config(
            "[",
            mode=SearchMode.REGEX,
            source_path=self.root / "does_not_exist.txt",
            destination=destination
        )
        
        with pytest.raises(PatternError) as exc_info:
            run(config, console=self.console)
        
        assert exc_info.value.pattern == "["
        assert destination.read_text() == "keep me\n"
        assert self.console.getvalue() == ""
    
    def test_no_matches_is_success_with_notice(self, caplog):
        """Test that zero matches writes nothing and logs a notice."""
        caplog.set_level(logging.INFO, logger="minigrep")
        
        result = run(self._config("zebra"), console=self.console)
        
        assert not result.any_match_found
        assert result.matches_written == 0
        assert self.console.getvalue() == ""
        notices = [r for r in caplog.records if "No matches found" in r.getMessage()]
        assert len(notices) == 1
        assert notices[0].levelno == logging.INFO
    
    def test_opening_notice(self, caplog):
        """Test that the search being performed is announced at INFO level."""
        caplog.set_level(logging.INFO, logger="minigrep")
        
        run(self._config("duct", case_insensitive=True), console=self.console)
        
        assert "Performing search: Pattern: 'duct' | Mode: search | Case: insensitive" in caplog.text
    
    def test_console_notice_without_destination(self, caplog):
        """Test the informational notice when results go to the console."""
        caplog.set_level(logging.INFO, logger="minigrep")
        
        run(self._config("Pick"), console=self.console)
        
        assert "printed to the console" in caplog.text
        assert "No matches found" not in caplog.text
    
    def test_writes_to_stdout_without_console_override(self, capsys):
        """Test that standard output is the default destination."""
        run(self._config("Pick"))
        
        assert capsys.readouterr().out == "Line 3: Pick three.\n"
    
    def test_file_destination(self, caplog):
        """Test writing matches to a destination file."""
        caplog.set_level(logging.INFO, logger="minigrep")
        destination = self.root / "out.txt"
        
        run(self._config("t", destination=destination), console=self.console)
        
        assert destination.read_text() == (
            "Line 1: Rust:\n"
            "Line 2: safe, fast, productive.\n"
            "Line 3: Pick three.\n"
            "Line 4: Duct tape.\n"
        )
        assert self.console.getvalue() == ""
        assert "printed to the console" not in caplog.text
    
    def test_file_destination_is_truncated(self):
        """Test that existing destination contents are replaced."""
        destination = self.root / "out.txt"
        destination.write_text("stale\n" * 100)
        
        run(self._config("Pick", destination=destination))
        
        assert destination.read_text() == "Line 3: Pick three.\n"
    
    def test_no_matches_leaves_empty_destination(self):
        destination = self.root / "out.txt"
        destination.write_text("stale\n")
        
        run(self._config("zebra", destination=destination))
        
        assert destination.read_text() == ""
    
    def test_idempotent(self):
        """Test that repeating a search yields byte-identical output."""
        first = self.root / "first.txt"
        second = self.root / "second.txt"
        
        run(self._config("a", destination=first))
        run(self._config("a", destination=second))
        
        assert first.read_bytes() == second.read_bytes()
        assert first.read_bytes()
    
    def test_line_numbers_strictly_increasing(self):
        """Test that matches are reported in file order with their positions."""
        source = self.root / "many.txt"
        lines = [f"{'hit' if i % 3 == 0 else 'miss'} {i}" for i in range(1, 31)]
        source.write_text("\n".join(lines) + "\n")
        
        run(self._config("hit", source_path=source), console=self.console)
        
        numbers = [int(record.split(":")[0].split()[1]) for record in self.console.getvalue().splitlines()]
        assert numbers == sorted(set(numbers))
        assert numbers == [i for i in range(1, 31) if i % 3 == 0]
        for number in numbers:
            assert lines[number - 1].startswith("hit")
    
    def test_missing_source(self):
        """Test that an unopenable source raises SearchIOError."""
        missing = self.root / "missing.txt"
        
        with pytest.raises(SearchIOError, match="cannot open source") as exc_info:
            run(self._config("x", source_path=missing), console=self.console)
        
        assert exc_info.value.path == missing
    
    def test_missing_source_does_not_truncate_destination(self):
        """Test that the source is opened before the destination."""
        destination = self.root / "out.txt"
        destination.write_text("keep me\n")
        
        with pytest.raises(SearchIOError):
            run(self._config("x", source_path=self.root / "missing.txt", destination=destination))
        
        assert destination.read_text() == "keep me\n"
    
    def test_unwritable_destination(self):
        """Test that an uncreatable destination raises SearchIOError."""
        destination = self.root / "no_such_dir" / "out.txt"
        
        with pytest.raises(SearchIOError, match="cannot open destination"):
            run(self._config("Rust", destination=destination))
    
    def test_decode_error_keeps_partial_output(self):
        """Test that a mid-file decoding error aborts but keeps earlier matches."""
        source = self.root / "mixed.txt"
        source.write_bytes(b"match here\n" * 2000 + b"\xff\xfe broken\nmatch later\n")
        destination = self.root / "out.txt"
        
        with pytest.raises(SearchIOError, match="cannot decode source"):
            run(self._config("match", source_path=source, destination=destination))
        
        written = destination.read_text()
        assert written.startswith("Line 1: match here\n")
        assert "match later" not in written
    
    def test_decode_error_reports_earlier_lines(self):
        """Test that lines before an invalid byte are still matched and written."""
        source = self.root / "bad_third_line.txt"
        source.write_bytes(b"match one\nmatch two\n\xff bad\nmatch later\n")
        
        with pytest.raises(SearchIOError, match="cannot decode source at line 3"):
            run(self._config("match", source_path=source), console=self.console)
        
        assert self.console.getvalue() == "Line 1: match one\nLine 2: match two\n"
    
    def test_write_failure_aborts_scan(self, monkeypatch):
        """Test that a failing sink write stops the scan."""
        destination = self.root / "out.txt"
        calls = []
        
        def failing_write(self, record):
            calls.append(record)
            raise OSError(28, "No space left on device")
        
        monkeypatch.setattr(FileSink, "_write", failing_write)
        
        with pytest.raises(SearchIOError, match="cannot write to"):
            run(self._config("t", destination=destination))
        
        assert len(calls) == 1
    
    def test_source_encoding(self):
        """Test that the configured encoding is used to read the source."""
        source = self.root / "latin.txt"
        source.write_bytes("caf\xe9 au lait\nth\xe9\n".encode("latin-1"))
        
        run(self._config("é", source_path=source, encoding="latin-1"), console=self.console)
        
        assert self.console.getvalue() == "Line 1: café au lait\nLine 2: thé\n"
    
    def test_runner_stats(self):
        """Test that the runner reports the statistics of its run."""
        runner = SearchRunner(self._config("a"), console=self.console)
        
        result = runner.run()
        
        assert result.lines_scanned == 4
        assert result.matches_written == 2
