"""
Command line interface for minigrep.

Parses the invocation into a SearchConfig, runs the search and maps failures to
a diagnostic on stderr and exit status 1.

    minigrep search duct poem.txt
    minigrep regex 'error\\d+' app.log matches.txt --ignore-case
"""

import importlib
import logging
import sys
from pathlib import Path
from typing import Annotated, NoReturn, Optional, Tuple

import typer
from pydantic import ValidationError

from . import __version__
from .config.parser import ConfigurationError, build_search_config, load_settings
from .errors import SearchError
from .models.search_config import SearchMode
from .search import run


logger = logging.getLogger(__name__)

# typer may bundle its own copy of click, so take the exception classes from
# the module typer.Exit comes from rather than importing click directly.
_click_exceptions = importlib.import_module(typer.Exit.__module__)

app = typer.Typer(add_completion=False, help="Search a file for lines matching a pattern.")


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"minigrep: {__version__}")
        raise typer.Exit()


def _attach_log_handler(level: int) -> Tuple[logging.Handler, int]:
    """
    Send minigrep diagnostics to stderr as plain messages.
    
    Returns:
        The installed handler and the previous package logger level
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger = logging.getLogger("minigrep")
    previous_level = package_logger.level
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return handler, previous_level


def _detach_log_handler(handler: logging.Handler, previous_level: int) -> None:
    package_logger = logging.getLogger("minigrep")
    package_logger.removeHandler(handler)
    package_logger.setLevel(previous_level)


def _fail(message: str) -> NoReturn:
    typer.echo(f"Application error: {message}", err=True)
    raise typer.Exit(code=1)


@app.command()
def search(
    mode: Annotated[SearchMode, typer.Argument(help="'search' for a literal substring, 'regex' for a regular expression.")],
    pattern: Annotated[str, typer.Argument(help="Text or expression to look for.")],
    file_path: Annotated[Path, typer.Argument(help="File to search.")],
    output_file: Annotated[Optional[Path], typer.Argument(help="Write matches here instead of the console.")] = None,
    ignore_case: Annotated[bool, typer.Option("--ignore-case", "-i", help="Case-insensitive matching.")] = False,
    config: Annotated[Optional[Path], typer.Option("--config", "-c", help="Settings file to use.")] = None,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit."),
    ] = None,
) -> None:
    """Print the lines of FILE_PATH that match PATTERN."""
    try:
        parse_result = load_settings(config)
    except ConfigurationError as e:
        _fail(str(e))

    settings = parse_result.settings
    try:
        search_config = build_search_config(
            mode, pattern, file_path, output_file,
            ignore_case=ignore_case,
            settings=settings
        )
    except ValidationError as e:
        reasons = "; ".join(error['msg'] for error in e.errors())
        raise typer.BadParameter(reasons, param_hint="PATTERN") from e

    handler, previous_level = _attach_log_handler(settings.get_log_level())
    try:
        source = "defaults" if parse_result.is_default else parse_result.config_path
        logger.debug(f"Settings loaded from {source}")
        if parse_result.env_overrides:
            logger.debug(f"Environment overrides: {', '.join(parse_result.env_overrides)}")
        run(search_config)
    except SearchError as e:
        _fail(str(e))
    finally:
        _detach_log_handler(handler, previous_level)


def main() -> None:
    """Console script entry point. Usage errors exit with status 1."""
    command = typer.main.get_command(app)
    try:
        exit_code = command.main(prog_name="minigrep", standalone_mode=False)
    except _click_exceptions.UsageError as e:
        typer.echo(f"Problem parsing arguments: {e.format_message()}", err=True)
        sys.exit(1)
    except _click_exceptions.Abort:
        typer.echo("Aborted!", err=True)
        sys.exit(1)
    sys.exit(exit_code or 0)
