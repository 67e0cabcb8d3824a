"""
YAML settings parser for minigrep.

This module loads the optional settings file, applies environment variable
overrides and turns command line values into a validated SearchConfig. It
handles settings file discovery and reports helpful errors for invalid files.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List, Union, Mapping
import logging
from dataclasses import dataclass, field

from pydantic import ValidationError

from ..models.settings import MinigrepSettings
from ..models.search_config import SearchConfig, SearchMode


logger = logging.getLogger(__name__)


# Presence alone enables case-insensitive matching, whatever the value.
IGNORE_CASE_ENV = "IGNORE_CASE"
ENCODING_ENV = "MINIGREP_ENCODING"
LOG_LEVEL_ENV = "MINIGREP_LOG_LEVEL"


@dataclass
class ConfigParseResult:
    """
    Result of settings parsing operation.

    Attributes:
        settings: The parsed and validated settings
        config_path: Path to the settings file used, None if none was found
        env_overrides: Names of environment variables that were applied
    """
    settings: MinigrepSettings
    config_path: Optional[Path]
    env_overrides: List[str] = field(default_factory=list)

    @property
    def is_default(self) -> bool:
        """Whether no settings file was used."""
        return self.config_path is None


class ConfigurationError(Exception):
    """Raised when settings parsing or validation fails."""
    pass


class ConfigParser:
    """
    YAML settings parser with validation and error handling.

    Settings are resolved from, in increasing order of precedence: built-in
    defaults, a settings file, and environment variables. Command line flags
    are applied on top by build_search_config().
    """

    DEFAULT_CONFIG_NAMES = [
        '.minigrep.yaml',
        '.minigrep.yml',
        'minigrep.yaml',
        'minigrep.yml'
    ]

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """
        Initialize the settings parser.

        Args:
            environ: Environment to read overrides from (defaults to os.environ)
        """
        self.environ = environ if environ is not None else os.environ
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load_settings(self, config_path: Optional[Union[str, Path]] = None) -> ConfigParseResult:
        """
        Load settings from file and environment.

        Args:
            config_path: Path to settings file. If None, searches default locations.

        Returns:
            ConfigParseResult containing the settings and where they came from

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid
        """
        if config_path:
            config_path = Path(config_path)
            if not config_path.exists():
                raise ConfigurationError(f"Configuration file not found: {config_path}")
            config_data = self._load_yaml_file(config_path)
        else:
            config_path, config_data = self._find_and_load_config()
            if config_data is None:
                config_data = {}

        overrides = self._get_env_overrides()
        merged = dict(config_data)
        merged.update(overrides)

        try:
            settings = MinigrepSettings.from_dict(merged)
        except ValidationError as e:
            source = config_path or 'defaults'
            raise ConfigurationError(f"Invalid settings from {source}: {e}") from e

        if config_path:
            self.logger.debug(f"Settings loaded from {config_path}")

        return ConfigParseResult(
            settings=settings,
            config_path=config_path,
            env_overrides=self._env_names(overrides)
        )

    def _find_and_load_config(self) -> tuple[Optional[Path], Optional[Dict[str, Any]]]:
        """
        Find and load a settings file from the default locations.

        Returns:
            Tuple of (config_path, config_data) or (None, None) if not found
        """
        search_paths = [
            Path.cwd(),
            Path.home(),
            Path.home() / '.config' / 'minigrep',
        ]

        for search_path in search_paths:
            for config_name in self.DEFAULT_CONFIG_NAMES:
                config_file = search_path / config_name
                if config_file.exists() and config_file.is_file():
                    try:
                        config_data = self._load_yaml_file(config_file)
                        self.logger.debug(f"Found configuration file: {config_file}")
                        return config_file, config_data
                    except ConfigurationError as e:
                        self.logger.warning(f"Skipping {config_file}: {e}")
                        continue

        return None, None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load and parse YAML file.

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed YAML data as dictionary

        Raises:
            ConfigurationError: If file cannot be read or parsed
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()

            if not content.strip():
                self.logger.warning(f"Configuration file is empty: {file_path}")
                return {}

            data = yaml.safe_load(content)

            if data is None:
                return {}

            if not isinstance(data, dict):
                raise ConfigurationError(f"Configuration file must contain a YAML object, got {type(data).__name__}")

            return data

        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {file_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {file_path}: {e}") from e

    def _get_env_overrides(self) -> Dict[str, Any]:
        """Collect setting values from environment variables."""
        overrides: Dict[str, Any] = {}
        if IGNORE_CASE_ENV in self.environ:
            overrides['ignore_case'] = True
        if self.environ.get(ENCODING_ENV):
            overrides['encoding'] = self.environ[ENCODING_ENV]
        if self.environ.get(LOG_LEVEL_ENV):
            overrides['log_level'] = self.environ[LOG_LEVEL_ENV]
        return overrides

    @staticmethod
    def _env_names(overrides: Dict[str, Any]) -> List[str]:
        names = {
            'ignore_case': IGNORE_CASE_ENV,
            'encoding': ENCODING_ENV,
            'log_level': LOG_LEVEL_ENV,
        }
        return [names[key] for key in overrides]


def load_settings(config_path: Optional[Union[str, Path]] = None,
                  environ: Optional[Mapping[str, str]] = None) -> ConfigParseResult:
    """
    Convenience function to load settings.

    Args:
        config_path: Path to settings file (optional)
        environ: Environment mapping (defaults to os.environ)

    Returns:
        ConfigParseResult containing parsed settings

    Raises:
        ConfigurationError: If settings are invalid
    """
    parser = ConfigParser(environ=environ)
    return parser.load_settings(config_path)


def build_search_config(mode: Union[SearchMode, str],
                        pattern: str,
                        file_path: Union[str, Path],
                        output_file: Optional[Union[str, Path]] = None,
                        ignore_case: bool = False,
                        settings: Optional[MinigrepSettings] = None) -> SearchConfig:
    """
    Combine command line values with settings into a SearchConfig.

    Case-insensitivity is enabled if either the flag or the settings ask for
    it; there is no way to force case-sensitive matching once a default says
    otherwise.

    Args:
        mode: Literal ('search') or regular expression ('regex') mode
        pattern: Search pattern
        file_path: File to scan
        output_file: Optional destination file
        ignore_case: Value of the --ignore-case flag
        settings: Loaded settings (defaults if None)

    Returns:
        Validated SearchConfig

    Raises:
        pydantic.ValidationError: If the values do not form a valid search
    """
    settings = settings or MinigrepSettings()
    return SearchConfig(
        pattern=pattern,
        mode=mode,
        case_insensitive=ignore_case or settings.ignore_case,
        source_path=Path(file_path),
        destination=Path(output_file) if output_file is not None else None,
        encoding=settings.encoding
    )
