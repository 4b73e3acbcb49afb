"""
Configuration Loader - Manages YAML configuration and environment variables
"""
import yaml
import os
import logging
from dataclasses import dataclass
from typing import Any, Optional

from .errors import ConfigInvalid

logger = logging.getLogger(__name__)

DEFAULT_MAX_TAGS = 20
DEFAULT_MIN_SCROBS = 5


@dataclass
class RunOptions:
    """Run-level values the user may change before a run starts"""
    max_tags: int = DEFAULT_MAX_TAGS
    min_scrobs: int = DEFAULT_MIN_SCROBS
    set_genre: bool = True


def _as_int(value: Any, name: str) -> int:
    """Coerce a config value to a non-negative int or raise ConfigInvalid"""
    if isinstance(value, bool):
        raise ConfigInvalid(f"{name} must be an integer, got {value!r}")
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise ConfigInvalid(f"{name} must be an integer, got {value!r}")
    if number < 0:
        raise ConfigInvalid(f"{name} must not be negative, got {number}")
    return number


def _as_float(value: Any, name: str) -> float:
    """Coerce a config value to a positive float or raise ConfigInvalid"""
    if isinstance(value, bool):
        raise ConfigInvalid(f"{name} must be a number, got {value!r}")
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        raise ConfigInvalid(f"{name} must be a number, got {value!r}")
    if number <= 0:
        raise ConfigInvalid(f"{name} must be positive, got {number}")
    return number


def _as_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ('1', 'true', 'yes', 'y', 'on'):
        return True
    if text in ('0', 'false', 'no', 'n', 'off'):
        return False
    raise ConfigInvalid(f"{name} must be a boolean, got {value!r}")


class Config:
    """Configuration manager for genre-fixer"""

    def __init__(self, config_path: Optional[str] = "config.yaml"):
        self.config_path = config_path
        self.config = self._load_config()
        self._validate_config()

    def _load_config(self) -> dict:
        """Load configuration from YAML file (missing file means defaults)"""
        if not self.config_path or not os.path.exists(self.config_path):
            logger.debug(f"No configuration file at {self.config_path}, using defaults")
            return {}

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigInvalid(f"Cannot parse {self.config_path}: {e}") from e
        except OSError as e:
            raise ConfigInvalid(f"Cannot read {self.config_path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigInvalid(f"{self.config_path} must contain a mapping at top level")
        return data

    def _validate_config(self):
        """Validate sections and typed fields"""
        for section in ('lastfm', 'itunes', 'tagging', 'genres'):
            value = self.config.get(section)
            if value is not None and not isinstance(value, dict):
                raise ConfigInvalid(f"Configuration section {section} must be a mapping")

        # Touch every typed property so bad values fail before any track is read
        for name in ('max_tags', 'min_scrobs', 'lastfm_timeout', 'itunes_timeout',
                     'itunes_enabled', 'set_genre', 'dry_run'):
            getattr(self, name)

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """
        Get configuration value

        Args:
            section: Configuration section
            key: Configuration key
            default: Default value if not found

        Returns:
            Configuration value or default
        """
        values = self.config.get(section) or {}
        value = values.get(key)
        return default if value is None else value

    @property
    def lastfm_api_key(self) -> str:
        """Get Last.FM API key (with environment variable override)"""
        key = os.getenv('LASTFM_API_KEY') or str(self.get('lastfm', 'api_key', ''))
        # Placeholder from config.example.yaml counts as unset
        return '' if key.startswith('YOUR_') else key

    @property
    def max_tags(self) -> int:
        """Get maximum tag position considered per Last.FM answer"""
        return _as_int(self.get('lastfm', 'max_tags', DEFAULT_MAX_TAGS), 'lastfm.max_tags')

    @property
    def min_scrobs(self) -> int:
        """Get minimum tag popularity count (strictly exceeded)"""
        return _as_int(self.get('lastfm', 'min_scrobs', DEFAULT_MIN_SCROBS), 'lastfm.min_scrobs')

    @property
    def lastfm_timeout(self) -> float:
        """Get Last.FM request timeout in seconds"""
        return _as_float(self.get('lastfm', 'timeout', 10), 'lastfm.timeout')

    @property
    def itunes_enabled(self) -> bool:
        """Check if the iTunes Store fallback genre is queried"""
        return _as_bool(self.get('itunes', 'enabled', True), 'itunes.enabled')

    @property
    def itunes_timeout(self) -> float:
        """Get iTunes Store request timeout in seconds"""
        return _as_float(self.get('itunes', 'timeout', 10), 'itunes.timeout')

    @property
    def set_genre(self) -> bool:
        """Check if the genre field is written in addition to grouping"""
        return _as_bool(self.get('tagging', 'set_genre', True), 'tagging.set_genre')

    @property
    def dry_run(self) -> bool:
        """Check if writes are only logged"""
        return _as_bool(self.get('tagging', 'dry_run', False), 'tagging.dry_run')

    @property
    def genre_table_path(self) -> Optional[str]:
        """Get custom genre table path (None = packaged table)"""
        return self.get('genres', 'table_path') or None

    def run_options(self) -> RunOptions:
        """Build the run options from this configuration"""
        return RunOptions(
            max_tags=self.max_tags,
            min_scrobs=self.min_scrobs,
            set_genre=self.set_genre,
        )
