"""
Configuration for doc2md.

Supports configuration via:
1. Environment variables (highest priority)
2. TOML config file (doc2md.toml or .doc2md.toml)
3. Default values (lowest priority)

Command-line options override all of them.

Environment variables:
- DOC2MD_CONFIG_FILE: Path to TOML config file
- DOC2MD_FLAVOR: Doc comment flavor (javadoc, phpdoc, jsdoc)
- DOC2MD_HEADING_LEVEL: Base heading level (1-6)
- DOC2MD_EXTENSION: Source file extension scanned by ``generate``
- DOC2MD_OUTPUT_DIR: Output directory used by ``generate``
- DOC2MD_EXCLUDE: Comma-separated directory names to skip
- DOC2MD_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
- DOC2MD_STRUCTURED_LOGGING: Emit JSON log lines (true/false)

Example doc2md.toml:

    [render]
    flavor = "phpdoc"
    heading_level = 2

    [generate]
    extension = "php"
    output_dir = "docs/api"
    excludes = ["tests"]

    [logging]
    level = "DEBUG"
    structured = false
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # Python < 3.11 fallback

from doc2md.core.flavors import FLAVORS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILES = ["doc2md.toml", ".doc2md.toml"]

MIN_HEADING_LEVEL = 1
MAX_HEADING_LEVEL = 6

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"true", "1", "yes", "on"}


def _normalize_flavor(value: Any, default: str) -> str:
    normalized = str(value).strip().lower()
    if normalized not in FLAVORS:
        logger.warning(
            "Invalid flavor '%s'. Falling back to '%s'. Valid options: %s",
            value,
            default,
            ", ".join(sorted(FLAVORS)),
        )
        return default
    return normalized


def _normalize_heading_level(value: Any, default: int) -> int:
    try:
        level = int(value)
    except (TypeError, ValueError):
        level = None
    if level is None or not MIN_HEADING_LEVEL <= level <= MAX_HEADING_LEVEL:
        logger.warning(
            "Invalid heading level '%s'. Falling back to %d. Valid range: %d-%d",
            value,
            default,
            MIN_HEADING_LEVEL,
            MAX_HEADING_LEVEL,
        )
        return default
    return level


def _normalize_log_level(value: Any, default: str) -> str:
    normalized = str(value).strip().upper()
    if normalized not in _VALID_LOG_LEVELS:
        logger.warning("Invalid log level '%s'. Falling back to '%s'", value, default)
        return default
    return normalized


def _split_list(value: Any) -> List[str]:
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = [str(item) for item in value]
    return [item.strip() for item in items if item.strip()]


@dataclass
class RenderSettings:
    """How doc comments are rendered."""

    flavor: str = "javadoc"
    heading_level: int = 1

    @classmethod
    def from_toml_dict(cls, data: Dict[str, Any]) -> "RenderSettings":
        settings = cls()
        if "flavor" in data:
            settings.flavor = _normalize_flavor(data["flavor"], settings.flavor)
        if "heading_level" in data:
            settings.heading_level = _normalize_heading_level(
                data["heading_level"], settings.heading_level
            )
        return settings


@dataclass
class GenerateSettings:
    """Defaults for the directory generator."""

    extension: str = "java"
    output_dir: Path = field(default_factory=lambda: Path("docs"))
    excludes: List[str] = field(default_factory=list)

    @classmethod
    def from_toml_dict(cls, data: Dict[str, Any]) -> "GenerateSettings":
        settings = cls()
        if "extension" in data:
            settings.extension = str(data["extension"]).strip().lstrip(".") or settings.extension
        if "output_dir" in data:
            settings.output_dir = Path(data["output_dir"])
        if "excludes" in data:
            settings.excludes = _split_list(data["excludes"])
        return settings


@dataclass
class Doc2MdConfig:
    """doc2md configuration with support for env vars and TOML overrides."""

    render: RenderSettings = field(default_factory=RenderSettings)
    generate: GenerateSettings = field(default_factory=GenerateSettings)

    # Logging configuration
    log_level: str = "INFO"
    structured_logging: bool = False

    # Where the settings came from, if a file was read
    config_file: Optional[Path] = None

    @classmethod
    def from_env(cls, config_file: Optional[str] = None) -> "Doc2MdConfig":
        """
        Create configuration from environment variables and optional TOML file.

        Priority (highest to lowest):
        1. Environment variables
        2. TOML config file
        3. Default values
        """
        config = cls()

        toml_path = config_file or os.environ.get("DOC2MD_CONFIG_FILE")
        if toml_path:
            config._load_toml(Path(toml_path))
        else:
            for default_path in DEFAULT_CONFIG_FILES:
                if Path(default_path).exists():
                    config._load_toml(Path(default_path))
                    break

        config._load_env()
        return config

    def _load_toml(self, path: Path) -> None:
        """Load configuration from TOML file."""
        if not path.exists():
            logger.warning("Config file not found: %s", path)
            return

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.error("Error loading config file %s: %s", path, e)
            return

        self.config_file = path

        if "render" in data:
            self.render = RenderSettings.from_toml_dict(data["render"])

        if "generate" in data:
            self.generate = GenerateSettings.from_toml_dict(data["generate"])

        if "logging" in data:
            log = data["logging"]
            if "level" in log:
                self.log_level = _normalize_log_level(log["level"], self.log_level)
            if "structured" in log:
                self.structured_logging = _parse_bool(log["structured"])

    def _load_env(self) -> None:
        """Load configuration from environment variables."""
        if flavor := os.environ.get("DOC2MD_FLAVOR"):
            self.render.flavor = _normalize_flavor(flavor, self.render.flavor)

        if level := os.environ.get("DOC2MD_HEADING_LEVEL"):
            self.render.heading_level = _normalize_heading_level(
                level, self.render.heading_level
            )

        if extension := os.environ.get("DOC2MD_EXTENSION"):
            self.generate.extension = extension.strip().lstrip(".") or self.generate.extension

        if output_dir := os.environ.get("DOC2MD_OUTPUT_DIR"):
            self.generate.output_dir = Path(output_dir)

        if excludes := os.environ.get("DOC2MD_EXCLUDE"):
            self.generate.excludes = _split_list(excludes)

        if log_level := os.environ.get("DOC2MD_LOG_LEVEL"):
            self.log_level = _normalize_log_level(log_level, self.log_level)

        if structured := os.environ.get("DOC2MD_STRUCTURED_LOGGING"):
            self.structured_logging = _parse_bool(structured)


# Global configuration instance
_config: Optional[Doc2MdConfig] = None


def get_config() -> Doc2MdConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Doc2MdConfig.from_env()
    return _config


def set_config(config: Optional[Doc2MdConfig]) -> None:
    """Set (or with None, reset) the global configuration instance."""
    global _config
    _config = config
