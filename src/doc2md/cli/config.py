"""CLI configuration.

Resolves the effective settings of one CLI invocation from command-line
options layered over the shared doc2md.config module.
"""

from pathlib import Path
from typing import List, Optional

from doc2md.config import Doc2MdConfig, get_config


class CLIContext:
    """CLI execution context with resolved configuration.

    Holds the effective configuration for a CLI command, including
    any overrides from global command-line options.
    """

    def __init__(
        self,
        config_file: Optional[str] = None,
        log_level: Optional[str] = None,
        log_format: Optional[str] = None,
        config: Optional[Doc2MdConfig] = None,
    ):
        """Initialize CLI context.

        Args:
            config_file: Explicit TOML file from --config.
            log_level: Log level override from --log-level.
            log_format: "structured" or "human" from --log-format.
            config: Optional config (loaded from env/TOML if not provided).
        """
        if config is not None:
            self._config = config
        elif config_file:
            self._config = Doc2MdConfig.from_env(config_file)
        else:
            self._config = get_config()
        self._log_level = log_level
        self._log_format = log_format

    @property
    def config(self) -> Doc2MdConfig:
        return self._config

    @property
    def log_level(self) -> str:
        return (self._log_level or self._config.log_level).upper()

    @property
    def log_format(self) -> str:
        if self._log_format:
            return self._log_format
        return "structured" if self._config.structured_logging else "human"

    def flavor(self, override: Optional[str] = None) -> str:
        """Flavor name: CLI option first, then config."""
        return override or self._config.render.flavor

    def heading_level(self, override: Optional[int] = None) -> int:
        return override if override is not None else self._config.render.heading_level

    def extension(self, override: Optional[str] = None) -> str:
        return override or self._config.generate.extension

    def output_dir(self, override: Optional[str] = None) -> Path:
        return Path(override) if override else self._config.generate.output_dir

    def excludes(self, extra: Optional[List[str]] = None) -> List[str]:
        return [*self._config.generate.excludes, *(extra or [])]

    def setup_logging(self) -> None:
        """Configure the doc2md logger for this invocation."""
        from doc2md.core.logging_config import configure_logging

        configure_logging(level=self.log_level, format=self.log_format)


def create_context(
    config_file: Optional[str] = None,
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
) -> CLIContext:
    """Create a CLI context with optional overrides."""
    return CLIContext(config_file=config_file, log_level=log_level, log_format=log_format)
