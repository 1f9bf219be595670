"""Configuration loader for the annotated source documenter.

Loads settings from configs/config.yaml and provides typed access
to all configuration sections via dataclasses.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "configs" / "config.yaml"


@dataclass
class ParserConfig:
    """Tokens delimiting the annotation block."""

    comment_open: str = "/*"
    comment_close: str = "*/"


@dataclass
class SourceConfig:
    """Which files are processed and how their body is formatted."""

    extension: str = ".go"
    test_suffix: str = "_test.go"
    language: str = "go"
    formatter: list[str] = field(default_factory=lambda: ["gofmt"])
    exclude_dirs: list[str] = field(default_factory=lambda: [".git", "vendor", "annodoc_out"])


@dataclass
class OutputConfig:
    """Configuration for documentation output."""

    output_dir: str = "annodoc_out"
    default_filename: str = "output.md"
    preview: bool = False


@dataclass
class ServerConfig:
    """Host used when --http gives only a port."""

    host: str = "127.0.0.1"


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None


@dataclass
class AppConfig:
    """Top-level application configuration."""

    parser: ParserConfig = field(default_factory=ParserConfig)
    source: SourceConfig = field(default_factory=SourceConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _build_source_config(data: dict) -> SourceConfig:
    """Build a SourceConfig from a dictionary.

    A null or empty ``formatter`` disables formatting.

    Args:
        data: Dictionary with source settings.

    Returns:
        A configured SourceConfig instance.
    """
    defaults = SourceConfig()
    formatter = data.get("formatter", defaults.formatter)
    if isinstance(formatter, str):
        formatter = formatter.split()
    return SourceConfig(
        extension=data.get("extension", defaults.extension),
        test_suffix=data.get("test_suffix", defaults.test_suffix),
        language=data.get("language", defaults.language),
        formatter=list(formatter or []),
        exclude_dirs=data.get("exclude_dirs", defaults.exclude_dirs),
    )


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load application configuration from a YAML file.

    Reads the YAML config file and constructs a fully typed AppConfig
    object. Falls back to defaults for any missing values.

    Args:
        config_path: Path to the YAML config file. If None, uses the
            default path at configs/config.yaml.

    Returns:
        A fully populated AppConfig instance.

    Raises:
        yaml.YAMLError: If the config file contains invalid YAML.
    """
    path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.warning("Config file not found at %s, using defaults", path)
        return AppConfig()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    logger.info("Loaded configuration from %s", path)

    parser_data = raw.get("parser", {})
    parser_config = ParserConfig(
        comment_open=parser_data.get("comment_open", "/*"),
        comment_close=parser_data.get("comment_close", "*/"),
    )

    output_data = raw.get("output", {})
    output_config = OutputConfig(
        output_dir=output_data.get("output_dir", "annodoc_out"),
        default_filename=output_data.get("default_filename", "output.md"),
        preview=output_data.get("preview", False),
    )

    server_data = raw.get("server", {})
    server_config = ServerConfig(
        host=server_data.get("host", "127.0.0.1"),
    )

    logging_data = raw.get("logging", {})
    logging_config = LoggingConfig(
        level=logging_data.get("level", "INFO"),
        format=logging_data.get(
            "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ),
        file=logging_data.get("file"),
    )

    return AppConfig(
        parser=parser_config,
        source=_build_source_config(raw.get("source", {})),
        output=output_config,
        server=server_config,
        logging=logging_config,
    )
