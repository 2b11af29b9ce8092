from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

import yaml
from dotenv import load_dotenv

# Valid log levels for configuration
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
VALID_COLOR_MODES = {"auto", "always", "never"}
VALID_FORMATS = {"text", "json"}

DEFAULT_CONFIG_PATH = "config.yaml"


@dataclass
class ScanConfig:
    """Configuration for the scan pipeline.

    Attributes:
        workers: Number of concurrent file scanners
        queue_size: Capacity of the work and outcome queues
        record_parser: Name of the record boundary parser (see parser.PARSERS)
        encoding: Text encoding of the log files
        encoding_errors: How undecodable bytes are handled
    """

    workers: int = 50
    queue_size: int = 100
    record_parser: str = "TimestampRecordParser"
    encoding: str = "utf-8"
    encoding_errors: str = "replace"

    def __post_init__(self) -> None:
        # Lazy import to avoid circular dependency
        from mailscan.parser import PARSERS

        if self.record_parser not in PARSERS:
            raise ValueError(f"Invalid record parser: {self.record_parser}")
        self.workers = int(self.workers)
        self.queue_size = int(self.queue_size)
        if self.workers < 1:
            raise ValueError(f"Invalid worker count: {self.workers}")
        if self.queue_size < 1:
            raise ValueError(f"Invalid queue size: {self.queue_size}")


@dataclass
class OutputConfig:
    """Configuration for report output.

    Attributes:
        color: ANSI colors: auto (terminal only), always or never
        format: Report format, text or json
        sort_by_path: Order the report by file path instead of completion order
    """

    color: Literal["auto", "always", "never"] = "auto"
    format: Literal["text", "json"] = "text"
    sort_by_path: bool = False

    def __post_init__(self) -> None:
        if self.color not in VALID_COLOR_MODES:
            raise ValueError(f"Invalid color mode: {self.color}")
        if self.format not in VALID_FORMATS:
            raise ValueError(f"Invalid output format: {self.format}")


@dataclass
class Config:
    """Main configuration class for mailscan.

    Attributes:
        log_level: Logging level for the application
        scan: Scan pipeline configuration
        output: Report output configuration
    """

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = (
        "INFO"
    )
    scan: ScanConfig = field(default_factory=ScanConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def __post_init__(self) -> None:
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.log_level}")

        # Convert dicts to config objects if needed
        if isinstance(self.scan, dict):
            self.scan = ScanConfig(**self.scan)
        if isinstance(self.output, dict):
            self.output = OutputConfig(**self.output)


def _load_env_overrides(config_data: dict) -> None:
    """Apply environment variable overrides on top of the config file."""
    log_level = os.getenv("MAILSCAN_LOG_LEVEL")
    if log_level:
        config_data["log_level"] = log_level.upper()

    workers = os.getenv("MAILSCAN_WORKERS")
    if workers:
        scan = config_data.setdefault("scan", {})
        if isinstance(scan, dict):
            scan["workers"] = workers


def load_config(config_path: str | None = None) -> Config:
    """Load configuration from YAML file.

    Uses MAILSCAN_CONFIG environment variable or 'config.yaml' as default path.
    The default file is optional; without it the built-in defaults apply.

    Args:
        config_path: Optional path to configuration file. If not provided, uses
            MAILSCAN_CONFIG environment variable or 'config.yaml' as default.

    Returns:
        Config: The loaded configuration object

    Raises:
        FileNotFoundError: If an explicitly requested configuration file doesn't exist
        ValueError: If the configuration file contains invalid data
    """
    explicit = bool(config_path or os.getenv("MAILSCAN_CONFIG"))
    config_path = config_path or os.getenv(
        "MAILSCAN_CONFIG", DEFAULT_CONFIG_PATH
    )

    config_data: dict = {}
    if os.path.exists(config_path):
        # Load .env file from the same directory as the config file.
        # override=False ensures shell env vars take precedence over .env.
        dotenv_path = Path(config_path).resolve().parent / ".env"
        load_dotenv(dotenv_path=dotenv_path, override=False)

        with open(config_path) as f:
            config_data = yaml.safe_load(f) or {}
        if not isinstance(config_data, dict):
            raise ValueError(f"Error loading config: {config_path} is not a mapping")
    elif explicit:
        raise FileNotFoundError(f"Config file not found: {config_path}")

    _load_env_overrides(config_data)

    try:
        return Config(**config_data)
    except Exception as e:
        raise ValueError(f"Error loading config: {e}") from e
