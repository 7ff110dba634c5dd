"""
Configuration management for Desktop Test Runner.

Handles environment variables, defaults, and configuration validation
for logging and environment detection.
"""

import os
from typing import Dict, Any
from dataclasses import dataclass, field
from pathlib import Path


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
VALID_LOG_FORMATS = ["text", "json"]


@dataclass
class Config:
    """Configuration class for Desktop Test Runner with environment variable support."""

    # Environment detection
    ci_mode: bool = field(default=False)

    # Logging configuration
    log_level: str = field(default="INFO")
    log_format: str = field(default="text")

    # Directory paths
    logs_dir: Path = field(default_factory=lambda: Path.cwd() / "logs")

    def __post_init__(self):
        """Apply environment overrides and normalise values."""
        if os.getenv("CI", "").lower() == "true":
            self.ci_mode = True

        log_env = os.getenv("DESKTOP_TEST_RUNNER_LOG_LEVEL")
        if log_env:
            self.log_level = log_env

        self.log_level = self.log_level.upper()
        if self.log_level == "WARN":
            self.log_level = "WARNING"
        if self.log_level not in VALID_LOG_LEVELS:
            self.log_level = "INFO"

        # CI log collectors expect one JSON object per line
        if self.ci_mode and self.log_format == "text":
            self.log_format = "json"

        self.logs_dir = Path(self.logs_dir)

    @property
    def is_ci_mode(self) -> bool:
        """Check if running in CI environment."""
        return self.ci_mode

    @property
    def debug_enabled(self) -> bool:
        """Check if debug logging is enabled."""
        return self.log_level == "DEBUG"

    def get_log_file_path(self) -> Path:
        """Get the main log file path, creating the logs directory."""
        self.logs_dir.mkdir(parents=True, exist_ok=True)
        return self.logs_dir / "desktop-test-runner.log"

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for logging."""
        return {
            "ci_mode": self.ci_mode,
            "log_level": self.log_level,
            "log_format": self.log_format,
            "logs_dir": str(self.logs_dir),
        }

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables."""
        ci = os.getenv("CI", "").lower() == "true"
        logs_dir = os.getenv("DESKTOP_TEST_RUNNER_LOGS_DIR")

        kwargs: Dict[str, Any] = {
            "ci_mode": ci,
            "log_level": os.getenv("DESKTOP_TEST_RUNNER_LOG_LEVEL", "INFO"),
            "log_format": os.getenv(
                "DESKTOP_TEST_RUNNER_LOG_FORMAT", "json" if ci else "text"
            ),
        }
        if logs_dir:
            kwargs["logs_dir"] = Path(logs_dir)

        return cls(**kwargs)

    def validate(self) -> None:
        """Validate configuration and raise ValidationError if invalid."""
        from .exceptions import ValidationError

        errors = []

        if self.log_level not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid log level: {self.log_level}. Must be one of {VALID_LOG_LEVELS}"
            )

        if self.log_format not in VALID_LOG_FORMATS:
            errors.append(
                f"Invalid log format: {self.log_format}. Must be one of {VALID_LOG_FORMATS}"
            )

        if self.logs_dir.exists() and not self.logs_dir.is_dir():
            errors.append(f"logs path is not a directory: {self.logs_dir}")

        if errors:
            raise ValidationError(
                "Configuration validation failed: " + "; ".join(errors),
                field_name="config",
            )
