#!/usr/bin/env python3
"""
Configuration Management for fireplan

Environment-based settings for the command line: where parsed statements
are saved and how verbose logging is. FIRE engine tunables never come from
the environment; they live in fireplan.analysis.assumptions.

Environment variables (a .env file in the working directory is honored):
- FIREPLAN_ENV: development, test or production (default: development)
- FIREPLAN_DATA_DIR: root data directory (default: ./data)
- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL (default: INFO)
- DEBUG: "true" to force DEBUG for the fireplan loggers
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class Config:
    """
    Settings resolved from the environment.

    imports_dir is where `fireplan parse --save` writes statement JSON,
    one file per statement id.
    """

    environment: Environment
    data_dir: Path
    imports_dir: Path
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("FIREPLAN_ENV", "development"))

        if env == Environment.TEST:
            fallback = Path(tempfile.gettempdir()) / "test_fireplan"
            data_dir = Path(os.getenv("FIREPLAN_DATA_DIR", str(fallback)))
        else:
            data_dir = Path(os.getenv("FIREPLAN_DATA_DIR", "./data")).expanduser().resolve()

        return cls(
            environment=env,
            data_dir=data_dir,
            imports_dir=data_dir / "imports",
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if self.log_level not in LOG_LEVELS:
            errors.append(f"Unknown LOG_LEVEL: {self.log_level}")

        for name, path in (("data_dir", self.data_dir), ("imports_dir", self.imports_dir)):
            if path.exists() and not path.is_dir():
                errors.append(f"{name} is not a directory: {path}")

        return errors

    def statement_path(self, statement_id: str) -> Path:
        """File under imports_dir for a parsed statement."""
        safe_id = "".join(c if c.isalnum() or c in "-_." else "_" for c in statement_id)
        return self.imports_dir / f"{safe_id}.json"

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        # Logger names only help while developing
        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        if self.debug:
            logging.getLogger("fireplan").setLevel(logging.DEBUG)

    def to_dict(self) -> dict[str, Any]:
        return {
            "environment": self.environment.value,
            "data_dir": str(self.data_dir),
            "imports_dir": str(self.imports_dir),
            "debug": self.debug,
            "log_level": self.log_level,
        }


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance, validating it on first use."""
    global _config
    if _config is None:
        config = Config.from_environment()

        errors = config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        config.setup_logging()
        _config = config

    return _config


def reload_config() -> Config:
    """Discard the cached configuration and read the environment again."""
    global _config
    _config = None
    return get_config()
