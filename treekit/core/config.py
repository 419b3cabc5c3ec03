"""treekit configuration using Pydantic Settings.

Settings are read from environment variables. Optionally, `ENV_FILE` may point
at a local env file; it is loaded without overriding variables that are
already exported.
"""

import logging
import os
import re

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from treekit.core.dotenv import load_env_file
from treekit.core.errors import ConfigurationError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_SOLC_VERSION_PATTERN = re.compile(r"^\d+\.\d+\.\d+$")

_env_file = os.getenv("ENV_FILE")
if _env_file:
    load_env_file(_env_file, overwrite=False)


class Settings(BaseSettings):
    """
    treekit settings with type validation.

    Every field maps to the upper-cased environment variable of the same
    name (e.g. `test_dir` <- `TEST_DIR`).
    """

    model_config = SettingsConfigDict(env_prefix="", extra="ignore")

    # Logging
    app_log_level: str = "WARNING"
    observability_structured_logs: bool = False

    # Project layout
    test_dir: str = "test"
    foundry_toml: str = "foundry.toml"
    test_tree_markdown: str = "TESTS.md"

    # External tools
    bulloak_bin: str = "bulloak"

    # Solidity version passed to `bulloak scaffold -s`.
    # Detected from foundry.toml when unset.
    solc_version: str | None = None

    @field_validator("app_log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the log level and reject unknown names."""
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"app_log_level must be one of {list(_LOG_LEVELS)}, got '{v}'")
        return level

    @field_validator("solc_version")
    @classmethod
    def validate_solc_version(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        version = v.strip()
        if not _SOLC_VERSION_PATTERN.match(version):
            raise ValueError(f"solc_version must look like 0.8.28, got '{v}'")
        return version

    @field_validator("test_dir")
    @classmethod
    def validate_test_dir(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("test_dir must be set")
        return v.strip()

    @property
    def log_level_number(self) -> int:
        return getattr(logging, self.app_log_level, logging.WARNING)


def load_settings(**overrides) -> Settings:
    """
    Build Settings from the environment, raising ConfigurationError on bad values.

    Args:
        **overrides: Explicit values that take precedence over the environment
    """
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        problems = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        ]
        raise ConfigurationError(
            "Invalid configuration: " + "; ".join(problems),
            details={"errors": problems},
        ) from exc
