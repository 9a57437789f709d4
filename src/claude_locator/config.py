"""Configuration for claude-locator."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

# Data directory name under the home directory
DATA_DIR_NAME = ".claude-locator"

# Environment variable naming an alternative config file
CONFIG_ENV_VAR = "CLAUDE_LOCATOR_CONFIG"


class LocatorConfig(BaseModel):
    """Settings for discovery and the installation cache."""

    model_config = ConfigDict(populate_by_name=True)

    tool_name: str = Field(default="claude", alias="toolName")
    version_arg: str = Field(default="--version", alias="versionArg")
    data_dir: Path = Field(default_factory=lambda: Path.home() / DATA_DIR_NAME, alias="dataDir")
    database_name: str = Field(default="agents.db", alias="databaseName")
    path_key: str = Field(default="claude_binary_path", alias="pathKey")
    preference_key: str = Field(
        default="claude_installation_preference", alias="preferenceKey"
    )
    probe_timeout: float | None = Field(default=None, alias="probeTimeout")
    max_workers: int = Field(default=1, ge=1, alias="maxWorkers")

    @property
    def database_path(self) -> Path:
        """Location of the settings database."""
        return self.data_dir / self.database_name

    @property
    def config_file(self) -> Path:
        """Location of the config file inside the data directory."""
        return self.data_dir / "config.json"

    @classmethod
    def from_file(cls, path: Path) -> LocatorConfig:
        """Load configuration from a JSON file.

        Args:
            path: Path to the config file.

        Returns:
            Parsed LocatorConfig.

        Raises:
            FileNotFoundError: If file doesn't exist.
            ValueError: If JSON is invalid.
        """
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        data = json.loads(path.read_text())
        return cls.model_validate(data)


def load_config(path: Path | None = None) -> LocatorConfig:
    """Load configuration, falling back to defaults.

    Looks at ``path``, then ``$CLAUDE_LOCATOR_CONFIG``, then
    ``~/.claude-locator/config.json``. A missing file means defaults; an
    explicitly named file must exist.

    Args:
        path: Explicit config file.

    Returns:
        Loaded or default configuration.

    Raises:
        FileNotFoundError: If an explicitly named file is missing.
        ValueError: If the file is not valid configuration.
    """
    explicit = path or (Path(os.environ[CONFIG_ENV_VAR]) if os.environ.get(CONFIG_ENV_VAR) else None)
    if explicit is not None:
        logger.debug("Loading config from %s", explicit)
        return LocatorConfig.from_file(explicit)

    default_file = LocatorConfig().config_file
    if default_file.exists():
        logger.debug("Loading config from %s", default_file)
        return LocatorConfig.from_file(default_file)
    return LocatorConfig()
