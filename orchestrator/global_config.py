"""Global configuration storage for the orchestrator.

Stores per-user defaults for new projects in ~/.orchestrator/config.json.
Set ORCHESTRATOR_HOME to use a different directory.
"""

import json
import logging
import os
from pathlib import Path

from orchestrator.domain.project import ProjectConfig

logger = logging.getLogger(__name__)

HOME_ENV = "ORCHESTRATOR_HOME"


def get_config_dir() -> Path:
    """Get the orchestrator config directory, creating it if needed."""
    override = os.environ.get(HOME_ENV)
    config_dir = Path(override) if override else Path.home() / ".orchestrator"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_default_config() -> ProjectConfig:
    """Load the default project configuration.

    Falls back to built-in defaults when the file is missing or invalid.
    """
    config_file = get_config_dir() / "config.json"
    if config_file.exists():
        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
            return ProjectConfig.model_validate(data)
        # ValueError covers undecodable bytes and pydantic validation errors
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning(f"Ignoring invalid {config_file}: {e}")
    return ProjectConfig()


def save_default_config(config: ProjectConfig) -> None:
    """Save the default project configuration."""
    config_file = get_config_dir() / "config.json"
    config_file.write_text(
        json.dumps(config.model_dump(mode="json", by_alias=True), indent=2),
        encoding="utf-8",
    )
