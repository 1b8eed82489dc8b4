"""Configuration management for agog."""

import logging
import os
import yaml
from pathlib import Path
from typing import Optional
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

DEFAULT_HOME = Path.home() / ".agog"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class EraseConfig:
    """Configuration for destroying projects."""
    strict: bool = False
    # Leave dot-prefixed entries in place when erasing a project
    skip_hidden: bool = True


@dataclass
class AgogConfig:
    """Main configuration for agog."""
    home: Path = field(default_factory=lambda: DEFAULT_HOME)
    erase: EraseConfig = field(default_factory=EraseConfig)

    @property
    def projects_dir(self) -> Path:
        return self.home / "projects"


def _parse_bool(name: str, value) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    logger.warning("Ignoring %s=%r: expected a boolean", name, value)
    return None


class ConfigManager:
    """Manages configuration loading and saving."""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize the config manager.

        Args:
            config_path: Path to config file. If None, uses default location.
        """
        self.config_path = Path(config_path) if config_path else DEFAULT_HOME / "config.yaml"
        self._config: Optional[AgogConfig] = None

    def load_config(self) -> AgogConfig:
        """Load configuration from file or return defaults."""
        if self._config is not None:
            return self._config

        self._config = AgogConfig()
        if self.config_path.exists():
            try:
                with open(self.config_path, "r") as f:
                    data = yaml.safe_load(f) or {}
                if not isinstance(data, dict):
                    raise ValueError("top level must be a mapping")
                self._apply_file_values(data)
            except (OSError, yaml.YAMLError, ValueError) as e:
                logger.warning("Error loading config from %s: %s", self.config_path, e)
                self._config = AgogConfig()

        # Override with environment variables
        self._apply_env_overrides()

        return self._config

    def _apply_file_values(self, data: dict):
        if data.get("home"):
            if not isinstance(data["home"], str):
                raise ValueError("'home' must be a path string")
            self._config.home = Path(data["home"]).expanduser()

        erase_data = data.get("erase") or {}
        if not isinstance(erase_data, dict):
            raise ValueError("'erase' must be a mapping")
        for key in ("strict", "skip_hidden"):
            if key in erase_data:
                value = _parse_bool(f"erase.{key}", erase_data[key])
                if value is not None:
                    setattr(self._config.erase, key, value)

    def _apply_env_overrides(self):
        """Apply environment variable overrides to config."""
        if os.getenv("AGOG_HOME"):
            self._config.home = Path(os.getenv("AGOG_HOME")).expanduser()

        for env_name, key in (
            ("AGOG_ERASE_STRICT", "strict"),
            ("AGOG_ERASE_SKIP_HIDDEN", "skip_hidden"),
        ):
            if os.getenv(env_name):
                value = _parse_bool(env_name, os.getenv(env_name))
                if value is not None:
                    setattr(self._config.erase, key, value)

    def save_config(self, config: AgogConfig):
        """Save configuration to file.

        Args:
            config: Configuration to save
        """
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "home": str(config.home),
            "erase": {
                "strict": config.erase.strict,
                "skip_hidden": config.erase.skip_hidden,
            },
        }

        with open(self.config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

        self._config = config
