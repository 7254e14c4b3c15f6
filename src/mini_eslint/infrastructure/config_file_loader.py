"""Load lint configuration from .minlintrc.json or [tool.mini-eslint] in pyproject.toml."""

import json
import logging
import tomllib
from pathlib import Path
from typing import Optional

from mini_eslint.domain.entities import ConfigError

logger = logging.getLogger(__name__)

RC_FILE_NAMES: tuple[str, ...] = (".minlintrc.json", ".minlintrc")
PYPROJECT_SECTION = "mini-eslint"


class ConfigFileLoader:
    """
    Loads config dictionaries from disk. Infrastructure I/O only.
    """

    @staticmethod
    def load_config_from_fs(start: Optional[Path] = None) -> dict[str, object]:
        """
        Search from `start` (default: cwd) up to the filesystem root.

        In each directory an rc file wins over pyproject.toml. Files that
        cannot be read or parsed are logged and skipped. Returns an empty
        dict when nothing is found.
        """
        current_path = (start or Path.cwd()).resolve()
        while True:
            for name in RC_FILE_NAMES:
                candidate = current_path / name
                if candidate.is_file():
                    try:
                        return ConfigFileLoader.load_file(candidate)
                    except ConfigError as exc:
                        logger.warning("Configuration Warning: %s", exc)
            pyproject = current_path / "pyproject.toml"
            if pyproject.is_file():
                try:
                    section = ConfigFileLoader.load_file(pyproject)
                except ConfigError as exc:
                    logger.warning("Configuration Warning: %s", exc)
                    section = {}
                if section:
                    return section
            if current_path.parent == current_path:
                return {}
            current_path = current_path.parent

    @staticmethod
    def load_file(path: Path) -> dict[str, object]:
        """
        Load one config file. pyproject.toml yields its [tool.mini-eslint] table.

        Raises:
            ConfigError: If the file is missing, unreadable or malformed.
        """
        try:
            if path.name == "pyproject.toml" or path.suffix == ".toml":
                with path.open("rb") as f:
                    data = tomllib.load(f)
                tool_section = data.get("tool", {}) or {}
                config = tool_section.get(PYPROJECT_SECTION, {}) if path.name == "pyproject.toml" else data
            else:
                with path.open(encoding="utf-8") as f:
                    config = json.load(f)
        except OSError as exc:
            raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
        except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
            raise ConfigError(f"Malformed config file {path}: {exc}") from exc

        if not isinstance(config, dict):
            raise ConfigError(f"Config file {path} must contain an object, got {type(config).__name__}.")
        logger.debug("Loaded configuration from %s", path)
        return config
