"""Config store: optional config file (master over env) + runtime overrides."""
import json
import logging
import threading
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

_SUPPORTED_SUFFIXES = (".yaml", ".yml", ".json")


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse a YAML or JSON config file into a flat dict. Missing or invalid files yield {}."""
    if not path.exists():
        logger.debug("Config file not found: %s (optional; using env/defaults)", path)
        return {}
    suffix = path.suffix.lower()
    if suffix not in _SUPPORTED_SUFFIXES:
        logger.warning("Config file must be .yaml, .yml, or .json: %s", path)
        return {}
    try:
        raw = path.read_text()
    except OSError as e:
        logger.warning("Could not read config file %s: %s", path, e)
        return {}
    try:
        data = json.loads(raw) if suffix == ".json" else yaml.safe_load(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        logger.warning("Invalid config file %s: %s", path, e)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file must contain a mapping; got %s", type(data).__name__)
        return {}
    return data


class ConfigStore:
    """
    Builds Settings from env and an optional config file.
    Precedence: config file > env > defaults.
    """

    def __init__(self, settings_cls: type, config_file_path: Optional[str] = None):
        self._settings_cls = settings_cls
        self._file_path = Path(config_file_path).expanduser().resolve() if config_file_path else None
        self._current: Optional[Any] = None
        self._lock = threading.RLock()

    def _layers(self) -> dict[str, Any]:
        env_values = self._settings_cls().model_dump()
        file_values = read_config_file(self._file_path) if self._file_path else {}
        if file_values:
            logger.info("Loaded config file (master over env): %s", self._file_path)
        return {**env_values, **file_values}

    def load(self) -> None:
        """Build settings from all layers. Call once at startup."""
        with self._lock:
            self._current = self._settings_cls(**self._layers())

    def get_settings(self) -> Any:
        with self._lock:
            if self._current is None:
                self.load()
            return self._current
