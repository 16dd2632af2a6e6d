import logging
import os

import yaml

from elemental.core.errors import ConfigError

log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/defaults.yaml"


class AttrDict(dict):
    """Dict that also supports attribute access: cfg.weights and cfg['weights'] both work."""
    def __getattr__(self, item):
        try:
            return self[item]
        except KeyError as e:
            raise AttributeError(item) from e
    def __setattr__(self, key, value):
        self[key] = value

def _to_attr(obj):
    if isinstance(obj, dict):
        return AttrDict({k: _to_attr(v) for k, v in obj.items()})
    if isinstance(obj, list):
        return [_to_attr(x) for x in obj]
    return obj

def config_path() -> str:
    return os.getenv("ELEMENTAL_CONFIG", DEFAULT_CONFIG_PATH)

def load_config(path: str | None = None):
    """
    Load YAML config from `path` (default: $ELEMENTAL_CONFIG or config/defaults.yaml).
    A missing file yields an empty config (engine defaults apply); a file that
    exists but does not parse to a mapping raises ConfigError.
    Optional override:
      - ELEMENTAL_FULL_MARK  (overrides config['chart']['full_mark'] if set)
    Returns an AttrDict for convenient access.
    """
    path = path or config_path()
    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"{path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: top level must be a mapping")
    else:
        log.warning("config file %s not found; using built-in defaults", path)
        data = {}

    full_mark = os.getenv("ELEMENTAL_FULL_MARK")
    if full_mark:
        try:
            data.setdefault("chart", {})["full_mark"] = int(full_mark)
        except ValueError as e:
            raise ConfigError(f"ELEMENTAL_FULL_MARK must be an integer, got {full_mark!r}") from e

    return _to_attr(data)
