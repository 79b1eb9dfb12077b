"""Settings loading for codefence.

Defaults live on ``FenceSettings``.  A user config file at
``~/.codefence/config.py`` may override them with module-level names, and
``CODEFENCE_<FIELD>`` environment variables (a ``.env`` file is read too)
override both.
"""

import importlib.util
import logging
import os
from pathlib import Path
from typing import Dict

import pydantic
from pydantic import BaseModel, ConfigDict, Field
from dotenv import load_dotenv

logger = logging.getLogger('codefence')

ENV_PREFIX = "CODEFENCE_"
LIBRARY_NAMES = ("qsharp", "qiskit", "scientific", "javascript", "python")

_CONFIG_NOT_FOUND = object()
_user_config = None
_settings = None


def _all_detectors():
    return {name: True for name in LIBRARY_NAMES}


class FenceSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra='ignore')

    merge_gap: int = Field(10, ge=0, description="Max line distance between fragments that may be merged")
    min_keywords: int = Field(2, ge=0, description="Keyword hits a brace-less fragment needs to survive")
    continuation_max_chars: int = Field(20, ge=0, description="Lines shorter than this continue a code run")
    max_merge_iterations: int = Field(64, gt=0)
    max_line_chars: int = Field(4000, gt=0)
    max_input_chars: int = Field(500_000, gt=0)
    auto_correct: bool = True
    escape_prose: bool = False
    fix_system_tags: bool = False
    detectors: Dict[str, bool] = Field(default_factory=_all_detectors)

    def detector_enabled(self, name: str) -> bool:
        return self.detectors.get(name, True)


def user_config_path() -> Path:
    return Path.home() / ".codefence" / "config.py"


def get_user_config():
    global _user_config

    if _user_config is not None:
        return None if _user_config is _CONFIG_NOT_FOUND else _user_config

    config_path = user_config_path()
    if not config_path.exists():
        _user_config = _CONFIG_NOT_FOUND
        return None

    try:
        spec = importlib.util.spec_from_file_location("codefence_user_config", config_path)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        _user_config = module
        return module
    except Exception as e:
        logger.warning(f"Failed to load user config from {config_path}: {e}")
        _user_config = _CONFIG_NOT_FOUND
        return None


def _from_module(module) -> dict:
    if module is None:
        return {}
    return {
        name: getattr(module, name)
        for name in FenceSettings.model_fields
        if hasattr(module, name)
    }


def _parse_detectors(value: str) -> dict:
    enabled = {part.strip().lower() for part in value.split(',') if part.strip()}
    unknown = enabled - set(LIBRARY_NAMES)
    if unknown:
        logger.warning(f"Ignoring unknown detectors in {ENV_PREFIX}DETECTORS: {', '.join(sorted(unknown))}")
    return {name: name in enabled for name in LIBRARY_NAMES}


def _from_env(environ) -> dict:
    values = {}
    for name in FenceSettings.model_fields:
        raw = environ.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is None:
            continue
        values[name] = _parse_detectors(raw) if name == 'detectors' else raw
    return values


def _validated(base: FenceSettings, overrides: dict, source: str) -> FenceSettings:
    """Apply overrides field by field so one bad value does not discard the rest."""
    merged = base.model_dump()
    for name, value in overrides.items():
        candidate = {**merged, name: value}
        try:
            merged = FenceSettings(**candidate).model_dump()
        except pydantic.ValidationError as e:
            logger.warning(f"Ignoring invalid {name}={value!r} from {source}: {e.errors()[0]['msg']}")
    return FenceSettings(**merged)


def load_settings(environ=None, user_config=_CONFIG_NOT_FOUND) -> FenceSettings:
    """Build settings from defaults, the user config module and the environment."""
    if environ is None:
        load_dotenv()
        environ = os.environ
    if user_config is _CONFIG_NOT_FOUND:
        user_config = get_user_config()

    settings = FenceSettings()
    settings = _validated(settings, _from_module(user_config), str(user_config_path()))
    settings = _validated(settings, _from_env(environ), "environment")
    return settings


def get_settings() -> FenceSettings:
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings():
    global _settings, _user_config
    _settings = None
    _user_config = None
