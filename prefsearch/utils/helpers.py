"""
Helper utilities for prefsearch.

Provides:
- Settings loading with defaults
- Wiring invalidation signals to a search pipeline
"""

import copy
from pathlib import Path
from typing import Any, Dict

import toml
from loguru import logger

DEFAULT_SETTINGS_PATH = Path(__file__).parent.parent / "data" / "settings.toml"

DEFAULTS = {
    "search": {
        "debounce_ms": 300,
        "reference_locale": "en",
    },
    "strings": {
        "locale": "en",
        "directory": "",
    },
}


def load_settings(path=None) -> Dict[str, Any]:
    """
    Load settings from a TOML file.

    Args:
        path: Settings file, defaults to data/settings.toml in the package

    Returns:
        Dictionary containing settings with defaults applied

    Example settings structure:
        {
            "search": {
                "debounce_ms": 300,
                "reference_locale": "en"
            },
            "strings": {
                "locale": "cs",
                "directory": "/usr/share/myapp/strings"
            }
        }
    """
    settings_path = Path(path) if path is not None else DEFAULT_SETTINGS_PATH

    if not settings_path.exists():
        logger.debug(f"Settings file not found at {settings_path}, using defaults")
        return copy.deepcopy(DEFAULTS)

    try:
        loaded = toml.load(settings_path)
    except Exception:
        logger.exception(f"Could not load settings from {settings_path}, using defaults")
        return copy.deepcopy(DEFAULTS)

    return _deep_merge(DEFAULTS, loaded)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary with defaults
        override: Dictionary with overrides

    Returns:
        Merged dictionary (override takes precedence)
    """
    result = copy.deepcopy(base)

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def bind_invalidation(pipeline, *emitters) -> list[tuple[object, int]]:
    """
    Invalidate the pipeline's index whenever an emitter reports "changed".

    Plugin registries (enable/disable) and string catalogs (locale switch)
    are the usual emitters.

    Returns:
        (emitter, handler_id) pairs, for disconnecting later
    """
    bindings = []
    for emitter in emitters:
        handler_id = emitter.connect("changed", lambda _source: pipeline.invalidate_index())
        bindings.append((emitter, handler_id))
    return bindings
