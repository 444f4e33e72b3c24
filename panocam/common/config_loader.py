#!/usr/bin/env python3

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from panocam.common.user_agent import is_firefox_user_agent

logger = logging.getLogger(__name__)

FIREFOX_THROTTLE_MS = 50
DEFAULT_THROTTLE_MS = 0
KEY_PRESS_INCREMENT = 5.0
DRAG_SPAN_FRACTION = 0.5

CastValue = Union[str, bool, float, Dict[str, str]]


class DataCastError(ValueError):
    """Raised when a data attribute cannot be cast to its declared type."""


@dataclass
class TrackerConfig:
    input_throttle_ms: float = DEFAULT_THROTTLE_MS
    key_press_increment: float = KEY_PRESS_INCREMENT
    drag_span_fraction: float = DRAG_SPAN_FRACTION
    keybinds: Dict[str, bool] = field(default_factory=dict)


@dataclass
class PlayerOptions:
    background: bool = False
    background_enhanced: bool = False
    autoplay: bool = False
    mobile_fallback_id: Optional[str] = None
    mobile_fallback_url: Optional[str] = None
    loading_image_url: Optional[str] = None
    responsive: bool = False


def load_config(config_path: str = "config.yaml") -> Dict[str, Any]:
    config_file = Path(config_path)

    if not config_file.exists():
        logger.warning(f"Config file {config_path} not found, using defaults")
        return {'tracker': {}}

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
        return config if config else {'tracker': {}}
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Error loading config file {config_path}: {e}")
        return {'tracker': {}}


def resolve_input_throttle_ms(user_agent: str = "") -> float:
    """Firefox delivers mousemove at a much higher rate, so it gets a throttle window."""
    return FIREFOX_THROTTLE_MS if is_firefox_user_agent(user_agent) else DEFAULT_THROTTLE_MS


def create_tracker_config(config: Optional[Dict[str, Any]] = None, user_agent: str = "") -> TrackerConfig:
    tracker_data = (config or {}).get('tracker') or {}
    tracker_config = TrackerConfig()

    throttle_ms = tracker_data.get('input_throttle_ms')
    if throttle_ms is None:
        throttle_ms = resolve_input_throttle_ms(user_agent)
    tracker_config.input_throttle_ms = float(throttle_ms)

    if tracker_data.get('key_press_increment') is not None:
        tracker_config.key_press_increment = float(tracker_data['key_press_increment'])

    if tracker_data.get('drag_span_fraction') is not None:
        tracker_config.drag_span_fraction = float(tracker_data['drag_span_fraction'])

    # Top-level section; the host application applies it to its own bindings too
    tracker_config.keybinds = dict((config or {}).get('keybinds') or {})

    return tracker_config


class DataCast:
    """Validates and casts a `data-*` attribute string to a declared type."""

    BOOLEAN_VALUES = {"True": True, "true": True, "1": True, "False": False, "false": False, "0": False}
    TYPES = ("string", "boolean", "number", "object")

    def __init__(self, key: str, type: str):
        if type not in self.TYPES:
            raise ValueError(f"Unsupported data attribute type: {type}")
        self.key = key
        self.type = type

    def _cast(self, value: str) -> CastValue:
        if self.type == "boolean":
            if value not in self.BOOLEAN_VALUES:
                raise DataCastError(f"must have a boolean-like value: {list(self.BOOLEAN_VALUES)}")
            return self.BOOLEAN_VALUES[value]
        if self.type == "number":
            return float(value)
        if self.type == "object":
            # 'key1=value1, key2=value2' -> {'key1': 'value1', 'key2': 'value2'}
            result = {}
            for item in value.split(","):
                k, v = item.split("=", 1)
                result[k.strip()] = v.strip()
            return result
        return str(value)

    def validate(self, data: Dict[str, str]) -> Optional[CastValue]:
        """
        Cast the attribute from a dataset mapping.

        Returns:
            Cast value, or None when the attribute is absent

        Raises:
            DataCastError: If the value cannot be cast
        """
        value = data.get(self.key)
        if value is None:
            return None

        try:
            return self._cast(value)
        except (ValueError, TypeError) as e:
            raise DataCastError(f"Could not process data attribute `data-{self.key}`: {e}") from e


PLAYER_OPTION_CASTS = {
    'background': DataCast("vimeoBackground", "boolean"),
    'background_enhanced': DataCast("vimeoBackgroundEnhanced", "boolean"),
    'autoplay': DataCast("vimeoAutoplay", "boolean"),
    'mobile_fallback_id': DataCast("vimeoMobileFallbackId", "string"),
    'mobile_fallback_url': DataCast("vimeoMobileFallbackUrl", "string"),
    'loading_image_url': DataCast("vimeoLoadingImageUrl", "string"),
    'responsive': DataCast("vimeoResponsive", "boolean"),
}


def create_player_options(dataset: Dict[str, str]) -> PlayerOptions:
    options = PlayerOptions()

    for field_name, cast in PLAYER_OPTION_CASTS.items():
        value = cast.validate(dataset)
        if value is not None:
            setattr(options, field_name, value)

    return options
