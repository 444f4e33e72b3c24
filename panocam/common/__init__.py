#!/usr/bin/env python3
"""Shared models, configuration and input bindings."""

from .data_models import ArrowKey, CameraProps, CustomEvent, Event, KeyEvent, PointerEvent, Rect
from .input_manager import InputBinding, InputCategory, InputManager

__all__ = [
    'ArrowKey',
    'CameraProps',
    'CustomEvent',
    'Event',
    'KeyEvent',
    'PointerEvent',
    'Rect',
    'InputBinding',
    'InputCategory',
    'InputManager',
]
