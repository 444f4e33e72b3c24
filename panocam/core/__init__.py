#!/usr/bin/env python3
"""Range model, throttling, input surface and camera tracking."""

from .range_operations import DomainError, MinMaxRange, generate_range_transform, map_position_and_width_to_range
from .throttle import throttle
from .surface import Document, Element, EventTarget
from .player import CameraPlayer, PlayerRejection, SimulatedPlayer, VideoPlayer, check_if_360_video
from .camera_input_tracker import CameraInputTracker, DragData
from .render_player import (
    RenderedPlayer,
    add_loading_image,
    generate_full_width_style_css,
    load,
    render_video_player,
)

__all__ = [
    'DomainError',
    'MinMaxRange',
    'generate_range_transform',
    'map_position_and_width_to_range',
    'throttle',
    'Document',
    'Element',
    'EventTarget',
    'CameraPlayer',
    'PlayerRejection',
    'SimulatedPlayer',
    'VideoPlayer',
    'check_if_360_video',
    'CameraInputTracker',
    'DragData',
    'RenderedPlayer',
    'render_video_player',
    'add_loading_image',
    'generate_full_width_style_css',
    'load',
]
