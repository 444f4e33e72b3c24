#!/usr/bin/env python3
"""Shared data models for camera input tracking."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


@dataclass
class CameraProps:
    """Camera orientation reported by a 360 video player."""
    yaw: float  # degrees (0-360)
    pitch: float  # degrees (-90 to 90)
    roll: float = 0.0
    fov: float = 0.0


@dataclass
class Rect:
    """Bounding rectangle in client (pixel) coordinates."""
    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


class ArrowKey(Enum):
    """Arrow key names as reported in keydown events."""
    RIGHT = "ArrowRight"
    LEFT = "ArrowLeft"
    UP = "ArrowUp"
    DOWN = "ArrowDown"


@dataclass
class Event:
    """Base surface event."""
    type: str
    bubbles: bool = False
    target: Optional[Any] = field(default=None, repr=False)
    default_prevented: bool = False

    def prevent_default(self):
        self.default_prevented = True


@dataclass
class PointerEvent(Event):
    """Mouse event carrying client coordinates."""
    client_x: float = 0.0
    client_y: float = 0.0


@dataclass
class KeyEvent(Event):
    """Keyboard event carrying the key name (e.g. 'ArrowLeft')."""
    key: str = ""


@dataclass
class CustomEvent(Event):
    """Application event carrying an arbitrary payload."""
    detail: Any = None
