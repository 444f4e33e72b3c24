#!/usr/bin/env python3
"""Mouse-drag and arrow-key control of a 360 video player's camera."""

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Any, Awaitable, List, Optional

from panocam.common.config_loader import TrackerConfig
from panocam.common.data_models import ArrowKey, CameraProps, KeyEvent, PointerEvent
from panocam.common.input_manager import InputManager
from panocam.core.player import CameraPlayer
from panocam.core.range_operations import MinMaxRange, generate_range_transform, map_position_and_width_to_range
from panocam.core.surface import Element
from panocam.core.throttle import throttle

logger = logging.getLogger(__name__)

YAW_MIN, YAW_MAX = 0, 360
PITCH_MIN, PITCH_MAX = -90, 90

OVERLAY_CLASS = "vimeo-video-root__event-overlay"
DRAGGING_CLASS = "dragging"
OVERLAY_STYLE = {
    "position": "absolute",
    "top": "0",
    "left": "0",
    "outline": "none",
    "width": "100%",
    "z-index": "200",
}


@dataclass
class DragData:
    x_range: MinMaxRange
    y_range: MinMaxRange


class CameraInputTracker:
    """
    Tracks click-and-drag mouse movement and arrow key presses on an overlay
    covering a video element, and moves the player's camera accordingly.

    Meant for background videos whose player hides its own controls, so the
    camera could not otherwise be moved. Each tracker owns its yaw/pitch ranges;
    they only change after the player accepts a camera write.
    """

    def __init__(
        self,
        element: Element,
        player: CameraPlayer,
        yaw: float = 180.0,
        pitch: float = 0.0,
        config: Optional[TrackerConfig] = None,
    ):
        """
        Args:
            element: Element the player is rendered in
            player: Player whose camera is moved
            yaw: Starting camera yaw (degrees)
            pitch: Starting camera pitch (degrees)
            config: Throttle window, key increment and drag span settings

        Raises:
            DomainError: If yaw or pitch fall outside their ranges
        """
        self.element = element
        self.player = player
        self.config = config or TrackerConfig()

        self.yaw_range = MinMaxRange(YAW_MIN, YAW_MAX, True, yaw)
        self.pitch_range = MinMaxRange(PITCH_MIN, PITCH_MAX, False, pitch)
        self.drag_data = DragData(x_range=MinMaxRange(0, 1), y_range=MinMaxRange(0, 1))
        self.pending: set = set()

        self.input_manager = InputManager()
        self._register_arrow_keys()
        self.input_manager.load_from_config({"keybinds": self.config.keybinds})

        self.event_overlay = self.add_event_overlay()

        if self.config.input_throttle_ms > 0:
            self.move_camera = throttle(self._move_camera, self.config.input_throttle_ms)
        else:
            self.move_camera = self._move_camera

    @classmethod
    async def create(cls, element: Element, player: CameraPlayer,
                     config: Optional[TrackerConfig] = None) -> 'CameraInputTracker':
        """Build a tracker seeded with the player's current camera yaw and pitch."""
        props = await player.get_camera_props()
        return cls(element, player, yaw=props.yaw, pitch=props.pitch, config=config)

    @property
    def dragging(self) -> bool:
        return DRAGGING_CLASS in self.event_overlay.class_list

    async def _move_camera(self, yaw: float, pitch: float) -> CameraProps:
        """
        Move the player's camera to a new position.

        Yaw wraps and pitch clamps before the write. The tracker's ranges are
        only updated once the player has accepted the new props; a rejected
        write propagates and leaves them untouched.

        Args:
            yaw: Camera yaw to set
            pitch: Camera pitch to set

        Returns:
            Camera props echoed back by the player
        """
        camera_props = await self.player.get_camera_props()

        next_yaw = self.yaw_range.copy()
        next_pitch = self.pitch_range.copy()
        next_yaw.current = yaw
        next_pitch.current = pitch

        applied = await self.player.set_camera_props(
            replace(camera_props, yaw=next_yaw.current, pitch=next_pitch.current)
        )

        self.yaw_range.current = applied.yaw
        self.pitch_range.current = applied.pitch
        return applied

    def _schedule(self, pending: Optional[Awaitable]) -> Optional[asyncio.Task]:
        """Run a camera write on the running loop; dropped (throttled) calls yield None."""
        if pending is None:
            return None

        task = asyncio.get_running_loop().create_task(pending)
        self.pending.add(task)
        task.add_done_callback(self.pending.discard)
        return task

    async def settle(self) -> List[Any]:
        """Wait for all in-flight camera writes; failures are returned, not raised."""
        if not self.pending:
            return []
        return await asyncio.gather(*list(self.pending), return_exceptions=True)

    def add_event_overlay(self) -> Element:
        """
        The player surface does not report mouse movement itself, so an overlay
        covering the element captures pointer events instead.

        Returns:
            The overlay element
        """
        event_overlay = self.element.document.create_element("div")
        event_overlay.style.update(OVERLAY_STYLE)
        event_overlay.class_list.add(OVERLAY_CLASS)
        event_overlay.tab_index = 0
        self.element.append_child(event_overlay)

        event_overlay.add_event_listener("mousedown", self.handle_mouse_down)
        event_overlay.add_event_listener("mouseup", self.handle_mouse_up)
        self.element.document.add_event_listener("keydown", self.handle_key_down)

        logger.debug(f"Event overlay attached to {self.element!r}")
        return event_overlay

    def store_drag_data(self, x_start: float, y_start: float) -> None:
        """
        Map the pointer's start position onto the camera's current proportional
        position, over a window spanning a fraction of the element's size.
        """
        rect = self.element.get_bounding_client_rect()
        fraction = self.config.drag_span_fraction

        self.drag_data = DragData(
            x_range=map_position_and_width_to_range(self.yaw_range, x_start, rect.width * fraction),
            y_range=map_position_and_width_to_range(self.pitch_range, y_start, rect.height * fraction),
        )

    def handle_mouse_down(self, event: PointerEvent) -> None:
        self.event_overlay.class_list.add(DRAGGING_CLASS)
        self.store_drag_data(event.client_x, event.client_y)
        self.event_overlay.add_event_listener("mousemove", self.handle_mouse_move)
        logger.debug(f"Drag started at ({event.client_x}, {event.client_y})")

    def handle_mouse_move(self, event: PointerEvent) -> Optional[asyncio.Task]:
        event.prevent_default()

        x_range = self.drag_data.x_range
        y_range = self.drag_data.y_range

        x_range.current = event.client_x
        y_range.current = event.client_y

        next_yaw = generate_range_transform(x_range, self.yaw_range)(x_range.current)
        next_pitch = generate_range_transform(y_range, self.pitch_range)(y_range.current)

        return self._schedule(self.move_camera(next_yaw, next_pitch))

    def handle_mouse_up(self, event: Optional[PointerEvent] = None) -> None:
        self.event_overlay.class_list.discard(DRAGGING_CLASS)
        self.event_overlay.remove_event_listener("mousemove", self.handle_mouse_move)
        logger.debug("Drag ended")

    def _register_arrow_keys(self):
        self.input_manager.register_keybind(ArrowKey.RIGHT.value, "Pan camera right", "movement", self._pan)
        self.input_manager.register_keybind(ArrowKey.LEFT.value, "Pan camera left", "movement", self._pan)
        self.input_manager.register_keybind(ArrowKey.UP.value, "Tilt camera up", "movement", self._pan)
        self.input_manager.register_keybind(ArrowKey.DOWN.value, "Tilt camera down", "movement", self._pan)

    def _pan(self, key: str) -> Optional[asyncio.Task]:
        increment = self.config.key_press_increment
        yaw = self.yaw_range.current
        pitch = self.pitch_range.current

        if key == ArrowKey.RIGHT.value:
            yaw += increment
        elif key == ArrowKey.LEFT.value:
            yaw -= increment
        elif key == ArrowKey.UP.value:
            pitch += increment
        elif key == ArrowKey.DOWN.value:
            pitch -= increment

        return self._schedule(self.move_camera(yaw, pitch))

    def handle_key_down(self, event: KeyEvent) -> Optional[asyncio.Task]:
        """Arrow keys move the camera, but only while the overlay has focus."""
        if not self.event_overlay.has_focus or not self.input_manager.is_handled(event.key):
            return None

        event.prevent_default()
        return self.input_manager.handle_key(event.key)
