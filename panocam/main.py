#!/usr/bin/env python3
"""
panocam - drag and arrow-key camera control for 360 video players

Demo host: renders a simulated 360 player's camera state in an OpenCV window
and drives it with the camera input tracker. Drag with the left mouse button,
or click the window and use the arrow keys. 'h' shows key bindings,
'q' or Esc quits.
"""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import cv2
import numpy as np

from panocam.common.config_loader import load_config
from panocam.common.data_models import Rect
from panocam.common.input_manager import InputManager
from panocam.core.cv2_input import Cv2InputBridge
from panocam.core.player import PlayerRejection, SimulatedPlayer
from panocam.core.render_player import VIDEO_ROOT_CLASS, load
from panocam.core.surface import Document

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
logger = logging.getLogger(__name__)


class PanocamApplication:
    """Demo application wiring a simulated player to a cv2 window."""

    DEFAULT_FRAME_WIDTH = 1280
    DEFAULT_FRAME_HEIGHT = 720
    WINDOW_NAME = "panocam"

    def __init__(self, config_path: Optional[str] = None, user_agent: str = ""):
        """
        Args:
            config_path: Path to config.yaml
            user_agent: User agent the tracker throttle default is derived from
        """
        self.config_path = config_path or str(Path(__file__).parent.parent / "config.yaml")
        self.user_agent = user_agent

        self.document = None
        self.player = None
        self.tracker = None
        self.bridge = None
        self.input_manager = None

        self.running = False
        self.show_help = False

    async def initialize(self):
        """Set up the surface, player and tracker."""
        logger.info("Loading configuration...")
        config = load_config(self.config_path)

        level = (config.get("logging") or {}).get("level")
        if level:
            logging.getLogger().setLevel(level)

        self.document = Document(self.DEFAULT_FRAME_WIDTH, self.DEFAULT_FRAME_HEIGHT)
        root = self.document.create_element("div", Rect(0, 0, self.DEFAULT_FRAME_WIDTH, self.DEFAULT_FRAME_HEIGHT))
        root.class_list.add(VIDEO_ROOT_CLASS)
        root.dataset.update({"vimeoBackground": "true", "vimeoBackgroundEnhanced": "true"})
        self.document.body.append_child(root)

        self.player = SimulatedPlayer()
        players = await load(self.document, lambda element: self.player, self.user_agent, config)
        rendered = players[0]
        if rendered.tracker is None:
            raise RuntimeError("Player did not get a camera input tracker")
        self.tracker = rendered.tracker

        self.bridge = Cv2InputBridge(self.document, self.tracker.event_overlay)
        self.input_manager = self._initialize_input_manager(config)
        self.document.add_event_listener("keydown", lambda event: self.input_manager.handle_key(event.key))

        cv2.namedWindow(self.WINDOW_NAME, cv2.WINDOW_AUTOSIZE)
        cv2.setMouseCallback(self.WINDOW_NAME, self.bridge.on_mouse)

        logger.info("Drag to look around, arrow keys after clicking the window, 'h' for help, 'q' to quit")

    def _initialize_input_manager(self, config: dict) -> InputManager:
        input_manager = InputManager()
        input_manager.register_keybind("q", "Quit", "system", self._quit)
        input_manager.register_keybind("Escape", "Quit", "system", self._quit)
        input_manager.register_keybind("h", "Toggle help", "display", self._toggle_help)
        input_manager.load_from_config(config)
        return input_manager

    def _quit(self, _key: str):
        self.running = False

    def _toggle_help(self, _key: str):
        self.show_help = not self.show_help

    def _help_lines(self) -> List[str]:
        """Enabled key bindings of the app and the tracker, grouped by category."""
        lines = []
        for manager in (self.input_manager, self.tracker.input_manager):
            for category, bindings in manager.get_keybinds_by_category():
                lines.append(f"{category}:")
                lines.extend(f"  {binding.key:<10} {binding.description}" for binding in bindings)
        return lines

    def _render_frame(self) -> np.ndarray:
        """Draw the camera heading strip and current angles."""
        width, height = self.DEFAULT_FRAME_WIDTH, self.DEFAULT_FRAME_HEIGHT
        frame = np.zeros((height, width, 3), dtype=np.uint8)

        yaw = self.tracker.yaw_range.current
        pitch = self.tracker.pitch_range.current

        # Heading ticks every 15 degrees, centered on the current yaw
        pixels_per_degree = width / 180.0
        for heading in range(0, 360, 15):
            offset = (heading - yaw + 540) % 360 - 180
            x = int(width / 2 + offset * pixels_per_degree)
            tick = 30 if heading % 90 == 0 else 12
            cv2.line(frame, (x, 40), (x, 40 + tick), (0, 255, 0), 2)
            if heading % 45 == 0:
                cv2.putText(frame, str(heading), (x - 14, 95), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (0, 255, 0), 1)

        horizon = int(height / 2 + pitch * (height / 180.0))
        cv2.line(frame, (0, horizon), (width, horizon), (255, 200, 0), 1)
        cv2.drawMarker(frame, (width // 2, height // 2), (255, 255, 255), cv2.MARKER_CROSS, 24, 1)

        status = f"yaw {yaw:6.1f}  pitch {pitch:5.1f}"
        if self.tracker.dragging:
            status += "  [dragging]"
        if self.tracker.event_overlay.has_focus:
            status += "  [focus]"
        cv2.putText(frame, status, (20, height - 24), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 1)

        if self.show_help:
            for row, line in enumerate(self._help_lines()):
                cv2.putText(frame, line, (20, 140 + row * 22), cv2.FONT_HERSHEY_SIMPLEX, 0.55, (200, 200, 200), 1)

        return frame

    async def run(self):
        """Main application loop."""
        self.running = True

        while self.running:
            cv2.imshow(self.WINDOW_NAME, self._render_frame())

            # Mouse callbacks fire inside waitKeyEx and schedule camera writes on this loop
            key = cv2.waitKeyEx(1)
            self.bridge.on_key(key)

            await asyncio.sleep(0)

            for result in await self.tracker.settle():
                if isinstance(result, PlayerRejection):
                    logger.warning(f"Camera update rejected: {result}")

            if cv2.getWindowProperty(self.WINDOW_NAME, cv2.WND_PROP_VISIBLE) < 1:
                self.running = False

        logger.info("Shutting down...")

    def cleanup(self):
        """Cleanup resources."""
        cv2.destroyAllWindows()
        logger.info("panocam shutdown complete")


async def _main(config_path: Optional[str], user_agent: str):
    app = PanocamApplication(config_path=config_path, user_agent=user_agent)

    try:
        await app.initialize()
        await app.run()
    finally:
        app.cleanup()


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="panocam - drag and arrow-key camera control for 360 video")
    parser.add_argument("--config", type=str, help="Path to config.yaml")
    parser.add_argument("--user-agent", type=str, default="", help="User agent used to pick the input throttle")
    args = parser.parse_args()

    try:
        asyncio.run(_main(args.config, args.user_agent))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except cv2.error as e:
        logger.error(f"OpenCV window error (a GUI-enabled OpenCV build is required): {e}")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)


if __name__ == "__main__":
    main()
