#!/usr/bin/env python3
"""
OpenCV host input for the camera tracker.

Translates cv2 mouse callbacks and waitKey/waitKeyEx key codes into surface
events, so a tracker can be driven from a cv2.imshow window:

    bridge = Cv2InputBridge(document, tracker.event_overlay)
    cv2.setMouseCallback(window_name, bridge.on_mouse)
    ...
    bridge.on_key(cv2.waitKeyEx(1))
"""

import logging
from typing import Any, List, Optional

import cv2

from panocam.common.data_models import ArrowKey, KeyEvent, PointerEvent
from panocam.core.surface import Document, Element

logger = logging.getLogger(__name__)

# GTK and Windows waitKeyEx() codes
ARROW_KEY_CODES = {
    65361: ArrowKey.LEFT,
    65362: ArrowKey.UP,
    65363: ArrowKey.RIGHT,
    65364: ArrowKey.DOWN,
    2424832: ArrowKey.LEFT,
    2490368: ArrowKey.UP,
    2555904: ArrowKey.RIGHT,
    2621440: ArrowKey.DOWN,
}

# waitKey() & 0xFF on Linux; these collide with ASCII Q-T in raw codes
MASKED_ARROW_KEY_CODES = {
    81: ArrowKey.LEFT,
    82: ArrowKey.UP,
    83: ArrowKey.RIGHT,
    84: ArrowKey.DOWN,
}

ESCAPE_KEY = 27


class Cv2InputBridge:
    """Feeds cv2 window input into a surface document and overlay."""

    def __init__(self, document: Document, overlay: Element, masked: bool = False):
        """
        Args:
            document: Document receiving keydown events
            overlay: Element receiving pointer events
            masked: Whether key codes come from `waitKey() & 0xFF` rather than waitKeyEx()
        """
        self.document = document
        self.overlay = overlay
        self.arrow_key_codes = dict(ARROW_KEY_CODES)
        if masked:
            self.arrow_key_codes.update(MASKED_ARROW_KEY_CODES)

    def on_mouse(self, event: int, x: int, y: int, flags: int, param: Any = None) -> List[Any]:
        """cv2.setMouseCallback handler. Returns results of the dispatched listeners."""
        if event == cv2.EVENT_LBUTTONDOWN:
            # Clicking a focusable element focuses it, which enables arrow keys
            self.overlay.focus()
            return self.overlay.dispatch_event(PointerEvent(type="mousedown", client_x=x, client_y=y))
        if event == cv2.EVENT_MOUSEMOVE:
            return self.overlay.dispatch_event(PointerEvent(type="mousemove", client_x=x, client_y=y))
        if event == cv2.EVENT_LBUTTONUP:
            return self.overlay.dispatch_event(PointerEvent(type="mouseup", client_x=x, client_y=y))
        return []

    def _key_name(self, code: int) -> Optional[str]:
        arrow = self.arrow_key_codes.get(code)
        if arrow is not None:
            return arrow.value
        if code == ESCAPE_KEY:
            return "Escape"
        if 32 <= code <= 126:
            return chr(code)
        return None

    def on_key(self, code: int) -> List[Any]:
        """Dispatch a waitKey/waitKeyEx code as a keydown on the document (-1 = no key)."""
        if code is None or code < 0:
            return []

        key = self._key_name(code)
        if key is None:
            logger.debug(f"Unmapped key code: {code}")
            return []

        return self.document.dispatch_event(KeyEvent(type="keydown", key=key))
