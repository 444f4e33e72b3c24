"""Tests for translating OpenCV window input into surface events."""

import asyncio

import cv2
import pytest
from panocam.core.camera_input_tracker import CameraInputTracker
from panocam.core.cv2_input import ARROW_KEY_CODES, Cv2InputBridge
from panocam.core.surface import Document
from tests.fixtures.mock_player import RecordingPlayer, make_video_root


@pytest.fixture
def surface():
    """Document with a focusable overlay recording every event it sees."""
    document = Document(640, 480)
    overlay = document.body.append_child(document.create_element())
    overlay.tab_index = 0
    seen = []
    for event_type in ("mousedown", "mousemove", "mouseup"):
        overlay.add_event_listener(event_type, seen.append)
    document.add_event_listener("keydown", seen.append)
    return document, overlay, seen


class TestMouseEvents:
    """cv2 mouse callbacks become pointer events on the overlay."""

    def test_left_button_down_focuses_and_dispatches(self, surface):
        document, overlay, seen = surface
        bridge = Cv2InputBridge(document, overlay)

        bridge.on_mouse(cv2.EVENT_LBUTTONDOWN, 10, 20, 0, None)

        assert overlay.has_focus
        assert [(event.type, event.client_x, event.client_y) for event in seen] == [("mousedown", 10, 20)]

    def test_move_and_release(self, surface):
        document, overlay, seen = surface
        bridge = Cv2InputBridge(document, overlay)

        bridge.on_mouse(cv2.EVENT_MOUSEMOVE, 30, 40, 0, None)
        bridge.on_mouse(cv2.EVENT_LBUTTONUP, 30, 40, 0, None)

        assert [event.type for event in seen] == ["mousemove", "mouseup"]

    def test_other_buttons_ignored(self, surface):
        document, overlay, seen = surface
        bridge = Cv2InputBridge(document, overlay)

        assert bridge.on_mouse(cv2.EVENT_RBUTTONDOWN, 10, 20, 0, None) == []
        assert seen == []


class TestKeyCodes:
    """waitKey codes become keydown events on the document."""

    @staticmethod
    def dispatched_keys(bridge, code):
        seen = []
        bridge.document.add_event_listener("keydown", lambda event: seen.append(event.key))
        bridge.on_key(code)
        return seen

    @pytest.mark.parametrize("code", [65361, 2424832])
    def test_left_arrow_codes(self, code):
        assert self.dispatched_keys(Cv2InputBridge(Document(), None), code) == ["ArrowLeft"]

    def test_every_arrow_code_maps_to_arrow(self):
        keys = []
        for code in ARROW_KEY_CODES:
            keys.extend(self.dispatched_keys(Cv2InputBridge(Document(), None), code))

        assert set(keys) == {"ArrowLeft", "ArrowRight", "ArrowUp", "ArrowDown"}

    @pytest.mark.parametrize("letter", ["Q", "R", "S", "T"])
    def test_raw_codes_keep_uppercase_letters(self, letter):
        """Shift+Q..T from waitKeyEx are letters, not arrows."""
        assert self.dispatched_keys(Cv2InputBridge(Document(), None), ord(letter)) == [letter]

    @pytest.mark.parametrize("code, key", [
        (81, "ArrowLeft"),
        (82, "ArrowUp"),
        (83, "ArrowRight"),
        (84, "ArrowDown"),
    ])
    def test_masked_codes_map_to_arrows(self, code, key):
        """waitKey() & 0xFF reports arrows as 81-84."""
        bridge = Cv2InputBridge(Document(), None, masked=True)

        assert self.dispatched_keys(bridge, code) == [key]

    @pytest.mark.parametrize("code, key", [(27, "Escape"), (ord("q"), "q"), (ord(" "), " ")])
    def test_escape_and_printable_keys(self, code, key):
        assert self.dispatched_keys(Cv2InputBridge(Document(), None), code) == [key]

    def test_unmapped_code_is_ignored(self):
        bridge = Cv2InputBridge(Document(), None)

        assert self.dispatched_keys(bridge, 4096) == []

    def test_keydown_dispatched_on_document(self, surface):
        document, overlay, seen = surface
        bridge = Cv2InputBridge(document, overlay)

        bridge.on_key(65363)

        assert [(event.type, event.key) for event in seen] == [("keydown", "ArrowRight")]

    def test_no_key_is_ignored(self, surface):
        """waitKey returns -1 when no key was pressed."""
        document, overlay, seen = surface
        bridge = Cv2InputBridge(document, overlay)

        assert bridge.on_key(-1) == []
        assert seen == []


class TestDrivingTracker:
    """A tracker can be driven end-to-end through cv2 input."""

    def test_drag_and_arrow_keys_move_camera(self):
        player = RecordingPlayer()
        element = make_video_root()

        async def scenario():
            tracker = CameraInputTracker(element, player)
            bridge = Cv2InputBridge(element.document, tracker.event_overlay)

            bridge.on_mouse(cv2.EVENT_LBUTTONDOWN, 500, 500, 0, None)
            bridge.on_mouse(cv2.EVENT_MOUSEMOVE, 560, 500, 0, None)
            bridge.on_mouse(cv2.EVENT_LBUTTONUP, 560, 500, 0, None)
            await tracker.settle()

            bridge.on_key(65361)
            await tracker.settle()
            return tracker

        tracker = asyncio.run(scenario())

        # 60px of a 960px drag span is 22.5 degrees, then one 5 degree step left
        assert tracker.yaw_range.current == pytest.approx(197.5)
        assert player.props.yaw == pytest.approx(197.5)
        assert tracker.dragging is False
