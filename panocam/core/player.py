#!/usr/bin/env python3
"""Video player capability consumed by the camera tracker, plus player helpers."""

from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional

from panocam.common.data_models import CameraProps, CustomEvent
from panocam.core.surface import Element

EVENT_PREFIX = "vimeo-enhanced-360-player-"

EVENT_TYPES = [
    "play",
    "playing",
    "pause",
    "ended",
    "timeupdate",
    "progress",
    "seeking",
    "seeked",
    "texttrackchange",
    "chapterchange",
    "cuechange",
    "cuepoint",
    "volumechange",
    "playbackratechange",
    "bufferstart",
    "bufferend",
    "error",
    "loaded",
    "durationchange",
    "fullscreenchange",
    "qualitychange",
    "camerachange",
    "resize",
    "enterpictureinpicture",
    "leavepictureinpicture",
]


class PlayerRejection(RuntimeError):
    """Raised when the player refuses a call, e.g. camera props on non-360 video."""


class CameraPlayer(ABC):
    """Camera control surface of a 360 video player."""

    @abstractmethod
    async def get_camera_props(self) -> CameraProps:
        """Current camera props. Raises PlayerRejection if the video is not 360."""
        pass

    @abstractmethod
    async def set_camera_props(self, props: CameraProps) -> CameraProps:
        """Apply camera props and return the props actually set."""
        pass


class VideoPlayer(CameraPlayer):
    """Full player surface used when bootstrapping a video root."""

    @abstractmethod
    async def load_video(self, video: str) -> str:
        pass

    @abstractmethod
    async def set_volume(self, volume: float) -> float:
        pass

    @abstractmethod
    async def play(self) -> None:
        pass

    @abstractmethod
    async def get_video_id(self) -> str:
        pass

    @abstractmethod
    async def get_video_width(self) -> int:
        pass

    @abstractmethod
    async def get_video_height(self) -> int:
        pass

    @abstractmethod
    def on(self, event_type: str, callback: Callable[[Any], None]) -> None:
        pass


class SimulatedPlayer(VideoPlayer):
    """
    In-memory player holding camera props.

    Used by the demo application and tests. Camera calls fail with
    PlayerRejection when is_360 is False, matching how real players report
    flat video.
    """

    def __init__(self, props: Optional[CameraProps] = None, is_360: bool = True, video_id: str = "0",
                 video_width: int = 3840, video_height: int = 1920):
        self.props = props or CameraProps(yaw=180.0, pitch=0.0, roll=0.0, fov=0.0)
        self.is_360 = is_360
        self.video_id = video_id
        self.video_width = video_width
        self.video_height = video_height
        self.volume = 1.0
        self.playing = False
        self.loaded_videos: List[str] = []
        self._callbacks: Dict[str, List[Callable[[Any], None]]] = defaultdict(list)

    async def get_camera_props(self) -> CameraProps:
        if not self.is_360:
            raise PlayerRejection("Camera props are only available for 360 video")
        return replace(self.props)

    async def set_camera_props(self, props: CameraProps) -> CameraProps:
        if not self.is_360:
            raise PlayerRejection("Camera props are only available for 360 video")
        self.props = replace(props)
        self.emit("camerachange", replace(self.props))
        return replace(self.props)

    async def load_video(self, video: str) -> str:
        self.loaded_videos.append(video)
        self.video_id = video
        self.emit("loaded", {"id": video})
        return video

    async def set_volume(self, volume: float) -> float:
        self.volume = volume
        self.emit("volumechange", {"volume": volume})
        return volume

    async def play(self) -> None:
        self.playing = True
        self.emit("play", None)
        self.emit("playing", None)

    async def get_video_id(self) -> str:
        return self.video_id

    async def get_video_width(self) -> int:
        return self.video_width

    async def get_video_height(self) -> int:
        return self.video_height

    def on(self, event_type: str, callback: Callable[[Any], None]) -> None:
        self._callbacks[event_type].append(callback)

    def emit(self, event_type: str, data: Any = None) -> None:
        """Fire callbacks registered for event_type."""
        for callback in list(self._callbacks.get(event_type, [])):
            callback(data)


async def check_if_360_video(player: CameraPlayer) -> bool:
    """Whether the player is showing 360 video (camera props are readable)."""
    try:
        await player.get_camera_props()
    except PlayerRejection:
        return False
    return True


def add_event_emitters(player: VideoPlayer, element: Element) -> None:
    """Re-emit every player event on element as a bubbling custom event."""
    def make_emitter(event_type: str):
        def emit(data: Any):
            element.dispatch_event(CustomEvent(type=f"{EVENT_PREFIX}{event_type}", bubbles=True, detail=data))
        return emit

    for event_type in EVENT_TYPES:
        player.on(event_type, make_emitter(event_type))
