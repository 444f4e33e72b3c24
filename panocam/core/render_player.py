#!/usr/bin/env python3
"""Sets up players inside video root elements using their data attributes."""

import asyncio
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from panocam.common.config_loader import create_player_options, create_tracker_config
from panocam.common.user_agent import is_mobile_user_agent
from panocam.core.camera_input_tracker import DRAGGING_CLASS, OVERLAY_CLASS, CameraInputTracker
from panocam.core.player import VideoPlayer, add_event_emitters, check_if_360_video
from panocam.core.surface import Document, Element

logger = logging.getLogger(__name__)

VIDEO_ROOT_CLASS = "vimeo-video-root"
LOADED_CLASS = f"{VIDEO_ROOT_CLASS}--loaded"

STYLE_CSS = f"""
/* overlays for loading images and mouse tracking match the size of the video */
div.{VIDEO_ROOT_CLASS} {{
  position: relative;
}}

div.{VIDEO_ROOT_CLASS} > div.{OVERLAY_CLASS} {{
  cursor: grab;
}}

div.{VIDEO_ROOT_CLASS} > div.{OVERLAY_CLASS}.{DRAGGING_CLASS} {{
  cursor: grabbing;
}}

/* fade out the loading image once the video plays or loads */
div.{VIDEO_ROOT_CLASS}.{LOADED_CLASS}::after {{
  animation: {VIDEO_ROOT_CLASS}__loading-animation 0.5s ease-in-out forwards;
}}

@keyframes {VIDEO_ROOT_CLASS}__loading-animation {{
  0% {{
    opacity: 1;
  }}
  100% {{
    opacity: 0;
    visibility: hidden;
  }}
}}
"""


@dataclass
class RenderedPlayer:
    player: VideoPlayer
    tracker: Optional[CameraInputTracker] = None


def generate_full_width_style_css(height: float, width: float) -> str:
    """CSS keeping responsive videos full width at the video's aspect ratio."""
    return f"""
div.{VIDEO_ROOT_CLASS}[data-vimeo-responsive="true"] > div {{
  height: calc({(height / width) * 100}vw);
  max-width: 100vw;
  padding: unset !important;
}}
"""


def generate_loading_image_style_css(element: Element, image_url: str) -> str:
    return f"""
div.{VIDEO_ROOT_CLASS}#{element.id}::after {{
  background-image: url({image_url});
  background-size: cover;
  background-repeat: no-repeat;
  background-position: center;
  bottom: 0;
  content: "";
  left: 0;
  position: absolute;
  top: 0;
  width: 100%;
}}
"""


def add_loading_image(element: Element, image_url: str) -> str:
    """
    Show image_url over element until the video loads.

    The element gets a unique id so the style sheet only targets it.

    Returns:
        The id assigned to element
    """
    element.id = f"{VIDEO_ROOT_CLASS}-{uuid.uuid4()}"
    element.document.append_style(generate_loading_image_style_css(element, image_url))
    return element.id


async def render_video_player(
    element: Element,
    player: VideoPlayer,
    user_agent: str = "",
    config: Optional[Dict[str, Any]] = None,
) -> RenderedPlayer:
    """
    Render a player in element using options passed as data attributes.

    Args:
        element: Video root element; its dataset holds the player options
        player: Player already bound to element
        user_agent: Host user agent, used for mobile fallback and throttle defaults
        config: Parsed configuration (see config_loader.load_config)

    Returns:
        The player and, for enhanced background 360 video, its camera tracker

    Raises:
        DataCastError: If a data attribute has an invalid value
    """
    options = create_player_options(element.dataset)
    rendered = RenderedPlayer(player=player)

    # Mobile devices load a fallback video if one is provided
    if is_mobile_user_agent(user_agent):
        fallback = options.mobile_fallback_id or options.mobile_fallback_url
        if fallback:
            logger.info(f"Loading mobile fallback video {fallback}")
            await player.load_video(fallback)

    if await check_if_360_video(player):
        # Background videos hide the player controls, so the camera needs our own input handling
        if options.background and options.background_enhanced:
            tracker_config = create_tracker_config(config, user_agent)
            rendered.tracker = await CameraInputTracker.create(element, player, tracker_config)
            logger.info(f"Camera input tracker attached (throttle={tracker_config.input_throttle_ms}ms)")
    else:
        logger.debug("Video is not 360, skipping camera input tracker")

    if options.responsive:
        width = await player.get_video_width()
        height = await player.get_video_height()
        element.document.append_style(generate_full_width_style_css(height, width))

    add_event_emitters(player, element)

    if options.loading_image_url:
        add_loading_image(element, options.loading_image_url)

    def mark_loaded(_data: Any = None):
        element.class_list.add(LOADED_CLASS)

    if options.autoplay or options.background:
        player.on("playing", mark_loaded)

        await player.set_volume(0)

        # Reloading the current video is needed for autoplay to start on mobile
        video_id = await player.get_video_id()
        await player.load_video(video_id)

        await player.play()
    else:
        player.on("loaded", mark_loaded)

    return rendered


async def load(
    document: Document,
    create_player: Callable[[Element], VideoPlayer],
    user_agent: str = "",
    config: Optional[Dict[str, Any]] = None,
) -> List[RenderedPlayer]:
    """
    Add the video root styles to document and render a player in every video root.

    Args:
        document: Document to search for `div.vimeo-video-root` elements
        create_player: Builds the player bound to a video root element
        user_agent: Host user agent
        config: Parsed configuration

    Returns:
        Rendered players, in document order
    """
    document.append_style(STYLE_CSS)

    video_roots = document.query_selector_all("div", VIDEO_ROOT_CLASS)
    logger.info(f"Found {len(video_roots)} video root(s)")

    return list(await asyncio.gather(*[
        render_video_player(element, create_player(element), user_agent, config)
        for element in video_roots
    ]))
