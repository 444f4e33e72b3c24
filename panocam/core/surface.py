#!/usr/bin/env python3
"""
Minimal element/document surface that input trackers attach to.

Mirrors the parts of a browser page the camera tracker relies on: focus,
classes, inline style, bounding rectangles and event listeners. Hosts feed
input in by dispatching events; see cv2_input for the OpenCV host.
"""

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional

from panocam.common.data_models import Event, Rect

logger = logging.getLogger(__name__)

Listener = Callable[[Event], Any]


class EventTarget:
    """Object that listeners can be attached to and events dispatched on."""

    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)
        self.parent: Optional['EventTarget'] = None

    def add_event_listener(self, event_type: str, listener: Listener) -> None:
        listeners = self._listeners[event_type]
        if listener not in listeners:
            listeners.append(listener)

    def remove_event_listener(self, event_type: str, listener: Listener) -> None:
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def has_listener(self, event_type: str, listener: Listener) -> bool:
        return listener in self._listeners.get(event_type, [])

    def dispatch_event(self, event: Event) -> List[Any]:
        """
        Call every listener registered for the event's type.

        Bubbling events continue to the parent chain afterwards.

        Returns:
            Non-None listener results, in call order (e.g. scheduled camera tasks)
        """
        if event.target is None:
            event.target = self

        results = []
        node: Optional[EventTarget] = self
        while node is not None:
            # Copy so listeners may detach themselves while being called
            for listener in list(node._listeners.get(event.type, [])):
                result = listener(event)
                if result is not None:
                    results.append(result)
            if not event.bubbles:
                break
            node = node.parent

        return results


class Element(EventTarget):
    """A node on the surface, e.g. a video root or an input overlay."""

    def __init__(self, document: 'Document', tag: str = "div", rect: Optional[Rect] = None):
        super().__init__()
        self.document = document
        self.tag = tag
        self.id = ""
        self.children: List['Element'] = []
        self.class_list = set()
        self.style: Dict[str, str] = {}
        self.dataset: Dict[str, str] = {}
        self.tab_index: Optional[int] = None
        self._rect = rect

    def append_child(self, child: 'Element') -> 'Element':
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def set_bounding_client_rect(self, rect: Rect) -> None:
        self._rect = rect

    def get_bounding_client_rect(self) -> Rect:
        """Own rectangle, else the parent's (overlays cover their parent)."""
        if self._rect is not None:
            return self._rect
        if isinstance(self.parent, Element):
            return self.parent.get_bounding_client_rect()
        return Rect(0.0, 0.0, 0.0, 0.0)

    def focus(self) -> bool:
        """Give this element input focus if it is focusable."""
        if self.tab_index is None:
            return False
        self.document.active_element = self
        return True

    def blur(self) -> None:
        if self.document.active_element is self:
            self.document.active_element = self.document.body

    @property
    def has_focus(self) -> bool:
        return self.document.active_element is self

    def __repr__(self):
        classes = " ".join(sorted(self.class_list))
        return f"<Element {self.tag} class='{classes}'>"


class Document(EventTarget):
    """Root of the surface and the global target for key events."""

    def __init__(self, width: float = 0.0, height: float = 0.0):
        super().__init__()
        self.body = Element(self, "body", Rect(0.0, 0.0, width, height))
        self.body.parent = self
        self.active_element: Element = self.body
        self.style_sheets: List[str] = []

    def create_element(self, tag: str = "div", rect: Optional[Rect] = None) -> Element:
        return Element(self, tag, rect)

    def query_selector_all(self, tag: str, class_name: str) -> List[Element]:
        """Elements under body with the given tag and class, in document order."""
        matches = []
        stack = list(reversed(self.body.children))
        while stack:
            element = stack.pop()
            if element.tag == tag and class_name in element.class_list:
                matches.append(element)
            stack.extend(reversed(element.children))
        return matches

    def append_style(self, css: str) -> None:
        self.style_sheets.append(css)
        logger.debug(f"Appended style sheet ({len(css)} chars)")
