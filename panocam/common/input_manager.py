#!/usr/bin/env python3
"""Key binding registry used to dispatch named keys to handlers."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class InputBinding:
    key: str
    description: str
    category: str
    handler: Optional[Callable[..., Any]] = None
    enabled: bool = True


@dataclass
class InputCategory:
    name: str
    priority: int
    bindings: List[InputBinding]


class InputManager:
    """
    Maps key names (e.g. 'ArrowLeft') to handlers, grouped into categories.

    Re-registering a key replaces the previous binding.
    """

    def __init__(self):
        self.bindings: Dict[str, InputBinding] = {}
        self.categories: Dict[str, InputCategory] = {}
        self._initialize_categories()

    def _initialize_categories(self):
        category_definitions = [
            ("system", 0),
            ("movement", 10),
            ("display", 20),
        ]

        for name, priority in category_definitions:
            self.categories[name] = InputCategory(name=name, priority=priority, bindings=[])

    def register_keybind(
        self,
        key: str,
        description: str,
        category: str,
        handler: Optional[Callable[..., Any]] = None,
        enabled: bool = True,
    ) -> None:
        """
        Register a keyboard binding.

        Args:
            key: Key name as reported by keydown events (e.g. 'ArrowUp')
            description: Human-readable description
            category: Category name for grouping
            handler: Optional callback, called with the key and any extra arguments
            enabled: Whether binding is currently active
        """
        if key in self.bindings:
            old_binding = self.bindings[key]
            category_bindings = self.categories[old_binding.category].bindings
            if old_binding in category_bindings:
                category_bindings.remove(old_binding)

        binding = InputBinding(key=key, description=description, category=category, handler=handler, enabled=enabled)
        self.bindings[key] = binding

        if category not in self.categories:
            self.categories[category] = InputCategory(name=category, priority=100, bindings=[])

        self.categories[category].bindings.append(binding)

    def is_handled(self, key: str) -> bool:
        """Whether key has an enabled binding with a handler."""
        binding = self.bindings.get(key)
        return binding is not None and binding.enabled and binding.handler is not None

    def handle_key(self, key: str, *args: Any) -> Any:
        """
        Dispatch a key to its registered handler.

        Returns:
            The handler's return value, or None if the key is not handled
        """
        if not self.is_handled(key):
            return None
        return self.bindings[key].handler(key, *args)

    def get_keybinds_by_category(self) -> List[tuple]:
        """
        Get enabled bindings organized by category, for help listings.

        Returns:
            List of (category_name, bindings) tuples sorted by priority
        """
        sorted_categories = sorted(self.categories.values(), key=lambda c: c.priority)

        result = []
        for category in sorted_categories:
            enabled_bindings = [b for b in category.bindings if b.enabled]
            if enabled_bindings:
                result.append((category.name, enabled_bindings))

        return result

    def set_enabled(self, key: str, enabled: bool) -> bool:
        """Enable or disable a binding. Returns False if key is not bound."""
        binding = self.bindings.get(key)
        if binding is None:
            return False
        binding.enabled = enabled
        return True

    def load_from_config(self, config: Optional[dict]) -> None:
        """
        Apply enabled flags from the `keybinds` section of a config dictionary.

        Expected format:
        {
            'keybinds': {
                'ArrowLeft': False,
                'q': True,
            }
        }

        Keys bound by other managers are skipped, so one section can cover
        the tracker's and the host's bindings.
        """
        keybinds_config = (config or {}).get("keybinds") or {}

        for key, enabled in keybinds_config.items():
            if self.set_enabled(str(key), bool(enabled)):
                logger.debug(f"Keybind {key} {'enabled' if enabled else 'disabled'}")
