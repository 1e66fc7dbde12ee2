"""Headless page host.

An in-process stand-in for a browser document: it keeps a registry of
elements by id, loads "scripts" through an async loader and tracks the
user info window. The default loader imports the rendering library
(``folium``) in a worker thread, which is this process's equivalent of
fetching the map script.
"""

from __future__ import annotations

import asyncio
import importlib
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterable, Optional

ScriptLoader = Callable[[str], Awaitable[Any]]


@dataclass
class Element:
    """A page element."""

    element_id: str
    tag: str = "div"
    attributes: Dict[str, Any] = field(default_factory=dict)
    style: Dict[str, str] = field(default_factory=dict)
    loaded: bool = False


@dataclass
class InfoWindow:
    """The popup shown for the user's own position."""

    content: str = ""
    is_open: bool = False

    def open(self, content: Optional[str] = None) -> None:
        if content is not None:
            self.content = content
        self.is_open = True

    def close(self) -> None:
        self.is_open = False


def import_module_loader(module_name: str = "folium") -> ScriptLoader:
    """Return a loader that imports ``module_name`` off the event loop.

    The script URL is recorded on the element but not fetched.
    """

    async def load(src: str) -> Any:
        return await asyncio.to_thread(importlib.import_module, module_name)

    return load


@dataclass
class HeadlessHost:
    """In-memory page implementing HostEnvironmentPort.

    Attributes:
        element_ids: Elements present when the page is created
        loader: Coroutine function called with the script URL
        user_info_window: The page's user info window, if one exists
    """

    element_ids: Iterable[str] = ("map", "filters")
    loader: ScriptLoader = field(default_factory=import_module_loader)
    user_info_window: Optional[InfoWindow] = None

    _elements: Dict[str, Element] = field(default_factory=dict, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        for element_id in self.element_ids:
            self.add_element(element_id)

    def add_element(self, element_id: str, tag: str = "div", **attributes: Any) -> Element:
        """Create (or replace) an element and return it."""
        element = Element(element_id=element_id, tag=tag, attributes=dict(attributes))
        self._elements[element_id] = element
        return element

    def has_element(self, element_id: str) -> bool:
        return element_id in self._elements

    def get_element(self, element_id: str) -> Optional[Element]:
        return self._elements.get(element_id)

    def remove_element(self, element_id: str) -> bool:
        return self._elements.pop(element_id, None) is not None

    async def load_script(self, script_id: str, src: str) -> None:
        """Register a script element and wait for the loader to finish."""
        element = self.add_element(
            script_id, tag="script", src=src, defer=True, async_=True
        )
        self._logger.debug("Loading script", extra={"script_id": script_id})
        await self.loader(src)
        element.loaded = True
        self._logger.info("Script loaded", extra={"script_id": script_id})

    def set_display(self, element_id: str, display: str) -> bool:
        """Set an element's display style. Returns False if it does not exist."""
        element = self._elements.get(element_id)
        if element is None:
            self._logger.warning(
                "Could not locate element", extra={"element_id": element_id}
            )
            return False
        element.style["display"] = display
        return True

    def close_info_window(self) -> None:
        if self.user_info_window is not None:
            self.user_info_window.close()
