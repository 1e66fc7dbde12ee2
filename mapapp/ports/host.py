"""Host port - The page environment the controller runs in.

The controller never touches process-wide globals for its document or
info window. Everything it needs from the page goes through this port so
the core can run without a real browser.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol


class HostEnvironmentPort(Protocol):
    """Port for the hosting page.

    Implementation: adapters/host/headless.py (HeadlessHost)
    """

    def has_element(self, element_id: str) -> bool:
        """Return True if an element with ``element_id`` exists on the page."""
        ...

    def get_element(self, element_id: str) -> Optional[Any]:
        """Return the element registered under ``element_id``, or None."""
        ...

    def remove_element(self, element_id: str) -> bool:
        """Remove an element. Returns True if it existed."""
        ...

    async def load_script(self, script_id: str, src: str) -> None:
        """Inject a script element with ``script_id`` and wait for it to load.

        The element is registered before the load is awaited, so a second
        caller sees it immediately.

        Raises:
            Exception: Whatever the underlying loader raised.
        """
        ...

    def set_display(self, element_id: str, display: str) -> bool:
        """Set the CSS display value of an element.

        Returns:
            False if the element does not exist.
        """
        ...

    def close_info_window(self) -> None:
        """Close the page's currently open user info window, if any."""
        ...
