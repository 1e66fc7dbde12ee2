"""Rendering port - Abstraction for the map surface.

This protocol defines the contract for the map the controller draws on,
allowing different implementations (Folium, test doubles) to be used.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Protocol

if TYPE_CHECKING:
    from ..config import MapOptions
    from ..domain.models import Marker, Position


class MapSurfacePort(Protocol):
    """Port for a map surface.

    Implementation: adapters/rendering/folium_adapter.py

    A surface is built once per page by the initialization sequence and
    then receives markers and center changes.
    """

    def set_center(self, position: Position) -> None:
        """Re-centre the map on ``position``."""
        ...

    def add_marker(self, marker: Marker) -> None:
        """Place ``marker`` on the surface.

        Raises:
            RenderError: If the surface cannot display the marker.
        """
        ...

    def remove_marker(self, marker: Marker) -> None:
        """Take ``marker`` off the surface. Unknown markers are ignored."""
        ...


# Builds a surface from the page's root element and the map options.
MapSurfaceFactory = Callable[[Any, "MapOptions"], MapSurfacePort]
