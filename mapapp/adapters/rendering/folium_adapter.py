"""Folium map surface adapter.

The surface keeps the live state the controller manipulates (center and
attached markers) and turns it into a ``folium.Map`` on demand, so
markers can be attached and detached freely between builds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Union

from ...config import MapOptions
from ...domain.errors import RenderError
from ...domain.models import Marker, Position

_PIN_HTML = '<div style="font-size:{height}px;line-height:{height}px">&#x1F4CD;</div>'


@dataclass
class FoliumMapSurface:
    """Folium-backed map surface.

    This adapter implements MapSurfacePort.

    Attributes:
        root: The page element the map is mounted on
        options: Map options (center, zoom, tiles)
    """

    root: Any
    options: MapOptions = field(default_factory=MapOptions)

    center: Position = field(init=False)
    _markers: List[Marker] = field(default_factory=list, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self.center = self.options.center_position

    @property
    def markers(self) -> tuple[Marker, ...]:
        return tuple(self._markers)

    def set_center(self, position: Position) -> None:
        if position.latitude is None or position.longitude is None:
            raise RenderError(
                f"Cannot centre map on incomplete position {position}",
                renderer_type="folium",
            )
        self.center = position
        self._logger.debug("Map centred", extra={"center": position.to_lat_lng()})

    def add_marker(self, marker: Marker) -> None:
        position = marker.position
        if position.latitude is None or position.longitude is None:
            raise RenderError(
                f"Marker {marker.title or ''!r} has no complete position",
                renderer_type="folium",
            )
        if not any(m is marker for m in self._markers):
            self._markers.append(marker)

    def remove_marker(self, marker: Marker) -> None:
        self._markers = [m for m in self._markers if m is not marker]

    def build(self) -> Any:
        """Create a ``folium.Map`` with the current center and markers.

        Raises:
            RenderError: If folium is missing or rejects the map state.
        """
        try:
            import folium

            m = folium.Map(
                location=[self.center.latitude, self.center.longitude],
                zoom_start=self.options.zoom,
                tiles=self.options.tiles,
            )
            for marker in self._markers:
                if marker.icon_size is not None:
                    icon = folium.DivIcon(
                        html=_PIN_HTML.format(height=marker.icon_size.height),
                        icon_size=marker.icon_size.as_tuple(),
                    )
                else:
                    icon = folium.Icon()
                folium.Marker(
                    location=[marker.position.latitude, marker.position.longitude],
                    tooltip=marker.title,
                    icon=icon,
                ).add_to(m)
            return m

        except ImportError as e:
            raise RenderError(
                "Folium not installed",
                renderer_type="folium",
                cause=e,
            )
        except Exception as e:
            self._logger.error("Map build failed", extra={"error": str(e)})
            raise RenderError(
                f"Map build failed: {e}",
                renderer_type="folium",
                cause=e,
            )

    def save(self, output_path: Union[str, Path]) -> Path:
        """Build the map and write it as HTML.

        Returns:
            Path to the generated map file.
        """
        path = Path(output_path)
        m = self.build()
        path.parent.mkdir(parents=True, exist_ok=True)
        m.save(str(path))
        self._logger.info(
            "Map saved",
            extra={"output_path": str(path), "markers": len(self._markers)},
        )
        return path


def create_folium_surface(root: Any, options: Optional[MapOptions] = None) -> FoliumMapSurface:
    """MapSurfaceFactory building a FoliumMapSurface."""
    return FoliumMapSurface(root=root, options=options or MapOptions())
