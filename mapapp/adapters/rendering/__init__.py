"""Rendering adapters - Implementations of MapSurfacePort.

Available implementations:
- FoliumMapSurface: Folium-based interactive map surface
"""

from .folium_adapter import FoliumMapSurface, create_folium_surface

__all__ = ["FoliumMapSurface", "create_folium_surface"]
