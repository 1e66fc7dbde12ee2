"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for the controller's
configuration: the map options handed to the surface, the dependency
script to load, replay timing and logging.

Configuration can be overridden via environment variables:
- MAPAPP_API_KEY=...
- MAPAPP_REPLAY_INTERVAL_SECONDS=1.5
- MAPAPP_MAP_OPTIONS__ZOOM=9
- MAPAPP_LOG_LEVEL=DEBUG
- etc.

Nested map options also accept the camelCase keys used by browser map
libraries (``defaultMarkerStyles``, ``scaledSize``).
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.models import MarkerSize, Position, RemovalMode


class _OptionsModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LatLng(_OptionsModel):
    """A map coordinate as written in configuration."""

    lat: float = Field(default=0.0, ge=-90, le=90)
    lng: float = Field(default=0.0, ge=-180, le=180)

    def to_position(self) -> Position:
        return Position(self.lat, self.lng)


class IconSize(_OptionsModel):
    width: int = Field(default=32, gt=0)
    height: int = Field(default=32, gt=0)


class MarkerIconStyle(_OptionsModel):
    scaled_size: IconSize = Field(default_factory=IconSize)


class MarkerStyles(_OptionsModel):
    icon: MarkerIconStyle = Field(default_factory=MarkerIconStyle)


class MapOptions(_OptionsModel):
    """Options used to construct the map surface.

    Unknown keys are kept so surface implementations can read options
    this module does not know about.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    center: LatLng = Field(default_factory=LatLng)
    zoom: int = Field(default=12, ge=0, le=22)
    tiles: str = "OpenStreetMap"
    default_marker_styles: MarkerStyles = Field(default_factory=MarkerStyles)

    @property
    def center_position(self) -> Position:
        """The center as a domain Position (the default marker position)."""
        return self.center.to_position()

    @property
    def default_marker_size(self) -> MarkerSize:
        size = self.default_marker_styles.icon.scaled_size
        return MarkerSize(size.width, size.height)


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with MAPAPP_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="MAPAPP_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class MapConfiguration(BaseSettings):
    """Main controller configuration.

    Usage:

        config = get_config()
        print(config.map_options.zoom)
        print(config.script_src)

    Environment variables prefixed with MAPAPP_.
    """

    model_config = SettingsConfigDict(
        env_prefix="MAPAPP_", env_nested_delimiter="__"
    )

    repository: str = "data"
    api_key: str = ""
    target: str = "map"
    map_element_id: str = "map"
    filters_element_id: str = "filters"

    script_id: str = "map-script"
    script_url: str = "https://maps.googleapis.com/maps/api/js?key={api_key}"
    # Extra attempts after a failed script load (0 = load once).
    script_load_retries: int = Field(default=0, ge=0)

    replay_interval_seconds: float = Field(default=5.0, ge=0)
    removal_mode: RemovalMode = RemovalMode.REGISTRY_ONLY

    map_options: MapOptions = Field(default_factory=MapOptions)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    @property
    def script_src(self) -> str:
        """URL of the rendering dependency, with the API key filled in."""
        return self.script_url.format(api_key=self.api_key)

    def get(self, name: str, default: Optional[Any] = None) -> Any:
        """Return a setting by name, or ``default`` if there is none."""
        return getattr(self, name, default)


@lru_cache(maxsize=1)
def get_config() -> MapConfiguration:
    """Get the singleton configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.
    """
    return MapConfiguration()


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()
