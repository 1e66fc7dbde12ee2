"""Domain models for the map application.

Positions and sizes are immutable values. Markers are the only mutable
objects here: they track which map surface they are currently placed on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Mapping, Optional

if TYPE_CHECKING:
    from ..ports.rendering import MapSurfacePort


class RemovalMode(str, Enum):
    """What remove_feature does besides dropping the registry entry."""

    REGISTRY_ONLY = "registry_only"
    HIDE_AND_REMOVE = "hide_and_remove"


@dataclass(frozen=True, slots=True)
class Position:
    """A latitude/longitude pair.

    Either coordinate may be None for a marker that has not been placed
    yet; such a position is replaced by the map default when rendered.
    """

    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if self.latitude is not None and not -90 <= self.latitude <= 90:
            raise ValueError(
                f"Latitude must be between -90 and 90, got {self.latitude}"
            )
        if self.longitude is not None and not -180 <= self.longitude <= 180:
            raise ValueError(
                f"Longitude must be between -180 and 180, got {self.longitude}"
            )

    @property
    def is_unset(self) -> bool:
        """True when neither latitude nor longitude is set."""
        return self.latitude is None and self.longitude is None

    def to_lat_lng(self) -> dict[str, Optional[float]]:
        """Return the ``{"lat", "lng"}`` mapping map surfaces expect."""
        return {"lat": self.latitude, "lng": self.longitude}

    @classmethod
    def from_value(cls, value: Any, longitude: Optional[float] = None) -> Position:
        """Build a position from a pair of numbers, a mapping or a Position.

        Mappings may use ``lat``/``lng`` or ``latitude``/``longitude`` keys.
        """
        if longitude is not None:
            return cls(float(value), float(longitude))
        if isinstance(value, Position):
            return value
        if isinstance(value, Mapping):
            lat = value.get("lat", value.get("latitude"))
            lng = value.get("lng", value.get("longitude"))
            return cls(
                None if lat is None else float(lat),
                None if lng is None else float(lng),
            )
        lat, lng = value
        return cls(float(lat), float(lng))


@dataclass(frozen=True, slots=True)
class MarkerSize:
    """Icon size of a marker, in pixels."""

    width: int
    height: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.width, self.height)


@dataclass(eq=False)
class Marker:
    """A renderable point on a map surface.

    Attributes:
        position: Where the marker is placed
        title: Tooltip text
        icon_size: Size applied at render time
        data: The source record the marker was built from
        map: The surface the marker is currently placed on, or None
    """

    position: Position = field(default_factory=Position)
    title: Optional[str] = None
    icon_size: Optional[MarkerSize] = None
    data: Mapping[str, Any] = field(default_factory=dict, repr=False)
    map: Optional[MapSurfacePort] = field(default=None, repr=False)

    def set_position(self, position: Position) -> None:
        self.position = position

    def set_icon_size(self, size: MarkerSize) -> None:
        self.icon_size = size

    def set_map(self, surface: Optional[MapSurfacePort]) -> None:
        """Place the marker on ``surface``, or take it off the map with None.

        A marker is on at most one surface at a time; moving it detaches it
        from the previous one.
        """
        previous = self.map
        if surface is previous:
            return
        if surface is not None:
            surface.add_marker(self)
        self.map = surface
        if previous is not None:
            previous.remove_marker(self)
