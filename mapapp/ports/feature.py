"""Feature port - The contract every map feature fulfils.

A feature is a named layer of markers. Its data loading is opaque to the
controller; the controller only sequences it.
"""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    List,
    Optional,
    Protocol,
    Sequence,
)

if TYPE_CHECKING:
    from ..application import MapApplication
    from ..domain.errors import RenderError
    from ..domain.models import Marker
    from .rendering import MapSurfacePort


class FeaturePort(Protocol):
    """Port for map features.

    Implementation: features/map_feature.py (MapFeature)

    ``load_markers`` must only run after ``load_data`` resolved; it may be
    a plain method or a coroutine function.
    """

    name: str
    is_initialized: bool

    @property
    def markers(self) -> Sequence[Marker]:
        """Markers built by load_markers (empty before that)."""
        ...

    def set_map(self, controller: MapApplication) -> None:
        """Bind the feature to the controller that owns it."""
        ...

    def load_data(self) -> Awaitable[Any]:
        """Load the feature's records."""
        ...

    def load_markers(self) -> Optional[Awaitable[Any]]:
        """Build markers from the loaded records."""
        ...

    def render(self, surface: Optional[MapSurfacePort]) -> List[RenderError]:
        """Show the feature's markers; returns one RenderError per rejected marker.

        A feature bound to a controller renders through it, onto the
        controller's surface, and ignores ``surface``.
        """
        ...

    def hide(self) -> None:
        """Take every marker off the map. Hiding twice is a no-op."""
        ...


# Builds a feature from one (name, config) entry of the feature configuration.
FeatureFactory = Callable[[str, Any], FeaturePort]
