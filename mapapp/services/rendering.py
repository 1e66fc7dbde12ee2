"""Render provider - places markers on the map surface.

Markers without a position are moved to the default position, every
marker gets the default icon size, and a marker the surface rejects does
not stop the rest of the batch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from ..domain.errors import MapNotReadyError, RenderError
from ..domain.models import Marker, MarkerSize, Position
from ..ports.rendering import MapSurfacePort


@dataclass
class RenderProvider:
    """Normalizes markers and hands them to the surface.

    Attributes:
        default_position: Used for markers with neither coordinate set
        default_size: Applied to every rendered marker
    """

    default_position: Position
    default_size: MarkerSize

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def normalize(self, marker: Marker) -> Marker:
        if marker.position.is_unset:
            marker.set_position(self.default_position)
        marker.set_icon_size(self.default_size)
        return marker

    def render(
        self,
        markers: Union[Marker, Sequence[Marker]],
        surface: Optional[MapSurfacePort],
    ) -> List[RenderError]:
        """Place one marker or a sequence of markers on ``surface``.

        Returns:
            One RenderError per marker the surface rejected, in batch order.

        Raises:
            MapNotReadyError: If there is no surface yet.
        """
        if surface is None:
            raise MapNotReadyError("Cannot render before the map surface exists")

        batch = [markers] if isinstance(markers, Marker) else list(markers)
        failures: List[RenderError] = []
        for index, marker in enumerate(batch):
            self.normalize(marker)
            try:
                marker.set_map(surface)
            except Exception as e:
                error = e if isinstance(e, RenderError) else RenderError(
                    f"Surface rejected marker: {e}", cause=e
                )
                error.marker_index = index
                failures.append(error)
                self._logger.error(
                    "Marker render failed",
                    extra={"marker_index": index, "error": str(error)},
                )

        self._logger.debug(
            "Markers rendered",
            extra={"count": len(batch), "failed": len(failures)},
        )
        return failures
