"""Default feature: markers built from repository records.

A MapFeature reads its records from the controller's repository (through
the controller cache, so a source already fetched is not fetched again),
turns each record into a Marker and shows or hides those markers as a
group.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, Field

from ..domain.errors import FeatureLoadError, RenderError
from ..domain.models import Marker, Position
from ..ports.cache import ABSENT

if TYPE_CHECKING:
    from ..application import MapApplication
    from ..ports.rendering import MapSurfacePort


class FeatureConfig(BaseModel):
    """Configuration of one feature.

    ``source`` defaults to the feature name.
    """

    name: str = Field(min_length=1)
    source: Optional[str] = None
    title_field: str = "name"
    lat_field: str = "lat"
    lng_field: str = "lng"

    @property
    def source_name(self) -> str:
        return self.source or self.name


@dataclass(eq=False)
class MapFeature:
    """A named layer of markers.

    This class implements FeaturePort.
    """

    config: FeatureConfig
    is_initialized: bool = False

    records: List[Mapping[str, Any]] = field(default_factory=list, repr=False)
    _markers: List[Marker] = field(default_factory=list, repr=False)
    _controller: Optional[MapApplication] = field(default=None, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @classmethod
    def from_config(
        cls, name: str, config: Union[FeatureConfig, Mapping[str, Any], None] = None
    ) -> MapFeature:
        """Build a feature from a config entry keyed by ``name``."""
        if isinstance(config, FeatureConfig):
            return cls(config=config)
        return cls(config=FeatureConfig.model_validate({"name": name, **(config or {})}))

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def markers(self) -> Sequence[Marker]:
        return tuple(self._markers)

    def set_map(self, controller: MapApplication) -> None:
        self._controller = controller

    async def load_data(self) -> List[Mapping[str, Any]]:
        """Fetch this feature's records.

        Raises:
            FeatureLoadError: If the feature is unbound or the fetch fails.
        """
        controller = self._controller
        if controller is None or controller.repository is None:
            raise FeatureLoadError(
                "Feature has no repository to load from",
                feature_name=self.name,
            )

        source = self.config.source_name
        cache_key = ("feature-source", source)
        cached = controller.get_cache(cache_key)
        if cached is not ABSENT:
            self.records = list(cached)
            self._logger.debug("Feature data from cache", extra={"feature": self.name})
            return self.records

        try:
            records = await controller.repository.fetch(source)
        except Exception as e:
            raise FeatureLoadError(
                f"Could not load data source {source!r}",
                feature_name=self.name,
                cause=e,
            )

        controller.set_cache(cache_key, records)
        self.records = list(records)
        self._logger.info(
            "Feature data loaded",
            extra={"feature": self.name, "records": len(self.records)},
        )
        return self.records

    def load_markers(self) -> Sequence[Marker]:
        """Build one marker per loaded record, replacing previous markers."""
        self.hide()
        self._markers = [self._to_marker(record) for record in self.records]
        return self.markers

    def _to_marker(self, record: Mapping[str, Any]) -> Marker:
        lat = record.get(self.config.lat_field)
        lng = record.get(self.config.lng_field)
        title = record.get(self.config.title_field)
        return Marker(
            position=Position.from_value({"lat": lat, "lng": lng}),
            title=None if title is None else str(title),
            data=record,
        )

    def render(self, surface: Optional[MapSurfacePort] = None) -> List[RenderError]:
        """Show every marker.

        When bound, markers go through the controller (defaults applied,
        controller surface) and ``surface`` is ignored.

        Returns:
            One RenderError per marker the surface rejected.
        """
        if self._controller is not None:
            return self._controller.render(self._markers)
        failures: List[RenderError] = []
        for index, marker in enumerate(self._markers):
            try:
                marker.set_map(surface)
            except RenderError as e:
                e.marker_index = index
                failures.append(e)
        return failures

    def hide(self) -> None:
        for marker in self._markers:
            marker.set_map(None)
