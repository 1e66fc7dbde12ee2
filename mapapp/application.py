"""Map application - the controller callers talk to.

Typical use:

    app = MapApplication(config, repository=JsonRepository("data"))
    await app.init([load_user_location])
    app.load_features({"stations": {"source": "stations"}})
    app.load_feature_data()
    await app.join_feature_data()
    app.show_feature("stations")
"""

from __future__ import annotations

import logging
from typing import Any, Hashable, Iterable, List, Mapping, Optional, Sequence, Union

from .adapters.cache.memory_cache import InMemoryCache
from .adapters.host.headless import HeadlessHost
from .adapters.rendering.folium_adapter import create_folium_surface
from .adapters.repository.json_repository import JsonRepository
from .config import MapConfiguration, get_config
from .domain.errors import FeatureLookupError, MapNotReadyError, RenderError
from .domain.models import Marker, MarkerSize, Position, RemovalMode
from .features.map_feature import MapFeature
from .ports.cache import CachePort
from .ports.feature import FeatureFactory, FeaturePort
from .ports.host import HostEnvironmentPort
from .ports.rendering import MapSurfaceFactory, MapSurfacePort
from .ports.repository import RepositoryPort
from .services.initialization import Initializer, InitializationSequencer
from .services.registry import FeatureRegistry
from .services.rendering import RenderProvider
from .services.replay import ReplayController, ReplaySession


class MapApplication:
    """Controller owning the map surface, the features and the cache.

    Every collaborator is injectable; the defaults are a headless page, a
    Folium surface, a JSON repository rooted at ``config.repository`` and
    a fresh in-memory cache.
    """

    def __init__(
        self,
        config: Optional[MapConfiguration] = None,
        *,
        repository: Optional[RepositoryPort] = None,
        host: Optional[HostEnvironmentPort] = None,
        surface_factory: Optional[MapSurfaceFactory] = None,
        feature_factory: Optional[FeatureFactory] = None,
        cache: Optional[CachePort[Any]] = None,
    ) -> None:
        self.config = config or get_config()
        self.repository = repository or JsonRepository(self.config.repository)
        self.host = host or HeadlessHost(
            element_ids=(self.config.map_element_id, self.config.filters_element_id)
        )
        self.map_surface: Optional[MapSurfacePort] = None
        self.default_marker_position: Position = self.config.map_options.center_position
        self.default_marker_size: MarkerSize = self.config.map_options.default_marker_size

        self._cache: CachePort[Any] = cache or InMemoryCache(name="application")
        self._registry = FeatureRegistry(
            controller=self,
            feature_factory=feature_factory or MapFeature.from_config,
            removal_mode=self.config.removal_mode,
        )
        self._renderer = RenderProvider(
            default_position=self.default_marker_position,
            default_size=self.default_marker_size,
        )
        self._sequencer = InitializationSequencer(
            config=self.config,
            host=self.host,
            surface_factory=surface_factory or create_folium_surface,
        )
        self._replayer = ReplayController(
            pan=self.pan,
            host=self.host,
            interval_seconds=self.config.replay_interval_seconds,
        )
        self._logger = logging.getLogger(__name__)

    @property
    def features(self) -> tuple[FeaturePort, ...]:
        return self._registry.features

    # Bootstrap

    async def init(self, initializers: Optional[Iterable[Initializer]] = None) -> None:
        """Load the map script, run ``initializers`` and build the surface.

        Each initializer is called with this controller.

        Raises:
            InitializationError: If any step fails; no surface is built.
        """
        surface = await self._sequencer.run(self, initializers)
        if surface is not None:
            self.map_surface = surface
        elif self.map_surface is None:
            self._logger.warning(
                "Map script was already loaded; this controller has no surface",
                extra={"script_id": self.config.script_id},
            )

    def get_map(self) -> Optional[MapSurfacePort]:
        return self.map_surface

    def get_root(self) -> Optional[Any]:
        return self.host.get_element(self.config.get("target"))

    # Cache

    def get_cache(self, key: Hashable) -> Any:
        """Return the cached value, or ``ABSENT`` if ``key`` was never set."""
        return self._cache.get(key)

    def set_cache(self, key: Hashable, value: Any) -> None:
        self._cache.set(key, value)

    # Features

    def load_features(self, config: Mapping[str, Any]) -> List[FeaturePort]:
        return self._registry.load_features(config)

    def load_feature_data(self) -> tuple[Any, ...]:
        """Start loading every feature without waiting (needs a running loop)."""
        return self._registry.load_feature_data()

    async def join_feature_data(self) -> None:
        """Wait for every load started by load_feature_data."""
        await self._registry.join()

    def add_feature(self, feature: FeaturePort) -> None:
        self._registry.add(feature)

    def remove_feature(self, name: str, mode: Optional[RemovalMode] = None) -> int:
        """Remove every feature called ``name``; returns how many were removed.

        Unknown names are logged and ignored.
        """
        try:
            return self._registry.remove(name, mode)
        except FeatureLookupError as e:
            self._log_lookup_failure(e)
            return 0

    def get_feature(self, name: str) -> Optional[FeaturePort]:
        return self._registry.get(name)

    def show_feature(self, name: str) -> List[RenderError]:
        """Show a feature; returns the markers the surface rejected.

        Unknown names are logged and ignored.
        """
        try:
            feature = self._registry.require(name)
        except FeatureLookupError as e:
            self._log_lookup_failure(e)
            return []
        return feature.render(self.map_surface)

    def hide_feature(self, name: str) -> None:
        """Hide a feature. Its data stays loaded."""
        try:
            feature = self._registry.require(name)
        except FeatureLookupError as e:
            self._log_lookup_failure(e)
            return
        feature.hide()

    def hide_features(self) -> None:
        self._registry.hide_all()

    def is_visible(self, name: str) -> bool:
        try:
            return self._registry.is_visible(name)
        except FeatureLookupError as e:
            self._log_lookup_failure(e)
            return False

    def _log_lookup_failure(self, error: FeatureLookupError) -> None:
        self._logger.error(
            "Could not locate feature",
            extra={"feature": error.feature_name},
        )

    # Map

    def render(self, markers: Union[Marker, Sequence[Marker]]) -> List[RenderError]:
        """Place markers on the map; returns the per-marker failures."""
        return self._renderer.render(markers, self.map_surface)

    def pan(self, position: Union[Position, Mapping[str, Any], Sequence[float]]) -> None:
        """Centre the map on ``position``."""
        if self.map_surface is None:
            raise MapNotReadyError("Cannot pan before the map surface exists")
        self.map_surface.set_center(Position.from_value(position))

    def replay(self, positions: Sequence[Any]) -> ReplaySession:
        """Pan through ``positions`` on a timer (needs a running loop)."""
        return self._replayer.start([Position.from_value(p) for p in positions])

    def show_filters(self) -> bool:
        return self.host.set_display(self.config.filters_element_id, "block")

    def hide_filters(self) -> bool:
        return self.host.set_display(self.config.filters_element_id, "none")
