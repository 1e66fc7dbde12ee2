"""Dependency injection container.

This module wires controllers to their adapters without external
frameworks. One container stands for one host page: every controller it
creates shares the page (so the map script is loaded once) and the data
repository, while each controller owns a fresh cache.

Design principles:
1. No magic - explicit wiring
2. Testable - every adapter can be swapped before first use
3. Lazy loading - adapters instantiated on first use
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from .adapters.cache import InMemoryCache
from .adapters.host import HeadlessHost
from .adapters.rendering import create_folium_surface
from .adapters.repository import JsonRepository
from .application import MapApplication
from .config import MapConfiguration, get_config
from .features.map_feature import MapFeature
from .ports.cache import CachePort
from .ports.feature import FeatureFactory
from .ports.host import HostEnvironmentPort
from .ports.rendering import MapSurfaceFactory
from .ports.repository import RepositoryPort


@dataclass
class Container:
    """Per-page dependency container.

    Usage:
        # Production
        container = Container.create_default()
        app = container.create_application()

        # Testing
        container = Container(repository=StaticRepository({...}))
        app = container.create_application()

    Attributes:
        config: Controller configuration
        host: Page shared by every controller (built on first use)
        repository: Data source shared by every controller (built on first use)
        surface_factory: Builds each controller's map surface
        feature_factory: Builds features from configuration entries
        cache_factory: Builds one cache per controller
    """

    config: MapConfiguration = field(default_factory=get_config)
    host: Optional[HostEnvironmentPort] = None
    repository: Optional[RepositoryPort] = None
    surface_factory: MapSurfaceFactory = create_folium_surface
    feature_factory: FeatureFactory = MapFeature.from_config
    cache_factory: Callable[[], CachePort[Any]] = field(
        default=lambda: InMemoryCache(name="application")
    )

    _applications: List[MapApplication] = field(default_factory=list, repr=False)

    @classmethod
    def create_default(cls, config: Optional[MapConfiguration] = None) -> Container:
        """Create a container with the default adapters."""
        return cls(config=config or get_config())

    @property
    def applications(self) -> tuple[MapApplication, ...]:
        return tuple(self._applications)

    def get_host(self) -> HostEnvironmentPort:
        if self.host is None:
            self.host = HeadlessHost(
                element_ids=(self.config.map_element_id, self.config.filters_element_id)
            )
        return self.host

    def get_repository(self) -> RepositoryPort:
        if self.repository is None:
            self.repository = JsonRepository(self.config.repository)
        return self.repository

    def create_application(self) -> MapApplication:
        """Create a controller on this page with its own cache."""
        app = MapApplication(
            self.config,
            repository=self.get_repository(),
            host=self.get_host(),
            surface_factory=self.surface_factory,
            feature_factory=self.feature_factory,
            cache=self.cache_factory(),
        )
        self._applications.append(app)
        return app
