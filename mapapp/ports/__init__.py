"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the controller and the things it
drives: the page, the map surface, features, data sources and the cache.
They make the controller testable without a browser.
"""

from .cache import ABSENT, CachePort
from .feature import FeatureFactory, FeaturePort
from .host import HostEnvironmentPort
from .rendering import MapSurfaceFactory, MapSurfacePort
from .repository import RepositoryPort

__all__ = [
    # Cache
    "ABSENT",
    "CachePort",
    # Features
    "FeaturePort",
    "FeatureFactory",
    # Host
    "HostEnvironmentPort",
    # Rendering
    "MapSurfacePort",
    "MapSurfaceFactory",
    # Data
    "RepositoryPort",
]
