"""Top-level package for the map feature controller.

The controller bootstraps a map surface, keeps a registry of named
marker layers ("features") on top of it, caches data per controller and
can replay a recorded sequence of positions.
"""

from .application import MapApplication
from .config import MapConfiguration, get_config, reset_config
from .container import Container
from .domain.models import Marker, MarkerSize, Position, RemovalMode
from .ports.cache import ABSENT

__all__ = [
    "MapApplication",
    "MapConfiguration",
    "Container",
    "get_config",
    "reset_config",
    "Marker",
    "MarkerSize",
    "Position",
    "RemovalMode",
    "ABSENT",
]
