"""Typed domain errors for the map application.

All errors inherit from MapApplicationError and can optionally
wrap a root cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class MapApplicationError(Exception):
    """Base error for the map application domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[BaseException] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class InitializationError(MapApplicationError):
    """Bootstrapping the map failed.

    Attributes:
        stage: Which step failed ("dependency", "initializer" or "surface")
    """

    stage: str = ""


@dataclass
class FeatureLookupError(MapApplicationError):
    """No feature is registered under the requested name.

    Attributes:
        feature_name: The name that was looked up
    """

    feature_name: str = ""


@dataclass
class FeatureLoadError(MapApplicationError):
    """A feature's data or marker loading failed.

    Attributes:
        feature_name: Name of the feature whose load failed
    """

    feature_name: str = ""


@dataclass
class RenderError(MapApplicationError):
    """The map surface rejected a marker.

    Attributes:
        marker_index: Position of the marker in the rendered batch
        renderer_type: Type of surface that failed
    """

    marker_index: Optional[int] = None
    renderer_type: str = ""


@dataclass
class MapNotReadyError(MapApplicationError):
    """An operation needed the map surface before init() built it."""

