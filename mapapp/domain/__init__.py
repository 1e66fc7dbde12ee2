"""Domain layer - Core models and errors.

This module contains the domain models and typed errors used
throughout the application. No external dependencies.
"""

from .errors import (
    FeatureLoadError,
    FeatureLookupError,
    InitializationError,
    MapApplicationError,
    MapNotReadyError,
    RenderError,
)
from .models import Marker, MarkerSize, Position, RemovalMode

__all__ = [
    # Models
    "Position",
    "MarkerSize",
    "Marker",
    "RemovalMode",
    # Errors
    "MapApplicationError",
    "InitializationError",
    "FeatureLookupError",
    "FeatureLoadError",
    "RenderError",
    "MapNotReadyError",
]
