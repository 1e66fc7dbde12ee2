"""Services layer - The controller's moving parts.

Available services:
- InitializationSequencer: Script loading, initializers and surface construction
- FeatureRegistry: Name-keyed features and their data loading
- RenderProvider: Marker normalization and placement
- ReplayController: Timed panning through positions
"""

from .initialization import InitializationSequencer
from .registry import FeatureRegistry
from .rendering import RenderProvider
from .replay import ReplayController, ReplaySession

__all__ = [
    "InitializationSequencer",
    "FeatureRegistry",
    "RenderProvider",
    "ReplayController",
    "ReplaySession",
]
