"""Features - Concrete map layers.

Available implementations:
- MapFeature: Markers built from repository records
"""

from .map_feature import FeatureConfig, MapFeature

__all__ = ["FeatureConfig", "MapFeature"]
