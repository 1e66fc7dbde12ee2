"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the controller to:
- The hosting page (headless in-memory document)
- Rendering engines (Folium)
- Feature data sources (JSON files, in-memory records)
- Caching (in-memory)
"""
