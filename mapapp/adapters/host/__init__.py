"""Host adapters - Implementations of HostEnvironmentPort.

Available implementations:
- HeadlessHost: In-memory page with an injectable script loader
"""

from .headless import Element, HeadlessHost, InfoWindow, import_module_loader

__all__ = ["HeadlessHost", "Element", "InfoWindow", "import_module_loader"]
