"""Shared fixtures and test doubles."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, List, Optional

import pytest

from mapapp.adapters.host import HeadlessHost, InfoWindow
from mapapp.adapters.repository import StaticRepository
from mapapp.application import MapApplication
from mapapp.config import MapConfiguration
from mapapp.domain.errors import RenderError
from mapapp.domain.models import Marker, Position


@dataclass
class RecordingSurface:
    """Map surface double that records what the controller does to it."""

    root: Any = None
    options: Any = None
    centers: List[Position] = field(default_factory=list)
    markers: List[Marker] = field(default_factory=list)
    reject_titles: set = field(default_factory=set)

    def set_center(self, position: Position) -> None:
        self.centers.append(position)

    def add_marker(self, marker: Marker) -> None:
        if marker.title in self.reject_titles:
            raise RenderError(f"rejected {marker.title}", renderer_type="recording")
        self.markers.append(marker)

    def remove_marker(self, marker: Marker) -> None:
        self.markers = [m for m in self.markers if m is not marker]


@dataclass(eq=False)
class FakeFeature:
    """Feature double logging every lifecycle call into ``events``."""

    name: str
    events: List[str] = field(default_factory=list)
    marker_count: int = 1
    gate: Optional[asyncio.Event] = None
    fail_with: Optional[Exception] = None
    is_initialized: bool = False
    controller: Any = None
    _markers: List[Marker] = field(default_factory=list)

    @property
    def markers(self) -> List[Marker]:
        return self._markers

    def set_map(self, controller: Any) -> None:
        self.controller = controller

    async def load_data(self) -> None:
        self.events.append(f"{self.name}:data:start")
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_with is not None:
            raise self.fail_with
        self.events.append(f"{self.name}:data:done")

    def load_markers(self) -> None:
        self.events.append(f"{self.name}:markers")
        self._markers = [
            Marker(title=f"{self.name}-{i}") for i in range(self.marker_count)
        ]

    def render(self, surface: Any) -> List[RenderError]:
        return self.controller.render(self._markers)

    def hide(self) -> None:
        for marker in self._markers:
            marker.set_map(None)


@dataclass
class RecordingLoader:
    """Script loader double counting loads; may fail a number of times."""

    failures: int = 0
    calls: List[str] = field(default_factory=list)

    async def __call__(self, src: str) -> None:
        self.calls.append(src)
        await asyncio.sleep(0)
        if len(self.calls) <= self.failures:
            raise OSError("script failed to load")


@pytest.fixture
def config() -> MapConfiguration:
    return MapConfiguration(
        api_key="test-key",
        replay_interval_seconds=0,
        map_options={
            "center": {"lat": 48.11, "lng": -1.68},
            "defaultMarkerStyles": {"icon": {"scaledSize": {"width": 20, "height": 24}}},
        },
    )


@pytest.fixture
def loader() -> RecordingLoader:
    return RecordingLoader()


@pytest.fixture
def host(loader: RecordingLoader) -> HeadlessHost:
    return HeadlessHost(loader=loader, user_info_window=InfoWindow())


@pytest.fixture
def surfaces() -> List[RecordingSurface]:
    return []


@pytest.fixture
def surface_factory(surfaces: List[RecordingSurface]):
    def create(root: Any, options: Any) -> RecordingSurface:
        surface = RecordingSurface(root=root, options=options)
        surfaces.append(surface)
        return surface

    return create


@pytest.fixture
def repository() -> StaticRepository:
    return StaticRepository(
        {
            "stations": [
                {"name": "Rennes", "lat": 48.10, "lng": -1.67},
                {"name": "Nowhere"},
            ]
        }
    )


@pytest.fixture
def app(config, host, surface_factory, repository) -> MapApplication:
    return MapApplication(
        config,
        repository=repository,
        host=host,
        surface_factory=surface_factory,
    )
