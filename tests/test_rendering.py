"""Tests for marker normalization and placement."""

import pytest

from mapapp.domain.errors import MapNotReadyError, RenderError
from mapapp.domain.models import Marker, MarkerSize, Position
from mapapp.services.rendering import RenderProvider

from .conftest import RecordingSurface

DEFAULT_POSITION = Position(48.11, -1.68)
DEFAULT_SIZE = MarkerSize(20, 24)


@pytest.fixture
def provider():
    return RenderProvider(default_position=DEFAULT_POSITION, default_size=DEFAULT_SIZE)


@pytest.fixture
def surface():
    return RecordingSurface()


def test_single_marker_is_rendered(provider, surface):
    marker = Marker(position=Position(1.0, 2.0))

    failures = provider.render(marker, surface)

    assert failures == []
    assert surface.markers == [marker]
    assert marker.map is surface


def test_every_marker_gets_position_and_default_size(provider, surface):
    markers = [
        Marker(),
        Marker(position=Position(10.0, 20.0), icon_size=MarkerSize(99, 99)),
        Marker(position=Position(latitude=5.0)),
    ]

    provider.render(markers, surface)

    assert markers[0].position == DEFAULT_POSITION
    assert markers[1].position == Position(10.0, 20.0)
    # Only a position with neither coordinate set is replaced.
    assert markers[2].position == Position(latitude=5.0)
    assert all(m.icon_size == DEFAULT_SIZE for m in markers)
    assert all(not m.position.is_unset for m in markers)


def test_rejected_marker_does_not_abort_batch(provider, surface, caplog):
    surface.reject_titles = {"bad"}
    markers = [Marker(title="good"), Marker(title="bad"), Marker(title="also good")]

    failures = provider.render(markers, surface)

    assert [m.title for m in surface.markers] == ["good", "also good"]
    assert len(failures) == 1
    assert failures[0].marker_index == 1
    assert markers[1].map is None
    assert sum(r.getMessage() == "Marker render failed" for r in caplog.records) == 1


def test_foreign_surface_errors_are_wrapped(provider):
    class ExplodingSurface(RecordingSurface):
        def add_marker(self, marker):
            raise ValueError("surface exploded")

    failures = provider.render([Marker()], ExplodingSurface())

    assert isinstance(failures[0], RenderError)
    assert isinstance(failures[0].cause, ValueError)
    assert failures[0].marker_index == 0


def test_render_without_surface_raises(provider):
    with pytest.raises(MapNotReadyError):
        provider.render(Marker(), None)


def test_rerender_keeps_single_placement(provider, surface):
    marker = Marker()

    provider.render(marker, surface)
    provider.render(marker, surface)

    assert surface.markers == [marker]


def test_moving_marker_detaches_from_previous_surface(provider, surface):
    other = RecordingSurface()
    marker = Marker()

    provider.render(marker, surface)
    provider.render(marker, other)

    assert surface.markers == []
    assert other.markers == [marker]
    assert marker.map is other


def test_failed_detach_still_tracks_new_surface(provider, surface):
    class StickySurface(RecordingSurface):
        def remove_marker(self, marker):
            raise RenderError("cannot detach", renderer_type="sticky")

    sticky = StickySurface()
    marker = Marker()
    provider.render(marker, sticky)

    with pytest.raises(RenderError):
        marker.set_map(surface)

    assert marker.map is surface
    assert surface.markers == [marker]
