"""Tests for position replay."""

import asyncio
import logging

import pytest

from mapapp.adapters.host import HeadlessHost, InfoWindow
from mapapp.domain.errors import MapNotReadyError, RenderError
from mapapp.domain.models import Position
from mapapp.services.replay import ReplayController

P0, P1, P2 = Position(48.0, -1.0), Position(48.1, -1.1), Position(48.2, -1.2)


@pytest.fixture
def pans():
    return []


@pytest.fixture
def window():
    return InfoWindow(is_open=True)


@pytest.fixture
def controller(pans, window):
    host = HeadlessHost(user_info_window=window)
    return ReplayController(pan=pans.append, host=host, interval_seconds=0)


def run_replay(controller, positions):
    async def scenario():
        session = controller.start(positions)
        await session.wait()
        return session

    return asyncio.run(scenario())


def test_replay_stops_before_last_position(controller, pans):
    # The final waypoint is never panned to; this pins the current boundary.
    session = run_replay(controller, [P0, P1, P2])

    assert pans == [P0, P1]
    assert len(pans) == 2
    assert session.visited == [P0, P1]
    assert session.index == 2
    assert session.done


def test_replay_closes_info_window(controller, window):
    run_replay(controller, [P0, P1])

    assert window.is_open is False


@pytest.mark.parametrize("positions", [[], [P0]])
def test_short_replays_never_pan(controller, pans, positions):
    run_replay(controller, positions)

    assert pans == []


def test_cancel_stops_replay(pans, window):
    host = HeadlessHost(user_info_window=window)
    controller = ReplayController(pan=pans.append, host=host, interval_seconds=10)

    async def scenario():
        session = controller.start([P0, P1, P2])
        await asyncio.sleep(0)
        assert session.cancel() is True
        await session.wait()
        assert session.cancel() is False
        return session

    session = asyncio.run(scenario())

    assert pans == []
    assert session.done


def test_application_replay_pans_map(app, surfaces):
    async def scenario():
        await app.init()
        session = app.replay([{"lat": 1.0, "lng": 2.0}, (3.0, 4.0), P2])
        await session.wait()

    asyncio.run(scenario())

    assert surfaces[0].centers == [Position(1.0, 2.0), Position(3.0, 4.0)]


def test_failed_pan_is_logged(window, caplog):
    def pan(position):
        raise RenderError("incomplete position", renderer_type="folium")

    host = HeadlessHost(user_info_window=window)
    controller = ReplayController(pan=pan, host=host, interval_seconds=0)

    async def scenario():
        session = controller.start([P0, P1, P2])
        with pytest.raises(RenderError):
            await session.wait()
        await asyncio.sleep(0)
        return session

    with caplog.at_level(logging.ERROR, logger="mapapp"):
        session = asyncio.run(scenario())

    records = [r for r in caplog.records if r.getMessage() == "Replay stopped"]
    assert len(records) == 1
    assert records[0].index == 0
    assert session.visited == []


def test_replay_before_init_logs_without_waiting(app, caplog):
    async def scenario():
        session = app.replay([(1.0, 2.0), (3.0, 4.0), (5.0, 6.0)])
        while not session.done:
            await asyncio.sleep(0)
        await asyncio.sleep(0.01)
        return session

    with caplog.at_level(logging.ERROR, logger="mapapp"):
        session = asyncio.run(scenario())

    records = [r for r in caplog.records if r.getMessage() == "Replay stopped"]
    assert len(records) == 1
    assert "Cannot pan before the map surface exists" in records[0].error
    assert isinstance(session._task.exception(), MapNotReadyError)
