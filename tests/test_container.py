"""Tests for the dependency injection container."""

import asyncio

import pytest

from mapapp import Container
from mapapp.adapters.host import HeadlessHost
from mapapp.adapters.repository import JsonRepository, StaticRepository
from mapapp.application import MapApplication
from mapapp.config import MapConfiguration
from mapapp.ports.cache import ABSENT


@pytest.fixture
def container():
    return Container.create_default(MapConfiguration(repository="fixtures"))


def test_default_application_wiring(container):
    app = container.create_application()

    assert isinstance(app, MapApplication)
    assert isinstance(app.host, HeadlessHost)
    assert isinstance(app.repository, JsonRepository)
    assert str(app.repository.base_dir) == "fixtures"
    assert container.applications == (app,)


def test_override_before_first_use():
    repository = StaticRepository({"pois": []})
    container = Container(config=MapConfiguration(), repository=repository)

    assert container.create_application().repository is repository


def test_applications_share_page_and_repository(container):
    first = container.create_application()
    second = container.create_application()

    assert first is not second
    assert first.host is second.host
    assert first.repository is second.repository


def test_caches_are_not_shared(container):
    first = container.create_application()
    second = container.create_application()
    first.set_cache("x", 1)

    assert second.get_cache("x") is ABSENT


def test_map_script_is_loaded_once_per_page(config, host, loader, surface_factory):
    container = Container(config=config, host=host, surface_factory=surface_factory)
    first = container.create_application()
    second = container.create_application()

    async def scenario():
        await first.init()
        await second.init()

    asyncio.run(scenario())

    assert len(loader.calls) == 1
    assert first.get_map() is not None
    assert second.get_map() is None
