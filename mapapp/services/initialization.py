"""Initialization sequencer - bootstraps the map surface.

Three things have to happen before the map is usable:

1. every caller-supplied initializer has resolved (they run concurrently,
   and the first failure fails the whole sequence);
2. the rendering dependency script is loaded, at most once per page;
3. the surface is built from the map options.

The surface is only built once both 1 and 2 are done. When the page
already has the script element, loading and surface construction are
skipped and the initializers alone gate completion: the surface is
assumed to have been built by whoever injected the script.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterable, Optional

from ..config import MapConfiguration
from ..domain.errors import InitializationError
from ..ports.host import HostEnvironmentPort
from ..ports.rendering import MapSurfaceFactory, MapSurfacePort

Initializer = Callable[[Any], Awaitable[Any]]


def _drain(future: asyncio.Future) -> None:
    if not future.cancelled():
        future.exception()


@dataclass
class InitializationSequencer:
    """Runs the bootstrap sequence for one controller.

    Attributes:
        config: Script id/URL, retries, root element id and map options
        host: The page the script is injected into
        surface_factory: Builds the surface once everything is ready
    """

    config: MapConfiguration
    host: HostEnvironmentPort
    surface_factory: MapSurfaceFactory

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    async def run(
        self,
        controller: Any,
        initializers: Optional[Iterable[Initializer]] = None,
    ) -> Optional[MapSurfacePort]:
        """Run the sequence.

        Returns:
            The new surface, or None if the script was already on the page.

        Raises:
            InitializationError: If an initializer, the script load or the
                surface construction fails.
        """
        initializers = list(initializers or ())
        ready = asyncio.ensure_future(self._run_initializers(controller, initializers))

        if self.host.has_element(self.config.script_id):
            self._logger.info(
                "Map script already present, skipping surface construction",
                extra={"script_id": self.config.script_id},
            )
            await ready
            return None

        script = asyncio.ensure_future(self._load_dependency())
        try:
            await asyncio.gather(script, ready)
        except BaseException:
            # The sibling keeps running; only the first failure is reported.
            for pending in (script, ready):
                pending.add_done_callback(_drain)
            raise

        return self._build_surface()

    async def _run_initializers(
        self, controller: Any, initializers: list[Initializer]
    ) -> None:
        if not initializers:
            self._logger.debug("Nothing to initialize")
            return

        async def call(initializer: Initializer) -> Any:
            result = initializer(controller)
            if inspect.isawaitable(result):
                return await result
            return result

        try:
            await asyncio.gather(*(call(fn) for fn in initializers))
        except Exception as e:
            raise InitializationError(
                "Initializer failed", stage="initializer", cause=e
            )
        self._logger.info("Initializers finished", extra={"count": len(initializers)})

    async def _load_dependency(self) -> None:
        script_id = self.config.script_id
        attempts = self.config.script_load_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                await self.host.load_script(script_id, self.config.script_src)
                return
            except Exception as e:
                # No stale script element may survive a failed load.
                self.host.remove_element(script_id)
                if attempt == attempts:
                    raise InitializationError(
                        f"Could not load map script after {attempts} attempt(s)",
                        stage="dependency",
                        cause=e,
                    )
                self._logger.warning(
                    "Map script load failed, retrying",
                    extra={"attempt": attempt, "error": str(e)},
                )

    def _build_surface(self) -> MapSurfacePort:
        root = self.host.get_element(self.config.map_element_id)
        try:
            surface = self.surface_factory(root, self.config.map_options)
        except Exception as e:
            raise InitializationError(
                "Map surface construction failed", stage="surface", cause=e
            )
        self._logger.info(
            "Map surface ready",
            extra={"root": self.config.map_element_id},
        )
        return surface
