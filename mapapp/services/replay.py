"""Replay - pans the map through recorded positions on a timer.

Meant to replicate a user moving around. On every tick the open user
info window is closed and the map is centred on the next position. The
replay stops when the index reaches the last position, so that final
position is never panned to.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from ..domain.models import Position
from ..ports.host import HostEnvironmentPort


@dataclass
class ReplaySession:
    """A running replay.

    Attributes:
        positions: Waypoints, in order
        index: Next waypoint to pan to
        visited: Waypoints already panned to
    """

    positions: Sequence[Position]
    index: int = 0
    visited: List[Position] = field(default_factory=list)
    _task: Optional[asyncio.Task] = field(default=None, repr=False)

    @property
    def done(self) -> bool:
        return self._task is not None and self._task.done()

    async def wait(self) -> None:
        """Wait until the replay finishes or is cancelled."""
        if self._task is None:
            return
        try:
            await self._task
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise

    def cancel(self) -> bool:
        """Stop the replay before its next tick."""
        if self._task is None or self._task.done():
            return False
        return self._task.cancel()


@dataclass
class ReplayController:
    """Drives replays for one controller.

    Attributes:
        pan: Centres the map on a position
        host: Page whose user info window is closed on every tick
        interval_seconds: Delay between ticks
    """

    pan: Callable[[Position], None]
    host: HostEnvironmentPort
    interval_seconds: float = 5.0

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def start(self, positions: Sequence[Position]) -> ReplaySession:
        """Schedule a replay on the running loop and return its session."""
        session = ReplaySession(positions=list(positions))
        session._task = asyncio.get_running_loop().create_task(
            self._run(session), name="map-replay"
        )
        session._task.add_done_callback(lambda task: self._log_failure(task, session))
        return session

    def _log_failure(self, task: asyncio.Task, session: ReplaySession) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self._logger.error(
                "Replay stopped",
                extra={"index": session.index, "error": str(error)},
            )

    async def _run(self, session: ReplaySession) -> None:
        last = len(session.positions) - 1
        while True:
            await asyncio.sleep(self.interval_seconds)
            if session.index >= last:
                self._logger.info(
                    "User position tracking has finished",
                    extra={"index": session.index, "visited": len(session.visited)},
                )
                return

            self.host.close_info_window()
            position = session.positions[session.index]
            self.pan(position)
            session.visited.append(position)
            self._logger.debug("Replay tick", extra={"index": session.index})
            session.index += 1
