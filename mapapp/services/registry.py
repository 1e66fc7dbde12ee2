"""Feature registry - ordered, name-keyed collection of features.

Data loading is dispatched, not awaited: ``load_feature_data`` starts one
task per feature and returns immediately. Within a task, ``load_data``
always completes before ``load_markers`` starts; tasks of different
features run in any order. ``join`` waits for everything dispatched so
far.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Mapping, Optional

from ..domain.errors import FeatureLoadError, FeatureLookupError
from ..domain.models import RemovalMode
from ..features.map_feature import MapFeature
from ..ports.feature import FeatureFactory, FeaturePort


@dataclass
class FeatureRegistry:
    """Registry of the controller's features.

    Attributes:
        controller: Object every feature is bound to via ``set_map``
        feature_factory: Builds a feature from a (name, config) entry
        removal_mode: Default behaviour of ``remove``
    """

    controller: Any = None
    feature_factory: FeatureFactory = MapFeature.from_config
    removal_mode: RemovalMode = RemovalMode.REGISTRY_ONLY

    _features: List[FeaturePort] = field(default_factory=list, repr=False)
    _tasks: List[asyncio.Task] = field(default_factory=list, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def __len__(self) -> int:
        return len(self._features)

    def __iter__(self) -> Iterator[FeaturePort]:
        return iter(list(self._features))

    @property
    def features(self) -> tuple[FeaturePort, ...]:
        return tuple(self._features)

    def names(self) -> List[str]:
        return [f.name for f in self._features]

    def load_features(self, config: Mapping[str, Any]) -> List[FeaturePort]:
        """Create, bind and append one feature per config entry.

        Names are not checked for uniqueness here; ``add`` reconciles
        duplicates.
        """
        created = []
        for name, feature_config in config.items():
            feature = self.feature_factory(name, feature_config)
            feature.set_map(self.controller)
            self._features.append(feature)
            created.append(feature)
        self._logger.info("Features loaded", extra={"count": len(created)})
        return created

    def add(self, feature: FeaturePort) -> None:
        """Bind and append ``feature``, replacing every entry with its name."""
        feature.set_map(self.controller)
        name = feature.name
        if self.get(name) is not None:
            self._features = [f for f in self._features if f.name != name]
            self._logger.debug("Feature replaced", extra={"feature": name})
        self._features.append(feature)

    def remove(self, name: str, mode: Optional[RemovalMode] = None) -> int:
        """Remove every feature called ``name``.

        With ``RemovalMode.HIDE_AND_REMOVE`` the features' markers are also
        taken off the map first.

        Returns:
            Number of entries removed.

        Raises:
            FeatureLookupError: If no feature has that name.
        """
        mode = RemovalMode(mode or self.removal_mode)
        matches = [f for f in self._features if f.name == name]
        if not matches:
            raise FeatureLookupError(
                f"Could not locate feature {name!r}", feature_name=name
            )

        if mode is RemovalMode.HIDE_AND_REMOVE:
            for feature in matches:
                feature.hide()
        self._features = [f for f in self._features if f.name != name]
        self._logger.info(
            "Feature removed",
            extra={"feature": name, "entries": len(matches), "mode": mode.value},
        )
        return len(matches)

    def get(self, name: str) -> Optional[FeaturePort]:
        """Return the first feature called ``name``, or None."""
        return next((f for f in self._features if f.name == name), None)

    def require(self, name: str) -> FeaturePort:
        """Return the first feature called ``name``.

        Raises:
            FeatureLookupError: If no feature has that name.
        """
        feature = self.get(name)
        if feature is None:
            raise FeatureLookupError(
                f"Could not locate feature {name!r}", feature_name=name
            )
        return feature

    def is_visible(self, name: str) -> bool:
        """True if the feature's first marker is placed on a surface.

        A feature without markers is not visible.

        Raises:
            FeatureLookupError: If no feature has that name.
        """
        markers = self.require(name).markers
        if not markers:
            return False
        return markers[0].map is not None

    def hide_all(self) -> None:
        for feature in self._features:
            feature.hide()

    def load_feature_data(self) -> tuple[asyncio.Task, ...]:
        """Start loading every feature's data, then its markers.

        Must be called from a running event loop. Returns without waiting;
        ``is_initialized`` is set on every feature as soon as its task is
        scheduled.
        """
        loop = asyncio.get_running_loop()
        tasks = []
        for feature in list(self._features):
            task = loop.create_task(
                self._load(feature), name=f"feature-load:{feature.name}"
            )
            task.add_done_callback(self._log_failure)
            feature.is_initialized = True
            tasks.append(task)
        self._tasks.extend(tasks)
        self._logger.debug("Feature loading dispatched", extra={"count": len(tasks)})
        return tuple(tasks)

    async def join(self) -> None:
        """Wait for every dispatched load.

        Raises:
            FeatureLoadError: The first load failure.
        """
        pending = list(self._tasks)
        try:
            if pending:
                await asyncio.gather(*pending)
        finally:
            self._tasks = [t for t in self._tasks if not t.done()]

    async def _load(self, feature: FeaturePort) -> None:
        try:
            await feature.load_data()
            result = feature.load_markers()
            if inspect.isawaitable(result):
                await result
        except FeatureLoadError:
            raise
        except Exception as e:
            raise FeatureLoadError(
                f"Loading feature {feature.name!r} failed",
                feature_name=feature.name,
                cause=e,
            )
        self._logger.info(
            "Feature ready",
            extra={"feature": feature.name, "markers": len(feature.markers)},
        )

    def _log_failure(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self._logger.error(
                "Feature load failed",
                extra={"task": task.get_name(), "error": str(error)},
            )
