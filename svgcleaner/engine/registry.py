"""Transform registry — every cleanup step is a standalone function registered via decorator.

Usage:
    @transform(id="T1.01", layer=Layer.CLEAN, dependencies=["T0.02"])
    def group_cleaning(ctx: CleanContext) -> None:
        ...

Steps run layer by layer. Within a layer, dependencies decide the order and
IDs break ties, so the run order is stable across imports.
"""

from __future__ import annotations

import enum
import heapq
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from svgcleaner.engine.context import CleanContext

logger = logging.getLogger(__name__)


class Layer(enum.IntEnum):
    PREPARE = 0
    CLEAN = 1
    PRUNE = 2


@dataclass
class TransformSpec:
    id: str
    layer: Layer
    fn: Callable[["CleanContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""

    @property
    def sort_key(self) -> tuple[int, str]:
        return (self.layer, self.id)


class TransformRegistry:
    """Cleanup transforms keyed by ID."""

    def __init__(self) -> None:
        self._transforms: dict[str, TransformSpec] = {}

    def register(self, spec: TransformSpec) -> None:
        if spec.id in self._transforms:
            raise ValueError(f"Duplicate transform ID: {spec.id}")
        self._transforms[spec.id] = spec
        logger.debug("Registered transform %s (%s)", spec.id, spec.layer.name)

    def _check_dependencies(self) -> None:
        for spec in self._transforms.values():
            for dep in spec.dependencies:
                target = self._transforms.get(dep)
                if target is None:
                    raise ValueError(f"{spec.id} depends on unknown transform {dep}")
                if target.layer > spec.layer:
                    raise ValueError(
                        f"{spec.id} ({spec.layer.name}) depends on {dep} "
                        f"from later layer {target.layer.name}"
                    )

    def resolve_order(self) -> list[TransformSpec]:
        """Every registered transform, dependencies first, then by (layer, ID).

        Raises ValueError for unknown dependencies, dependencies on a later
        layer, or cycles.
        """
        self._check_dependencies()

        waiting = {tid: len(spec.dependencies) for tid, spec in self._transforms.items()}
        dependents: dict[str, list[str]] = {tid: [] for tid in self._transforms}
        for spec in self._transforms.values():
            for dep in spec.dependencies:
                dependents[dep].append(spec.id)

        ready = [self._transforms[tid].sort_key for tid, n in waiting.items() if n == 0]
        heapq.heapify(ready)
        ordered: list[TransformSpec] = []
        while ready:
            _, tid = heapq.heappop(ready)
            ordered.append(self._transforms[tid])
            for other in dependents[tid]:
                waiting[other] -= 1
                if waiting[other] == 0:
                    heapq.heappush(ready, self._transforms[other].sort_key)

        if len(ordered) != len(self._transforms):
            stuck = sorted(tid for tid, n in waiting.items() if n > 0)
            raise ValueError(f"Circular dependency detected among: {stuck}")
        return ordered


# Module-level singleton
_registry = TransformRegistry()


def get_registry() -> TransformRegistry:
    return _registry


def transform(
    *,
    id: str,
    layer: Layer,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator to register a transform function."""

    def decorator(fn: Callable[["CleanContext"], None]):
        _registry.register(
            TransformSpec(
                id=id,
                layer=layer,
                fn=fn,
                dependencies=dependencies or [],
                description=description,
            )
        )
        return fn

    return decorator
