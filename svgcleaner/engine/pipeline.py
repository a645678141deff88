"""Pipeline orchestrator — runs cleanup transforms in dependency order."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time

from svgcleaner.engine.context import CleanContext
from svgcleaner.engine.registry import TransformRegistry, get_registry

logger = logging.getLogger(__name__)

LAYER_PACKAGES = ("layer0", "layer1", "layer2")


class Pipeline:
    """Orchestrates the cleanup pipeline for one document."""

    def __init__(self, registry: TransformRegistry | None = None) -> None:
        self.registry = registry or get_registry()

    def run(self, ctx: CleanContext) -> CleanContext:
        """Run every registered transform on the given context.

        A failing transform is recorded in ``ctx.errors``. Transforms that
        depend on it are skipped and recorded too; independent ones still run
        so all failures are reported together.
        """
        start = time.perf_counter()
        ordered = self.registry.resolve_order()

        logger.debug("Pipeline: %d transforms queued", len(ordered))

        for spec in ordered:
            failed = [dep for dep in spec.dependencies if dep in ctx.errors]
            if failed:
                ctx.errors[spec.id] = f"skipped, {', '.join(failed)} failed"
                logger.debug("  %s skipped (failed: %s)", spec.id, failed)
                continue

            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
                ctx.completed_transforms.add(spec.id)
                elapsed = (time.perf_counter() - t0) * 1000
                logger.debug("  %s completed in %.1fms", spec.id, elapsed)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)

        total = (time.perf_counter() - start) * 1000
        logger.debug(
            "Pipeline complete: %d/%d transforms in %.1fms",
            len(ctx.completed_transforms),
            len(ordered),
            total,
        )
        return ctx


def load_transforms() -> None:
    """Import all transform modules so @transform decorators fire."""
    for layer_name in LAYER_PACKAGES:
        package_name = f"svgcleaner.engine.{layer_name}"
        package = importlib.import_module(package_name)
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package_name}.{module_name}")


def create_pipeline() -> Pipeline:
    """Factory for a pipeline over the global registry, with all transforms loaded."""
    load_transforms()
    return Pipeline()
