"""Transform-folding and structural-cleanup engine."""

from svgcleaner.engine.registry import transform, Layer, get_registry
from svgcleaner.engine.context import CleanContext, ChangeCounters
from svgcleaner.engine.config import CleanerConfig
from svgcleaner.engine.pipeline import Pipeline, create_pipeline

__all__ = [
    "transform",
    "Layer",
    "get_registry",
    "CleanContext",
    "ChangeCounters",
    "CleanerConfig",
    "Pipeline",
    "create_pipeline",
]
