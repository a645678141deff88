"""Cleaner configuration — per-run knobs for the transform pipeline."""

from __future__ import annotations

from dataclasses import dataclass

from svgcleaner.config import Settings, settings as default_settings


@dataclass
class CleanerConfig:
    """Controls font retargeting and attribute sanitization."""

    # Font retargeting
    change_fonts: bool = True
    source_font: str = "Arial"
    target_font: str = "Cambria"

    # Attributes the word processor's SVG renderer rejects outright
    removed_attributes: tuple[str, ...] = ("paint-order", "vector-effect")
    # Attributes removed only when their value is blank
    blank_attributes: tuple[str, ...] = ("stroke-miterlimit", "stroke-dasharray")

    # Backups
    backup_suffix: str = ".backup"

    # Serialization
    indent: str = "  "

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **overrides) -> CleanerConfig:
        s = settings or default_settings
        values = {
            "source_font": s.source_font,
            "target_font": s.target_font,
            "backup_suffix": s.backup_suffix,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
