"""File orchestration — load, clean, back up and save SVG files one at a time."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Callable

from svgcleaner.engine.config import CleanerConfig
from svgcleaner.engine.context import CleanContext
from svgcleaner.engine.pipeline import Pipeline, create_pipeline
from svgcleaner.errors import CleanError
from svgcleaner.models.report import FileReport, FileStatus, RunSummary
from svgcleaner.svg.parser import load_svg, read_doctype
from svgcleaner.svg.serializer import ensure_backup, write_svg

logger = logging.getLogger(__name__)

Echo = Callable[[str], None]

# Counter name -> console label for modified files
_COUNTER_LABELS = {
    "rects_removed": "Rectangles removed",
    "fonts_changed": "Fonts changed ({source} → {target})",
    "attributes_cleaned": "Attributes cleaned",
    "transforms_applied": "Transforms applied",
    "empty_elements_removed": "Empty elements removed",
}


def clean_tree(
    root: ET.Element,
    config: CleanerConfig | None = None,
    pipeline: Pipeline | None = None,
    source_path: Path | None = None,
) -> CleanContext:
    """Run the cleanup pipeline over an in-memory document. Mutates `root`."""
    ctx = CleanContext(root=root, config=config or CleanerConfig(), source_path=source_path)
    (pipeline or create_pipeline()).run(ctx)
    if ctx.errors:
        raise CleanError(source_path, ctx.errors)
    return ctx


def clean_file(
    path: Path,
    config: CleanerConfig | None = None,
    pipeline: Pipeline | None = None,
) -> FileReport:
    """Clean one SVG file in place, writing a one-time backup first.

    Raises ET.ParseError, OSError or CleanError; the file is not rewritten
    unless the pipeline completed and changed something.
    """
    config = config or CleanerConfig()
    tree = load_svg(path)
    ctx = clean_tree(tree.getroot(), config, pipeline, source_path=path)

    report = FileReport(
        file_name=path.name,
        status=FileStatus.MODIFIED if ctx.modified else FileStatus.UNCHANGED,
        counters=ctx.counters.as_dict(),
        notes=list(ctx.notes),
    )
    if not ctx.modified:
        return report

    backup = ensure_backup(path, config.backup_suffix)
    if backup is not None:
        report.backup_path = str(backup)
    write_svg(tree, path, config.indent, doctype=read_doctype(path))
    logger.debug("Saved %s: %s", path, report.counters)
    return report


def find_svg_files(directory: Path, extension: str = ".svg") -> list[Path]:
    """Non-recursive, sorted listing of files with the given extension."""
    ext = extension.lower()
    return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == ext)


def _echo_details(report: FileReport, config: CleanerConfig, echo: Echo) -> None:
    for note in report.notes:
        echo(f"    {note}")
    for name, label in _COUNTER_LABELS.items():
        count = report.counters.get(name, 0)
        if count > 0:
            label = label.format(source=config.source_font, target=config.target_font)
            echo(f"    {label}: {count}")


def process_directory(
    directory: Path,
    config: CleanerConfig | None = None,
    extension: str = ".svg",
    echo: Echo = print,
) -> RunSummary:
    """Clean every SVG file in `directory`. One file's failure never stops the run."""
    config = config or CleanerConfig()
    pipeline = create_pipeline()
    summary = RunSummary(directory=str(directory))

    files = find_svg_files(directory, extension)
    echo(f"Found {len(files)} SVG files to process...\n")

    for path in files:
        echo(f"Processing: {path.name}")
        try:
            report = clean_file(path, config, pipeline)
        except Exception as e:
            logger.warning("Failed to clean %s: %s", path, e)
            report = FileReport(file_name=path.name, status=FileStatus.ERROR, error=str(e))
            echo(f"  ✗ Error: {e}")
        else:
            if report.status == FileStatus.MODIFIED:
                _echo_details(report, config, echo)
                echo("  ✓ Modified and saved")
            else:
                echo("  - No changes needed")
        summary.reports.append(report)

    echo("\n=== Summary ===")
    echo(f"Files processed: {summary.files_processed}")
    echo(f"Files modified: {summary.files_modified}")
    echo(f"Files unchanged: {summary.files_unchanged}")
    if summary.files_failed:
        echo(f"Files failed: {summary.files_failed}")
    return summary
