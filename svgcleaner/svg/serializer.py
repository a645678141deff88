"""Write cleaned SVG documents back to disk."""

from __future__ import annotations

import logging
import shutil
import xml.etree.ElementTree as ET
from pathlib import Path

logger = logging.getLogger(__name__)

XML_DECLARATION = "<?xml version='1.0' encoding='utf-8'?>"


def backup_path_for(path: Path, suffix: str = ".backup") -> Path:
    return path.with_name(path.name + suffix)


def ensure_backup(path: Path, suffix: str = ".backup") -> Path | None:
    """Copy `path` next to itself once. Returns the new backup, or None if one exists."""
    backup = backup_path_for(path, suffix)
    if backup.exists():
        logger.debug("Backup already present: %s", backup)
        return None
    shutil.copy2(path, backup)
    logger.debug("Created backup %s", backup)
    return backup


def write_svg(
    tree: ET.ElementTree,
    path: Path,
    indent: str = "  ",
    doctype: str | None = None,
) -> None:
    """Indent and write `tree` as UTF-8 with an XML declaration.

    `doctype` is written between the declaration and the root element.
    """
    ET.indent(tree, space=indent)
    with open(path, "w", encoding="utf-8") as f:
        f.write(XML_DECLARATION + "\n")
        if doctype:
            f.write(doctype + "\n")
        tree.write(f, encoding="unicode")
