"""SVG cleanup for UML diagram exports embedded in word-processing documents."""

__version__ = "0.1.0"
