"""SVG document helpers — loading, matrix math, path data and serialization."""
