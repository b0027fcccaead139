"""Generate TypeScript event declarations from reflected type snapshots."""

__version__ = "0.1.0"
