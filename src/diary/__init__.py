"""Console diary for authors and their entries."""

__version__ = "0.1.0"
