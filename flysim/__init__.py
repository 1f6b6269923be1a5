"""flysim — autonomous fly simulation engine with a live state feed."""

__version__ = "0.1.0"
