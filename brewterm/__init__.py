"""Terminal user interfaces built on a model, update and view loop."""

__version__ = "0.1.0"