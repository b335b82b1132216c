"""Typed pipeline variables and expressions, and recognitions run against a pluggable vision backend."""

__version__ = "1.0.0"