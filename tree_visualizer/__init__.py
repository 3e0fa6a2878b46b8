"""Syntax tree visualizer service."""

__version__ = "0.1.0"
