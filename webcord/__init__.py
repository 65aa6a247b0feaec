"""Render a scrolling capture of a webpage (or a tall image) into video."""

__version__ = "1.0.0"
