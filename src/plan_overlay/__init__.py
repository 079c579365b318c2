"""Percent-based annotation of building and parking images with unit status tracking."""

__version__ = "0.1.0"
