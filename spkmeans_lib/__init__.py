"""Spherical k-means clustering of document-term matrices."""

__version__ = "0.1"
