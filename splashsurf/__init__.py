"""Bounding boxes, tree traversal, reconstruction parameters, path handling and logging setup for SPH surface reconstruction."""

__version__ = "0.9.0"