"""Shared utilities for maplecast."""

from .geo import BoundingBox, Coordinates, generate_grid
from .http import fetch_json, fetch_model

__all__ = [
    "BoundingBox",
    "Coordinates",
    "generate_grid",
    "fetch_json",
    "fetch_model",
]
