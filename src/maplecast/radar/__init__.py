"""Radar frames: provider fallback, map layers and animation."""

from maplecast.radar.animator import AnimationState, AnimatorState, LayerAnimator
from maplecast.radar.layers import MapSurface, create_radar_layer
from maplecast.radar.models import RadarFetchResult, RadarFrame
from maplecast.radar.source import RadarFrameSource
from maplecast.radar.timer import FrameTimer

__all__ = [
    "AnimationState",
    "AnimatorState",
    "FrameTimer",
    "LayerAnimator",
    "MapSurface",
    "RadarFetchResult",
    "RadarFrame",
    "RadarFrameSource",
    "create_radar_layer",
]
