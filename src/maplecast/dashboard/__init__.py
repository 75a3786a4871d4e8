"""Radar/forecast view state and orchestration."""

from maplecast.dashboard.orchestrator import RadarOrchestrator
from maplecast.dashboard.view_model import RADAR_UNAVAILABLE, RadarViewModel

__all__ = [
    "RADAR_UNAVAILABLE",
    "RadarOrchestrator",
    "RadarViewModel",
]
