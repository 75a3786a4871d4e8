"""Radar frame animation.

LayerAnimator owns the map layers for the current radar frames and the
playback state. Layers are created once per frame list and kept on the map;
changing the visible frame only changes opacities (the visible layer gets its
frame's base opacity, every other layer gets 0). Recreating tile layers on
each tick would flicker and re-request tiles.

States:
    IDLE     no frames or no layers on the map
    PAUSED   layers on the map, timer stopped (manual stepping allowed)
    PLAYING  layers on the map, timer advancing the frame every interval
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

import pydeck as pdk

from maplecast.config import FRAME_INTERVAL_MS
from maplecast.radar.layers import LayerFactory, MapSurface, create_radar_layer
from maplecast.radar.models import RadarFrame
from maplecast.radar.timer import FrameTimer

logger = logging.getLogger(__name__)


class AnimatorState(str, Enum):
    IDLE = "idle"
    PAUSED = "paused"
    PLAYING = "playing"


@dataclass
class AnimationState:
    """Playback position.

    Attributes:
        frame_index: Index of the visible frame, in [0, frame_count)
        is_playing: Whether the timer is advancing frames
    """

    frame_index: int = 0
    is_playing: bool = False


class LayerAnimator:
    """Owns radar layers and timer-driven playback.

    Example:
        >>> animator = LayerAnimator(MapSurface())
        >>> animator.load_frames(result.frames)
        >>> animator.play()       # needs a running event loop
        >>> animator.pause()
        >>> animator.step(1)
        >>> animator.close()
    """

    def __init__(
        self,
        surface: MapSurface,
        layer_factory: LayerFactory = create_radar_layer,
        interval_ms: int = FRAME_INTERVAL_MS,
    ):
        """Initialize an idle animator.

        Args:
            surface: Map the layers are added to
            layer_factory: Creates one layer per frame
            interval_ms: Playback tick period in milliseconds
        """
        self.surface = surface
        self.layer_factory = layer_factory
        self.interval_ms = interval_ms
        self.frames: list[RadarFrame] = []
        self.state: Optional[AnimationState] = None
        self.precipitation_enabled = True
        # (frame, layer) for every frame whose layer was created
        self._visible: list[tuple[RadarFrame, pdk.Layer]] = []
        self._timer = FrameTimer(interval_ms / 1000, self.tick)

    # Introspection

    @property
    def frame_count(self) -> int:
        """Number of frames that have a live layer."""
        return len(self._visible)

    @property
    def layers(self) -> list[pdk.Layer]:
        return [layer for _, layer in self._visible]

    @property
    def frame_index(self) -> int:
        return self.state.frame_index if self.state else 0

    @property
    def is_playing(self) -> bool:
        return bool(self.state and self.state.is_playing)

    @property
    def current_frame(self) -> Optional[RadarFrame]:
        if not self._visible or self.state is None:
            return None
        return self._visible[self.state.frame_index][0]

    @property
    def status(self) -> AnimatorState:
        if not self._visible:
            return AnimatorState.IDLE
        return AnimatorState.PLAYING if self.is_playing else AnimatorState.PAUSED

    # Frame list lifecycle

    def load_frames(self, frames: Sequence[RadarFrame]) -> None:
        """Replace the frame list and rebuild layers.

        Used both for the first load and for manual refresh. Prior layers are
        destroyed, one layer is built per new frame (whatever the new count)
        and the index goes back to 0. Playback keeps running if it was.
        An empty list returns the animator to IDLE.
        """
        was_playing = self.is_playing
        self._timer.cancel()
        self._destroy_layers()

        self.frames = list(frames)
        if not self.frames:
            self.state = None
            return

        self.state = AnimationState(frame_index=0, is_playing=False)
        if self.precipitation_enabled:
            self._build_layers()
            if was_playing:
                self.play()

    def set_precipitation_enabled(self, enabled: bool) -> None:
        """Toggle the precipitation overlay.

        Turning it off destroys every layer and stops playback. Turning it on
        while frames exist builds exactly one layer per frame again.
        """
        if enabled == self.precipitation_enabled:
            return
        self.precipitation_enabled = enabled

        if not enabled:
            self.pause()
            self._destroy_layers()
            return

        if self.frames:
            self._build_layers()

    def close(self) -> None:
        """Tear down: stop the timer, destroy layers, forget frames and state."""
        self._timer.cancel()
        self._destroy_layers()
        self.frames = []
        self.state = None

    # Playback

    def play(self) -> None:
        """Start advancing one frame per interval.

        Does nothing without layers. Must be called from a running event loop.
        """
        if self.state is None or not self._visible:
            logger.debug("No radar layers to animate")
            return
        self._timer.start()
        self.state.is_playing = True

    def pause(self) -> None:
        self._timer.cancel()
        if self.state is not None:
            self.state.is_playing = False

    def toggle_play(self) -> None:
        if self.is_playing:
            self.pause()
        else:
            self.play()

    def tick(self) -> None:
        """Advance to the next frame, wrapping to the first."""
        if self.state is None or not self._visible:
            return
        self._show((self.state.frame_index + 1) % self.frame_count)

    def step(self, delta: int) -> None:
        """Manually move delta frames (wrapping). Pauses playback first."""
        if self.state is None or not self._visible:
            return
        self.pause()
        self._show((self.state.frame_index + delta) % self.frame_count)

    def next_frame(self) -> None:
        self.step(1)

    def prev_frame(self) -> None:
        self.step(-1)

    def seek(self, index: int) -> None:
        """Jump to index (timeline slider). Pauses playback first.

        Raises:
            IndexError: If index is outside [0, frame_count)
        """
        if not 0 <= index < self.frame_count:
            raise IndexError(f"Frame index {index} out of range for {self.frame_count} frames")
        self.pause()
        self._show(index)

    # Internals

    def _show(self, index: int) -> None:
        self.state.frame_index = index
        self._apply_opacity()

    def _apply_opacity(self) -> None:
        visible = self.state.frame_index if self.state else -1
        for i, (frame, layer) in enumerate(self._visible):
            layer.opacity = frame.base_opacity if i == visible else 0

    def _build_layers(self) -> None:
        self._destroy_layers()
        for index, frame in enumerate(self.frames):
            try:
                layer = self.layer_factory(frame, index, 0)
            except Exception as e:
                logger.error(f"Skipping radar frame {index}: could not create layer: {e}")
                continue
            self.surface.add_layer(layer)
            self._visible.append((frame, layer))

        if self.state is not None and self._visible:
            self.state.frame_index = min(self.state.frame_index, self.frame_count - 1)
        self._apply_opacity()
        logger.info(f"Created {self.frame_count} radar layers for {len(self.frames)} frames")

    def _destroy_layers(self) -> None:
        for _, layer in self._visible:
            self.surface.remove_layer(layer)
        self._visible = []
