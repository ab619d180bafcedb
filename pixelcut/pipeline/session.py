# pixelcut/pipeline/session.py
"""
Editor session state owned by the surrounding application.

States: Idle, BrushArmed(mode), Processing. Selecting an image captures the
original snapshot and disarms the brush; brush modes toggle exclusively.
"""
from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Sequence
import numpy as np

from ..errors import InvalidState, MissingSnapshot
from ..masking.brush import BrushMode, OriginalSnapshot, Stroke, apply_brush, rasterize_stroke
from ..schemas.config import SegmentationConfig
from ..utils.logging_utils import get_logger
from .effects import blur_background
from .io import check_rgba
from .segmenter import BackgroundRemover, SegmentationResult


class SessionState(Enum):
    IDLE = "idle"
    BRUSH_ARMED = "brush_armed"
    PROCESSING = "processing"


@dataclass
class BrushState:
    mode: Optional[BrushMode] = None

    @property
    def armed(self) -> bool:
        return self.mode is not None


class EditorSession:
    def __init__(self, cfg: SegmentationConfig | None = None, logger=None) -> None:
        self.cfg = cfg or SegmentationConfig()
        self.logger = logger or get_logger("session")
        self.remover = BackgroundRemover(self.cfg, logger=self.logger)
        self.image: Optional[np.ndarray] = None
        self.snapshot: Optional[OriginalSnapshot] = None
        self.brush = BrushState()
        self._processing = False

    @property
    def state(self) -> SessionState:
        if self._processing:
            return SessionState.PROCESSING
        if self.brush.armed:
            return SessionState.BRUSH_ARMED
        return SessionState.IDLE

    def _require_image(self) -> np.ndarray:
        if self.image is None:
            raise InvalidState("Please select an image first")
        if self._processing:
            raise InvalidState("An operation is already running on this image")
        return self.image

    @contextmanager
    def _processing_state(self) -> Iterator[np.ndarray]:
        img = self._require_image()
        self._processing = True
        try:
            yield img
        finally:
            self._processing = False

    def select_image(self, rgba: np.ndarray, original: Optional[np.ndarray] = None) -> None:
        """
        Make `rgba` the edited image. The snapshot is taken from `original`
        (the image as first loaded) or from `rgba` itself.
        """
        if self._processing:
            raise InvalidState("Cannot switch images while processing")
        self.image = check_rgba(rgba)
        self.snapshot = OriginalSnapshot(original if original is not None else rgba)
        self.brush = BrushState()
        self.logger.info(f"🖼️ Selected image {self.image.shape[1]}x{self.image.shape[0]}")

    def toggle_brush(self, mode: BrushMode) -> Optional[BrushMode]:
        """Arm `mode`; re-activating the armed mode disarms. Returns the armed mode."""
        self._require_image()
        if self.brush.mode is mode:
            self.brush = BrushState()
            self.logger.info("🖌️ Magic brush disabled")
        else:
            self.brush = BrushState(mode)
            self.logger.info(f"🖌️ Magic brush armed: {mode.value}")
        return self.brush.mode

    def apply_stroke(self, points: Sequence[Sequence[float]], radius: int | None = None) -> int:
        if not self.brush.armed:
            raise InvalidState("No brush mode is armed")
        mode = self.brush.mode
        stroke = Stroke.of(points, radius if radius is not None else self.cfg.brush.radius)
        with self._processing_state() as img:
            h, w = img.shape[:2]
            mask = rasterize_stroke(stroke, w, h)
            return self.apply_mask(mask, mode, img)

    def apply_mask(self, mask: np.ndarray, mode: BrushMode, img: Optional[np.ndarray] = None) -> int:
        """Apply an already rasterized stroke mask."""
        img = img if img is not None else self._require_image()
        n = apply_brush(img, mask, mode, self.snapshot)
        self.logger.info(f"🖌️ {mode.value}: {n} px")
        return n

    def remove_background(self) -> SegmentationResult:
        with self._processing_state() as img:
            return self.remover.remove(img)

    def blur_background(self) -> int:
        with self._processing_state() as img:
            return blur_background(img, self.cfg.blur)

    def reset(self) -> None:
        """Put the selected image back to its original snapshot."""
        with self._processing_state() as img:
            if self.snapshot is None:
                raise MissingSnapshot("No snapshot captured for this image")
            if self.snapshot.shape != img.shape:
                raise InvalidState("Snapshot and image sizes differ")
            img[...] = self.snapshot.rgba
