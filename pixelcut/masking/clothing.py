# pixelcut/masking/clothing.py
"""
Clothing / printed-texture protection.

Three independent per-pixel tests, any of which protects a pixel:
  - brightness continuity: bright pixel inside a region of similarly bright neighbors
  - local texture: moderate mean perceptual distance to the 5x5 neighbors
  - high contrast: several 5x5 neighbors differ strongly in brightness (text, prints)

Neighborhood tests are evaluated with shifted array views; pixels closer to
the image edge than the largest window radius are never tested.
"""
from __future__ import annotations
from typing import Iterator, Optional, Tuple
import numpy as np

from .base import Masker
from .morphology import bridge_cleanup
from ..color.model import luma_map, pairwise_distance
from ..schemas.config import ClothingConfig


def _offsets(radius: int) -> Iterator[Tuple[int, int]]:
    for dy in range(-radius, radius + 1):
        for dx in range(-radius, radius + 1):
            if dy or dx:
                yield dy, dx


class ClothingTextureMasker(Masker):
    def __init__(self, cfg: ClothingConfig | None = None) -> None:
        self.cfg = cfg or ClothingConfig()

    @property
    def margin(self) -> int:
        return max(self.cfg.bright_window, self.cfg.texture_window) // 2

    def _shift(self, arr: np.ndarray, dy: int, dx: int) -> np.ndarray:
        m = self.margin
        h, w = arr.shape[:2]
        return arr[m + dy:h - m + dy, m + dx:w - m + dx]

    def _inner(self, arr: np.ndarray) -> np.ndarray:
        return self._shift(arr, 0, 0)

    def brightness_continuity(self, luma: np.ndarray) -> np.ndarray:
        c = self.cfg
        center = self._inner(luma)
        similar = np.zeros(center.shape, np.int32)
        n = 0
        for dy, dx in _offsets(c.bright_window // 2):
            similar += np.abs(self._shift(luma, dy, dx) - center) < c.bright_similar_diff
            n += 1
        return (center > c.bright_min) & (similar > c.bright_similar_ratio * n)

    def local_texture(self, rgb: np.ndarray) -> np.ndarray:
        c = self.cfg
        center = self._inner(rgb)
        total = np.zeros(center.shape[:2], np.float32)
        n = 0
        for dy, dx in _offsets(c.texture_window // 2):
            total += pairwise_distance(self._shift(rgb, dy, dx), center)
            n += 1
        mean = total / n
        return (mean > c.texture_min) & (mean < c.texture_max)

    def high_contrast(self, luma: np.ndarray) -> np.ndarray:
        c = self.cfg
        center = self._inner(luma)
        hits = np.zeros(center.shape, np.int32)
        for dy, dx in _offsets(c.texture_window // 2):
            hits += np.abs(self._shift(luma, dy, dx) - center) > c.contrast_diff
        return hits >= c.contrast_min_count

    def get_mask(self, rgba: np.ndarray, background: Optional[np.ndarray] = None) -> np.ndarray:
        h, w = rgba.shape[:2]
        out = np.zeros((h, w), bool)
        m = self.margin
        if not self.cfg.enabled or h <= 2 * m or w <= 2 * m:
            return out

        rgb = rgba[..., :3].astype(np.float32)
        luma = luma_map(rgba[..., :3])
        protected = (self.brightness_continuity(luma)
                     | self.local_texture(rgb)
                     | self.high_contrast(luma))
        out[m:h - m, m:w - m] = protected
        out &= self.candidates(rgba, background)
        return bridge_cleanup(out)
