from __future__ import annotations
from typing import Optional
import numpy as np

from .base import Masker
from .morphology import bridge_cleanup
from ..color.model import hsv_map
from ..schemas.config import SkinConfig

def skin_pixels(rgba: np.ndarray, cfg: SkinConfig) -> np.ndarray:
    """Raw HSV-range test with the R > G > B ordering, before morphology."""
    rgb = rgba[..., :3].astype(np.int16)
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    ordered = (r > g) & (g > b)

    hsv = hsv_map(rgba[..., :3])
    h, s, v = hsv[..., 0], hsv[..., 1], hsv[..., 2]
    in_range = np.zeros(ordered.shape, bool)
    for rng in cfg.ranges:
        in_range |= ((h <= rng.h_max)
                     & (s >= rng.s_min) & (s <= rng.s_max)
                     & (v >= rng.v_min) & (v <= rng.v_max))
    return ordered & in_range

class SkinToneMasker(Masker):
    def __init__(self, cfg: SkinConfig | None = None) -> None:
        self.cfg = cfg or SkinConfig()

    def get_mask(self, rgba: np.ndarray, background: Optional[np.ndarray] = None) -> np.ndarray:
        if not self.cfg.enabled:
            return np.zeros(rgba.shape[:2], bool)
        raw = skin_pixels(rgba, self.cfg) & self.candidates(rgba, background)
        return bridge_cleanup(raw)
