from __future__ import annotations
from typing import Sequence
import numpy as np

from ..color.model import Color, distance_map
from ..schemas.config import BackgroundConfig

def initial_background_mask(rgba: np.ndarray,
                            dominant: Sequence[Color],
                            cfg: BackgroundConfig | None = None) -> np.ndarray:
    """
    Pixels within the strict distance threshold of any dominant border color.
    Fully transparent pixels are background. With no dominant colors the
    mask is all-false: nothing is assumed to be background.
    """
    cfg = cfg or BackgroundConfig()
    h, w = rgba.shape[:2]
    mask = rgba[..., 3] == 0
    if not dominant:
        return np.zeros((h, w), bool)

    rgb = rgba[..., :3]
    best = np.full((h, w), np.inf, np.float32)
    for c in dominant:
        np.minimum(best, distance_map(rgb, c), out=best)
    return mask | (best < cfg.distance_threshold)
