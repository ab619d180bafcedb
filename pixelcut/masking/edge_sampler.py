from __future__ import annotations
from typing import List
import numpy as np

from ..color.model import Color
from ..schemas.config import SamplerConfig

def border_depth(width: int, height: int, cfg: SamplerConfig | None = None) -> int:
    """max(5, 3% of the short side) unless configured, clamped to half the short side."""
    cfg = cfg or SamplerConfig()
    short = min(width, height)
    if cfg.border_depth is not None:
        depth = cfg.border_depth
    else:
        depth = max(cfg.border_depth_min, int(short * cfg.border_depth_ratio))
    return max(1, min(depth, (short + 1) // 2))

def _positions(length: int, n: int) -> np.ndarray:
    n = min(n, length)
    return np.linspace(0, length - 1, n).round().astype(int)

def sample_edge_colors(rgba: np.ndarray, cfg: SamplerConfig | None = None) -> List[Color]:
    """
    Evenly spaced samples along the four border bands, for every depth offset
    from 0 to the border depth. Order: depth, then top, bottom, left, right.
    """
    cfg = cfg or SamplerConfig()
    h, w = rgba.shape[:2]
    depth = border_depth(w, h, cfg)
    xs = _positions(w, cfg.samples_per_side)
    ys = _positions(h, cfg.samples_per_side)

    out: List[Color] = []
    for d in range(depth):
        rows = (rgba[d, xs], rgba[h - 1 - d, xs], rgba[ys, d], rgba[ys, w - 1 - d])
        for band in rows:
            out.extend(Color(int(p[0]), int(p[1]), int(p[2]), int(p[3])) for p in band)
    return out
