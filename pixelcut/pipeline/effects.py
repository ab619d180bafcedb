from __future__ import annotations
import numpy as np
import cv2

from ..schemas.config import BlurConfig

def blur_background(rgba: np.ndarray, cfg: BlurConfig | None = None) -> int:
    """
    Blur RGB wherever alpha is below the cutoff (background or soft edge);
    near-opaque subject pixels stay sharp and alpha is left as is.
    Returns the number of pixels rewritten.
    """
    cfg = cfg or BlurConfig()
    bg = rgba[..., 3] < cfg.alpha_cutoff
    if not bg.any():
        return 0
    rgb = np.ascontiguousarray(rgba[..., :3])
    blurred = cv2.GaussianBlur(rgb, (0, 0), cfg.sigma)
    rgba[..., :3][bg] = blurred[bg]
    return int(bg.sum())
