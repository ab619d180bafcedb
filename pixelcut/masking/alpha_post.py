from __future__ import annotations
import numpy as np, cv2

from .morphology import components, dilate
from ..schemas.config import PostProcessConfig

def apply_mask(rgba: np.ndarray, mask: np.ndarray) -> None:
    """Zero alpha wherever the composite mask says background (in place)."""
    rgba[..., 3][mask] = 0

def remove_small_regions(rgba: np.ndarray, cfg: PostProcessConfig | None = None) -> tuple[int, int]:
    """
    Flip enclosed transparent holes and opaque islands that are too small.
    Regions touching the image edge are kept. Both passes see the
    transparency state from before any flip. Returns (holes_filled, islands_cleared).
    """
    cfg = cfg or PostProcessConfig()
    alpha = rgba[..., 3]
    transparent = alpha == 0

    labels, areas, touches = components(transparent, connectivity=4)
    small = (areas < cfg.transparent_region_px) & ~touches
    small[0] = False
    holes = small[labels]

    labels, areas, touches = components(~transparent, connectivity=4)
    small = (areas < cfg.opaque_region_px) & ~touches
    small[0] = False
    islands = small[labels]

    alpha[holes] = 255
    alpha[islands] = 0
    return int(holes.sum()), int(islands.sum())

def smooth_edges(rgba: np.ndarray) -> int:
    """
    Replace alpha on transparency boundaries with the 3x3 box mean of the
    surrounding alpha (neighbors outside the image excluded). Returns the
    number of boundary pixels.
    """
    alpha = rgba[..., 3]
    zero = alpha == 0
    edge = (zero & dilate(~zero)) | (~zero & dilate(zero))

    a = alpha.astype(np.float32)
    kw = dict(ddepth=-1, ksize=(3, 3), normalize=False, borderType=cv2.BORDER_CONSTANT)
    sums = cv2.boxFilter(a, **kw)
    counts = cv2.boxFilter(np.ones_like(a), **kw)
    mean = np.floor(sums / counts + 0.5).astype(np.uint8)
    alpha[edge] = mean[edge]
    return int(edge.sum())

def post_process(rgba: np.ndarray, cfg: PostProcessConfig | None = None) -> None:
    cfg = cfg or PostProcessConfig()
    remove_small_regions(rgba, cfg)
    if cfg.smooth_edges:
        smooth_edges(rgba)
