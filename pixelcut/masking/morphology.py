from __future__ import annotations
import numpy as np, cv2

_K3 = np.ones((3, 3), np.uint8)

def _u8(mask: np.ndarray) -> np.ndarray:
    return mask.astype(np.uint8)

def erode(mask: np.ndarray) -> np.ndarray:
    """True only where the whole 3x3 window is true. The 1px image frame comes out false."""
    out = cv2.erode(_u8(mask), _K3, borderType=cv2.BORDER_CONSTANT, borderValue=1).astype(bool)
    out[0, :] = False
    out[-1, :] = False
    out[:, 0] = False
    out[:, -1] = False
    return out

def dilate(mask: np.ndarray) -> np.ndarray:
    """True where any pixel of the 3x3 window is true; neighbors outside the image are ignored."""
    return cv2.dilate(_u8(mask), _K3, borderType=cv2.BORDER_CONSTANT, borderValue=0).astype(bool)

def close_mask(mask: np.ndarray) -> np.ndarray:
    return erode(dilate(mask))

def open_mask(mask: np.ndarray) -> np.ndarray:
    return dilate(erode(mask))

def bridge_cleanup(mask: np.ndarray) -> np.ndarray:
    # dilate x2, erode, dilate x2, erode: close small gaps then bridge nearby regions
    m = dilate(dilate(mask))
    m = erode(m)
    m = dilate(dilate(m))
    return erode(m)

def box_count(mask: np.ndarray, ksize: int) -> tuple[np.ndarray, np.ndarray]:
    """
    Per-pixel (true count, in-image count) over the ksize x ksize window,
    center excluded. Pixels outside the image are not counted.
    """
    m = mask.astype(np.float32)
    ones = np.ones_like(m)
    kw = dict(ddepth=-1, ksize=(ksize, ksize), normalize=False, borderType=cv2.BORDER_CONSTANT)
    hits = cv2.boxFilter(m, **kw) - m
    total = cv2.boxFilter(ones, **kw) - 1.0
    return hits, total

def components(mask: np.ndarray, connectivity: int = 4) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Label true regions. Returns (labels, areas, touches_border) where areas and
    touches_border are indexed by label; label 0 is the false region.
    """
    num, labels, stats, _ = cv2.connectedComponentsWithStats(_u8(mask), connectivity=connectivity)
    h, w = mask.shape
    areas = stats[:, cv2.CC_STAT_AREA].astype(np.int64)
    x0 = stats[:, cv2.CC_STAT_LEFT]
    y0 = stats[:, cv2.CC_STAT_TOP]
    x1 = x0 + stats[:, cv2.CC_STAT_WIDTH]
    y1 = y0 + stats[:, cv2.CC_STAT_HEIGHT]
    touches = (x0 == 0) | (y0 == 0) | (x1 == w) | (y1 == h)
    areas[0] = 0
    touches[0] = False
    return labels, areas, touches

def flood_from(mask: np.ndarray, seeds: np.ndarray) -> np.ndarray:
    """4-connected flood fill of `mask` starting from every true pixel of `seeds & mask`."""
    labels, _, _ = components(mask, connectivity=4)
    hit = np.unique(labels[seeds & mask])
    hit = hit[hit != 0]
    return np.isin(labels, hit)

def border_band(shape: tuple[int, int], px: int) -> np.ndarray:
    h, w = shape
    band = np.zeros((h, w), bool)
    if px <= 0:
        return band
    band[:px, :] = True
    band[h - px:, :] = True
    band[:, :px] = True
    band[:, w - px:] = True
    return band
