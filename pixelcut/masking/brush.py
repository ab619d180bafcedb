# pixelcut/masking/brush.py
"""
Manual brush override: rasterize a stroke into a per-pixel mask and apply
remove (alpha -> 0) or restore (RGBA copied back from the original snapshot).
No color analysis happens here.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple
import numpy as np
import cv2

from ..errors import InvalidInput, MissingSnapshot


class BrushMode(Enum):
    REMOVE = "remove"
    RESTORE = "restore"


@dataclass(frozen=True)
class Stroke:
    points: Tuple[Tuple[float, float], ...]
    radius: int = 10

    @classmethod
    def of(cls, points: Sequence[Sequence[float]], radius: int = 10) -> "Stroke":
        return cls(tuple((float(p[0]), float(p[1])) for p in points), int(radius))


class OriginalSnapshot:
    """Read-only copy of the image taken when it was selected."""

    def __init__(self, rgba: np.ndarray) -> None:
        self._rgba = np.array(rgba, dtype=np.uint8, copy=True)
        self._rgba.setflags(write=False)

    @property
    def rgba(self) -> np.ndarray:
        return self._rgba

    @property
    def shape(self) -> tuple[int, ...]:
        return self._rgba.shape


def rasterize_stroke(stroke: Stroke, width: int, height: int) -> np.ndarray:
    """Filled round-capped polyline of the stroke at full buffer resolution."""
    canvas = np.zeros((height, width), np.uint8)
    if not stroke.points:
        return canvas.astype(bool)
    pts = np.round(np.asarray(stroke.points)).astype(np.int32)
    r = max(1, stroke.radius)
    for x, y in pts:
        cv2.circle(canvas, (int(x), int(y)), r, 1, thickness=-1)
    if len(pts) > 1:
        cv2.polylines(canvas, [pts.reshape(-1, 1, 2)], isClosed=False, color=1, thickness=2 * r + 1)
    return canvas.astype(bool)


def apply_brush(rgba: np.ndarray,
                mask: np.ndarray,
                mode: BrushMode,
                snapshot: Optional[OriginalSnapshot] = None) -> int:
    """Apply a brush mask in place. Returns the number of pixels touched."""
    if mask.shape != rgba.shape[:2]:
        raise InvalidInput(f"brush mask {mask.shape} does not match image {rgba.shape[:2]}")
    if mode is BrushMode.REMOVE:
        rgba[..., 3][mask] = 0
    else:
        if snapshot is None:
            raise MissingSnapshot("restore brush needs the original snapshot captured at selection time")
        if snapshot.shape != rgba.shape:
            raise InvalidInput(f"snapshot {snapshot.shape} does not match image {rgba.shape}; rescale first")
        rgba[mask] = snapshot.rgba[mask]
    return int(mask.sum())
