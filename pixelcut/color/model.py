from __future__ import annotations
import colorsys
from typing import NamedTuple
import numpy as np
import cv2

# Rec.601 luma weights, applied to squared channel differences
LUMA_WEIGHTS = (0.299, 0.587, 0.114)

class Color(NamedTuple):
    """
    RGB(A) color. Channels read from pixels are 8-bit integers; cluster
    representatives are running means and keep float channels.
    """
    r: float
    g: float
    b: float
    a: int = 255

def perceptual_distance(c1: Color, c2: Color) -> float:
    wr, wg, wb = LUMA_WEIGHTS
    dr = c1.r - c2.r
    dg = c1.g - c2.g
    db = c1.b - c2.b
    return float(np.sqrt(wr * dr * dr + wg * dg * dg + wb * db * db))

def rgb_to_hsv(color: Color) -> tuple[float, float, float]:
    """Hue in degrees [0, 360), saturation and value in [0, 1]."""
    h, s, v = colorsys.rgb_to_hsv(color.r / 255.0, color.g / 255.0, color.b / 255.0)
    return (h * 360.0) % 360.0, s, v

# --- array versions used by the per-pixel stages ---

def distance_map(rgb: np.ndarray, color: Color) -> np.ndarray:
    """Perceptual distance of every pixel in an HxWx3 array to one color."""
    wr, wg, wb = LUMA_WEIGHTS
    f = rgb.astype(np.float32)
    dr = f[..., 0] - color.r
    dg = f[..., 1] - color.g
    db = f[..., 2] - color.b
    return np.sqrt(wr * dr * dr + wg * dg * dg + wb * db * db)

def pairwise_distance(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Perceptual distance between two equally shaped float RGB arrays."""
    wr, wg, wb = LUMA_WEIGHTS
    d = a - b
    return np.sqrt(wr * d[..., 0] ** 2 + wg * d[..., 1] ** 2 + wb * d[..., 2] ** 2)

def luma_map(rgb: np.ndarray) -> np.ndarray:
    wr, wg, wb = LUMA_WEIGHTS
    f = rgb.astype(np.float32)
    return wr * f[..., 0] + wg * f[..., 1] + wb * f[..., 2]

def hsv_map(rgb: np.ndarray) -> np.ndarray:
    """HxWx3 float32: H in degrees, S and V in [0, 1]."""
    return cv2.cvtColor(rgb.astype(np.float32) / 255.0, cv2.COLOR_RGB2HSV)
