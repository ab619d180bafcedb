from __future__ import annotations
import numpy as np
import pytest


def solid(h: int, w: int, rgb, alpha: int = 255) -> np.ndarray:
    img = np.zeros((h, w, 4), np.uint8)
    img[..., :3] = rgb
    img[..., 3] = alpha
    return img


def with_block(img: np.ndarray, y0: int, y1: int, x0: int, x1: int, rgb) -> np.ndarray:
    img[y0:y1, x0:x1, :3] = rgb
    return img


WHITE = (255, 255, 255)
BLUE = (40, 60, 200)
SKIN = (224, 172, 135)


@pytest.fixture
def rect_image() -> np.ndarray:
    """60x60 white background with a blue 20x20 rectangle at [20, 40)."""
    return with_block(solid(60, 60, WHITE), 20, 40, 20, 40, BLUE)


@pytest.fixture
def skin_image() -> np.ndarray:
    """60x60 blue background with a skin-tone 20x20 patch at [20, 40)."""
    return with_block(solid(60, 60, BLUE), 20, 40, 20, 40, SKIN)
