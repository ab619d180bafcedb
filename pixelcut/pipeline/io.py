from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List
import numpy as np
import cv2

from ..errors import InvalidInput

@dataclass(frozen=True)
class ImageItem:
    id: str
    path: Path

def discover_images(input_dir: Path, patterns: Iterable[str], limit: int | None = None) -> List[ImageItem]:
    seen = set()
    items: List[ImageItem] = []
    for pat in patterns:
        for p in sorted(input_dir.glob(pat)):
            if p in seen:
                continue
            seen.add(p)
            items.append(ImageItem(id=p.stem, path=p))
    items.sort(key=lambda it: it.path.name)
    return items[:limit] if limit else items

def as_pixels(buffer, width: int, height: int) -> np.ndarray:
    """
    Writable HxWx4 uint8 view over a caller-owned RGBA8 buffer.
    Validates before anything is touched.
    """
    if width <= 0 or height <= 0:
        raise InvalidInput(f"width and height must be positive, got {width}x{height}")
    expected = width * height * 4
    if isinstance(buffer, np.ndarray):
        if buffer.dtype != np.uint8:
            raise InvalidInput(f"buffer dtype must be uint8, got {buffer.dtype}")
        flat = buffer
    else:
        try:
            flat = np.frombuffer(buffer, dtype=np.uint8)
        except (TypeError, ValueError) as e:
            raise InvalidInput(f"unsupported buffer: {e}") from e
    if flat.size != expected:
        raise InvalidInput(f"buffer length {flat.size} != {width}*{height}*4 = {expected}")
    if not flat.flags.writeable:
        raise InvalidInput("buffer is read-only; pass a bytearray or writable array")
    if not flat.flags.c_contiguous:
        raise InvalidInput("buffer must be C-contiguous so edits reach the caller")
    try:
        return flat.reshape(height, width, 4)
    except (AttributeError, ValueError) as e:
        raise InvalidInput(f"buffer cannot be viewed as {height}x{width}x4: {e}") from e

def check_rgba(rgba: np.ndarray) -> np.ndarray:
    if not isinstance(rgba, np.ndarray) or rgba.ndim != 3 or rgba.shape[2] != 4:
        raise InvalidInput("expected an HxWx4 RGBA array")
    h, w = rgba.shape[:2]
    return as_pixels(rgba, w, h)

def load_rgba(path: Path) -> np.ndarray:
    img = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if img is None:
        raise RuntimeError(f"Failed to read image {path}")
    if img.dtype == np.uint16:
        img = (img >> 8).astype(np.uint8)
    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2RGBA)
    if img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGBA)

def save_rgba(path: Path, rgba: np.ndarray) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(path), cv2.cvtColor(rgba, cv2.COLOR_RGBA2BGRA)):
        raise RuntimeError(f"Failed to write image {path}")

def save_mask(path: Path, mask: np.ndarray) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    cv2.imwrite(str(path), mask.astype(np.uint8) * 255)
