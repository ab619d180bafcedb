from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional
import numpy as np

class Masker(ABC):
    @abstractmethod
    def get_mask(self, rgba: np.ndarray, background: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Return a bool HxW protection mask for an HxWx4 RGBA array.
        Pixels already true in `background` are never candidates.
        """
        raise NotImplementedError

    @staticmethod
    def candidates(rgba: np.ndarray, background: Optional[np.ndarray]) -> np.ndarray:
        cand = rgba[..., 3] > 0
        if background is not None:
            cand &= ~background
        return cand
