# pixelcut/pipeline/segmenter.py
from __future__ import annotations
from concurrent.futures import Executor, Future
from dataclasses import dataclass, field
from typing import List, Optional
import numpy as np

from ..color.clustering import dominant_colors
from ..color.model import Color
from ..masking.alpha_post import apply_mask, post_process
from ..masking.background_init import initial_background_mask
from ..masking.clothing import ClothingTextureMasker
from ..masking.compositor import composite_mask
from ..masking.edge_sampler import border_depth, sample_edge_colors
from ..masking.skin import SkinToneMasker
from ..schemas.config import SegmentationConfig
from ..utils.logging_utils import get_logger
from .io import as_pixels, check_rgba


@dataclass
class SegmentationResult:
    mask: np.ndarray                       # composite: True -> background
    background: np.ndarray                 # color-matched, before flood fill
    skin: np.ndarray
    clothing: np.ndarray
    dominant: List[Color] = field(default_factory=list)

    @property
    def removed_px(self) -> int:
        return int(self.mask.sum())


class BackgroundRemover:
    """
    Heuristic background removal:
      border samples -> dominant colors -> color-matched background
      skin + clothing protection -> composite mask -> alpha + cleanup

    Synchronous and single-threaded. One instance may serve many images,
    but a single buffer must not be processed twice concurrently.
    """

    def __init__(self, cfg: SegmentationConfig | None = None, logger=None) -> None:
        self.cfg = cfg or SegmentationConfig()
        self.logger = logger or get_logger("segmenter")
        self.skin = SkinToneMasker(self.cfg.skin)
        self.clothing = ClothingTextureMasker(self.cfg.clothing)

    def compute_mask(self, rgba: np.ndarray) -> SegmentationResult:
        """Read-only pass: classify every pixel without touching the buffer."""
        h, w = rgba.shape[:2]
        samples = sample_edge_colors(rgba, self.cfg.sampler)
        dominant = dominant_colors(samples, self.cfg.cluster)
        if not dominant:
            self.logger.warning("⚠️ No dominant border color; nothing will be removed by color.")
        else:
            self.logger.debug(f"🎯 {len(dominant)} dominant border color(s) from {len(samples)} samples")

        background = initial_background_mask(rgba, dominant, self.cfg.background)
        skin = self.skin.get_mask(rgba, background)
        clothing = self.clothing.get_mask(rgba, background)
        self.logger.debug(
            f"masks | background={int(background.sum())} skin={int(skin.sum())} clothing={int(clothing.sum())}"
        )

        if not dominant:
            # Under-remove: keep everything that is not already transparent
            mask = rgba[..., 3] == 0
        else:
            mask = composite_mask(
                background, skin, clothing, self.cfg.composite,
                seed_px=border_depth(w, h, self.cfg.sampler),
                logger=self.logger,
            )
        return SegmentationResult(mask=mask, background=background, skin=skin,
                                  clothing=clothing, dominant=dominant)

    def remove(self, rgba: np.ndarray) -> SegmentationResult:
        """Classify, zero background alpha in place, then clean and soften the alpha edge."""
        rgba = check_rgba(rgba)
        result = self.compute_mask(rgba)
        if not result.dominant:
            return result
        apply_mask(rgba, result.mask)
        post_process(rgba, self.cfg.post)
        self.logger.info(f"✂️ Removed {result.removed_px}/{result.mask.size} px")
        return result


def remove_background(buffer, width: int, height: int,
                      cfg: SegmentationConfig | None = None) -> SegmentationResult:
    """Run the pipeline on a flat RGBA8 buffer; alpha is edited in place."""
    rgba = as_pixels(buffer, width, height)
    return BackgroundRemover(cfg).remove(rgba)


def submit(executor: Executor, rgba: np.ndarray,
           cfg: SegmentationConfig | None = None,
           remover: Optional[BackgroundRemover] = None) -> "Future[np.ndarray]":
    """
    Run the pipeline on a private copy inside `executor`. The caller's array
    is never touched, so a cancelled or ignored future leaves it intact;
    apply the returned RGBA when the future resolves.
    """
    work = np.array(check_rgba(rgba), copy=True)
    remover = remover or BackgroundRemover(cfg)

    def _run() -> np.ndarray:
        remover.remove(work)
        return work

    return executor.submit(_run)
