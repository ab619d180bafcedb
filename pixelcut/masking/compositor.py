# pixelcut/masking/compositor.py
from __future__ import annotations
import logging
import numpy as np

from .morphology import border_band, box_count, close_mask, components, flood_from, open_mask
from ..schemas.config import CompositeConfig


def composite_mask(background: np.ndarray,
                   skin: np.ndarray,
                   clothing: np.ndarray,
                   cfg: CompositeConfig | None = None,
                   seed_px: int = 1,
                   logger: logging.Logger | None = None) -> np.ndarray:
    """
    Fuse the color-matched background mask with the skin and clothing
    protection masks. True means the pixel is background and loses its alpha.

      1. flood fill the background mask from its pixels inside the outer
         `seed_px` band, so interior look-alikes stay unless connected
      2. protected pixels are never background
      3. flood-filled pixels are background
      4. remaining pixels: outer band, mostly-background 5x5 neighborhood,
         or a tiny foreground island -> background
      5. close then open
      6. force the outer `border_force_px` band to background
    """
    cfg = cfg or CompositeConfig()
    shape = background.shape

    flood = flood_from(background, border_band(shape, seed_px))
    protected = skin | clothing

    comp = flood & ~protected
    uncertain = ~flood & ~protected

    near_edge = border_band(shape, cfg.outer_border_px)
    hits, total = box_count(flood, 5)
    mostly_bg = hits >= cfg.neighborhood_ratio * np.maximum(total, 1.0)

    labels, areas, _ = components(~flood, connectivity=4)
    island = areas[labels] < cfg.island_max_px

    comp |= uncertain & (near_edge | mostly_bg | island)

    comp = open_mask(close_mask(comp))
    comp &= ~protected
    comp |= border_band(shape, cfg.border_force_px)

    if logger is not None:
        n = background.size
        logger.debug(
            f"composite | seeds={int(background.sum())} flood={int(flood.sum())} "
            f"protected={int(protected.sum())} final={int(comp.sum())}/{n}"
        )
    return comp
