# pixelcut/pipeline/orchestrator.py
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from ..schemas.config import AppConfig
from ..utils.logging_utils import get_logger
from .effects import blur_background
from .io import ImageItem, load_rgba, save_mask, save_rgba
from .segmenter import BackgroundRemover


@dataclass
class ItemOutcome:
    id: str
    ok: bool
    removed_px: int = 0
    total_px: int = 0
    error: Optional[str] = None


def process_item(item: ImageItem, output_dir: Path, remover: BackgroundRemover,
                 cfg: AppConfig, logger) -> ItemOutcome:
    logger.info(f"🚀 ID={item.id} | Loading {item.path.name}")
    rgba = load_rgba(item.path)
    result = remover.remove(rgba)
    save_rgba(output_dir / f"{item.id}-nobg.png", rgba)

    if cfg.run.save_mask:
        save_mask(output_dir / f"{item.id}-mask.png", result.mask)
    if cfg.run.save_blur:
        blurred = load_rgba(item.path)
        blurred[..., 3] = rgba[..., 3]
        blur_background(blurred, cfg.segmentation.blur)
        blurred[..., 3] = 255
        save_rgba(output_dir / f"{item.id}-blur.png", blurred)

    return ItemOutcome(id=item.id, ok=True, removed_px=result.removed_px, total_px=result.mask.size)


def run_batch(items: Iterable[ImageItem], output_dir: Path, logs_dir: Path, cfg: AppConfig) -> List[ItemOutcome]:
    """
    Segment every image independently. Separate buffers are safe to process
    in parallel, so items are spread over `run.num_workers` threads.
    A failing image is logged and skipped.
    """
    logger = get_logger("orchestrator", logs_dir, level=cfg.run.log_level)
    output_dir.mkdir(parents=True, exist_ok=True)
    remover = BackgroundRemover(cfg.segmentation, logger=get_logger("segmenter", logs_dir))

    def _safe(item: ImageItem) -> ItemOutcome:
        try:
            return process_item(item, output_dir, remover, cfg, logger)
        except Exception as e:
            logger.error(f" ID={item.id} failed: {e}")
            return ItemOutcome(id=item.id, ok=False, error=str(e))

    items = list(items)
    workers = max(1, cfg.run.num_workers)
    if workers == 1:
        outcomes = [_safe(it) for it in items]
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            outcomes = list(pool.map(_safe, items))

    done = [o for o in outcomes if o.ok]
    for o in done:
        pct = 100.0 * o.removed_px / max(1, o.total_px)
        logger.info(f" ID={o.id} | background {pct:.1f}%")
    logger.info(f"🎉 Done. {len(done)}/{len(outcomes)} image(s) processed.")
    return outcomes
