from __future__ import annotations
import argparse, yaml
from pathlib import Path
from pixelcut.schemas.config import AppConfig
from pixelcut.utils.logging_utils import get_logger
from pixelcut.pipeline.io import discover_images
from pixelcut.pipeline.orchestrator import run_batch

def parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Heuristic background remover")
    ap.add_argument("--config", type=Path, default=Path("configs/default.yaml"))
    ap.add_argument("--input-dir", type=Path)
    ap.add_argument("--output-dir", type=Path)
    ap.add_argument("--limit", type=int)
    ap.add_argument("--workers", type=int)
    ap.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    return ap.parse_args(argv)

def load_config(path: Path) -> AppConfig:
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    return AppConfig.model_validate(raw)

def main(argv=None) -> None:
    args = parse_args(argv)
    cfg = load_config(args.config)
    if args.input_dir:
        cfg.paths.input_dir = str(args.input_dir)
    if args.output_dir:
        cfg.paths.output_dir = str(args.output_dir)
    if args.limit:
        cfg.run.limit = args.limit
    if args.workers:
        cfg.run.num_workers = args.workers
    if args.log_level:
        cfg.run.log_level = args.log_level

    log = get_logger("main", Path(cfg.paths.logs_dir), level=cfg.run.log_level)
    log.info("🚀 Starting background removal run")
    log.info(f"📁 input_dir={cfg.paths.input_dir} | output_dir={cfg.paths.output_dir} | limit={cfg.run.limit}")

    items = discover_images(Path(cfg.paths.input_dir), cfg.run.patterns, cfg.run.limit)
    if not items:
        log.error(f"❌ No images found in {cfg.paths.input_dir} matching {cfg.run.patterns}.")
        raise SystemExit(1)

    outcomes = run_batch(
        items=items,
        output_dir=Path(cfg.paths.output_dir),
        logs_dir=Path(cfg.paths.logs_dir),
        cfg=cfg,
    )
    if not any(o.ok for o in outcomes):
        raise SystemExit(1)

if __name__ == "__main__":
    main()
