import logging

import cv2
import numpy as np
import pytest
import yaml
from pydantic import ValidationError

from pixelcut.main import load_config, main
from pixelcut.pipeline.io import discover_images, load_rgba
from pixelcut.schemas.config import AppConfig, RunConfig, SamplerConfig, SegmentationConfig
from pixelcut.utils.logging_utils import get_logger


def _write_config(path, tmp_path, **run):
    raw = {
        "paths": {
            "input_dir": str(tmp_path / "in"),
            "output_dir": str(tmp_path / "out"),
            "logs_dir": str(tmp_path / "logs"),
        },
        "run": {"num_workers": 1, **run},
        "segmentation": {"cluster": {"distance_threshold": 15.0}},
    }
    path.write_text(yaml.safe_dump(raw), encoding="utf-8")
    return path


def test_defaults_match_documented_constants():
    cfg = SegmentationConfig()
    assert cfg.cluster.distance_threshold == 20.0
    assert cfg.cluster.min_prevalence == 0.08
    assert cfg.background.distance_threshold == 25.0
    assert cfg.composite.border_force_px == 5
    assert cfg.post.transparent_region_px == 200
    assert cfg.post.opaque_region_px == 100
    assert cfg.clothing.texture_min == 5.0 and cfg.clothing.texture_max == 25.0
    assert cfg.clothing.contrast_diff == 50.0


def test_load_config_applies_yaml_over_defaults(tmp_path):
    cfg = load_config(_write_config(tmp_path / "c.yaml", tmp_path))
    assert isinstance(cfg, AppConfig)
    assert cfg.segmentation.cluster.distance_threshold == 15.0
    assert cfg.segmentation.background.distance_threshold == 25.0
    assert cfg.run.num_workers == 1


def test_invalid_config_is_rejected():
    with pytest.raises(ValidationError):
        SamplerConfig(samples_per_side=0)
    with pytest.raises(ValidationError):
        AppConfig.model_validate({"run": {}})


def test_discover_images_sorted_and_limited(tmp_path):
    for name in ["b.png", "a.jpg", "c.txt", "d.png"]:
        (tmp_path / name).write_bytes(b"")
    items = discover_images(tmp_path, ["*.png", "*.jpg"])
    assert [it.id for it in items] == ["a", "b", "d"]
    assert len(discover_images(tmp_path, ["*.png", "*.jpg"], limit=2)) == 2


def test_cli_batch_run(tmp_path):
    (tmp_path / "in").mkdir()
    img = np.full((40, 40, 3), 255, np.uint8)
    img[12:28, 12:28] = (200, 60, 40)            # BGR
    cv2.imwrite(str(tmp_path / "in" / "shirt.png"), img)
    cv2.imwrite(str(tmp_path / "in" / "plain.jpg"), np.full((30, 30, 3), 90, np.uint8))
    (tmp_path / "in" / "broken.png").write_bytes(b"not an image")

    cfg_path = _write_config(tmp_path / "c.yaml", tmp_path, save_mask=True, save_blur=True)
    main(["--config", str(cfg_path)])

    out = tmp_path / "out"
    shirt = load_rgba(out / "shirt-nobg.png")
    assert shirt.shape == (40, 40, 4)
    assert shirt[0, 0, 3] == 0
    assert shirt[20, 20, 3] == 255
    assert (out / "shirt-mask.png").exists()
    assert (out / "shirt-blur.png").exists()
    assert (load_rgba(out / "plain-nobg.png")[..., 3] == 0).all()
    assert not (out / "broken-nobg.png").exists()
    assert (tmp_path / "logs" / "run.log").exists()


def test_cli_exits_when_nothing_to_do(tmp_path):
    (tmp_path / "in").mkdir()
    cfg_path = _write_config(tmp_path / "c.yaml", tmp_path)
    with pytest.raises(SystemExit):
        main(["--config", str(cfg_path)])


def test_logger_accepts_level_names_and_shares_run_log(tmp_path):
    root = logging.getLogger("pixelcut")
    try:
        log = get_logger("unit", tmp_path, level="debug")
        assert root.level == logging.DEBUG
        log.debug("fine detail")
        get_logger("other", tmp_path, level="WARNING").info("hidden")
        log.warning("shown")
        text = (tmp_path / "run.log").read_text(encoding="utf-8")
        assert "fine detail" in text and "shown" in text
        assert "hidden" not in text
        log_file = (tmp_path / "run.log").resolve()
        assert sum(isinstance(h, logging.FileHandler) and h.baseFilename == str(log_file)
                   for h in root.handlers) == 1
    finally:
        root.setLevel(logging.INFO)


def test_cli_log_level_flag_reaches_run_log(tmp_path):
    (tmp_path / "in").mkdir()
    img = np.full((40, 40, 3), 255, np.uint8)
    img[12:28, 12:28] = (200, 60, 40)
    cv2.imwrite(str(tmp_path / "in" / "shirt.png"), img)
    cfg_path = _write_config(tmp_path / "c.yaml", tmp_path)
    try:
        main(["--config", str(cfg_path), "--log-level", "DEBUG"])
    finally:
        logging.getLogger("pixelcut").setLevel(logging.INFO)
    text = (tmp_path / "logs" / "run.log").read_text(encoding="utf-8")
    assert "dominant border color" in text

    with pytest.raises(ValidationError):
        RunConfig(log_level="LOUD")
