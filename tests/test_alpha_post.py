import numpy as np

from pixelcut.masking.alpha_post import apply_mask, post_process, remove_small_regions, smooth_edges
from pixelcut.schemas.config import PostProcessConfig

from conftest import solid


def test_apply_mask_zeroes_only_masked_alpha():
    img = solid(6, 6, (10, 20, 30))
    mask = np.zeros((6, 6), bool)
    mask[2:4, 1:5] = True
    before = img.copy()
    apply_mask(img, mask)
    assert (img[..., 3][mask] == 0).all()
    np.testing.assert_array_equal(img[~mask], before[~mask])
    np.testing.assert_array_equal(img[..., :3], before[..., :3])


def test_small_enclosed_hole_is_filled():
    img = solid(30, 30, (10, 20, 30))
    img[14:17, 14:17, 3] = 0
    assert remove_small_regions(img) == (9, 0)
    assert (img[..., 3] == 255).all()


def test_small_enclosed_island_is_cleared_but_large_one_kept():
    img = solid(60, 60, (10, 20, 30), alpha=0)
    img[5:9, 5:9, 3] = 255                # 16 px
    img[30:45, 30:45, 3] = 255            # 225 px
    holes, islands = remove_small_regions(img)
    assert (holes, islands) == (0, 16)
    assert (img[5:9, 5:9, 3] == 0).all()
    assert (img[30:45, 30:45, 3] == 255).all()


def test_regions_touching_the_edge_are_kept():
    img = solid(30, 30, (10, 20, 30), alpha=0)
    img[0:3, 0:3, 3] = 255
    assert remove_small_regions(img) == (0, 0)
    assert (img[0:3, 0:3, 3] == 255).all()


def test_thresholds_are_configurable():
    img = solid(30, 30, (10, 20, 30))
    img[10:20, 10:20, 3] = 0               # 100 px hole
    remove_small_regions(img, PostProcessConfig(transparent_region_px=100))
    assert (img[10:20, 10:20, 3] == 0).all()
    remove_small_regions(img, PostProcessConfig(transparent_region_px=101))
    assert (img[10:20, 10:20, 3] == 255).all()


def test_smooth_edges_box_average_on_boundary():
    img = solid(6, 6, (0, 0, 0))
    img[:, :3, 3] = 0
    assert smooth_edges(img) == 12
    alpha = img[..., 3]
    assert (alpha[1:-1, 2] == 85).all()
    assert (alpha[1:-1, 3] == 170).all()
    assert alpha[0, 2] == 85 and alpha[0, 3] == 170
    assert (alpha[:, :2] == 0).all()
    assert (alpha[:, 4:] == 255).all()


def test_post_process_without_smoothing_keeps_hard_edge():
    img = solid(6, 6, (0, 0, 0))
    img[:, :3, 3] = 0
    post_process(img, PostProcessConfig(smooth_edges=False))
    assert set(np.unique(img[..., 3])) == {0, 255}
