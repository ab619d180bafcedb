import numpy as np
import pytest

from pixelcut.errors import InvalidState, MissingSnapshot
from pixelcut.masking.brush import BrushMode
from pixelcut.pipeline.effects import blur_background
from pixelcut.pipeline.session import EditorSession, SessionState
from pixelcut.schemas.config import BlurConfig

from conftest import WHITE, solid


@pytest.fixture
def session(rect_image):
    s = EditorSession()
    s.select_image(rect_image)
    return s


def test_operations_need_a_selected_image():
    s = EditorSession()
    assert s.state is SessionState.IDLE
    with pytest.raises(InvalidState):
        s.toggle_brush(BrushMode.REMOVE)
    with pytest.raises(InvalidState):
        s.remove_background()
    with pytest.raises(InvalidState):
        s.reset()


def test_brush_modes_toggle_exclusively(session):
    assert session.toggle_brush(BrushMode.REMOVE) is BrushMode.REMOVE
    assert session.state is SessionState.BRUSH_ARMED
    assert session.toggle_brush(BrushMode.RESTORE) is BrushMode.RESTORE
    assert session.brush.mode is BrushMode.RESTORE
    assert session.toggle_brush(BrushMode.RESTORE) is None
    assert session.state is SessionState.IDLE


def test_stroke_needs_an_armed_brush(session):
    with pytest.raises(InvalidState):
        session.apply_stroke([(30, 30)])


def test_remove_then_restore_round_trip(session, rect_image):
    original = rect_image.copy()
    session.toggle_brush(BrushMode.REMOVE)
    n = session.apply_stroke([(25, 30), (35, 30)], radius=3)
    assert n > 0
    assert rect_image[30, 30, 3] == 0
    assert session.state is SessionState.BRUSH_ARMED

    session.toggle_brush(BrushMode.RESTORE)
    session.apply_stroke([(25, 30), (35, 30)], radius=3)
    np.testing.assert_array_equal(rect_image, original)


def test_restore_after_background_removal(session, rect_image):
    original = rect_image.copy()
    session.remove_background()
    assert rect_image[5, 5, 3] == 0
    assert session.state is SessionState.IDLE
    session.toggle_brush(BrushMode.RESTORE)
    session.apply_stroke([(5, 5)], radius=2)
    np.testing.assert_array_equal(rect_image[5, 5], original[5, 5])


def test_restore_without_snapshot(session):
    session.snapshot = None
    session.toggle_brush(BrushMode.RESTORE)
    with pytest.raises(MissingSnapshot):
        session.apply_stroke([(10, 10)])
    assert session.state is SessionState.BRUSH_ARMED


def test_selecting_an_image_disarms_the_brush(session):
    session.toggle_brush(BrushMode.REMOVE)
    session.select_image(solid(10, 10, WHITE))
    assert session.state is SessionState.IDLE
    assert session.snapshot.shape == (10, 10, 4)


def test_reset_restores_the_snapshot(session, rect_image):
    original = rect_image.copy()
    session.remove_background()
    session.reset()
    np.testing.assert_array_equal(rect_image, original)


def test_session_blur_leaves_subject_sharp(session, rect_image):
    session.remove_background()
    before = rect_image.copy()
    assert session.blur_background() > 0
    np.testing.assert_array_equal(rect_image[25:35, 25:35], before[25:35, 25:35])


def test_blur_background_only_touches_low_alpha_pixels():
    img = solid(20, 20, (0, 0, 0))
    img[:, ::2, :3] = 255
    img[:, :10, 3] = 0
    before = img.copy()
    n = blur_background(img, BlurConfig(sigma=2.0))
    assert n == 200
    assert not np.array_equal(img[:, :8, :3], before[:, :8, :3])
    np.testing.assert_array_equal(img[:, 10:], before[:, 10:])
    np.testing.assert_array_equal(img[..., 3], before[..., 3])


def test_blur_background_without_background_is_a_noop():
    img = solid(8, 8, (10, 200, 30))
    assert blur_background(img) == 0
