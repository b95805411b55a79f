import numpy as np

from ornament_sway.bounds import ImageBounds, alpha_channel, compute_bounds
from ornament_sway.assets import ImageAsset


def _blank(w, h):
    return np.zeros((h, w, 4), dtype=np.uint8)


def test_fully_transparent_image_falls_back_to_full_rect():
    assert compute_bounds(_blank(5, 4)) == ImageBounds(0, 0, 5, 4)


def test_single_opaque_pixel():
    px = _blank(8, 6)
    px[1, 2, 3] = 255
    assert compute_bounds(px) == ImageBounds(2, 1, 2, 1)


def test_alpha_threshold_is_exclusive():
    px = _blank(4, 4)
    px[0, 0, 3] = 10
    assert compute_bounds(px) == ImageBounds(0, 0, 4, 4)
    px[3, 3, 3] = 11
    assert compute_bounds(px) == ImageBounds(3, 3, 3, 3)


def test_padded_sprite_bounds():
    px = _blank(64, 48)
    px[5:40, 10:30, 3] = 200
    b = compute_bounds(ImageAsset("sprite", px))
    assert (b.min_x, b.min_y, b.max_x, b.max_y) == (10, 5, 29, 39)
    assert b.center_x == 19.5
    assert b.center_y == 22.0


def test_float_pixels_are_scaled():
    px = np.zeros((10, 10, 4), dtype=np.float32)
    px[2:4, 6:9, 3] = 0.5
    assert compute_bounds(px) == ImageBounds(6, 2, 8, 3)


def test_rgb_without_alpha_is_opaque():
    px = np.zeros((3, 7, 3), dtype=np.uint8)
    assert compute_bounds(px) == ImageBounds(0, 0, 6, 2)
    assert alpha_channel(px).min() == 255


def test_bounds_stay_inside_image():
    rng = np.random.default_rng(5)
    for _ in range(25):
        h, w = rng.integers(1, 40, size=2)
        px = _blank(w, h)
        mask = rng.random((h, w)) > 0.9
        px[..., 3] = np.where(mask, 255, 0)
        b = compute_bounds(px)
        if mask.any():
            assert 0 <= b.min_x <= b.max_x < w
            assert 0 <= b.min_y <= b.max_y < h
        else:
            assert b == ImageBounds(0, 0, w, h)


def test_out_of_range_float_alpha_is_clipped():
    px = np.zeros((4, 4, 4), dtype=np.float32)
    px[0, 0, 3] = 1.5
    px[1, 1, 3] = -0.5
    alpha = alpha_channel(px)
    assert alpha[0, 0] == 255
    assert alpha[1, 1] == 0
    assert compute_bounds(px) == ImageBounds(0, 0, 0, 0)
