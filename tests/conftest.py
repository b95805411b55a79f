import numpy as np
import pytest

from ornament_sway import ImageAsset, SceneController, Viewport
from ornament_sway.scenes import festive_scene_config


class FixedRandom:
    """Random source that always returns the same value."""

    def __init__(self, value=0.5):
        self.value = value

    def random(self):
        return self.value


def padded_square(name, size=64, pad=12):
    px = np.zeros((size, size, 4), dtype=np.uint8)
    px[pad:size - pad, pad:size - pad] = (255, 255, 255, 255)
    return ImageAsset(name, px)


def top_line(name="top_line", width=600, height=80, rows=(30, 50)):
    px = np.zeros((height, width, 4), dtype=np.uint8)
    px[rows[0]:rows[1], :] = (240, 200, 90, 255)
    return ImageAsset(name, px)


@pytest.fixture
def scene_config():
    cfg = festive_scene_config()
    cfg.sim.seed = 1234
    return cfg


@pytest.fixture
def festive_images(scene_config):
    images = {key: padded_square(key) for key in scene_config.required_images()}
    images[scene_config.reference_key] = top_line()
    return images


@pytest.fixture
def loaded_controller(scene_config, festive_images):
    ctl = SceneController(scene_config, Viewport(1280, 720))
    ctl.load(festive_images, now=0.0)
    return ctl
