# tests/test_install.py
import json5
import matplotlib
import numpy as np

import ornament_sway


def test_import_and_core_types():
    assert np.zeros((1, 1, 4)).shape == (1, 1, 4)
    assert matplotlib.__version__
    assert json5.loads("{a: 1}") == {"a": 1}
    assert ornament_sway.SceneController is not None
    assert ornament_sway.__version__
