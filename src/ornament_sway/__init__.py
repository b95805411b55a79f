from .assets import AssetLoadError, ImageAsset, load_assets
from .bounds import ImageBounds, compute_bounds
from .config import SceneConfig, SimulationConfig, load_scene_config
from .layout import Viewport, layout
from .render import FrameDrawList, compose_frame
from .scene import SceneContext, SceneController
from .sim_runner import FrameClock, SimulationRunner

__version__ = "0.1.0"

__all__ = [
    "AssetLoadError",
    "ImageAsset",
    "load_assets",
    "ImageBounds",
    "compute_bounds",
    "SceneConfig",
    "SimulationConfig",
    "load_scene_config",
    "Viewport",
    "layout",
    "FrameDrawList",
    "compose_frame",
    "SceneContext",
    "SceneController",
    "FrameClock",
    "SimulationRunner",
]
