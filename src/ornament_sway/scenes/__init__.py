from .festive import FESTIVE_ASSETS, festive_ornaments, festive_scene_config

__all__ = [
    "FESTIVE_ASSETS",
    "festive_ornaments",
    "festive_scene_config",
]
