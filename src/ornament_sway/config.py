"""Configuration dataclasses for the festive overlay scene.

This module defines the primary inputs used by scene builders and the frame
runner. The dataclasses are intentionally lightweight and serializable so they
can be created in user scripts and tests without loading any image assets.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Literal

import json5


OrnamentKind = Literal["snowflake", "sock", "figure", "leaves", "cherry"]
MotionModel = Literal["pendulum", "sway", "static"]
AttachMode = Literal["center", "top_center", "top_left"]
LineEdge = Literal["bottom", "top"]
ChainKind = Literal["beads", "rope"]

MOTION_MODELS: tuple[str, ...] = ("pendulum", "sway", "static")


@dataclass(slots=True)
class SimulationConfig:
    """Top-level settings for a simulation run.

    Attributes:
        frame_ms: Nominal frame interval used by the headless frame clock.
        max_step_ms: Ceiling applied to the elapsed time of a single tick.
        gravity: Stylized gravity term of the pendulum equation (px/s^2 scale).
        damping: Multiplicative velocity damping applied once per step.
        duration_ms: Length of a headless run in milliseconds.
        sample_every_n_frames: Record state every N ticks.
        seed: Seed for the random source; ``None`` draws fresh entropy.
    """

    frame_ms: float = 1000.0 / 60.0
    max_step_ms: float = 32.0
    gravity: float = 45.0
    damping: float = 0.99
    duration_ms: float = 5000.0
    sample_every_n_frames: int = 10
    seed: int | None = None


@dataclass(slots=True)
class DriveRange:
    """Ranges the self-forcing sinusoid parameters are drawn from.

    ``rate`` is in radians per millisecond of clock time, ``amp`` in rad/s^2.
    """

    rate_min: float = 0.0007
    rate_spread: float = 0.0006
    amp_min: float = 0.18
    amp_spread: float = 0.08


@dataclass(slots=True)
class PendulumParams:
    """Per-class tuning of the damped, self-driven pendulum."""

    angle_cap: float = 0.30
    center_pull: float = 0.25
    micro_amp: float = 0.006
    stall_micro_amp: float = 0.03
    stall_velocity: float = 0.00008
    edge_angle: float = 0.24
    initial_angle_spread: float = 0.4
    initial_velocity_spread: float = 0.6
    drive: DriveRange = field(default_factory=DriveRange)


@dataclass(slots=True)
class SwayParams:
    """Tuning of the gentle sway used by resting foliage."""

    angle_cap: float = 0.06
    target_amp: float = 0.05
    gain: float = 0.55
    damping: float = 0.997
    rate_min: float = 0.0007
    rate_spread: float = 0.0005


@dataclass(slots=True)
class ChainStyle:
    """Visual parameters of the chain or rope between anchor and bob."""

    kind: ChainKind = "beads"
    sag_cap_px: float = 18.0
    sag_ratio: float = 0.08
    link_spacing: float = 16.0
    min_segments: int = 8
    color: str = "#ffd133"
    width: float = 3.0
    glow_color: str | None = "#ffb300"


@dataclass(slots=True)
class CharmSpec:
    """An extra image riding on a chain, spun by the spin controller."""

    image_key: str
    scale: float = 0.65
    t: float = 0.5
    glow_color: str | None = "#ffffffe6"


@dataclass(slots=True)
class OrnamentSpec:
    """Creation-time description of one ornament.

    The horizontal offset is ``width_fraction * reference_width + offset_px``;
    the vertical offset is the fixed ``offset_y`` pixel delta from the line
    edge named by ``edge``.
    """

    name: str
    kind: OrnamentKind
    image_key: str
    motion: MotionModel = "pendulum"
    width_fraction: float = 0.0
    offset_px: float = 0.0
    offset_y: float = 0.0
    edge: LineEdge = "bottom"
    length: float = 0.0
    scale: float = 0.8
    attach: AttachMode = "center"
    layer: int = 0
    glow_color: str | None = None
    params: PendulumParams | SwayParams | None = None
    chain: ChainStyle | None = None
    charm: CharmSpec | None = None

    def __post_init__(self) -> None:
        if self.motion not in MOTION_MODELS:
            raise ValueError(f"Unsupported motion model: {self.motion}")
        if self.motion == "pendulum" and self.length <= 0.0:
            raise ValueError(f"{self.name}.length must be > 0")
        if self.scale <= 0.0:
            raise ValueError(f"{self.name}.scale must be > 0")


@dataclass(slots=True)
class LightStringConfig:
    """Layout and timing of the twinkling light string."""

    margin: float = 12.0
    min_usable_width: float = 200.0
    line_gap: float = 10.0
    min_scene_height: float = 220.0
    max_scene_height: float = 520.0
    scene_height_ratio: float = 0.65
    lanes: int = 6
    min_per_lane: int = 8
    spacing: float = 70.0
    glow_smoothing: float = 0.12
    drift_smoothing: float = 0.04
    visibility_threshold: float = 0.08
    render_cutoff: float = 0.02
    recolor_chance: float = 0.25
    palette: tuple[str, ...] = ("#ff4d4f", "#2ecc71", "#f4d03f", "#00c3ff", "#ff6f61")

    def __post_init__(self) -> None:
        if self.spacing <= 0.0:
            raise ValueError("lights.spacing must be > 0")
        if self.lanes < 1:
            raise ValueError("lights.lanes must be >= 1")
        if self.min_per_lane < 0:
            raise ValueError("lights.min_per_lane must be >= 0")
        if not self.palette:
            raise ValueError("lights.palette must not be empty")
        for name in ("glow_smoothing", "drift_smoothing"):
            value = getattr(self, name)
            if not 0.0 < value <= 1.0:
                raise ValueError(f"lights.{name} must be in (0, 1]")
        if not 0.0 <= self.recolor_chance <= 1.0:
            raise ValueError("lights.recolor_chance must be in [0, 1]")


@dataclass(slots=True)
class SpinConfig:
    """Speed phases of the spinning charm."""

    min_speed: float = 1.6
    speed_spread: float = 1.8
    min_hold_ms: float = 1200.0
    hold_spread_ms: float = 1400.0
    gain: float = 2.2
    drag: float = 0.995
    initial_target_speed: float = 0.8

    def __post_init__(self) -> None:
        for name in ("min_speed", "speed_spread", "min_hold_ms", "hold_spread_ms", "gain"):
            if getattr(self, name) < 0.0:
                raise ValueError(f"spin.{name} must be >= 0")
        if not 0.0 < self.drag <= 1.0:
            raise ValueError("spin.drag must be in (0, 1]")


@dataclass(slots=True)
class SceneConfig:
    """Everything needed to build a scene from a set of decoded assets."""

    reference_key: str = "top_line"
    overlay_keys: tuple[str, ...] = ("icicles",)
    anchor_y: float = 40.0
    assets: dict[str, str] = field(default_factory=dict)
    ornaments: list[OrnamentSpec] = field(default_factory=list)
    lights: LightStringConfig = field(default_factory=LightStringConfig)
    spin: SpinConfig = field(default_factory=SpinConfig)
    sim: SimulationConfig = field(default_factory=SimulationConfig)

    def required_images(self) -> list[str]:
        """Return the image keys the scene draws, reference first."""
        keys = [self.reference_key, *self.overlay_keys]
        for spec in self.ornaments:
            keys.append(spec.image_key)
            if spec.charm is not None:
                keys.append(spec.charm.image_key)
        return list(dict.fromkeys(keys))


def _override(obj, values: dict[str, Any], section: str):
    """Return a copy of dataclass ``obj`` with ``values`` applied."""
    known = {f.name for f in fields(obj)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"Unknown keys in [{section}]: {', '.join(unknown)}")
    if "palette" in values:
        values = {**values, "palette": tuple(values["palette"])}
    return replace(obj, **values)


def load_scene_config(path: str | Path, base: SceneConfig | None = None) -> SceneConfig:
    """Load overrides from a JSON5 file on top of ``base``.

    Recognised top-level sections are ``sim``, ``lights``, ``spin`` and
    ``assets``, plus the scalar ``anchor_y``. Ornament geometry is owned by
    scene modules and cannot be overridden from a file.
    """
    if base is None:
        from .scenes.festive import festive_scene_config

        base = festive_scene_config()

    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = json5.load(f)
        except ValueError as exc:
            raise ValueError(f"Malformed scene config {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ValueError(f"Scene config {path} must contain an object")
    allowed = {"sim", "lights", "spin", "assets", "anchor_y"}
    unknown = sorted(set(raw) - allowed)
    if unknown:
        raise ValueError(f"Unknown sections in scene config: {', '.join(unknown)}")

    cfg = replace(base)
    if "sim" in raw:
        cfg.sim = _override(base.sim, raw["sim"], "sim")
    if "lights" in raw:
        cfg.lights = _override(base.lights, raw["lights"], "lights")
    if "spin" in raw:
        cfg.spin = _override(base.spin, raw["spin"], "spin")
    if "assets" in raw:
        cfg.assets = {**base.assets, **{str(k): str(v) for k, v in raw["assets"].items()}}
    if "anchor_y" in raw:
        cfg.anchor_y = float(raw["anchor_y"])
    return cfg
