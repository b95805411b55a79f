"""The festive overlay: snowflakes, socks and candy figures under a top line.

This module owns the ornament set of the default scene:
- two long snowflake chains, the longer one carrying a spinning charm,
- three socks and two candy figures on short ropes,
- two leaf clusters swaying on top of the line,
- two static cherries.

Horizontal offsets are fractions of the top line width plus pixel nudges;
vertical offsets are pixel deltas from the line's opaque bottom (hanging) or
top (resting) edge.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..config import (
    ChainStyle,
    CharmSpec,
    DriveRange,
    OrnamentSpec,
    PendulumParams,
    SceneConfig,
    SwayParams,
)


FESTIVE_ASSETS = {
    "top_line": "top_line.png",
    "icicles": "sosul.png",
    "snowflake1": "snowflake1.png",
    "snowflake2": "snowflake2png.png",
    "snowflake3": "snowflake3.png",
    "sock1": "sock1.png",
    "sock2": "sock2.png",
    "kendy": "kendy.png",
    "leaves1": "leaves1.png",
    "leaves2": "leaves2.png",
    "cherry1": "cherry1.png",
}

SNOW_WHITE = "#ffffffe6"


def snowflake_params() -> PendulumParams:
    # stronger spring and a tighter cap than the socks
    return PendulumParams(
        angle_cap=0.30,
        center_pull=0.25,
        initial_angle_spread=0.4,
        initial_velocity_spread=0.6,
        drive=DriveRange(rate_min=0.0007, rate_spread=0.0006, amp_min=0.18, amp_spread=0.08),
    )


def sock_params() -> PendulumParams:
    return PendulumParams(
        angle_cap=0.32,
        center_pull=0.15,
        initial_angle_spread=0.2,
        initial_velocity_spread=0.0,
        drive=DriveRange(rate_min=0.0009, rate_spread=0.0007, amp_min=0.22, amp_spread=0.12),
    )


def figure_params() -> PendulumParams:
    return PendulumParams(
        angle_cap=0.32,
        center_pull=0.15,
        initial_angle_spread=0.3,
        initial_velocity_spread=0.5,
        drive=DriveRange(rate_min=0.001, rate_spread=0.0007, amp_min=0.2, amp_spread=0.1),
    )


def bead_chain() -> ChainStyle:
    return ChainStyle(kind="beads", sag_cap_px=18.0, sag_ratio=0.08, link_spacing=16.0, min_segments=8)


def rope(link_spacing: float) -> ChainStyle:
    return ChainStyle(
        kind="rope",
        sag_cap_px=16.0,
        sag_ratio=0.06,
        link_spacing=link_spacing,
        min_segments=2,
        color="#c0392b",
        width=4.0,
        glow_color=None,
    )


@dataclass(slots=True)
class _Hang:
    name: str
    width_fraction: float
    offset_y: float


def festive_ornaments() -> list[OrnamentSpec]:
    """Return the ornament specs in draw order layers."""
    specs = [
        OrnamentSpec(
            name="sock_center", kind="sock", image_key="sock1",
            width_fraction=0.05, offset_y=0.0, length=20.0,
            scale=0.8, attach="top_center", layer=0,
            params=sock_params(), chain=rope(10.0),
        ),
        OrnamentSpec(
            name="flake_short", kind="snowflake", image_key="snowflake1",
            width_fraction=0.18, offset_y=-12.0, length=360.0,
            scale=0.8, attach="center", layer=1, glow_color=SNOW_WHITE,
            params=snowflake_params(), chain=bead_chain(),
        ),
        OrnamentSpec(
            name="flake_long", kind="snowflake", image_key="snowflake2",
            width_fraction=0.32, offset_y=-55.0, length=520.0,
            scale=0.8, attach="center", layer=1, glow_color=SNOW_WHITE,
            params=snowflake_params(), chain=bead_chain(),
            charm=CharmSpec(image_key="snowflake3", scale=0.65, t=0.5, glow_color=SNOW_WHITE),
        ),
        OrnamentSpec(
            name="leaves_right", kind="leaves", image_key="leaves1", motion="sway",
            width_fraction=0.16, offset_px=-1.0, offset_y=114.0, edge="top",
            scale=0.68, attach="top_left", layer=2, params=SwayParams(),
        ),
        OrnamentSpec(
            name="leaves_left", kind="leaves", image_key="leaves2", motion="sway",
            width_fraction=-0.24, offset_y=48.0, edge="top",
            scale=0.62, attach="top_left", layer=2, params=SwayParams(),
        ),
        OrnamentSpec(
            name="cherry_right", kind="cherry", image_key="cherry1", motion="static",
            width_fraction=0.24, offset_px=-145.0, offset_y=117.0, edge="top",
            scale=0.6, attach="top_left", layer=3,
        ),
        OrnamentSpec(
            name="cherry_left", kind="cherry", image_key="cherry1", motion="static",
            width_fraction=-0.24, offset_px=-3.0, offset_y=75.0, edge="top",
            scale=0.6, attach="top_left", layer=3,
        ),
    ]
    for hang in (_Hang("sock_left", -0.42, -129.0), _Hang("sock_right", 0.40, -94.0)):
        specs.append(
            OrnamentSpec(
                name=hang.name, kind="sock", image_key="sock2",
                width_fraction=hang.width_fraction, offset_y=hang.offset_y, length=20.0,
                scale=0.8, attach="top_center", layer=4,
                params=sock_params(), chain=rope(10.0),
            )
        )
    for hang in (_Hang("figure_left", -0.1, -10.0), _Hang("figure_right", 0.28, -30.0)):
        specs.append(
            OrnamentSpec(
                name=hang.name, kind="figure", image_key="kendy",
                width_fraction=hang.width_fraction, offset_y=hang.offset_y, length=18.0,
                scale=0.7, attach="top_center", layer=5, glow_color="#ffffffb3",
                params=figure_params(), chain=rope(9.0),
            )
        )
    return specs


def festive_scene_config() -> SceneConfig:
    """Build the default festive :class:`SceneConfig`."""
    return SceneConfig(
        reference_key="top_line",
        overlay_keys=("icicles",),
        anchor_y=40.0,
        assets=dict(FESTIVE_ASSETS),
        ornaments=festive_ornaments(),
    )
