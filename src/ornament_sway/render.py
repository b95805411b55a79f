"""Frame composition: turn scene state into draw instructions.

The composer never touches pixels. It produces a :class:`FrameDrawList` that a
:class:`RenderSink` turns into output. Image placement uses each asset's
opaque bounds, so ornaments attach where their visible pixels are rather than
at the padded image corner.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from .bounds import ImageBounds
from .config import AttachMode, ChainKind
from .layout import backdrop_origin
from .lights import is_visible
from .pendulum import Ornament, Point, chain_points, charm_position


BACKDROP_GLOW = "#ffd078cc"


@dataclass(slots=True)
class ImageDraw:
    """Draw ``image_key`` scaled to ``width`` x ``height``.

    The image is translated so its local point ``(pivot_x, pivot_y)`` lands on
    ``(x, y)`` and then rotated by ``rotation`` radians around that point.
    """

    image_key: str
    x: float
    y: float
    pivot_x: float
    pivot_y: float
    width: float
    height: float
    rotation: float = 0.0
    glow_color: str | None = None


@dataclass(slots=True)
class ChainDraw:
    points: list[Point]
    kind: ChainKind
    color: str
    width: float
    glow_color: str | None = None


@dataclass(slots=True)
class LightDraw:
    x: float
    y: float
    color: str
    alpha: float
    radius_x: float
    radius_y: float


@dataclass(slots=True)
class FrameDrawList:
    """Ordered draw instructions for one frame, back to front."""

    width: float
    height: float
    items: list[ImageDraw | ChainDraw | LightDraw] = field(default_factory=list)

    def of_type(self, cls) -> list:
        return [item for item in self.items if isinstance(item, cls)]


class RenderSink(Protocol):
    def draw(self, frame: FrameDrawList) -> None: ...


def attach_offsets(
    bounds: ImageBounds | None,
    width: float,
    height: float,
    scale: float,
    mode: AttachMode,
) -> tuple[float, float, float, float]:
    """Return ``(draw_w, draw_h, pivot_x, pivot_y)`` for an image.

    ``center`` pivots on the opaque-box centre, ``top_center`` on the opaque
    top edge at its horizontal centre, ``top_left`` on the opaque top-left
    corner.
    """
    draw_w = width * scale
    draw_h = height * scale
    if bounds is None:
        if mode == "center":
            return draw_w, draw_h, draw_w / 2, draw_h / 2
        if mode == "top_center":
            return draw_w, draw_h, draw_w / 2, 0.0
        return draw_w, draw_h, 0.0, 0.0

    if mode == "center":
        px = bounds.center_x / width * draw_w
        py = bounds.center_y / height * draw_h
    elif mode == "top_center":
        px = bounds.center_x / width * draw_w
        py = bounds.min_y / height * draw_h
    else:
        px = bounds.min_x / width * draw_w
        py = bounds.min_y / height * draw_h
    return draw_w, draw_h, px, py


def _image_draw(ctx, key: str, at: Point, scale: float, mode: AttachMode, rotation: float, glow):
    img = ctx.images[key]
    draw_w, draw_h, px, py = attach_offsets(ctx.bounds.get(key), img.width, img.height, scale, mode)
    return ImageDraw(
        image_key=key,
        x=at.x,
        y=at.y,
        pivot_x=px,
        pivot_y=py,
        width=draw_w,
        height=draw_h,
        rotation=rotation,
        glow_color=glow,
    )


def _backdrop(ctx) -> list[ImageDraw]:
    cfg = ctx.config
    origin = backdrop_origin(ctx.viewport.width, ctx.reference)
    items = []
    for key in (cfg.reference_key, *cfg.overlay_keys):
        if key not in ctx.images:
            continue
        img = ctx.images[key]
        items.append(
            ImageDraw(key, origin.x, origin.y, 0.0, 0.0, img.width, img.height, glow_color=BACKDROP_GLOW)
        )
    return items


def _light_draws(ctx) -> list[LightDraw]:
    cfg = ctx.config.lights
    items = []
    for light in ctx.lights:
        if not is_visible(light, cfg):
            continue
        items.append(LightDraw(light.x, light.y, light.color, 0.75 * light.glow, 6 * light.glow, 4.5 * light.glow))
        items.append(LightDraw(light.x, light.y, light.color, 1.0, 3.6, 2.7))
    return items


def _ornament_draws(ctx, orn: Ornament) -> list:
    items: list = []
    if orn.motion != "pendulum":
        # resting items rotate about their opaque top-left corner
        rotation = orn.angle if orn.motion == "sway" else 0.0
        items.append(_image_draw(ctx, orn.image_key, orn.anchor, orn.scale, orn.attach, rotation, orn.glow_color))
        return items

    bob = orn.bob()
    if orn.chain is not None:
        items.append(
            ChainDraw(
                points=chain_points(orn),
                kind=orn.chain.kind,
                color=orn.chain.color,
                width=orn.chain.width,
                glow_color=orn.chain.glow_color,
            )
        )
    items.append(_image_draw(ctx, orn.image_key, bob, orn.scale, orn.attach, 0.0, orn.glow_color))

    at = charm_position(orn)
    if at is not None:
        charm = orn.charm
        items.append(_image_draw(ctx, charm.image_key, at, charm.scale, "center", ctx.spin.angle, charm.glow_color))
    return items


def compose_frame(ctx) -> FrameDrawList:
    """Build the draw list for the current state of ``ctx``.

    An unready scene yields an empty frame.
    """
    frame = FrameDrawList(width=ctx.viewport.width, height=ctx.viewport.height)
    if not ctx.ready:
        return frame
    frame.items.extend(_backdrop(ctx))
    frame.items.extend(_light_draws(ctx))
    for orn in sorted(ctx.ornaments, key=lambda o: o.layer):
        frame.items.extend(_ornament_draws(ctx, orn))
    return frame
