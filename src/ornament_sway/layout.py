"""Anchor layout derived from the reference frame's opaque bounds.

Ornaments hang from the bottom edge of the reference ("top line") image or
rest on its top edge. Only absolute anchor positions move when the viewport
changes; the per-ornament offsets are fixed at creation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .bounds import ImageBounds
from .pendulum import Ornament, Point


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Viewport:
    width: float
    height: float


@dataclass(frozen=True, slots=True)
class ReferenceFrame:
    """The image everything hangs from, and where it is drawn vertically."""

    width: float
    height: float
    bounds: ImageBounds
    anchor_y: float = 40.0

    @property
    def line_bottom_y(self) -> float:
        return self.anchor_y + self.bounds.max_y

    @property
    def line_top_y(self) -> float:
        return self.anchor_y + self.bounds.min_y


def viewport_mid_x(viewport_width: float) -> float:
    if viewport_width < 0:
        logger.debug("Negative viewport width %s clamped to 0", viewport_width)
    return max(viewport_width, 0.0) / 2


def anchor_for(
    viewport_width: float,
    reference: ReferenceFrame,
    offset_x: float,
    offset_y: float,
    edge: str = "bottom",
) -> Point:
    line_y = reference.line_top_y if edge == "top" else reference.line_bottom_y
    return Point(viewport_mid_x(viewport_width) + offset_x, line_y + offset_y)


def layout(
    viewport_width: float,
    reference: ReferenceFrame,
    offsets: list[tuple[float, float, str]],
) -> list[Point]:
    """Compute anchors for ``(offset_x, offset_y, edge)`` triples."""
    return [anchor_for(viewport_width, reference, ox, oy, edge) for ox, oy, edge in offsets]


def relayout(ornaments: list[Ornament], viewport_width: float, reference: ReferenceFrame) -> None:
    """Write fresh anchors onto ``ornaments``; angle and velocity are untouched."""
    anchors = layout(
        viewport_width,
        reference,
        [(orn.offset_x, orn.offset_y, orn.edge) for orn in ornaments],
    )
    for orn, anchor in zip(ornaments, anchors):
        orn.anchor = anchor
    logger.debug("Re-anchored %d ornaments for width %s", len(ornaments), viewport_width)


def backdrop_origin(viewport_width: float, reference: ReferenceFrame) -> Point:
    """Top-left corner where the reference image is drawn, centred horizontally."""
    return Point((viewport_width - reference.width) / 2, reference.anchor_y)
