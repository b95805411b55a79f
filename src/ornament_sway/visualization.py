"""Matplotlib render sink for composed frames."""

from __future__ import annotations

import logging
from pathlib import Path

from matplotlib.colors import to_rgba
from matplotlib.figure import Figure
from matplotlib.patches import Circle, Ellipse
from matplotlib.transforms import Affine2D

from .assets import ImageAsset
from .render import ChainDraw, FrameDrawList, ImageDraw, LightDraw


logger = logging.getLogger(__name__)

GLOW_ALPHA = 0.25


class MatplotlibSink:
    """Draw :class:`FrameDrawList` objects onto a matplotlib figure.

    Coordinates are screen pixels with ``y`` growing downward, so the axes are
    inverted vertically. The most recent frame stays available as
    :attr:`figure` until the next :meth:`draw`.
    """

    def __init__(self, images: dict[str, ImageAsset], dpi: int = 100, background: str | None = None):
        self.images = images
        self.dpi = dpi
        self.background = background
        self.figure: Figure | None = None
        self.frames_drawn = 0

    def draw(self, frame: FrameDrawList) -> Figure:
        width = max(frame.width, 1.0)
        height = max(frame.height, 1.0)
        fig = Figure(figsize=(width / self.dpi, height / self.dpi), dpi=self.dpi)
        if self.background is None:
            fig.patch.set_alpha(0.0)
        else:
            fig.patch.set_facecolor(self.background)
        ax = fig.add_axes((0, 0, 1, 1))
        ax.set_axis_off()

        for z, item in enumerate(frame.items):
            if isinstance(item, ImageDraw):
                self._draw_image(ax, item, z)
            elif isinstance(item, ChainDraw):
                self._draw_chain(ax, item, z)
            elif isinstance(item, LightDraw):
                ax.add_patch(
                    Ellipse(
                        (item.x, item.y),
                        2 * item.radius_x,
                        2 * item.radius_y,
                        facecolor=to_rgba(item.color, item.alpha),
                        edgecolor="none",
                        zorder=z,
                    )
                )

        # imshow extends the data limits; pin the view to the viewport last
        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)
        self.figure = fig
        self.frames_drawn += 1
        return fig

    def _draw_image(self, ax, item: ImageDraw, z: int) -> None:
        asset = self.images[item.image_key]
        x0 = item.x - item.pivot_x
        y0 = item.y - item.pivot_y
        transform = Affine2D().rotate_around(item.x, item.y, item.rotation) + ax.transData
        ax.imshow(
            asset.pixels,
            extent=(x0, x0 + item.width, y0 + item.height, y0),
            transform=transform,
            interpolation="bilinear",
            aspect="auto",
            zorder=z,
        )

    def _draw_chain(self, ax, item: ChainDraw, z: int) -> None:
        if not item.points:
            return
        if item.kind == "rope":
            ax.plot(
                [p.x for p in item.points],
                [p.y for p in item.points],
                color=item.color,
                linewidth=item.width * 72.0 / self.dpi,
                solid_capstyle="round",
                zorder=z,
            )
            return
        for p in item.points:
            if item.glow_color is not None:
                ax.add_patch(
                    Circle((p.x, p.y), item.width * 2, facecolor=to_rgba(item.glow_color, GLOW_ALPHA),
                           edgecolor="none", zorder=z)
                )
            ax.add_patch(Circle((p.x, p.y), item.width, facecolor=item.color, edgecolor="none", zorder=z))

    def save(self, path: str | Path) -> Path:
        """Write the last drawn frame as a PNG."""
        if self.figure is None:
            raise RuntimeError("No frame has been drawn yet")
        path = Path(path)
        self.figure.savefig(path, dpi=self.dpi, transparent=self.background is None)
        logger.debug("Wrote frame %s", path)
        return path
