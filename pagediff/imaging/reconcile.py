"""Pads two renders to a shared size for comparison."""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image

TRANSPARENT = (0, 0, 0, 0)


@dataclass(frozen=True)
class ReconciledPair:
    """Two RGBA images sharing identical dimensions."""

    first: Image.Image
    second: Image.Image

    @property
    def size(self) -> tuple[int, int]:
        return self.first.size

    @property
    def width(self) -> int:
        return self.first.width

    @property
    def height(self) -> int:
        return self.first.height


def pad_to(image: Image.Image, width: int, height: int,
           fill: tuple[int, int, int, int] = TRANSPARENT) -> Image.Image:
    """Copy ``image`` onto the top-left corner of a ``width`` x ``height`` canvas."""
    canvas = Image.new("RGBA", (width, height), fill)
    canvas.paste(image.convert("RGBA"), (0, 0))
    return canvas


def reconcile(a: Image.Image, b: Image.Image,
              fill: tuple[int, int, int, int] = TRANSPARENT) -> ReconciledPair:
    """Pad ``a`` and ``b`` to (max width, max height) without scaling or cropping.

    The area outside each original footprint holds ``fill``, so a difference
    in rendered page size shows up as differing pixels.
    """
    width = max(a.width, b.width)
    height = max(a.height, b.height)
    return ReconciledPair(
        first=pad_to(a, width, height, fill),
        second=pad_to(b, width, height, fill),
    )
