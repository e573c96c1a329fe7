"""Perceptual closest-color lookup in OKLab space."""

from __future__ import annotations

from functools import lru_cache
from typing import Sequence, Tuple

from .errors import EmptyPaletteError
from .palette import Color

Lab = Tuple[float, float, float]


def _srgb_to_linear(component: int) -> float:
    c = component / 255.0
    if c <= 0.04045:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def _cbrt(value: float) -> float:
    if value < 0:
        return -((-value) ** (1.0 / 3.0))
    return value ** (1.0 / 3.0)


@lru_cache(maxsize=4096)
def srgb_to_oklab(color: Color) -> Lab:
    """Convert an 8-bit sRGB color to OKLab ``(L, a, b)``."""

    r, g, b = (_srgb_to_linear(c) for c in color)

    long_ = 0.4122214708 * r + 0.5363325363 * g + 0.0514459929 * b
    medium = 0.2119034982 * r + 0.6806995451 * g + 0.1073969566 * b
    short = 0.0883024619 * r + 0.2817188376 * g + 0.6299787005 * b

    l_, m_, s_ = _cbrt(long_), _cbrt(medium), _cbrt(short)

    return (
        0.2104542553 * l_ + 0.7936177850 * m_ - 0.0040720468 * s_,
        1.9779984951 * l_ - 2.4285922050 * m_ + 0.4505937099 * s_,
        0.0259040371 * l_ + 0.7827717662 * m_ - 0.8086757660 * s_,
    )


def oklab_distance(a: Lab, b: Lab) -> float:
    return (a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2 + (a[2] - b[2]) ** 2


def find_closest(color: Color, palette: Sequence[Color]) -> int:
    """
    Return the index of the palette entry perceptually closest to ``color``.
    Distances are squared Euclidean distances in OKLab. When several entries
    are equally close the first one wins.
    """
    if not palette:
        raise EmptyPaletteError("Cannot match a color against an empty palette")

    target = srgb_to_oklab(tuple(color))
    best_idx = 0
    best_dist = float("inf")
    for i, candidate in enumerate(palette):
        dist = oklab_distance(target, srgb_to_oklab(tuple(candidate)))
        if dist < best_dist:
            best_idx = i
            best_dist = dist
    return best_idx
