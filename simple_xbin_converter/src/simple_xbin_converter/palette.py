"""16-color palette handling.

XBIN stores its palette the way a VGA DAC does: 6 bits per channel (0-63).
Two aligned palettes are kept for every conversion:

* ``hardware``: the 6-bit values written into the file.
* ``render``: the same colors scaled back to 8 bits (``value * 4``). This is
  what a viewer displays, so every color comparison uses it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .errors import QuantizationError

Color = Tuple[int, int, int]

PALETTE_SIZE = 16
PAD_COLOR: Color = (0, 0, 0)


def to_6bit(component: int) -> int:
    return round(component * 63 / 255)


def to_8bit(component: int) -> int:
    return component * 4


@dataclass(frozen=True)
class Palettes:
    hardware: Tuple[Color, ...]
    render: Tuple[Color, ...]


def derive_palettes(colors: Sequence[Sequence[int]]) -> Palettes:
    """Build the hardware and render palettes from up to 16 source colors.

    Only the first three channels of each color are used, so RGBA entries are
    accepted as well. Short palettes are padded with black.
    """

    if len(colors) > PALETTE_SIZE:
        raise QuantizationError(
            f"Palette has {len(colors)} colors; at most {PALETTE_SIZE} are supported"
        )

    hardware: List[Color] = []
    for color in colors:
        r, g, b = color[0], color[1], color[2]
        hardware.append((to_6bit(r), to_6bit(g), to_6bit(b)))
    while len(hardware) < PALETTE_SIZE:
        hardware.append(PAD_COLOR)

    render = [(to_8bit(r), to_8bit(g), to_8bit(b)) for r, g, b in hardware]
    return Palettes(hardware=tuple(hardware), render=tuple(render))
