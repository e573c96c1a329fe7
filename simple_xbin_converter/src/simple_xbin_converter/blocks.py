"""Reduce 8-pixel blocks to a background/foreground color pair."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, MutableSequence, Sequence, Tuple

from .errors import InvalidBlockLengthError, InvalidIndexError
from .matcher import find_closest
from .palette import PALETTE_SIZE, Color

BLOCK_WIDTH = 8

# Second color used when a block contains a single palette index.
FALLBACK_INDEX = 0


@dataclass(frozen=True)
class Block:
    bg: int
    fg: int
    codepoint: int


def pick_two_colors(block_indices: Sequence[int]) -> Tuple[int, int]:
    """Return the two most frequent indices, lower index first on equal counts."""

    counts = [0] * PALETTE_SIZE
    for idx in block_indices:
        counts[idx] += 1
    ranked = sorted(
        (kv for kv in enumerate(counts) if kv[1] > 0),
        key=lambda kv: (-kv[1], kv[0]),
    )
    if len(ranked) < 2:
        return ranked[0][0], FALLBACK_INDEX
    return ranked[0][0], ranked[1][0]


def block_codepoint(block_indices: Sequence[int], bg: int) -> int:
    codepoint = 0
    for idx in block_indices:
        codepoint <<= 1
        if idx != bg:
            codepoint |= 0x01
    return codepoint & 0xFF


def reduce_block(
    block_indices: MutableSequence[int], render_palette: Sequence[Color]
) -> Block:
    """Limit one 8-pixel block to two palette indices, in place.

    The two most frequent indices become ``bg`` and ``fg``. Any other pixel
    is snapped to whichever of the two is closer in OKLab space.
    """

    bg, fg = pick_two_colors(block_indices)
    pair = [render_palette[bg], render_palette[fg]]
    allowed = (bg, fg)

    for i, idx in enumerate(block_indices):
        if idx == bg or idx == fg:
            continue
        block_indices[i] = allowed[find_closest(render_palette[idx], pair)]

    return Block(bg=bg, fg=fg, codepoint=block_codepoint(block_indices, bg))


def reduce_blocks(
    render_palette: Sequence[Color], indices: MutableSequence[int] | bytes
) -> Tuple[List[Block], MutableSequence[int]]:
    """Split ``indices`` into 8-pixel blocks and reduce each to two colors.

    ``indices`` is rewritten in place so every pixel holds its block's ``bg``
    or ``fg``; immutable ``bytes`` are copied into a ``bytearray`` first. The
    block list and the reduced buffer are returned together.
    """

    if len(indices) % BLOCK_WIDTH != 0:
        raise InvalidBlockLengthError(
            f"Index buffer length {len(indices)} is not a multiple of {BLOCK_WIDTH}"
        )
    if isinstance(indices, bytes):
        indices = bytearray(indices)

    for offset, idx in enumerate(indices):
        if not (0 <= idx < PALETTE_SIZE):
            raise InvalidIndexError(f"Palette index {idx} at pixel {offset} is out of range")

    blocks: List[Block] = []
    for block_start in range(0, len(indices), BLOCK_WIDTH):
        block_indices = indices[block_start : block_start + BLOCK_WIDTH]
        blocks.append(reduce_block(block_indices, render_palette))
        indices[block_start : block_start + BLOCK_WIDTH] = block_indices

    return blocks, indices
