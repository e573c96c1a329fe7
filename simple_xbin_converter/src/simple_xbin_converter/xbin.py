"""XBIN container encoding and decoding."""

# Reference: XBIN layout written by this package (little-endian)
# Field        | Offset | Size          | Notes
# -------------|--------|---------------|--------------------------------------------------
# Magic        | 0      | 5             | "XBIN" + 1Ah
# Columns      | 5      | 2             | image width / 8
# Rows         | 7      | 2             | image height (one text row per scanline)
# Font height  | 9      | 1             | 01h; every glyph is a single 8-pixel scanline
# Flags        | 10     | 1             | 0Bh = palette | font | non-blink
# Palette      | 11     | 48            | 16 x (R, G, B), 6 bits per channel
# Font         | 59     | 256           | glyph n is the byte n
# Blocks       | 315    | 2 x cols x rows | codepoint, then (bg << 4) | fg
#
# With an identity one-scanline font the codepoint of a block is its bitmask.

from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple

from .blocks import BLOCK_WIDTH, Block
from .errors import InvalidBlockLengthError, XbinFormatError, XbinWriteError
from .palette import PALETTE_SIZE, Color

MAGIC = b"XBIN\x1a"
FONT_HEIGHT = 1

FLAG_PALETTE = 0x01
FLAG_FONT = 0x02
FLAG_COMPRESS = 0x04
FLAG_NONBLINK = 0x08
FLAG_512_CHARS = 0x10
FLAGS = FLAG_PALETTE | FLAG_FONT | FLAG_NONBLINK

HEADER_FORMAT = "<5sHHBB"
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)
PALETTE_BYTES = PALETTE_SIZE * 3
FONT = bytes(range(256))
DATA_OFFSET = HEADER_SIZE + PALETTE_BYTES + len(FONT) * FONT_HEIGHT

MAX_DIMENSION = 0xFFFF


@dataclass
class XbinImage:
    """Decoded contents of an XBIN file."""

    columns: int
    rows: int
    font_height: int
    flags: int
    palette: List[Color]
    font: bytes
    blocks: List[Block]

    @property
    def width(self) -> int:
        return self.columns * BLOCK_WIDTH

    @property
    def height(self) -> int:
        return self.rows


def palette_to_bytes(palette: Sequence[Color]) -> bytes:
    if len(palette) != PALETTE_SIZE:
        raise XbinFormatError(f"Palette must have exactly {PALETTE_SIZE} entries, got {len(palette)}")
    data = bytearray()
    for color in palette:
        if any(not (0 <= c <= 63) for c in color):
            raise XbinFormatError(f"Palette channel out of 6-bit range: {tuple(color)}")
        data.extend(color)
    return bytes(data)


def blocks_to_bytes(blocks: Sequence[Block]) -> bytes:
    data = bytearray()
    for block in blocks:
        if not (0 <= block.bg < PALETTE_SIZE and 0 <= block.fg < PALETTE_SIZE):
            raise XbinFormatError(f"Block colors out of range: bg={block.bg} fg={block.fg}")
        data.append(block.codepoint & 0xFF)
        data.append((block.bg << 4) | block.fg)
    return bytes(data)


def xbin_dimensions(width: int, height: int) -> Tuple[int, int]:
    """Return ``(columns, rows)`` for an image, validating XBIN limits."""

    if width % BLOCK_WIDTH != 0:
        raise InvalidBlockLengthError(
            f"Image width {width} is not a multiple of {BLOCK_WIDTH}"
        )
    columns = width // BLOCK_WIDTH
    rows = height
    if columns > MAX_DIMENSION or rows > MAX_DIMENSION:
        raise XbinFormatError(
            f"Image of {width}x{height} exceeds the XBIN limit of {MAX_DIMENSION} columns/rows"
        )
    return columns, rows


def encode_xbin(
    width: int, height: int, palette: Sequence[Color], blocks: Sequence[Block]
) -> bytes:
    """Build a complete XBIN file in memory.

    ``palette`` is the 16-entry hardware palette (0-63 per channel) and
    ``blocks`` lists every block in source order.
    """

    columns, rows = xbin_dimensions(width, height)
    if len(blocks) != columns * rows:
        raise InvalidBlockLengthError(
            f"Expected {columns * rows} blocks for {width}x{height}, got {len(blocks)}"
        )

    header = struct.pack(HEADER_FORMAT, MAGIC, columns, rows, FONT_HEIGHT, FLAGS)
    return header + palette_to_bytes(palette) + FONT + blocks_to_bytes(blocks)


def decode_xbin(data: bytes) -> XbinImage:
    """Parse XBIN bytes produced by :func:`encode_xbin`."""

    if len(data) < HEADER_SIZE:
        raise XbinFormatError("XBIN data is shorter than its header")
    magic, columns, rows, font_height, flags = struct.unpack_from(HEADER_FORMAT, data, 0)
    if magic != MAGIC:
        raise XbinFormatError(f"Invalid XBIN signature: {magic!r}")
    if flags & FLAG_COMPRESS:
        raise XbinFormatError("Compressed XBIN data is not supported")

    offset = HEADER_SIZE
    palette: List[Color] = []
    if flags & FLAG_PALETTE:
        raw = data[offset : offset + PALETTE_BYTES]
        if len(raw) != PALETTE_BYTES:
            raise XbinFormatError("XBIN palette is truncated")
        palette = [tuple(raw[i : i + 3]) for i in range(0, PALETTE_BYTES, 3)]  # type: ignore[misc]
        offset += PALETTE_BYTES

    font = b""
    if flags & FLAG_FONT:
        glyphs = 512 if flags & FLAG_512_CHARS else 256
        font_size = glyphs * font_height
        font = bytes(data[offset : offset + font_size])
        if len(font) != font_size:
            raise XbinFormatError("XBIN font is truncated")
        offset += font_size

    body_size = 2 * columns * rows
    body = data[offset : offset + body_size]
    if len(body) != body_size:
        raise XbinFormatError(
            f"XBIN block data is truncated: expected {body_size} bytes, got {len(body)}"
        )

    blocks = [
        Block(bg=body[i + 1] >> 4, fg=body[i + 1] & 0x0F, codepoint=body[i])
        for i in range(0, body_size, 2)
    ]
    return XbinImage(
        columns=columns,
        rows=rows,
        font_height=font_height,
        flags=flags,
        palette=palette,
        font=font,
        blocks=blocks,
    )


def save_xbin(path: str | Path, data: bytes) -> Path:
    path = Path(path)
    try:
        path.write_bytes(data)
    except OSError as exc:
        raise XbinWriteError(f"Failed to write XBIN: {path}") from exc
    return path
