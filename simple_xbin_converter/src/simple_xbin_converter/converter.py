"""End-to-end conversion from images to XBIN bytes."""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import List

from PIL import Image

from .blocks import BLOCK_WIDTH, reduce_blocks
from .errors import DecodeError, XbinFormatError
from .palette import Color, derive_palettes, to_8bit
from .quantize import PillowQuantizer, Quantizer
from .xbin import decode_xbin, encode_xbin, xbin_dimensions


@dataclass
class ConvertOptions:
    """Options for the global quantization step."""

    quantize_method: str = "mediancut"  # mediancut, maxcoverage, fastoctree, libimagequant
    kmeans: int = 0


def flatten_image(image: Image.Image) -> Image.Image:
    """Return an RGB copy of ``image``; transparency is discarded."""

    if "A" in image.getbands() or "transparency" in image.info:
        warnings.warn(
            "Alpha channel discarded; XBIN colors are always opaque",
            RuntimeWarning,
            stacklevel=2,
        )
    return image.convert("RGB")


def convert_image_to_xbin(
    image: Image.Image,
    options: ConvertOptions | None = None,
    quantizer: Quantizer | None = None,
) -> bytes:
    options = options or ConvertOptions()
    image = flatten_image(image)
    width, height = image.size

    # Rejects widths that do not split into 8-pixel blocks before any work.
    xbin_dimensions(width, height)

    quantizer = quantizer or PillowQuantizer(options.quantize_method, options.kmeans)
    quantized = quantizer.quantize(image)

    palettes = derive_palettes(quantized.palette)
    blocks, _ = reduce_blocks(palettes.render, quantized.indices)
    return encode_xbin(width, height, palettes.hardware, blocks)


def render_xbin_preview(data: bytes) -> Image.Image:
    """Render XBIN bytes to an RGB image the way a viewer would display them."""

    xbin = decode_xbin(data)
    if not xbin.palette:
        raise XbinFormatError("XBIN data has no palette to render with")
    palette: List[Color] = [
        (to_8bit(r), to_8bit(g), to_8bit(b)) for r, g, b in xbin.palette
    ]

    pixels: List[Color] = []
    for block in xbin.blocks:
        bg = palette[block.bg]
        fg = palette[block.fg]
        for bit in range(BLOCK_WIDTH - 1, -1, -1):
            pixels.append(fg if (block.codepoint >> bit) & 1 else bg)

    preview = Image.new("RGB", (xbin.width, xbin.height))
    preview.putdata(pixels)
    return preview


def convert_image_file_to_xbin(
    path: str | Path,
    options: ConvertOptions | None = None,
    quantizer: Quantizer | None = None,
) -> bytes:
    path = Path(path)
    try:
        with Image.open(path) as img:
            img.load()
            return convert_image_to_xbin(img, options, quantizer)
    except FileNotFoundError as exc:
        raise DecodeError(f"Input file not found: {path}") from exc
    except Image.DecompressionBombError as exc:
        raise DecodeError(f"Image is too large to decode safely: {path}") from exc
    except OSError as exc:
        raise DecodeError(f"Failed to read image: {path}") from exc
