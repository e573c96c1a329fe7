"""Simple image to XBIN converter.

This module converts images into XBIN text-mode files: 16 colors, and every
8-pixel run stored as one character cell with a background color, a
foreground color and a bitmask. It can be invoked through the CLI (``python -m
simple_xbin_converter``) or imported to convert a single image into bytes.
"""

from .blocks import Block, reduce_blocks
from .converter import (
    ConvertOptions,
    convert_image_file_to_xbin,
    convert_image_to_xbin,
    render_xbin_preview,
)
from .errors import (
    ConversionError,
    DecodeError,
    EmptyPaletteError,
    InvalidBlockLengthError,
    InvalidIndexError,
    QuantizationError,
    XbinFormatError,
    XbinWriteError,
)
from .matcher import find_closest, srgb_to_oklab
from .palette import Palettes, derive_palettes
from .quantize import PillowQuantizer, QuantizedImage, Quantizer
from .xbin import XbinImage, decode_xbin, encode_xbin, save_xbin

__all__ = [
    "Block",
    "ConversionError",
    "ConvertOptions",
    "DecodeError",
    "EmptyPaletteError",
    "InvalidBlockLengthError",
    "InvalidIndexError",
    "Palettes",
    "PillowQuantizer",
    "QuantizationError",
    "QuantizedImage",
    "Quantizer",
    "XbinFormatError",
    "XbinImage",
    "XbinWriteError",
    "convert_image_file_to_xbin",
    "convert_image_to_xbin",
    "decode_xbin",
    "derive_palettes",
    "encode_xbin",
    "find_closest",
    "reduce_blocks",
    "render_xbin_preview",
    "save_xbin",
    "srgb_to_oklab",
]
