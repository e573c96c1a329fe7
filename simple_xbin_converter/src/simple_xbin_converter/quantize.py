"""Global 16-color quantization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Protocol

from PIL import Image

from .errors import QuantizationError
from .palette import PALETTE_SIZE, Color

QUANTIZE_METHODS: Dict[str, int] = {
    "mediancut": Image.Quantize.MEDIANCUT,
    "maxcoverage": Image.Quantize.MAXCOVERAGE,
    "fastoctree": Image.Quantize.FASTOCTREE,
    "libimagequant": Image.Quantize.LIBIMAGEQUANT,
}


@dataclass
class QuantizedImage:
    """Palette of at most 16 colors plus one palette index per pixel."""

    palette: List[Color]
    indices: bytearray


class Quantizer(Protocol):
    def quantize(self, image: Image.Image, colors: int = PALETTE_SIZE) -> QuantizedImage:
        ...


class PillowQuantizer:
    """Quantize with ``Image.quantize`` and no dithering."""

    def __init__(self, method: str = "mediancut", kmeans: int = 0):
        if method not in QUANTIZE_METHODS:
            raise QuantizationError(f"Unknown quantize method: {method}")
        if kmeans < 0:
            raise QuantizationError("kmeans must be zero or greater")
        self.method = method
        self.kmeans = kmeans

    def quantize(self, image: Image.Image, colors: int = PALETTE_SIZE) -> QuantizedImage:
        try:
            quantized = image.convert("RGB").quantize(
                colors=colors,
                method=QUANTIZE_METHODS[self.method],
                kmeans=self.kmeans,
                dither=Image.Dither.NONE,
            )
        except (ValueError, OSError) as exc:
            raise QuantizationError(f"Failed to quantize image ({self.method}): {exc}") from exc

        raw = quantized.getpalette() or []
        palette: List[Color] = [
            (raw[i], raw[i + 1], raw[i + 2]) for i in range(0, len(raw) - 2, 3)
        ][:colors]
        indices = bytearray(quantized.tobytes())

        if not palette:
            raise QuantizationError("Quantizer returned an empty palette")
        if len(indices) != image.width * image.height:
            raise QuantizationError("Quantizer returned the wrong number of pixels")
        if indices and max(indices) >= len(palette):
            raise QuantizationError(
                f"Quantizer used palette index {max(indices)} outside a {len(palette)}-color palette"
            )
        return QuantizedImage(palette=palette, indices=indices)
