"""Command line interface for the simple XBIN converter."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .converter import ConvertOptions, convert_image_file_to_xbin, render_xbin_preview
from .errors import ConversionError, XbinWriteError
from .quantize import QUANTIZE_METHODS
from .xbin import save_xbin


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Convert an image into an XBIN text-mode file.\n"
            "The image is reduced to 16 colors, then every 8-pixel run becomes one\n"
            "character cell holding a background color, a foreground color and a bitmask.\n"
            "The image width must be a multiple of 8."
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("input", help="Source image (any format Pillow can read)")
    parser.add_argument("output", help="Destination .xb file")
    parser.add_argument(
        "--method",
        choices=sorted(QUANTIZE_METHODS),
        default="mediancut",
        help=(
            "Pillow quantization method used to pick the 16 colors. "
            "libimagequant gives the best palettes but is only "
            "available when Pillow was built with libimagequant support"
        ),
    )
    parser.add_argument(
        "--kmeans",
        type=int,
        default=0,
        help="Extra k-means refinement passes after quantization (slower, better palette)",
    )
    parser.add_argument(
        "--preview",
        help="Optional PNG path for a rendering of the XBIN output",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = ConvertOptions()
        options.quantize_method = args.method
        options.kmeans = args.kmeans

        data = convert_image_file_to_xbin(args.input, options)

        # The .xb file is only written once the preview has been saved.
        preview_path = Path(args.preview) if args.preview else None
        if preview_path is not None:
            preview = render_xbin_preview(data)
            try:
                preview.save(preview_path, format="PNG")
            except OSError as exc:
                raise XbinWriteError(f"Failed to write preview: {preview_path}") from exc

        try:
            target = save_xbin(args.output, data)
        except XbinWriteError:
            if preview_path is not None:
                preview_path.unlink(missing_ok=True)
            raise

        print(f"wrote {target}")
        if preview_path is not None:
            print(f"wrote {preview_path}")
        return 0
    except ConversionError as exc:
        print(exc, file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
