"""Exception types raised by the XBIN converter."""


class ConversionError(Exception):
    """Custom exception for conversion errors."""


class DecodeError(ConversionError):
    """Raised when the source image cannot be read or decoded."""


class QuantizationError(ConversionError):
    """Raised when the image cannot be reduced to a 16-color palette."""


class InvalidBlockLengthError(ConversionError):
    """Raised when pixel data cannot be split into 8-pixel blocks."""


class InvalidIndexError(ConversionError):
    """Raised when an index buffer refers to a color outside the palette."""


class EmptyPaletteError(ConversionError):
    """Raised when a closest-color lookup is given no candidates."""


class XbinFormatError(ConversionError):
    """Raised when XBIN data cannot be encoded or decoded."""


class XbinWriteError(ConversionError):
    """Raised when the output file cannot be written."""
