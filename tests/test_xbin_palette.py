import pytest

from simple_xbin_converter import QuantizationError, derive_palettes
from simple_xbin_converter.palette import PALETTE_SIZE


def test_short_palette_is_padded_with_black() -> None:
    palettes = derive_palettes([(255, 255, 255), (128, 64, 0)])

    assert len(palettes.hardware) == PALETTE_SIZE
    assert palettes.hardware[0] == (63, 63, 63)
    assert palettes.hardware[1] == (32, 16, 0)
    assert palettes.hardware[2:] == ((0, 0, 0),) * 14


def test_render_palette_is_hardware_times_four() -> None:
    colors = [(i * 17, 255 - i * 17, (i * 53) % 256) for i in range(PALETTE_SIZE)]
    palettes = derive_palettes(colors)

    for hw, render in zip(palettes.hardware, palettes.render):
        assert render == (hw[0] * 4, hw[1] * 4, hw[2] * 4)
    for color in palettes.hardware:
        assert all(0 <= c <= 63 for c in color)


def test_render_palette_does_not_restore_source_values() -> None:
    palettes = derive_palettes([(255, 255, 255)])

    assert palettes.render[0] == (252, 252, 252)


def test_rgba_entries_ignore_alpha() -> None:
    palettes = derive_palettes([(255, 0, 0, 255), (0, 0, 255, 0)])

    assert palettes.hardware[:2] == ((63, 0, 0), (0, 0, 63))


def test_empty_palette_becomes_all_black() -> None:
    palettes = derive_palettes([])

    assert palettes.hardware == ((0, 0, 0),) * PALETTE_SIZE
    assert palettes.render == ((0, 0, 0),) * PALETTE_SIZE


def test_more_than_sixteen_colors_is_rejected() -> None:
    with pytest.raises(QuantizationError):
        derive_palettes([(i, i, i) for i in range(17)])
