import pytest

from simple_xbin_converter import EmptyPaletteError, find_closest, srgb_to_oklab


def test_oklab_reference_values() -> None:
    assert srgb_to_oklab((0, 0, 0)) == (0.0, 0.0, 0.0)

    L, a, b = srgb_to_oklab((255, 255, 255))
    assert L == pytest.approx(1.0, abs=1e-3)
    assert a == pytest.approx(0.0, abs=1e-3)
    assert b == pytest.approx(0.0, abs=1e-3)

    # Pure sRGB red, reference value from the OKLab definition.
    L, a, b = srgb_to_oklab((255, 0, 0))
    assert L == pytest.approx(0.628, abs=1e-3)
    assert a == pytest.approx(0.225, abs=1e-3)
    assert b == pytest.approx(0.126, abs=1e-3)


def test_find_closest_picks_nearest_color() -> None:
    palette = [(0, 0, 0), (255, 0, 0), (0, 0, 255)]

    assert find_closest((250, 10, 10), palette) == 1
    assert find_closest((10, 10, 240), palette) == 2
    assert find_closest((20, 20, 20), palette) == 0


def test_find_closest_uses_perceptual_lightness() -> None:
    # Mid-gray (128) is perceptually closer to white than to black.
    palette = [(0, 0, 0), (255, 255, 255)]

    assert find_closest((128, 128, 128), palette) == 1
    assert find_closest((40, 40, 40), palette) == 0


def test_ties_resolve_to_first_candidate() -> None:
    assert find_closest((10, 20, 30), [(200, 0, 0), (200, 0, 0)]) == 0
    assert find_closest((255, 0, 0), [(0, 0, 0), (255, 0, 0), (255, 0, 0)]) == 1


def test_find_closest_is_deterministic() -> None:
    palette = [(12, 200, 40), (90, 90, 90), (200, 20, 180)]
    results = {find_closest((100, 120, 80), palette) for _ in range(10)}

    assert len(results) == 1


def test_empty_palette_raises() -> None:
    with pytest.raises(EmptyPaletteError):
        find_closest((0, 0, 0), [])
