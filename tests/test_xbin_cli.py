from pathlib import Path

from PIL import Image

from simple_xbin_converter import decode_xbin
from simple_xbin_converter.cli import build_parser, main


def _write_sample_png(path: Path, size: tuple[int, int] = (32, 4)) -> Path:
    width, height = size
    image = Image.new("RGB", size)
    image.putdata(
        [((x * 8) % 256, (y * 60) % 256, ((x + y) * 16) % 256) for y in range(height) for x in range(width)]
    )
    image.save(path)
    return path


def test_cli_writes_xbin(tmp_path: Path, capsys) -> None:
    source = _write_sample_png(tmp_path / "sample.png")
    target = tmp_path / "sample.xb"

    assert main([str(source), str(target)]) == 0

    xbin = decode_xbin(target.read_bytes())
    assert (xbin.columns, xbin.rows) == (4, 4)
    assert f"wrote {target}" in capsys.readouterr().out


def test_cli_writes_preview(tmp_path: Path) -> None:
    source = _write_sample_png(tmp_path / "sample.png")
    target = tmp_path / "sample.xb"
    preview = tmp_path / "preview.png"

    assert main([str(source), str(target), "--preview", str(preview), "--method", "maxcoverage"]) == 0

    with Image.open(preview) as img:
        assert img.size == (32, 4)


def test_cli_rejects_width_not_multiple_of_eight(tmp_path: Path, capsys) -> None:
    source = _write_sample_png(tmp_path / "odd.png", size=(12, 2))
    target = tmp_path / "odd.xb"

    assert main([str(source), str(target)]) == 1
    assert not target.exists()
    assert "multiple of 8" in capsys.readouterr().err


def test_cli_reports_missing_input(tmp_path: Path, capsys) -> None:
    target = tmp_path / "out.xb"

    assert main([str(tmp_path / "missing.png"), str(target)]) == 1
    assert not target.exists()
    assert "not found" in capsys.readouterr().err


def test_cli_reports_unwritable_output(tmp_path: Path, capsys) -> None:
    source = _write_sample_png(tmp_path / "sample.png")

    assert main([str(source), str(tmp_path / "no_dir" / "out.xb")]) == 1
    assert "Failed to write" in capsys.readouterr().err


def test_cli_failed_preview_leaves_no_xbin(tmp_path: Path, capsys) -> None:
    source = _write_sample_png(tmp_path / "sample.png")
    target = tmp_path / "sample.xb"

    assert main([str(source), str(target), "--preview", str(tmp_path / "no_dir" / "p.png")]) == 1
    assert not target.exists()
    captured = capsys.readouterr()
    assert "Failed to write preview" in captured.err
    assert "wrote" not in captured.out


def test_cli_failed_output_removes_preview(tmp_path: Path) -> None:
    source = _write_sample_png(tmp_path / "sample.png")
    preview = tmp_path / "preview.png"

    assert main([str(source), str(tmp_path / "no_dir" / "out.xb"), "--preview", str(preview)]) == 1
    assert not preview.exists()


def test_cli_help_describes_libimagequant() -> None:
    help_text = build_parser().format_help()

    assert "libimagequant" in help_text
    assert "built with libimagequant" in help_text
