"""
Tests for the command line front end
"""

from PIL import Image

from conftest import stamped_numbers
from main import build_parser, main, settings_from_args
from numbering_settings import PositionPreset
from unit_converter import Unit


def test_stamp_writes_numbered_copy(sample_pdf_path):
    assert main(["stamp", str(sample_pdf_path), "--start-number", "7"]) == 0

    output = sample_pdf_path.with_name("sample_numbered.pdf")
    assert [entry[0] for entry in stamped_numbers(output.read_bytes())] == ["7", "8", "9"]


def test_stamp_with_log_dir(sample_pdf_path, temp_dir):
    output = temp_dir / "custom.pdf"
    log_dir = temp_dir / "logs"
    assert main(["stamp", str(sample_pdf_path), "-o", str(output), "--log-dir", str(log_dir)]) == 0
    assert output.exists()
    assert list(log_dir.glob("numbering_log_*.json"))


def test_dry_run_prints_plan(sample_pdf_path, capsys):
    assert main(["stamp", str(sample_pdf_path), "--visible-from", "2", "--skip", "3", "--dry-run"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out == [
        "page    1: - (before-start)",
        "page    2: 1",
        "page    3: - (skipped)",
    ]
    assert not sample_pdf_path.with_name("sample_numbered.pdf").exists()


def test_preview_writes_png(sample_pdf_path, temp_dir, capsys):
    output = temp_dir / "page2.png"
    assert main(["preview", str(sample_pdf_path), "--page", "2", "--zoom", "50", "-o", str(output)]) == 0

    with Image.open(output) as image:
        assert image.size == (306, 396)
    assert "number 2" in capsys.readouterr().out


def test_missing_input_fails(temp_dir, capsys):
    assert main(["stamp", str(temp_dir / "missing.pdf")]) == 1
    assert "Error:" in capsys.readouterr().err


def test_settings_from_args():
    args = build_parser().parse_args([
        "stamp", "in.pdf", "--range", "2", "5", "--preset", "bottom-inner",
        "--units", "in", "--gutter-preset", "0.75", "--mirrored", "--color", "#336699",
    ])
    numbering, position, font = settings_from_args(args, 10)

    assert numbering.custom_range is True
    assert (numbering.range_from, numbering.range_to) == (2, 5)
    assert position.preset is PositionPreset.BOTTOM_INNER
    assert position.units is Unit.IN
    assert position.gutter_margin == 0.75
    assert position.mirrored_gutter is True
    assert font.color == "#336699"


def test_range_defaults_to_page_count():
    args = build_parser().parse_args(["stamp", "in.pdf"])
    numbering, _, _ = settings_from_args(args, 12)
    assert numbering.custom_range is False
    assert numbering.range_to == 12
