from pathlib import Path

import numpy as np
from PIL import Image

from milk_filter.cli import main, parse_cli_args
from milk_filter.core_types import float_to_u8_image
from milk_filter.palette_data import MILK_PALETTE


def _u8_colours(path: Path) -> set:
    arr = np.array(Image.open(path).convert("RGB"))
    return {tuple(row) for row in arr.reshape(-1, 3).tolist()}


def test_parse_defaults(tmp_path: Path) -> None:
    args = parse_cli_args([str(tmp_path)])
    assert args.filter == "milk"
    assert args.palette is None
    assert not args.no_stretch
    assert args.workers >= 1


def test_milk_filter_writes_palette_only_png(ramp_png: Path) -> None:
    assert main([str(ramp_png), "--workers", "1"]) == 0
    out = ramp_png.parent / "milk_ramp0.png"
    assert out.exists()
    milk_u8 = {
        tuple(row)
        for row in float_to_u8_image(MILK_PALETTE.rgb_matrix()[None]).reshape(-1, 3).tolist()
    }
    assert _u8_colours(out) <= milk_u8


def test_random_filter_writes_one_file_per_image(ramp_png: Path, tmp_path: Path) -> None:
    outdir = tmp_path / "out"
    code = main(
        [str(ramp_png), "--filter", "random", "--images", "3", "--colours", "2",
         "--seed", "3", "--outdir", str(outdir), "--workers", "2"]
    )
    assert code == 0
    assert sorted(p.name for p in outdir.iterdir()) == [
        "milk_ramp0.png",
        "milk_ramp1.png",
        "milk_ramp2.png",
    ]
    for path in outdir.iterdir():
        assert len(_u8_colours(path)) <= 2


def test_out_of_range_spread_is_clamped(ramp_png: Path, capsys) -> None:
    code = main([str(ramp_png), "--filter", "random", "--spread", "5", "--seed", "1"])
    assert code == 0
    assert "[warn] spread 5.0 clamped to 0.99" in capsys.readouterr().out


def test_custom_palette(ramp_png: Path) -> None:
    code = main([str(ramp_png), "--palette", "#000000", "#ffffff", "--no-stretch"])
    assert code == 0
    assert _u8_colours(ramp_png.parent / "milk_ramp0.png") == {(0, 0, 0), (255, 255, 255)}


def test_folder_mode_skips_outputs(ramp_png: Path) -> None:
    folder = ramp_png.parent
    Image.new("RGB", (4, 4), (200, 10, 10)).save(folder / "milk_old.png")
    (folder / "notes.txt").write_text("x")
    assert main([str(folder), "--debug"]) == 0
    names = sorted(p.name for p in folder.glob("milk_*.png"))
    assert names == ["milk_old.png", "milk_ramp0.png"]


def test_missing_input(tmp_path: Path, capsys) -> None:
    assert main([str(tmp_path / "nope.png")]) == 2
    assert "[error] not found" in capsys.readouterr().err


def test_bad_counts_and_hex(ramp_png: Path, capsys) -> None:
    assert main([str(ramp_png), "--filter", "random", "--images", "0"]) == 2
    assert main([str(ramp_png), "--palette", "#12"]) == 2
    err = capsys.readouterr().err
    assert "--images must be >= 1" in err
    assert "hex must be" in err
