import io

import pytest
from PIL import Image

from picture_ascii import cli
from picture_ascii.conversion.converter import convert


@pytest.fixture
def picture(tmp_path):
    path = tmp_path / "pic.png"
    img = Image.new("RGB", (7, 7), (0, 0, 0))
    img.putpixel((0, 0), (255, 255, 255))
    img.save(path)
    return path


@pytest.fixture
def cfg_path(tmp_path):
    return str(tmp_path / "cfg.json")


def _read(path):
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def test_default_run_compresses_with_window_three(picture, cfg_path, tmp_path, capsys):
    out = tmp_path / "art.txt"
    code = cli.main([str(picture), "--config", cfg_path, "-o", str(out)])
    assert code == 0
    assert "Done!" in capsys.readouterr().out
    expected = convert(Image.open(picture), compress=True, window_size=3)
    assert _read(out) == expected.data
    assert len(expected.rows) == 2


def test_plain_flag(picture, cfg_path, tmp_path):
    out = tmp_path / "art.txt"
    assert cli.main([str(picture), "--plain", "--workers", "2", "--config", cfg_path, "-o", str(out)]) == 0
    lines = _read(out).splitlines()
    assert len(lines) == 7
    assert lines[0] == " ######"


def test_bad_window_writes_nothing(picture, cfg_path, tmp_path, capsys):
    out = tmp_path / "art.txt"
    code = cli.main([str(picture), "--window", "4", "--config", cfg_path, "-o", str(out)])
    assert code == 3
    assert not out.exists()
    assert "Conversion failed" in capsys.readouterr().out


def test_missing_image(cfg_path, tmp_path, capsys):
    out = tmp_path / "art.txt"
    code = cli.main([str(tmp_path / "nope.png"), "--config", cfg_path, "-o", str(out)])
    assert code == 2
    assert not out.exists()
    assert "Could not load image" in capsys.readouterr().out


def test_filename_read_from_stdin(picture, cfg_path, tmp_path, monkeypatch, capsys):
    out = tmp_path / "art.txt"
    monkeypatch.setattr("sys.stdin", io.StringIO(f"{picture}\n"))
    assert cli.main(["--config", cfg_path, "-o", str(out)]) == 0
    assert out.exists()
    printed = capsys.readouterr().out
    assert "introduce the image filename" in printed
    assert "Done!" in printed


def test_empty_stdin(cfg_path, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert cli.main(["--config", cfg_path]) == 2


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--version"])
    assert exc.value.code == 0
    assert "Picture2ASCII" in capsys.readouterr().out
