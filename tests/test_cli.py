import pytest

from cg2d.cli import main
from conftest import AGD_TEXT


def test_cli_writes_ply(agd_file, tmp_path, capsys):
    out = tmp_path / "out.ply"
    assert main(["-i", str(agd_file), "-o", str(out)]) == 0
    assert out.read_text(encoding="utf-8").startswith("ply\n")
    assert "Exported PLY file" in capsys.readouterr().out


def test_cli_off_proposed(agd_file, tmp_path):
    out = tmp_path / "out.off"
    assert main(["-i", str(agd_file), "-o", str(out), "-f", "OFF", "-e", "proposed", "--backend", "scipy"]) == 0
    assert out.read_text(encoding="utf-8").splitlines()[:2] == ["OFF", "5 4 0"]


def test_cli_missing_input(tmp_path):
    assert main(["-i", str(tmp_path / "nope.agd"), "-o", str(tmp_path / "x.ply")]) == 1
    assert not (tmp_path / "x.ply").exists()


def test_cli_usage_errors(agd_file, tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(["-i", str(agd_file), "-o", str(tmp_path / "x.stl"), "-f", "stl"])
    assert exc.value.code == 2
    with pytest.raises(SystemExit):
        main(["-o", str(tmp_path / "x.ply")])


def test_cli_duplicates_need_dedupe(tmp_path):
    src = tmp_path / "dup.agd"
    src.write_text(AGD_TEXT + "37.000000,-120.000000,100.0,101.0,-1.000,GR,again\n", encoding="utf-8")
    out = tmp_path / "dup.ply"
    assert main(["-i", str(src), "-o", str(out)]) == 1
    assert main(["-i", str(src), "-o", str(out), "--dedupe"]) == 0
    assert "element vertex 5" in out.read_text(encoding="utf-8")
