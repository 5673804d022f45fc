from sudoku.__main__ import main
from sudoku.extreme import RECORD_SIZE

LINE = "004000067000020080009030000060008050030400000120000000000006000000500000000000300"


def test_generate_prints_problem_and_solution(capsys):
    assert main(["generate", "--level", "easy", "--width", "4"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Easy (")
    assert "Solution" in out


def test_generate_unknown_level(capsys):
    assert main(["generate", "--level", "nightmare"]) == 1
    assert "nightmare" in capsys.readouterr().err


def test_encode(tmp_path, capsys):
    src = tmp_path / "in.txt"
    src.write_text(LINE + "\n" + LINE + "\n")
    dst = tmp_path / "out.dat"
    assert main(["encode", str(src), str(dst)]) == 0
    assert dst.stat().st_size == 2 * RECORD_SIZE
    assert "Wrote 2 records" in capsys.readouterr().out
