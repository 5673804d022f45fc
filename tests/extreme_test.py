import random

import pytest

from sudoku.extreme import RECORD_SIZE, decode_record, encode_file, encode_record, load_extreme, record_count
from sudoku.grid import count_givens, from_line, is_consistent

PUZZLES = [
    "009050000308000004000020007001900800000004200000000560000800000020000000000001000",
    "401007000900000500000006300800100090000300007000520000000000008030000000000000010",
]


def write_dataset(tmp_path, lines, name="puzzles.dat"):
    text = tmp_path / "puzzles.txt"
    text.write_text("\n".join(lines) + "\n")
    out = tmp_path / name
    assert encode_file(text, out) == len(lines)
    return out


def test_encode_record_packs_nibble_triples():
    line = "050000000" + "000400000" + "0" * 63
    record = encode_record(line)
    assert len(record) == RECORD_SIZE
    # (0, 1, 5) then (1, 3, 4)
    assert record[:3] == bytes([0x01, 0x51, 0x34])
    assert record[3:] == bytes(RECORD_SIZE - 3)


def test_encode_record_odd_triple_count():
    line = "7" + "0" * 80
    assert encode_record(line)[:2] == bytes([0x00, 0x70])


def test_encode_record_rejects_bad_lines():
    with pytest.raises(ValueError):
        encode_record(PUZZLES[0][:80])
    with pytest.raises(ValueError):
        encode_record("1" * 81)


@pytest.mark.parametrize("line", PUZZLES)
def test_decode_reproduces_encoded_givens(line):
    board, given = decode_record(encode_record(line))
    assert given == 17
    assert board == from_line(line)


def test_decode_empty_record():
    board, given = decode_record(bytes(RECORD_SIZE))
    assert given == 0
    assert count_givens(board) == 0


def test_decode_truncated_record_yields_fewer_givens():
    record = encode_record(PUZZLES[0])
    board, given = decode_record(record[:9])
    assert given == 6
    assert count_givens(board) == 6


def test_encode_file_appends_and_stops_at_blank_line(tmp_path):
    text = tmp_path / "puzzles.txt"
    text.write_text(PUZZLES[0] + "\n\n" + PUZZLES[1] + "\n")
    out = tmp_path / "out.dat"
    assert encode_file(text, out) == 1
    assert encode_file(text, out) == 1
    assert out.stat().st_size == 2 * RECORD_SIZE
    assert encode_file(text, out, append=False) == 1
    assert out.stat().st_size == RECORD_SIZE


def test_load_extreme_from_file(tmp_path):
    path = write_dataset(tmp_path, PUZZLES)
    assert record_count(path) == 2
    seen = set()
    rng = random.Random(3)
    for _ in range(20):
        board, given = load_extreme(rng=rng, source=path)
        assert given == 17
        seen.add("".join(str(v) for row in board for v in row))
    assert seen == set(PUZZLES)


def test_load_extreme_missing_file(tmp_path):
    assert load_extreme(source=tmp_path / "missing.dat") is None


def test_load_extreme_empty_file(tmp_path):
    path = tmp_path / "empty.dat"
    path.write_bytes(b"")
    assert load_extreme(source=path) is None


def test_packaged_dataset():
    assert record_count() > 0
    board, given = load_extreme()
    assert given == 17
    assert count_givens(board) == 17
    assert is_consistent(board)
