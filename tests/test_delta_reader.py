import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from errors import DecodeError, TransientReadError  # noqa: E402
from tailing import DeltaReader, read_delta  # noqa: E402


def test_reads_from_offset_to_end(tmp_path):
    target = tmp_path / "app.log"
    target.write_bytes(b"old\nnew line\n")

    assert read_delta(target, 4, encoding="utf-8") == "new line\n"


def test_end_bounds_the_read(tmp_path):
    target = tmp_path / "app.log"
    target.write_bytes(b"old\nnew\nlater\n")

    assert read_delta(target, 4, 8, encoding="utf-8") == "new\n"


def test_start_past_end_yields_empty(tmp_path):
    target = tmp_path / "app.log"
    target.write_bytes(b"tiny")

    assert read_delta(target, 100, encoding="utf-8") == ""


def test_end_before_start_yields_empty(tmp_path):
    target = tmp_path / "app.log"
    target.write_bytes(b"0123456789")

    assert read_delta(target, 8, 3, encoding="utf-8") == ""


def test_missing_file_is_transient(tmp_path):
    with pytest.raises(TransientReadError) as exc_info:
        read_delta(tmp_path / "gone.log", 0, encoding="utf-8")
    assert isinstance(exc_info.value.underlying, OSError)


def test_invalid_bytes_raise_decode_error(tmp_path):
    target = tmp_path / "app.log"
    target.write_bytes(b"\xff\xfe\xfa\n")

    with pytest.raises(DecodeError):
        read_delta(target, 0, encoding="utf-8")


def test_reader_does_not_block_a_concurrent_writer(tmp_path):
    target = tmp_path / "app.log"
    target.write_bytes(b"")
    reader = DeltaReader(target, "utf-8")

    with open(target, "a", encoding="utf-8") as writer:
        writer.write("first\n")
        writer.flush()
        assert reader.read(0) == "first\n"
        writer.write("second\n")
        writer.flush()
        assert reader.read(6) == "second\n"


def test_multibyte_character_split_across_reads(tmp_path):
    target = tmp_path / "app.log"
    encoded = "café\n".encode("utf-8")
    target.write_bytes(encoded)
    reader = DeltaReader(target, "utf-8")

    # Cut inside the two-byte "é".
    first = reader.read(0, 4)
    second = reader.read(4, len(encoded))

    assert first == "caf"
    assert first + second == "café\n"


def test_decode_error_resets_reader_state(tmp_path):
    target = tmp_path / "app.log"
    target.write_bytes(b"\xff\n")
    reader = DeltaReader(target, "utf-8")

    with pytest.raises(DecodeError):
        reader.read(0)

    with open(target, "ab") as f:
        f.write(b"ok\n")
    assert reader.read(2) == "ok\n"
