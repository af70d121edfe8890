import pytest

from huffcodec import decode, encode
from huffcodec.bitstream import MAGIC


def run_round_trip(tmp_path, name, content, *flags):
    src = tmp_path / f"{name}.txt"
    packed = tmp_path / "out" / f"{name}.huff"
    restored = tmp_path / f"{name}.restored.txt"
    src.write_bytes(content.encode("utf-8"))
    encode.main(["--input", str(src), "--output", str(packed), *flags])
    decode.main(["--input", str(packed), "--output", str(restored)])
    return packed, restored.read_bytes().decode("utf-8")


def test_text_round_trip(tmp_path, capsys):
    text = "aaaabbbcc\r\nsecond line ✓\n"
    packed, restored = run_round_trip(tmp_path, "text", text, "--show-tree")
    assert restored == text
    assert packed.read_bytes()[:4] == MAGIC
    out = capsys.readouterr().out
    assert "[encode] wrote" in out
    assert "[encode] tree=[null," in out
    assert "[decode] wrote" in out
    assert "mode=text" in out


def test_legacy_round_trip(tmp_path):
    packed, restored = run_round_trip(tmp_path, "legacy", "abracadabra", "--legacy")
    assert restored == "abracadabra"
    body = packed.read_bytes()[8:]
    assert body[:2] == b"a1"


def test_token_round_trip(tmp_path, capsys):
    _, restored = run_round_trip(tmp_path, "tokens", "1 1 1\n2 2 3\n", "--tokens")
    assert restored == "1 1 1 2 2 3\n"
    assert "mode=tokens" in capsys.readouterr().out


def test_tokens_and_legacy_conflict(tmp_path):
    src = tmp_path / "t.txt"
    src.write_text("1 2")
    with pytest.raises(SystemExit):
        encode.main(["--input", str(src), "--output", str(tmp_path / "t.huff"), "--tokens", "--legacy"])


def test_decode_rejects_foreign_file(tmp_path):
    bogus = tmp_path / "bogus.huff"
    bogus.write_bytes(b"MMIP\x01\x00\x00\x00")
    with pytest.raises(ValueError, match="magic"):
        decode.main(["--input", str(bogus), "--output", str(tmp_path / "x.txt")])
