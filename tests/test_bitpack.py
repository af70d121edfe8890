import numpy as np
import pytest

from huffcodec.bitpack import BitReader, BitWriter, pack_symbols, unpack_symbols
from huffcodec.builder import build_tree
from huffcodec.errors import TruncatedStreamError, UnknownSymbolError


class TestBitWriter:

    def test_code_split_across_words(self):
        bw = BitWriter()
        bw.write_code(0, 30)
        bw.write_code(0b1111, 4)
        assert bw.finish().tolist() == [0b11, 0xC0000000]

    def test_exactly_full_word(self):
        bw = BitWriter()
        bw.write_code(0xFFFFFFFF, 32)
        assert bw.finish().tolist() == [0xFFFFFFFF]

    def test_full_word_then_more(self):
        bw = BitWriter()
        bw.write_code(0xFFFFFFFF, 32)
        bw.write_code(1, 1)
        assert bw.finish().tolist() == [0xFFFFFFFF, 0x80000000]

    def test_code_longer_than_a_word(self):
        bw = BitWriter()
        bw.write_code((1 << 40) - 1, 40)
        assert bw.finish().tolist() == [0xFFFFFFFF, 0xFF000000]

    def test_empty_still_flushes_one_word(self):
        words = BitWriter().finish()
        assert words.dtype == np.uint32
        assert words.tolist() == [0]


class TestBitReader:

    def test_msb_first_then_truncated(self):
        br = BitReader([0x80000001])
        bits = [br.read_bit() for _ in range(32)]
        assert bits == [1] + [0] * 30 + [1]
        with pytest.raises(TruncatedStreamError):
            br.read_bit()

    def test_start_offset(self):
        br = BitReader([0, 0x40000000], start=1)
        assert [br.read_bit(), br.read_bit()] == [0, 1]


def test_pack_symbols(abc_tree):
    assert pack_symbols(abc_tree, "aaaabbbcc") == [9, 0x0ABC0000]


def test_unpack_symbols(abc_tree):
    assert unpack_symbols(abc_tree, [9, 0x0ABC0000]) == list("aaaabbbcc")


def test_unpack_from_offset(abc_tree):
    assert unpack_symbols(abc_tree, [7, 7, 9, 0x0ABC0000], start=2) == list("aaaabbbcc")


def test_unpack_numpy_words(abc_tree):
    words = np.array([9, 0x0ABC0000], dtype=">u4")
    assert unpack_symbols(abc_tree, words) == list("aaaabbbcc")


def test_pack_generic_tokens():
    tree = build_tree([1, 1, 1, 2, 2, 3])
    assert pack_symbols(tree, [1, 1, 1, 2, 2, 3]) == [6, 0x15800000]


def test_multi_word_round_trip():
    data = "abcdefgh" * 50 + "aaaaaaaaaaaaaaa"
    tree = build_tree(data)
    words = pack_symbols(tree, data)
    assert len(words) > 3
    assert unpack_symbols(tree, words) == list(data)


def test_pack_subset_of_tree(abc_tree):
    words = pack_symbols(abc_tree, "cab")
    assert unpack_symbols(abc_tree, words) == ["c", "a", "b"]


def test_unknown_symbol(abc_tree):
    with pytest.raises(UnknownSymbolError):
        pack_symbols(abc_tree, "abd")


def test_truncated_payload(abc_tree):
    with pytest.raises(TruncatedStreamError):
        unpack_symbols(abc_tree, [100, 0])
    with pytest.raises(TruncatedStreamError):
        unpack_symbols(abc_tree, [])


def test_zero_count(abc_tree):
    assert unpack_symbols(abc_tree, [0]) == []
