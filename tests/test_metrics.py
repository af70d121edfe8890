import math

import pytest

from huffcodec.builder import build_tree
from huffcodec.dictionary import reconstruct, serialize
from huffcodec.metrics import (
    average_code_length, code_lengths, compression_ratio, entropy_bits, kraft_sum,
)


def test_code_lengths(abc_tree):
    assert code_lengths(abc_tree) == {"a": 1, "b": 2, "c": 2}


def test_kraft_sum():
    assert kraft_sum([1, 2, 2]) == 1.0
    assert kraft_sum([2, 2, 2]) == 0.75
    assert kraft_sum([]) == 0.0


def test_entropy_bits():
    assert entropy_bits("aabb") == pytest.approx(1.0)
    assert entropy_bits("aaaa") == 0.0
    assert entropy_bits("") == 0.0
    assert entropy_bits([1, 2, 3, 4]) == pytest.approx(2.0)


def test_average_code_length(abc_tree):
    assert average_code_length(abc_tree) == pytest.approx(14 / 9)


def test_average_length_within_one_bit_of_entropy():
    text = "it was the best of times, it was the worst of times"
    tree = build_tree(text)
    h = entropy_bits(text)
    assert h <= average_code_length(tree) < h + 1


def test_average_code_length_rebuilt_tree(abc_tree):
    tree, _ = reconstruct(serialize(abc_tree))
    assert average_code_length(tree) == 0.0


def test_compression_ratio():
    assert compression_ratio(10, 5) == 2.0
    assert math.isinf(compression_ratio(10, 0))
