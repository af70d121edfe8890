from __future__ import annotations
import math
import numbers
from collections import Counter
from typing import Iterable, List, Tuple

import numpy as np

from huffcodec.errors import EmptyInputError
from huffcodec.tree import HuffmanTree, Symbol


def companion_symbol(sym: Symbol) -> Symbol:
    """
    A symbol guaranteed to differ from `sym`, used as the zero-frequency
    partner when the input holds a single distinct symbol. The result is
    always orderable against `sym`.
    """
    if isinstance(sym, str):
        if len(sym) == 1:
            return chr(ord(sym) ^ 0xFF)
        return sym + "+"
    if isinstance(sym, (bytes, bytearray)):
        if len(sym) == 1:
            return bytes([sym[0] ^ 0xFF])
        return bytes(sym) + b"+"
    # bool and numpy integers included
    if isinstance(sym, (numbers.Integral, np.bool_)):
        return ~int(sym)
    if isinstance(sym, numbers.Real):
        x = float(sym)
        if math.isnan(x):
            raise ValueError("NaN has no ordering and cannot be a symbol")
        # next float up, or down from +inf
        return math.nextafter(x, -math.inf if x == math.inf else math.inf)
    if isinstance(sym, tuple):
        # longer tuple with an equal prefix sorts after, no element compare
        return sym + ("+",)
    raise TypeError(f"cannot derive a companion for symbol of type {type(sym).__name__}")


def _two_lowest(tree: HuffmanTree, roots: List[int]) -> Tuple[int, int]:
    """
    Positions (in `roots`) of the least and second-least frequent nodes.
    Ties go to scanning order: the first minimum found is `least`.
    """
    least = second = -1
    for pos, idx in enumerate(roots):
        freq = tree.nodes[idx].freq
        if least < 0 or freq < tree.nodes[roots[least]].freq:
            second, least = least, pos
        elif second < 0 or freq < tree.nodes[roots[second]].freq:
            second = pos
    return least, second


def _least_is_zero(tree: HuffmanTree, least: int, second: int) -> bool:
    a, b = tree.nodes[least], tree.nodes[second]
    if a.height != b.height:
        return a.height < b.height
    if a.is_leaf and b.is_leaf:
        return not (a.sym > b.sym)
    return True


def build_tree(data: Iterable[Symbol]) -> HuffmanTree:
    """
    Build the canonical Huffman tree for `data`.

    Leaves are created in first-seen order. Each round merges the two lowest
    frequency roots; the shallower one becomes the zero child, and two
    equal-height leaves are ordered by symbol. The merged node takes the
    least frequent node's place in the root list.

    When the first two roots tie on frequency the first one is `least`; the
    PHP Huffman class this format comes from picks the second, so shapes
    (not round trips) can differ from its output.
    """
    freqs = Counter(data)
    if not freqs:
        raise EmptyInputError("No data provided to build a Huffman tree")

    tree = HuffmanTree()
    roots = [tree.add_leaf(s, f) for s, f in freqs.items()]

    # Need at least two leaves for a 1-bit code
    if len(roots) == 1:
        only = tree.nodes[roots[0]].sym
        roots.append(tree.add_leaf(companion_symbol(only), 0))

    while len(roots) > 1:
        least, second = _two_lowest(tree, roots)
        a, b = roots[least], roots[second]
        if _least_is_zero(tree, a, b):
            merged = tree.add_internal(a, b)
        else:
            merged = tree.add_internal(b, a)
        roots[least] = merged
        del roots[second]

    tree.root = roots[0]
    return tree
