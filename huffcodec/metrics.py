from collections import Counter
from typing import Dict, Iterable

import numpy as np

from huffcodec.tree import HuffmanTree


def code_lengths(tree: HuffmanTree) -> Dict:
    return {tree.nodes[idx].sym: depth for idx, depth in tree.walk_leaves()}


def kraft_sum(lengths: Iterable[int]) -> float:
    L = np.fromiter(lengths, dtype=np.float64)
    return float(np.sum(np.exp2(-L)))


def entropy_bits(data) -> float:
    """Shannon entropy of the symbol distribution, bits/symbol."""
    counts = np.fromiter(Counter(data).values(), dtype=np.float64)
    if counts.size == 0:
        return 0.0
    p = counts / counts.sum()
    return float(-np.sum(p * np.log2(p)))


def average_code_length(tree: HuffmanTree) -> float:
    """Frequency-weighted code length, bits/symbol (0 for a rebuilt tree)."""
    freq = []
    depth = []
    for idx, d in tree.walk_leaves():
        freq.append(tree.nodes[idx].freq)
        depth.append(d)
    f = np.asarray(freq, dtype=np.float64)
    total = f.sum()
    if total == 0:
        return 0.0
    return float(np.dot(f, np.asarray(depth, dtype=np.float64)) / total)


def compression_ratio(original_size: int, compressed_size: int) -> float:
    if compressed_size == 0:
        return float("inf")
    return original_size / compressed_size
