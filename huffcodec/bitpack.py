from typing import List, Sequence

import numpy as np

from huffcodec.errors import TruncatedStreamError
from huffcodec.tree import HuffmanTree

WORD_BITS = 32
WORD_MASK = (1 << WORD_BITS) - 1


class BitWriter:
    def __init__(self):
        self._words: List[int] = []
        self._cur = 0
        self._left = WORD_BITS  # free bits in _cur

    def write_code(self, code: int, length: int):
        """Write 'length' bits of code (MSB-first), splitting across words."""
        while length > self._left:
            spill = length - self._left
            self._words.append(((self._cur << self._left) | (code >> spill)) & WORD_MASK)
            code &= (1 << spill) - 1
            length = spill
            self._cur = 0
            self._left = WORD_BITS
        self._cur = (self._cur << length) | code
        self._left -= length

    def finish(self) -> np.ndarray:
        """Flush the last word, zero-padded on the low end. Always emits it."""
        self._words.append((self._cur << self._left) & WORD_MASK)
        self._cur = 0
        self._left = WORD_BITS
        return np.array(self._words, dtype=np.uint32)


class BitReader:
    def __init__(self, words: Sequence[int], start: int = 0):
        self.words = words
        self.i = start
        self._cur = 0
        self._bit = 0  # unread bits left in _cur, MSB-first

    def read_bit(self) -> int:
        if self._bit == 0:
            if self.i >= len(self.words):
                raise TruncatedStreamError("Unexpected end of bitstream")
            self._cur = int(self.words[self.i])
            self.i += 1
            self._bit = WORD_BITS
        self._bit -= 1
        return (self._cur >> self._bit) & 1


def pack_symbols(tree: HuffmanTree, data: Sequence) -> List[int]:
    """
    Returns [count, word, word, ...]; codes are derived (and memoized) on
    the tree the first time each symbol is met.
    """
    bw = BitWriter()
    for sym in data:
        code, length = tree.code_for(sym)
        bw.write_code(code, length)
    return [len(data)] + bw.finish().tolist()


def unpack_symbols(tree: HuffmanTree, words: Sequence[int], start: int = 0) -> list:
    """
    Decode `words[start]` symbols from the words that follow it.

    Nothing marks the end of the payload: a stream that is too short raises
    TruncatedStreamError, while a corrupted one decodes to garbage.
    """
    if start >= len(words):
        raise TruncatedStreamError("Malformed stream: symbol count missing")
    count = int(words[start])
    nodes = tree.nodes
    root = nodes[tree.root]
    br = BitReader(words, start + 1)
    out = []
    for _ in range(count):
        node = root
        while not node.is_leaf:
            node = nodes[node.one] if br.read_bit() else nodes[node.zero]
        out.append(node.sym)
    return out
