"""
HuffmanCoder

Ties the pieces together: frequency count -> canonical tree -> dictionary
(leaf symbols + depths) followed by the packed payload, and back.

Two container modes share one code path:
  - character mode: `str` in, `bytes` out. Dictionary entries are packed
    (codepoint u32, depth u8) records, or symbol+digit pairs when the coder
    is created with legacy=True. Payload words are big-endian u32.
  - generic mode: any other sequence in, `list` out. The dictionary is a
    flat symbol, depth, symbol, depth, ... run; payload words are ints.

The payload starts right after the dictionary; the number of dictionary
items consumed while rebuilding the tree is the boundary.
"""

from typing import Optional, Sequence, Union

from huffcodec.bitpack import pack_symbols, unpack_symbols
from huffcodec.bitstream import bytes_to_words, words_to_bytes
from huffcodec.builder import build_tree
from huffcodec.dictionary import (
    FlatEntries, LegacyEntries, PackedEntries,
    flatten_entries, pack_entries, pack_entries_legacy, reconstruct, serialize,
)
from huffcodec.errors import MissingDictionaryError
from huffcodec.tree import HuffmanTree, format_tree

_BYTES_LIKE = (bytes, bytearray, memoryview)

Stream = Union[bytes, list]


class HuffmanCoder:
    """Builds or installs a tree, then packs/unpacks data against it."""

    name = "Huffman"

    def __init__(self, dictionary: Optional[Stream] = None, *, legacy: bool = False):
        self.legacy = legacy
        self.tree: Optional[HuffmanTree] = None
        if dictionary is not None:
            self.set_dictionary(dictionary)

    def build_tree(self, data: Sequence) -> HuffmanTree:
        self.tree = build_tree(data)
        return self.tree

    def _require_tree(self) -> HuffmanTree:
        if self.tree is None:
            raise MissingDictionaryError("No Huffman tree: build one or install a dictionary first")
        return self.tree

    def get_dictionary(self, as_array: bool = False) -> Stream:
        if self.tree is None:
            raise MissingDictionaryError("Impossible to extract dictionary from non-existing tree")
        entries = serialize(self.tree)
        if as_array:
            return flatten_entries(entries)
        if self.legacy:
            return pack_entries_legacy(entries)
        return pack_entries(entries)

    def _entries(self, stream: Stream):
        if isinstance(stream, _BYTES_LIKE):
            buf = bytes(stream)
            return LegacyEntries(buf) if self.legacy else PackedEntries(buf)
        return FlatEntries(stream)

    def set_dictionary(self, stream: Stream) -> int:
        """
        Install the tree described at the start of `stream`.

        Returns the number of stream items (bytes in character mode, list
        items in generic mode) the dictionary occupied.
        """
        if stream is None or len(stream) == 0:
            raise MissingDictionaryError("No dictionary provided")
        entries = self._entries(stream)
        self.tree, consumed = reconstruct(entries)
        return consumed * entries.width

    def compress_data(self, data: Sequence, as_array: bool = False) -> Stream:
        words = pack_symbols(self._require_tree(), data)
        if as_array:
            return words
        return words_to_bytes(words)

    def decompress_data(self, compressed: Stream, as_array: bool = False, start: int = 0):
        """
        Decode a payload against the installed tree. `start` skips whatever
        precedes the payload (e.g. the dictionary) in the same stream.
        """
        tree = self._require_tree()
        if isinstance(compressed, _BYTES_LIKE):
            out = unpack_symbols(tree, bytes_to_words(compressed, start))
        else:
            out = unpack_symbols(tree, compressed, start)
        if as_array:
            return out
        return "".join(out)

    def compress(self, data: Sequence) -> Stream:
        if isinstance(data, str):
            self.build_tree(data)
            return self.get_dictionary() + self.compress_data(data)
        data = list(data)
        self.build_tree(data)
        return self.get_dictionary(as_array=True) + self.compress_data(data, as_array=True)

    def decompress(self, stream: Stream):
        start = self.set_dictionary(stream)
        as_array = not isinstance(stream, _BYTES_LIKE)
        return self.decompress_data(stream, as_array, start)

    def __str__(self):
        return format_tree(self.tree)


def compress(data: Sequence, *, legacy: bool = False) -> Stream:
    return HuffmanCoder(legacy=legacy).compress(data)


def decompress(stream: Stream, *, legacy: bool = False):
    return HuffmanCoder(legacy=legacy).decompress(stream)
