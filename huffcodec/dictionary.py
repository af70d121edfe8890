from __future__ import annotations
import operator
import struct
from typing import List, Sequence, Tuple

from huffcodec.errors import MalformedDictionaryError
from huffcodec.tree import HuffmanTree, Symbol

Entry = Tuple[Symbol, int]  # (symbol, depth)

# Packed character entry (big-endian):
# codepoint(u32) depth(u8)
PACKED_FMT = ">IB"
PACKED_SIZE = struct.calcsize(PACKED_FMT)

# Legacy character entry: symbol byte (latin-1) + one ASCII depth digit
LEGACY_SIZE = 2
LEGACY_MAX_DEPTH = 9


def serialize(tree: HuffmanTree) -> List[Entry]:
    """Leaves as (symbol, depth), zero subtree before one subtree."""
    return [(tree.nodes[idx].sym, depth) for idx, depth in tree.walk_leaves()]


def reconstruct(entries, cursor: int = 0) -> Tuple[HuffmanTree, int]:
    """
    Rebuild the exact tree shape from leaf entries starting at `cursor`.

    `entries` is any indexable of (symbol, depth) with a length; the length
    may run past the dictionary (e.g. into a trailing payload). Returns the
    tree and the number of entries consumed.
    """
    tree = HuffmanTree()
    limit = len(entries)
    start = cursor

    # open internal nodes: (depth, child indices resolved so far)
    stack: List[Tuple[int, List[int]]] = [(0, [])]
    while stack:
        depth, kids = stack[-1]
        if len(kids) == 2:
            stack.pop()
            idx = tree.add_internal(kids[0], kids[1])
            if stack:
                stack[-1][1].append(idx)
            else:
                tree.root = idx
            continue

        if cursor >= limit:
            raise MalformedDictionaryError("Dictionary exhausted before the tree was complete")
        sym, d = entries[cursor]
        try:
            d = operator.index(d)
        except TypeError:
            raise MalformedDictionaryError(f"Dictionary depth {d!r} is not an integer") from None
        if d == depth + 1:
            if sym in tree.leaves:
                raise MalformedDictionaryError(f"Duplicate dictionary symbol {sym!r}")
            kids.append(tree.add_leaf(sym))
            cursor += 1
        # n leaves never sit deeper than n - 1
        elif d <= depth or d >= limit:
            raise MalformedDictionaryError(f"Dictionary depth {d} unreachable at depth {depth + 1}")
        else:
            stack.append((depth + 1, []))

    return tree, cursor - start


class FlatEntries:
    """Entries over a flat `symbol, depth, symbol, depth, ...` sequence."""
    width = 2

    def __init__(self, seq: Sequence, start: int = 0):
        self.seq = seq
        self.start = start

    def __len__(self):
        return max(0, (len(self.seq) - self.start) // 2)

    def __getitem__(self, i: int) -> Entry:
        j = self.start + 2 * i
        return self.seq[j], self.seq[j + 1]


class PackedEntries:
    width = PACKED_SIZE

    def __init__(self, buf: bytes, start: int = 0):
        self.buf = buf
        self.start = start

    def __len__(self):
        return max(0, (len(self.buf) - self.start) // PACKED_SIZE)

    def __getitem__(self, i: int) -> Entry:
        cp, depth = struct.unpack_from(PACKED_FMT, self.buf, self.start + i * PACKED_SIZE)
        if cp > 0x10FFFF:
            raise MalformedDictionaryError(f"Invalid code point in dictionary: {cp:#x}")
        return chr(cp), depth


class LegacyEntries:
    width = LEGACY_SIZE

    def __init__(self, buf: bytes, start: int = 0):
        self.buf = buf
        self.start = start

    def __len__(self):
        return max(0, (len(self.buf) - self.start) // LEGACY_SIZE)

    def __getitem__(self, i: int) -> Entry:
        j = self.start + i * LEGACY_SIZE
        sym, digit = self.buf[j], self.buf[j + 1]
        if not 0x30 <= digit <= 0x39:
            raise MalformedDictionaryError(f"Invalid depth digit in dictionary: {digit:#04x}")
        return chr(sym), digit - 0x30


def flatten_entries(entries: List[Entry]) -> list:
    out = []
    for sym, depth in entries:
        out.append(sym)
        out.append(depth)
    return out


def pack_entries(entries: List[Entry]) -> bytes:
    """Character dictionary, one (codepoint, depth) record per leaf."""
    out = bytearray()
    for sym, depth in entries:
        if not (0 <= depth <= 255):
            raise MalformedDictionaryError("depth out of range (0..255)")
        out += struct.pack(PACKED_FMT, ord(sym), depth)
    return bytes(out)


def pack_entries_legacy(entries: List[Entry]) -> bytes:
    """
    Symbol followed by its decimal depth, no delimiter. Only readable back
    when every depth is a single digit, so anything else is refused here.
    """
    out = bytearray()
    for sym, depth in entries:
        if depth > LEGACY_MAX_DEPTH:
            raise MalformedDictionaryError(f"legacy dictionary cannot hold depth {depth} (max {LEGACY_MAX_DEPTH})")
        try:
            out += sym.encode("latin-1")
        except UnicodeEncodeError:
            raise MalformedDictionaryError(f"legacy dictionary cannot hold symbol {sym!r}") from None
        out += str(depth).encode("ascii")
    return bytes(out)
