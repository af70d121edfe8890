from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Hashable, Iterator, List, Optional, Tuple

from huffcodec.errors import UnknownSymbolError

Symbol = Hashable  # must also support a total order (tie-breaks)
Code = Tuple[int, int]  # (code_int, code_len), bit 0 = edge nearest the leaf


@dataclass
class Node:
    freq: int = 0
    sym: Optional[Symbol] = None
    height: int = 0
    zero: Optional[int] = None
    one: Optional[int] = None
    parent: Optional[int] = None

    @property
    def is_leaf(self) -> bool:
        return self.zero is None


class HuffmanTree:
    """
    Arena-backed Huffman tree.

    Nodes live in `nodes` and refer to each other by index. `leaves` maps
    each symbol to its leaf index; `parent` links are only followed when
    deriving codes. Codes are memoized per leaf index on first use and stay
    valid for the lifetime of the tree object.
    """

    def __init__(self):
        self.nodes: List[Node] = []
        self.root: Optional[int] = None
        self.leaves: Dict[Symbol, int] = {}
        self._codes: Dict[int, Code] = {}

    def __len__(self) -> int:
        return len(self.leaves)

    def __getitem__(self, idx: int) -> Node:
        return self.nodes[idx]

    def add_leaf(self, sym: Symbol, freq: int = 0) -> int:
        self.nodes.append(Node(freq=freq, sym=sym))
        idx = len(self.nodes) - 1
        self.leaves[sym] = idx
        return idx

    def add_internal(self, zero: int, one: int) -> int:
        """Join two existing roots under a new node and return its index."""
        z, o = self.nodes[zero], self.nodes[one]
        self.nodes.append(Node(
            freq=z.freq + o.freq,
            height=1 + max(z.height, o.height),
            zero=zero,
            one=one,
        ))
        idx = len(self.nodes) - 1
        z.parent = idx
        o.parent = idx
        return idx

    def leaf_for(self, sym: Symbol) -> int:
        try:
            return self.leaves[sym]
        except (KeyError, TypeError):
            raise UnknownSymbolError(sym) from None

    def code_of(self, leaf: int) -> Code:
        cached = self._codes.get(leaf)
        if cached is not None:
            return cached
        code, length = 0, 0
        cur = leaf
        parent = self.nodes[cur].parent
        while parent is not None:
            if self.nodes[parent].one == cur:
                code |= 1 << length
            length += 1
            cur = parent
            parent = self.nodes[cur].parent
        self._codes[leaf] = (code, length)
        return code, length

    def code_for(self, sym: Symbol) -> Code:
        return self.code_of(self.leaf_for(sym))

    def walk_leaves(self) -> Iterator[Tuple[int, int]]:
        """Yield (leaf_index, depth), zero subtree before one subtree."""
        if self.root is None:
            return
        stack = [(self.root, 0)]
        while stack:
            idx, depth = stack.pop()
            node = self.nodes[idx]
            if node.is_leaf:
                yield idx, depth
            else:
                # one pushed first so zero is visited first
                stack.append((node.one, depth + 1))
                stack.append((node.zero, depth + 1))


def format_tree(tree: Optional[HuffmanTree]) -> str:
    """
    Render as [sym,freq,height](zero,one); leaves as [sym,freq,height].
    Internal nodes print `null` in the symbol slot.
    """
    if tree is None or tree.root is None:
        return "no tree"

    out = []
    # node indices interleaved with literal punctuation
    stack: list = [tree.root]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            out.append(item)
            continue
        n = tree.nodes[item]
        if n.is_leaf:
            out.append(f"[{n.sym},{n.freq},{n.height}]")
        else:
            out.append(f"[null,{n.freq},{n.height}](")
            stack.extend([")", n.one, ",", n.zero])
    return "".join(out)
