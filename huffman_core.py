# filename: huffman_core.py

import heapq
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

# End of Transmission Block, appended to every message to mark where it ends
ETB_CHAR = "\x17"

ZERO_BIT = "0"
ONE_BIT = "1"

NO_CHILD = -1


class HuffmanNode:
    __slots__ = ("index", "char", "freq", "key")

    def __init__(self, index, char, freq, key):
        self.index = index
        self.char = char
        self.freq = freq
        # Code point used to break weight ties
        self.key = key

    def __lt__(self, other):
        return (self.freq, self.key, self.index) < (other.freq, other.key, other.index)


@dataclass(frozen=True)
class HuffmanTrie:
    """Binary trie stored as parallel tuples indexed by node position.

    Leaves carry a symbol and have no children. Internal nodes carry ``None``
    and own exactly two children, reached by a ``0`` bit (``zero_child``) and
    a ``1`` bit (``one_child``).
    """

    symbols: Tuple[Optional[str], ...]
    weights: Tuple[int, ...]
    zero_child: Tuple[int, ...]
    one_child: Tuple[int, ...]
    root: int

    def is_leaf(self, index: int) -> bool:
        return self.zero_child[index] == NO_CHILD

    @property
    def root_weight(self) -> int:
        return self.weights[self.root]

    @property
    def leaf_count(self) -> int:
        return sum(1 for s in self.symbols if s is not None)

    def __len__(self):
        return len(self.symbols)


class HuffmanLogic:
    def frequency_distribution(self, corpus: str, sentinel: str = ETB_CHAR) -> Dict[str, int]:
        freqs = dict(Counter(corpus))
        # The sentinel ends every message exactly once, whatever the corpus holds
        freqs[sentinel] = 1
        return freqs

    def build_tree(self, freqs: Dict[str, int], sentinel: str = ETB_CHAR) -> HuffmanTrie:
        if not freqs:
            raise ValueError("cannot build a Huffman trie from an empty frequency table")

        symbols = []
        weights = []
        zero_child = []
        one_child = []

        # Leaves are laid out in symbol order so node positions never depend on
        # dict iteration order
        priority_queue = []
        for char in sorted(freqs):
            freq = freqs[char]
            if freq <= 0:
                raise ValueError(f"weight for symbol {char!r} must be positive, got {freq}")
            node = HuffmanNode(len(symbols), char, freq, ord(char))
            symbols.append(char)
            weights.append(freq)
            zero_child.append(NO_CHILD)
            one_child.append(NO_CHILD)
            priority_queue.append(node)
        heapq.heapify(priority_queue)

        # Merged nodes sort as if they carried the sentinel, then by creation order
        merged_key = ord(sentinel)
        while len(priority_queue) > 1:
            zero = heapq.heappop(priority_queue)
            one = heapq.heappop(priority_queue)
            merged = HuffmanNode(len(symbols), None, zero.freq + one.freq, merged_key)
            symbols.append(None)
            weights.append(merged.freq)
            zero_child.append(zero.index)
            one_child.append(one.index)
            heapq.heappush(priority_queue, merged)

        return HuffmanTrie(
            symbols=tuple(symbols),
            weights=tuple(weights),
            zero_child=tuple(zero_child),
            one_child=tuple(one_child),
            root=priority_queue[0].index,
        )

    def generate_codes(self, trie: HuffmanTrie) -> Dict[str, str]:
        codes = {}
        stack = [(trie.root, "")]
        while stack:
            index, current_code = stack.pop()
            if trie.is_leaf(index):
                codes[trie.symbols[index]] = current_code
                continue
            # Pushed last, popped first: zero branches are visited before one branches
            stack.append((trie.one_child[index], current_code + ONE_BIT))
            stack.append((trie.zero_child[index], current_code + ZERO_BIT))
        return codes
