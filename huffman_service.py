# filename: huffman_service.py

import logging
import warnings
from types import MappingProxyType

from bitstream import BitReader, BitWriter
from huffman_core import ETB_CHAR, HuffmanLogic
from huffman_errors import (
    DegenerateCodeWarning,
    ReservedSymbolError,
    TruncatedInputError,
    UnknownSymbolError,
)

logger = logging.getLogger(__name__)


class HuffmanService:
    """Reusable static Huffman code built from a sample corpus.

    The trie and encoding map are derived once, here, from the character
    distribution of ``corpus``; later messages only need a similar
    distribution. Compressed output is the packed bit string of every message
    symbol followed by the end-of-message symbol, zero-padded to a byte
    boundary. There is no header, so both ends must build the service from
    the same corpus and sentinel.

    Instances are never mutated after construction and can be shared between
    threads.
    """

    def __init__(self, corpus, sentinel=ETB_CHAR):
        if not isinstance(corpus, str):
            raise TypeError(f"corpus must be str, not {type(corpus).__name__}")
        if not isinstance(sentinel, str) or len(sentinel) != 1:
            raise ValueError(f"sentinel must be a single character, got {sentinel!r}")

        self.logic = HuffmanLogic()
        self._sentinel = sentinel

        freqs = self.logic.frequency_distribution(corpus, sentinel)
        self._trie = self.logic.build_tree(freqs, sentinel)
        codes = self.logic.generate_codes(self._trie)

        # Sorted to keep the map readable when debugging
        self._frequencies = MappingProxyType(dict(sorted(freqs.items())))
        self._encoding_map = MappingProxyType(dict(sorted(codes.items())))
        # (code, length) pairs feed the bit writer directly
        self._packed_codes = {
            char: (int(code, 2) if code else 0, len(code)) for char, code in codes.items()
        }

        if self.is_degenerate:
            warnings.warn(
                "corpus yields a single-symbol code; every message compresses to empty output",
                DegenerateCodeWarning,
                stacklevel=2,
            )

        logger.debug(
            "built Huffman code: %d symbols, root weight %d, longest code %d bits",
            self._trie.leaf_count,
            self._trie.root_weight,
            max(len(code) for code in codes.values()),
        )

    @property
    def sentinel(self):
        return self._sentinel

    @property
    def trie(self):
        return self._trie

    @property
    def frequencies(self):
        return self._frequencies

    @property
    def encoding_map(self):
        return self._encoding_map

    @property
    def root_weight(self):
        return self._trie.root_weight

    @property
    def is_degenerate(self):
        return self._trie.is_leaf(self._trie.root)

    def code_for(self, char):
        try:
            return self._encoding_map[char]
        except KeyError:
            raise UnknownSymbolError(char) from None

    def compress(self, message):
        if not isinstance(message, str):
            raise TypeError(f"message must be str, not {type(message).__name__}")

        packed_codes = self._packed_codes
        sentinel = self._sentinel
        writer = BitWriter()
        for position, char in enumerate(message):
            if char == sentinel:
                raise ReservedSymbolError(char, position)
            try:
                code, length = packed_codes[char]
            except KeyError:
                raise UnknownSymbolError(char, position) from None
            writer.write(code, length)

        code, length = packed_codes[sentinel]
        writer.write(code, length)
        return writer.finish()

    def decompress(self, compressed):
        if not isinstance(compressed, (bytes, bytearray, memoryview)):
            raise TypeError(f"compressed data must be bytes-like, not {type(compressed).__name__}")

        trie = self._trie
        # A leaf root can only be the sentinel, whose code is empty
        if self.is_degenerate:
            return ""

        symbols = trie.symbols
        zero_child = trie.zero_child
        one_child = trie.one_child
        root = trie.root
        sentinel = self._sentinel

        reader = BitReader(compressed)
        decoded = []
        node = root
        for bit in reader:
            node = one_child[node] if bit else zero_child[node]
            char = symbols[node]
            if char is None:
                continue
            if char == sentinel:
                return "".join(decoded)
            decoded.append(char)
            node = root

        raise TruncatedInputError(reader.bits_read, len(decoded))
