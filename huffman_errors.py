# filename: huffman_errors.py


class HuffmanError(ValueError):
    """Base class for failures raised by the Huffman engine."""


class UnknownSymbolError(HuffmanError):
    def __init__(self, symbol, position=None):
        self.symbol = symbol
        self.position = position
        where = "" if position is None else f" at position {position}"
        super().__init__(f"symbol {symbol!r}{where} is not in the encoding map")

    # pickle and copy rebuild exceptions from their constructor arguments
    def __reduce__(self):
        return (type(self), (self.symbol, self.position))


class ReservedSymbolError(UnknownSymbolError):
    def __init__(self, symbol, position):
        super().__init__(symbol, position)
        # Overwrite the parent's message, the symbol is known but reserved
        self.args = (
            f"message contains the reserved end-of-message symbol {symbol!r} at position {position}",
        )


class TruncatedInputError(HuffmanError):
    def __init__(self, bits_read, decoded):
        self.bits_read = bits_read
        self.decoded = decoded
        super().__init__(
            f"bit stream ended after {bits_read} bits ({decoded} symbols decoded) "
            "without reaching the end-of-message symbol"
        )

    def __reduce__(self):
        return (type(self), (self.bits_read, self.decoded))


class DegenerateCodeWarning(UserWarning):
    """The corpus produced a single-leaf trie whose only code is empty."""
