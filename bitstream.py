# filename: bitstream.py

# Bits are packed most-significant first; a partial final byte is zero-filled
# on its low-order bits.


class BitWriter:
    def __init__(self) -> None:
        self.buf = bytearray()
        self.acc = 0
        self.bits = 0

    def write(self, code: int, length: int) -> None:
        for i in range(length - 1, -1, -1):
            self.acc = (self.acc << 1) | ((code >> i) & 1)
            self.bits += 1
            if self.bits == 8:
                self.buf.append(self.acc)
                self.acc = 0
                self.bits = 0

    def finish(self) -> bytes:
        if self.bits > 0:
            self.acc <<= (8 - self.bits)
            self.buf.append(self.acc & 0xFF)
            self.acc = 0
            self.bits = 0
        return bytes(self.buf)


class BitReader:
    def __init__(self, data) -> None:
        self.data = bytes(data)
        self.byte_idx = 0
        self.acc = 0
        self.bits = 0
        self.bits_read = 0

    def read_bit(self) -> int:
        """Return the next bit, or -1 once the data is exhausted."""
        if self.bits == 0:
            if self.byte_idx >= len(self.data):
                return -1
            self.acc = self.data[self.byte_idx]
            self.byte_idx += 1
            self.bits = 8
        bit = (self.acc >> (self.bits - 1)) & 1
        self.bits -= 1
        self.bits_read += 1
        return bit

    def __iter__(self):
        while True:
            bit = self.read_bit()
            if bit < 0:
                return
            yield bit
