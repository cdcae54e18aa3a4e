# filename: huffman_bits.py

from bitarray import bitarray
from bitarray.util import ba2int, int2ba


def padding_for(bit_length):
    """Zero bits needed to reach the next byte boundary (0 when aligned)."""
    return (8 - bit_length % 8) % 8


class BitWriter:
    # Accumulates MSB-first bits; to_bytes() zero-pads the final byte.

    def __init__(self):
        self.bits = bitarray(endian="big")

    def __len__(self):
        return len(self.bits)

    def write(self, value, length):
        if length == 0:
            return
        self.bits.extend(int2ba(value, length=length, endian="big"))

    def write_bytes(self, data):
        for byte in data:
            self.write(byte, 8)

    @property
    def padding(self):
        return padding_for(len(self.bits))

    def to_bytes(self):
        return self.bits.tobytes()


class BitReader:
    """Reads MSB-first bit fields from a byte buffer.

    ``bit_length`` limits the readable bits, e.g. to exclude trailing
    padding. Reads past the end raise ``EOFError`` and leave the position
    untouched.
    """

    def __init__(self, data, bit_length=None):
        self.bits = bitarray(endian="big")
        self.bits.frombytes(bytes(data))
        if bit_length is not None:
            del self.bits[bit_length:]
        self.pos = 0

    def __len__(self):
        return len(self.bits)

    @property
    def remaining(self):
        return len(self.bits) - self.pos

    def read_bit(self):
        if self.pos >= len(self.bits):
            raise EOFError("bitstream exhausted")
        bit = self.bits[self.pos]
        self.pos += 1
        return bit

    def read(self, n):
        if n > self.remaining:
            raise EOFError(f"need {n} bits, {self.remaining} remain")
        if n == 0:
            return 0
        value = ba2int(self.bits[self.pos:self.pos + n])
        self.pos += n
        return value

    def read_bytes(self, n):
        if 8 * n > self.remaining:
            raise EOFError(f"need {n} bytes, {self.remaining} bits remain")
        return bytes(self.read(8) for _ in range(n))

    def __iter__(self):
        while self.pos < len(self.bits):
            yield self.read_bit()
