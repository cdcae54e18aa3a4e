# filename: huffman_container.py

"""
Binary container for Huffman-coded text.

Layout (big-endian)::

    version      uint16   FORMAT_VERSION
    table_size   uint16   byte length of the padded table region
    text_size    uint32   byte length of the padded text region
    table region          entries: [UTF-8 symbol][length: 1 byte][code: length bits]
    text region           concatenated codes, MSB-first

Each region is zero-padded to a byte boundary. The table also carries one
marker entry with code length 0 whose codepoint is the number of padding
bits at the end of the text region, so padding is never decoded as data.
The marker's symbol (U+0000 to U+0007) may also occur in the text; the
marker is written first so a reader keyed on symbol alone sees the real
entry last.
"""

import struct

from bitarray.util import int2ba

from huffman_bits import BitReader, BitWriter
from huffman_errors import (
    DecodeError,
    EncodingLimitError,
    InvalidSymbolError,
    MalformedTreeError,
    TruncatedHeaderError,
    TruncatedTableError,
    TruncatedTextError,
    UnknownFormatVersionError,
    UnrecognizedCodeError,
)

FORMAT_VERSION = 1
HEADER = struct.Struct(">HHI")

MAX_CODE_LENGTH = 0xFF
MAX_TABLE_BYTES = 0xFFFF
MAX_TEXT_BYTES = 0xFFFFFFFF


#
# Table region
#

def serialize_table(codes, padding_bits=None):
    """Pack a code table into bits.

    Returns ``(bits, bit_length)``; the bits are not byte aligned. When
    ``padding_bits`` is given the padding marker entry leads the table.
    """
    writer = BitWriter()
    if padding_bits is not None:
        writer.write_bytes(chr(padding_bits).encode("utf-8"))
        writer.write(0, 8)

    for char, (value, length) in sorted(codes.items(), key=lambda item: (item[1][1], item[1][0])):
        if not 1 <= length <= MAX_CODE_LENGTH:
            raise EncodingLimitError(f"code length {length} for {char!r} does not fit in one byte")
        writer.write_bytes(_encode_symbol(char))
        writer.write(length, 8)
        writer.write(value, length)

    return writer.bits, len(writer)


def deserialize_table(region):
    """Rebuild ``(codes, padding_bits)`` from a table region.

    Trailing bits too short to start another entry are padding. ``padding_bits``
    is None when the region has no padding marker.
    """
    reader = BitReader(region)
    codes = {}
    seen = set()
    padding_bits = None

    while reader.remaining >= 8:
        char = _read_symbol(reader)
        try:
            length = reader.read(8)
            value = reader.read(length)
        except EOFError as exc:
            raise TruncatedTableError(f"table entry for {char!r} is cut off: {exc}") from exc

        if length == 0:
            if padding_bits is not None:
                raise DecodeError("table region holds more than one padding marker")
            padding_bits = ord(char)
            if padding_bits > 7:
                raise DecodeError(f"padding marker out of range: {padding_bits}")
            continue

        if char in codes:
            raise DecodeError(f"duplicate table entry for {char!r}")
        if (value, length) in seen:
            raise DecodeError(f"code {(value, length)} for {char!r} is already assigned")
        seen.add((value, length))
        codes[char] = (value, length)

    return codes, padding_bits


def _encode_symbol(char):
    try:
        return char.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise EncodingLimitError(f"symbol {char!r} has no UTF-8 encoding") from exc


def _symbol_width(lead):
    if lead < 0x80:
        return 1
    if 0xC0 <= lead < 0xE0:
        return 2
    if 0xE0 <= lead < 0xF0:
        return 3
    if 0xF0 <= lead < 0xF8:
        return 4
    raise InvalidSymbolError(f"invalid UTF-8 lead byte 0x{lead:02x} in table region")


def _read_symbol(reader):
    lead = reader.read(8)
    width = _symbol_width(lead)
    try:
        raw = bytes([lead]) + reader.read_bytes(width - 1)
    except EOFError as exc:
        raise TruncatedTableError(f"table symbol is cut off: {exc}") from exc
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidSymbolError(f"invalid UTF-8 symbol {raw!r} in table region") from exc


#
# Text region
#

def encode_text(text, codes):
    """Emit each symbol's code in order. Returns ``(region, padding_bits)``."""
    missing = set(text) - codes.keys()
    if missing:
        raise MalformedTreeError(f"no code for symbols {sorted(missing)!r}")

    code_map = {char: int2ba(value, length=length, endian="big") for char, (value, length) in codes.items()}
    writer = BitWriter()
    writer.bits.encode(code_map, text)
    return writer.to_bytes(), writer.padding


def decode_text(region, inverted, padding_bits=None):
    """Replay the text region against an inverted code table.

    With ``padding_bits`` known, exactly the coded bits are read and a region
    ending mid-code is truncated. Without it every bit is read and a
    non-matching tail is taken to be padding.
    """
    bit_length = None
    if padding_bits is not None:
        bit_length = len(region) * 8 - padding_bits
        if bit_length < 0:
            raise TruncatedTextError(f"text region of {len(region)} bytes cannot hold {padding_bits} padding bits")
    reader = BitReader(region, bit_length)

    if not inverted:
        if len(reader):
            raise UnrecognizedCodeError("text region holds bits but the code table is empty")
        return ""

    max_length = max(length for _, length in inverted)
    out = []
    value = depth = 0
    for bit in reader:
        value = (value << 1) | bit
        depth += 1
        char = inverted.get((value, depth))
        if char is not None:
            out.append(char)
            value = depth = 0
        elif depth >= max_length:
            raise UnrecognizedCodeError(f"no code matches {depth} bits ending at bit {reader.pos}")

    if depth and padding_bits is not None:
        raise TruncatedTextError(f"text region ends {depth} bits into a code")
    return "".join(out)


#
# Container
#

def pack_container(table_region, text_region):
    if len(table_region) > MAX_TABLE_BYTES:
        raise EncodingLimitError(f"table region of {len(table_region)} bytes exceeds {MAX_TABLE_BYTES}")
    if len(text_region) > MAX_TEXT_BYTES:
        raise EncodingLimitError(f"text region of {len(text_region)} bytes exceeds {MAX_TEXT_BYTES}")
    header = HEADER.pack(FORMAT_VERSION, len(table_region), len(text_region))
    return header + bytes(table_region) + bytes(text_region)


def parse_container(blob):
    """Split a container into ``(table_region, text_region)``."""
    if len(blob) < HEADER.size:
        raise TruncatedHeaderError(f"container of {len(blob)} bytes is shorter than the {HEADER.size}-byte header")

    version, table_size, text_size = HEADER.unpack_from(blob)
    if version != FORMAT_VERSION:
        raise UnknownFormatVersionError(version)

    table_end = HEADER.size + table_size
    if len(blob) < table_end:
        raise TruncatedTableError(f"table region declares {table_size} bytes, {len(blob) - HEADER.size} available")

    text_end = table_end + text_size
    if len(blob) < text_end:
        raise TruncatedTextError(f"text region declares {text_size} bytes, {len(blob) - table_end} available")

    return bytes(blob[HEADER.size:table_end]), bytes(blob[table_end:text_end])
