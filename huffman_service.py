# filename: huffman_service.py

from huffman_container import (
    decode_text,
    deserialize_table,
    encode_text,
    pack_container,
    parse_container,
    serialize_table,
)
from huffman_core import HuffmanLogic
from huffman_errors import EmptyAlphabetError


class HuffmanService:
    def __init__(self):
        self.logic = HuffmanLogic()

    def build_codes(self, text):
        freqs = self.logic.count_frequencies(text)
        tree = self.logic.build_tree(freqs)
        return freqs, self.logic.generate_codes(tree)

    def compress(self, text):
        if not text:
            raise EmptyAlphabetError()
        _, codes = self.build_codes(text)

        text_region, padding_bits = encode_text(text, codes)
        table_bits, _ = serialize_table(codes, padding_bits)
        # bitarray.tobytes() zero-fills the last partial byte
        return pack_container(table_bits.tobytes(), text_region)

    def decompress(self, blob):
        table_region, text_region = parse_container(blob)
        codes, padding_bits = deserialize_table(table_region)
        if not codes and not text_region:
            raise EmptyAlphabetError("container holds no symbols")
        return decode_text(text_region, self.logic.invert_codes(codes), padding_bits)

    def code_table(self, text):
        """Rows of ``(symbol, frequency, value, length)``, shortest codes first."""
        freqs, codes = self.build_codes(text)
        rows = [(char, freqs[char], value, length) for char, (value, length) in codes.items()]
        rows.sort(key=lambda row: (row[3], -row[1], row[2]))
        return rows
