# filename: huffman_errors.py


class HuffmanError(ValueError):
    pass


class EmptyAlphabetError(HuffmanError):
    def __init__(self, message="empty alphabet: nothing to encode"):
        super().__init__(message)


class MalformedTreeError(HuffmanError, AssertionError):
    # Raised for broken tree/table invariants; indicates a bug, not bad input.
    pass


class EncodingLimitError(HuffmanError):
    pass


class DecodeError(HuffmanError):
    pass


class TruncatedHeaderError(DecodeError):
    pass


class TruncatedTableError(DecodeError):
    pass


class TruncatedTextError(DecodeError):
    pass


class UnrecognizedCodeError(DecodeError):
    pass


class InvalidSymbolError(DecodeError):
    pass


class UnknownFormatVersionError(DecodeError):
    def __init__(self, version):
        self.version = version
        super().__init__(f"unknown format version: {version}")
