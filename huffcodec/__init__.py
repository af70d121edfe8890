from huffcodec.codec import HuffmanCoder, compress, decompress
from huffcodec.errors import (
    EmptyInputError,
    HuffmanError,
    MalformedDictionaryError,
    MissingDictionaryError,
    TruncatedStreamError,
    UnknownSymbolError,
)

__all__ = [
    "HuffmanCoder",
    "compress",
    "decompress",
    "HuffmanError",
    "EmptyInputError",
    "MissingDictionaryError",
    "UnknownSymbolError",
    "MalformedDictionaryError",
    "TruncatedStreamError",
]
