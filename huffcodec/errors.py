class HuffmanError(ValueError):
    """Base class for every codec failure (still a ValueError for callers)."""


class EmptyInputError(HuffmanError):
    pass


class MissingDictionaryError(EmptyInputError):
    pass


class UnknownSymbolError(HuffmanError, KeyError):
    def __init__(self, symbol):
        super().__init__(f"Huffman tree does not match input data: no leaf for {symbol!r}")
        self.symbol = symbol

    def __str__(self):
        # KeyError would repr() the message
        return self.args[0]


class MalformedDictionaryError(HuffmanError):
    pass


class TruncatedStreamError(HuffmanError, EOFError):
    pass
