class BinStoreError(Exception):
    """Base class for every error raised by the packed array store."""


class ArgumentError(BinStoreError, ValueError):
    """A construction parameter is out of its allowed range."""


class ValueOutOfRange(BinStoreError, ValueError):
    """A value does not fit into the store's element bit width."""


class IndexOutOfBounds(BinStoreError, IndexError):
    """An element's byte span lies outside the allocated data region."""
