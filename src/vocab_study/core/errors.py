"""Error types raised by the vocabulary store.

Every error carries a descriptive message; the command boundary hands
``str(error)`` to the front-end unchanged.
"""


class VocabularyStoreError(RuntimeError):
    """Base class for recoverable, per-call store failures."""


class StoreClosedError(VocabularyStoreError):
    """The shared connection is no longer available."""


class StoreQueryError(VocabularyStoreError):
    """A statement failed to prepare or execute."""


class RowDecodeError(VocabularyStoreError):
    """A stored row does not match the VocabularyEntry shape."""


class ImportTransactionError(VocabularyStoreError):
    """A bulk import could not begin, prepare its insert, or commit."""


class StoreStartupError(RuntimeError):
    """The store could not be located or opened. Fatal at startup."""
