"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class StorageError(DomainException):
    """Persistence boundary failed to complete a call"""

    pass


class StorageReadError(StorageError):
    """Persisted ledger could not be read"""

    pass


class LedgerParseError(StorageReadError):
    """Persisted ledger blob is not valid JSON"""

    pass


class StorageWriteError(StorageError):
    """Ledger could not be written or removed"""

    pass
