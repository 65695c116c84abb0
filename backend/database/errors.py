"""
Storage errors raised by the database layer
"""


class StorageError(Exception):
    """Persistence I/O or consistency failure.

    Raised in place of the underlying SQLAlchemy/OS error, which is kept as
    ``__cause__``. Never retried by the storage layer.
    """
