"""Persistence exceptions."""


class PersistenceError(Exception):
    """Raised when the durable store did not confirm a read or write.

    In-memory state (including the cache tier) is never advanced past a
    write that raised this error.
    """

    pass
