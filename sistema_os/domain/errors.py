"""Errors raised by the storage collaborators."""


class StoreError(Exception):
    """A remote store operation failed (connection, constraint, expired session)."""


class NotFound(LookupError):
    """The referenced entity does not exist in the store."""


__all__ = ["NotFound", "StoreError"]
