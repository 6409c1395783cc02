"""Exceptions raised by auradawn."""


class StorageError(Exception):
    """An object storage request failed."""

    def __init__(self, message, key=None):
        super().__init__(message)
        self.key = key
