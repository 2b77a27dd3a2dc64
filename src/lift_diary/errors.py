"""Exception types raised by the exercise log."""


class DiaryError(Exception):
    """Base class for all lift-diary errors."""


class ValidationError(DiaryError):
    """A record or set is malformed. Raised before any I/O is attempted."""


class StorageUnavailable(DiaryError):
    """The storage medium could not be read."""


class StorageWriteFailed(DiaryError):
    """A save or delete could not be written.

    For deletes, ``removed`` lists the keys that were removed before the
    failure and ``not_removed`` the keys that are still stored.
    """

    def __init__(
        self,
        message: str,
        removed: list[str] | None = None,
        not_removed: list[str] | None = None,
    ):
        super().__init__(message)
        self.removed = list(removed or [])
        self.not_removed = list(not_removed or [])
