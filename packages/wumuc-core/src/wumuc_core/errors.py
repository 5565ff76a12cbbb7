"""Exception hierarchy for update creation."""

from __future__ import annotations


class UpdateError(Exception):
    """Base class for failures raised while building an update.

    Wraps the underlying exception (if any) with the operation that failed
    and the path it was working on.
    """

    def __init__(
        self,
        operation: str,
        message: str,
        path: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.operation = operation
        self.path = path
        detail = f"{operation} failed"
        if path:
            detail += f" for '{path}'"
        super().__init__(f"{detail}: {message}")
        if cause is not None:
            self.__cause__ = cause


class ReadError(UpdateError):
    """An archive entry or filesystem path could not be read."""


class CopyError(UpdateError):
    """Writing into the staging area failed."""


class InputError(UpdateError):
    """The interactive input stream is closed or unreadable."""


class DescriptorError(UpdateError):
    """The update descriptor is missing or malformed."""


class ValidationError(Exception):
    """A user selection was malformed or out of range.

    Only ever raised and handled inside the placement state machine.
    """

    def __init__(self, raw: str, reason: str) -> None:
        self.raw = raw
        self.reason = reason
        super().__init__(f"invalid selection {raw!r}: {reason}")
