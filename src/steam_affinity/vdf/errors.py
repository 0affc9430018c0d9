"""Exceptions raised by the VDF engine."""

from typing import Optional, Sequence


class VdfError(Exception):
    """Base class for all VDF errors."""


class MalformedDocumentError(VdfError):
    """Unbalanced braces, a brace without a key, or an unclosed object."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class DuplicateKeyError(VdfError):
    """A key already exists in the object it is being inserted into."""

    def __init__(self, key: str, line_number: Optional[int] = None):
        self.key = key
        self.line_number = line_number
        message = f"duplicate key {key!r}"
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class PathNotFoundError(VdfError):
    """A path segment is missing or is not an object."""

    def __init__(self, path: Sequence[str], missing: Optional[str] = None):
        self.path = list(path)
        self.missing = missing
        shown = "/".join(self.path) or "<empty>"
        if missing is not None:
            message = f"path {shown!r} not found (no object at {missing!r})"
        else:
            message = f"path {shown!r} not found"
        super().__init__(message)
