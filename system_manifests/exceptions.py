"""Exceptions related to system-manifests."""

from pathlib import Path

__all__ = [
    "SystemManifestsException",
    "InputException",
    "DiscoveryError",
    "StreamError",
    "ListingError",
    "FileOpenError",
    "DecodeError",
]


class SystemManifestsException(Exception):
    """Generic base exception used for this library."""


class InputException(SystemManifestsException):
    """Raised when a manifest document is not formatted as expected."""


class DiscoveryError(SystemManifestsException):
    """Raised when the directory convention is violated during discovery."""

    def __init__(self, path: Path, reason: str, step: str) -> None:
        super().__init__(f"{step} directory {path} is {reason}")
        self.path = path
        self.reason = reason
        self.step = step


class StreamError(SystemManifestsException):
    """Base for errors yielded as items of a resource stream."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.path = path


class ListingError(StreamError):
    """A directory or one of its entries could not be enumerated."""

    def __init__(self, path: Path, detail: str) -> None:
        super().__init__(path, f"Unable to list {path}: {detail}")


class FileOpenError(StreamError):
    """A manifest file could not be opened or read."""

    def __init__(self, path: Path, detail: str) -> None:
        super().__init__(path, f"Unable to read manifest file {path}: {detail}")


class DecodeError(StreamError):
    """A YAML document could not be decoded into a resource."""

    def __init__(self, path: Path, index: int, detail: str) -> None:
        super().__init__(
            path, f"Unable to decode document {index} of {path}: {detail}"
        )
        self.index = index
