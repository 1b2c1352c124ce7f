from __future__ import annotations


class BrewletError(Exception):
    """Base class for all errors raised by brewlet."""


class ManifestError(BrewletError):
    """The manifest record is invalid or cannot be loaded."""


class ChecksumMismatch(BrewletError):
    """The artifact does not match the manifest's checksum."""

    def __init__(self, path: str, expected: str, actual: str) -> None:
        super().__init__(
            f"SHA256 mismatch for {path}: expected {expected}, got {actual}"
        )
        self.path = path
        self.expected = expected
        self.actual = actual


class DownloadFailure(BrewletError):
    """The release location could not be reached."""


class InstallIOError(BrewletError):
    """A rename or move during installation failed."""
