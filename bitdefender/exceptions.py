"""Error types raised by the plugin.

Each one is surfaced to the invoking boundary (CLI exit status or HTTP
response); nothing here is retried.
"""

from typing import List, Optional


class BitdefenderError(Exception):
    """Base class for all plugin errors."""


class ScannerError(BitdefenderError):
    """The scanner binary could not be run or exited with an error status."""

    def __init__(
        self,
        message: str,
        command: Optional[List[str]] = None,
        path: Optional[str] = None,
        return_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.command = command or []
        self.path = path
        self.return_code = return_code


class ScannerTimeoutError(ScannerError):
    """The scanner did not finish within the configured timeout."""


class ParseIntegrityError(BitdefenderError):
    """The scanner reported an infection without naming the signature."""

    def __init__(self, line: str):
        super().__init__(f"Virus name extracted was empty: {line!r}")
        self.line = line


class SignatureUpdateError(BitdefenderError):
    """Signatures were updated but the UPDATED sentinel could not be written."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to write signature date to {path}: {reason}")
        self.path = path


class StorageError(BitdefenderError):
    """Indexing plugin results into Elasticsearch failed."""

    def __init__(self, message: str, plugin: str = "", doc_id: str = ""):
        super().__init__(message)
        self.plugin = plugin
        self.doc_id = doc_id


class WebhookError(BitdefenderError):
    """POSTing results to the Malice webhook failed."""
