"""Errors raised by the document import pipeline."""


class DocumentImportError(Exception):
    """Base class for failures while importing an exported document."""


class FormatError(DocumentImportError):
    """The export is not a valid archive or lacks the expected HTML structure."""


class RemoteError(DocumentImportError):
    """The external document source failed or answered unexpectedly."""
