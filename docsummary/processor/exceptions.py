from typing import ClassVar


class ProcessorError(Exception):
    """Base exception for all processor-related errors."""

    remediation: ClassVar[str] = "The document could not be processed."
    retry_suggested: ClassVar[bool] = False


class DocumentNotFoundError(ProcessorError):
    """Raised when a document cannot be found in the database."""

    remediation = "Document not found."


class UnsupportedStorageDiskError(ProcessorError):
    """Raised when a document uses an unsupported storage disk type."""

    remediation = "The document is stored on an unsupported storage disk."
