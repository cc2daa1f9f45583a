from abc import ABC, abstractmethod
from pathlib import Path
from types import TracebackType

from docsummary.extraction.exceptions import ByteSourceConsumedError, DocumentTooLargeError
from docsummary.extraction.models import DocumentBytes, kind_for_mime_type
from docsummary.logging.logger import Log


class ByteSource(ABC):
    """Read-once access to an uploaded document.

    Use as a context manager so that any backing resources are released
    whether extraction succeeds or fails.
    """

    def __init__(
        self,
        *,
        mime_type: str,
        original_name: str,
        max_size_bytes: int | None = None,
    ) -> None:
        self.mime_type = mime_type
        self.original_name = original_name
        self._max_size_bytes = max_size_bytes
        self._consumed = False

    def read(self) -> DocumentBytes:
        """Return the document bytes. A second call raises ByteSourceConsumedError.

        Raises:
            UnsupportedDocumentTypeError: if the MIME type is not a PDF or image.
            DocumentTooLargeError: if the payload exceeds the size ceiling.
        """
        if self._consumed:
            raise ByteSourceConsumedError(f"Byte source for '{self.original_name}' already read")
        self._consumed = True
        kind = kind_for_mime_type(self.mime_type)
        content = self._read_bytes()
        if self._max_size_bytes is not None and len(content) > self._max_size_bytes:
            raise DocumentTooLargeError(
                f"'{self.original_name}' is {len(content)} bytes, "
                f"limit is {self._max_size_bytes} bytes"
            )
        return DocumentBytes(
            content=content,
            kind=kind,
            original_name=self.original_name,
            mime_type=self.mime_type,
        )

    def close(self) -> None:
        """Release backing resources. Never raises."""

    def __enter__(self) -> "ByteSource":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @abstractmethod
    def _read_bytes(self) -> bytes:
        """Load the raw payload."""


class InMemoryByteSource(ByteSource):
    """Byte source over an upload already buffered in memory."""

    def __init__(
        self,
        content: bytes,
        *,
        mime_type: str,
        original_name: str,
        max_size_bytes: int | None = None,
    ) -> None:
        super().__init__(
            mime_type=mime_type,
            original_name=original_name,
            max_size_bytes=max_size_bytes,
        )
        self._content: bytes | None = content

    def _read_bytes(self) -> bytes:
        content = self._content or b""
        self._content = None
        return content


class FileByteSource(ByteSource):
    """Byte source over an upload persisted to disk.

    With ``delete_on_close`` the file is removed when the source is closed.
    """

    def __init__(
        self,
        path: Path,
        *,
        mime_type: str,
        original_name: str,
        max_size_bytes: int | None = None,
        delete_on_close: bool = False,
    ) -> None:
        super().__init__(
            mime_type=mime_type,
            original_name=original_name,
            max_size_bytes=max_size_bytes,
        )
        self.path = path
        self._delete_on_close = delete_on_close

    def _read_bytes(self) -> bytes:
        if not self.path.exists():
            raise FileNotFoundError(f"File not found: {self.path}")
        return self.path.read_bytes()

    def close(self) -> None:
        if not self._delete_on_close:
            return
        try:
            self.path.unlink(missing_ok=True)
            Log.debug(f"Temporary file {self.path} cleaned up")
        except OSError as exc:
            Log.warning(f"Cleanup of {self.path} failed: {exc}")
