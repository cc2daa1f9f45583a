from pathlib import Path

from docsummary.extraction.byte_source import FileByteSource
from docsummary.processor.exceptions import UnsupportedStorageDiskError
from docsummary.processor.models import UploadedDocument


def document_file_path(files_root: Path, uuid: str) -> Path:
    """Build path to the stored upload: {files_root}/{uuid}"""
    return files_root / uuid


class FileLoader:
    """Resolves where an upload is stored and opens it as a byte source."""

    FILES_ROOT = Path("/app/files")

    def __init__(
        self,
        files_root: Path | None = None,
        max_size_bytes: int | None = None,
        delete_after_read: bool = False,
    ) -> None:
        self._files_root = files_root if files_root is not None else self.FILES_ROOT
        self._max_size_bytes = max_size_bytes
        self._delete_after_read = delete_after_read

    def open(self, document: UploadedDocument) -> FileByteSource:
        """Open the stored upload without reading it yet.

        Raises:
            UnsupportedStorageDiskError: if storage_disk is not 'local'.
        """
        if document.storage_disk != "local":
            raise UnsupportedStorageDiskError(
                f"storage_disk '{document.storage_disk}' is not supported"
            )
        return FileByteSource(
            document_file_path(self._files_root, document.uuid),
            mime_type=document.mime_type,
            original_name=document.original_name,
            max_size_bytes=self._max_size_bytes,
            delete_on_close=self._delete_after_read,
        )
