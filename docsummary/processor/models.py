from dataclasses import dataclass


@dataclass(frozen=True)
class UploadedDocument:
    """Domain model for an uploaded document (subset of DB columns)."""

    id: int
    uuid: str
    storage_disk: str
    original_name: str
    mime_type: str
    file_size_bytes: int
