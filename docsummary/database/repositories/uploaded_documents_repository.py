from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from docsummary.database.connection import get_connection
from docsummary.processor.exceptions import DocumentNotFoundError
from docsummary.processor.models import UploadedDocument


class UploadedDocumentsRepository:
    """Database operations for the uploaded_documents table."""

    def find_by_id(self, document_id: int) -> UploadedDocument:
        """Find an uploaded document by ID.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, uuid, storage_disk, original_name, mime_type, file_size_bytes
                    FROM uploaded_documents
                    WHERE id = %s
                    """,
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")

        return UploadedDocument(
            id=row["id"],
            uuid=str(row["uuid"]),
            storage_disk=row["storage_disk"],
            original_name=row["original_name"],
            mime_type=row["mime_type"],
            file_size_bytes=row["file_size_bytes"],
        )

    def update_extraction_result(
        self,
        document_id: int,
        extracted_text: str,
        extraction_payload: dict[str, Any],
    ) -> None:
        """Persist the extracted text and its JSON extraction metadata.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE uploaded_documents
                    SET extracted_text = %s,
                        extraction_result = %s,
                        processed_at = NOW()
                    WHERE id = %s
                    """,
                    (extracted_text, Jsonb(extraction_payload), document_id),
                )
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()
