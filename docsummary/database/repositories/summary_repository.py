from docsummary.database.connection import get_connection
from docsummary.database.models import SummaryRecord


class SummaryRepository:
    """Write side of the summaries table; querying it is not this worker's job."""

    def insert(self, record: SummaryRecord) -> int:
        """Insert a summary and return its ID."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO summaries
                    (uploaded_document_id, filename, original_name, file_type,
                     extracted_text, summary, summary_length, provider_used,
                     model_name, processing_time_ms, file_size)
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                    RETURNING id
                    """,
                    (
                        record.uploaded_document_id,
                        record.filename,
                        record.original_name,
                        record.file_type,
                        record.extracted_text_sample,
                        record.summary,
                        record.summary_length,
                        record.provider_used,
                        record.model_name,
                        record.processing_time_ms,
                        record.file_size,
                    ),
                )
                row = cur.fetchone()
            conn.commit()
        if row is None:
            raise RuntimeError("INSERT INTO summaries returned no id")
        return int(row[0])
