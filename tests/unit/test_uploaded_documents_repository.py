from unittest.mock import MagicMock, patch

import pytest
from psycopg.types.json import Jsonb

from docsummary.database.repositories.uploaded_documents_repository import (
    UploadedDocumentsRepository,
)
from docsummary.processor.exceptions import DocumentNotFoundError
from docsummary.processor.models import UploadedDocument


def _make_row() -> dict:
    return {
        "id": 1,
        "uuid": "550e8400-e29b-41d4-a716-446655440000",
        "storage_disk": "local",
        "original_name": "budget.pdf",
        "mime_type": "application/pdf",
        "file_size_bytes": 2048,
    }


def _mock_connection(mock_get_conn: MagicMock) -> tuple[MagicMock, MagicMock]:
    """Wire up a mock connection + cursor and return (mock_conn, mock_cursor)."""
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    mock_get_conn.return_value.__enter__ = MagicMock(return_value=mock_conn)
    mock_get_conn.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn, mock_cursor


class TestFindById:
    @patch("docsummary.database.repositories.uploaded_documents_repository.get_connection")
    def test_returns_uploaded_document_when_found(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = _make_row()

        result = UploadedDocumentsRepository().find_by_id(1)

        assert result == UploadedDocument(
            id=1,
            uuid="550e8400-e29b-41d4-a716-446655440000",
            storage_disk="local",
            original_name="budget.pdf",
            mime_type="application/pdf",
            file_size_bytes=2048,
        )

    @patch("docsummary.database.repositories.uploaded_documents_repository.get_connection")
    def test_raises_document_not_found_when_missing(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = None

        with pytest.raises(DocumentNotFoundError, match="Document 999 not found"):
            UploadedDocumentsRepository().find_by_id(999)


class TestUpdateExtractionResult:
    @patch("docsummary.database.repositories.uploaded_documents_repository.get_connection")
    def test_executes_update_query(self, mock_get_conn: MagicMock) -> None:
        _mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 1

        UploadedDocumentsRepository().update_extraction_result(
            42, extracted_text="text", extraction_payload={"isValid": True}
        )

        mock_cursor.execute.assert_called_once()
        sql, params = mock_cursor.execute.call_args.args
        assert "UPDATE uploaded_documents" in sql
        assert "extraction_result" in sql
        assert params[0] == "text"
        assert isinstance(params[1], Jsonb)
        assert params[1].obj == {"isValid": True}
        assert params[2] == 42

    @patch("docsummary.database.repositories.uploaded_documents_repository.get_connection")
    def test_commits_transaction(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 1

        UploadedDocumentsRepository().update_extraction_result(1, "text", {})

        mock_conn.commit.assert_called_once()

    @patch("docsummary.database.repositories.uploaded_documents_repository.get_connection")
    def test_raises_document_not_found_when_no_rows_updated(
        self, mock_get_conn: MagicMock
    ) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 0

        with pytest.raises(DocumentNotFoundError, match="Document 999 not found"):
            UploadedDocumentsRepository().update_extraction_result(999, "text", {})
