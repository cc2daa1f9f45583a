from unittest.mock import MagicMock

from docsummary.database.models import JobRecord
from docsummary.database.repositories.job_repository import JobRepository


def _mock_conn(row: dict | None) -> tuple[MagicMock, MagicMock]:
    mock_cursor = MagicMock()
    mock_cursor.fetchone.return_value = row
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn, mock_cursor


class TestClaimNextJob:
    def test_claims_oldest_pending_job(self) -> None:
        mock_conn, mock_cursor = _mock_conn(
            {
                "id": 5,
                "uploaded_document_id": 9,
                "summary_length": "short",
                "status": "pending",
                "attempts": 1,
            }
        )

        job = JobRepository(max_attempts=3).claim_next_job(mock_conn)

        assert job == JobRecord(
            id=5, uploaded_document_id=9, status="claimed", attempts=1, summary_length="short"
        )
        sql, params = mock_cursor.execute.call_args.args
        assert "FOR UPDATE SKIP LOCKED" in sql
        assert params == (3,)
        update_sql, update_params = mock_conn.execute.call_args.args
        assert "status = 'claimed'" in update_sql
        assert update_params == (5,)
        mock_conn.commit.assert_called_once()

    def test_returns_none_when_queue_is_empty(self) -> None:
        mock_conn, _cursor = _mock_conn(None)

        assert JobRepository(max_attempts=3).claim_next_job(mock_conn) is None
        mock_conn.rollback.assert_called_once()
        mock_conn.execute.assert_not_called()
