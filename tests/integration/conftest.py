import os
import uuid
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest
from psycopg.rows import dict_row

from docsummary.config.settings import Settings
from docsummary.database.connection import close_pool, get_connection, init_pool
from docsummary.database.models import JobRecord

SCHEMA_PATH = Path(__file__).parent / "schema.sql"


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "docsummary_test")
    return Settings(summarization_provider="example")


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(
    integration_pool: None,
) -> Generator[list[tuple[str, int]], None, None]:
    cleanup: list[tuple[str, int]] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for table, row_id in cleanup:
                if table == "uploaded_documents":
                    cur.execute(
                        "DELETE FROM summaries WHERE uploaded_document_id = %s", (row_id,)
                    )
            for table, row_id in cleanup:
                if table == "summary_jobs":
                    cur.execute("DELETE FROM summary_jobs WHERE id = %s", (row_id,))
            for table, row_id in cleanup:
                if table == "uploaded_documents":
                    cur.execute("DELETE FROM uploaded_documents WHERE id = %s", (row_id,))
        conn.commit()


@pytest.fixture
def seed_document(
    db_conn: psycopg.Connection[Any],
    integration_cleanup: list[tuple[str, int]],
) -> tuple[int, str]:
    doc_uuid = str(uuid.uuid4())
    with db_conn.cursor() as cur:
        cur.execute(
            """
            INSERT INTO uploaded_documents
            (uuid, storage_disk, original_name, mime_type, file_size_bytes)
            VALUES (%s::uuid, %s, %s, %s, %s)
            RETURNING id
            """,
            (doc_uuid, "local", "report.pdf", "application/pdf", 1024),
        )
        row = cur.fetchone()
        assert row is not None
        document_id = row[0]
    db_conn.commit()
    integration_cleanup.append(("uploaded_documents", document_id))
    return (document_id, doc_uuid)


@pytest.fixture
def seed_job(
    db_conn: psycopg.Connection[Any],
    integration_cleanup: list[tuple[str, int]],
    seed_document: tuple[int, str],
) -> JobRecord:
    document_id = seed_document[0]
    with db_conn.cursor(row_factory=dict_row) as cur:
        cur.execute(
            """
            INSERT INTO summary_jobs (uploaded_document_id, summary_length, status, attempts)
            VALUES (%s, 'short', 'pending', 0)
            RETURNING id, uploaded_document_id, summary_length, status, attempts
            """,
            (document_id,),
        )
        row = cur.fetchone()
        assert row is not None
    db_conn.commit()
    integration_cleanup.append(("summary_jobs", row["id"]))
    return JobRecord(**row)


@pytest.fixture
def files_root(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture
def report_pdf_on_disk(
    seed_document: tuple[int, str],
    files_root: Path,
    report_pdf_bytes: bytes,
) -> tuple[int, str, Path]:
    document_id, doc_uuid = seed_document
    (files_root / doc_uuid).write_bytes(report_pdf_bytes)
    return (document_id, doc_uuid, files_root)
