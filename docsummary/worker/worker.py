import signal
import time
from types import FrameType

from docsummary.config.settings import Settings
from docsummary.database.connection import get_connection
from docsummary.database.models import JobRecord
from docsummary.database.repositories.job_repository import JobRepository
from docsummary.logging.logger import Log
from docsummary.worker.job_runner import JobRunner


class Worker:
    """Poll loop: claim a summary job, run it, sleep when the queue is empty.

    Jobs run one at a time, so a slow extraction or summary only delays the
    queue of this worker process. SIGTERM finishes the current job and stops.
    """

    def __init__(
        self,
        job_repo: JobRepository,
        job_runner: JobRunner,
        settings: Settings,
    ) -> None:
        self._job_repo = job_repo
        self._job_runner = job_runner
        self._settings = settings
        self._stopping = False

    def stop(self) -> None:
        """Ask the loop to exit after the job in progress."""
        self._stopping = True

    def install_signal_handlers(self) -> None:
        signal.signal(signal.SIGTERM, self._handle_signal)

    def run(self, max_jobs: int | None = None) -> None:
        """Poll until stopped or interrupted.

        If max_jobs is set, stop after processing that many jobs (for testing).
        """
        Log.info("Worker started, polling for summary jobs")
        jobs_done = 0
        try:
            while not self._stopping:
                if max_jobs is not None and jobs_done >= max_jobs:
                    break
                job = self._try_claim_job()
                if job is None:
                    Log.debug("No jobs available, sleeping")
                    time.sleep(self._settings.job_poll_interval_seconds)
                    continue
                Log.info(
                    f"Claimed job {job.id} for document {job.uploaded_document_id} "
                    f"({job.summary_length} summary)"
                )
                self._job_runner.run(job)
                jobs_done += 1
        except KeyboardInterrupt:
            Log.info("Worker interrupted")
        Log.info(f"Worker shutting down after {jobs_done} jobs")

    def _try_claim_job(self) -> JobRecord | None:
        """Attempt to claim the next pending job. Gracefully handle DB errors."""
        try:
            with get_connection() as conn:
                return self._job_repo.claim_next_job(conn)
        except Exception as exc:
            Log.warning(f"Database error, will retry: {exc}")
            return None

    def _handle_signal(self, signum: int, _frame: FrameType | None) -> None:
        Log.info(f"Received signal {signum}, stopping after the current job")
        self.stop()
