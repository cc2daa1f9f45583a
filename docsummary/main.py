from docsummary.config.settings import Settings
from docsummary.database.connection import close_pool, init_pool
from docsummary.database.repositories.job_repository import JobRepository
from docsummary.logging.logger import Log
from docsummary.processor.processor import build_processor
from docsummary.worker.job_runner import JobRunner
from docsummary.worker.worker import Worker


def main() -> None:
    """Entry point: initialize pool -> build dependencies -> start worker loop."""
    settings = Settings()
    Log.configure(settings.log_level)
    Log.info(
        f"Starting docsummary worker (env={settings.app_env}, pdf_engine={settings.pdf_engine}, "
        f"provider={settings.summarization_provider})"
    )
    init_pool(settings)

    try:
        processor = build_processor(settings)
        job_repo = JobRepository(settings.max_job_attempts)
        job_runner = JobRunner(processor, job_repo, settings)
        worker = Worker(job_repo, job_runner, settings)
        worker.install_signal_handlers()
        worker.run()
    finally:
        close_pool()


if __name__ == "__main__":
    main()
