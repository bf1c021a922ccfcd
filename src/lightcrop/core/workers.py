"""
workers.py: Fixed-size thread pool that runs the crop engine over a batch of jobs.

The job queue is filled completely before any worker starts, so workers only ever
drain it. Each worker writes to its own temporary path and renames the result into
place once the final name is known. A failed job is recorded and never stops the
batch.
"""

import queue
import threading
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, Union

from .errors import ConfigurationError
from .file_operations import commit, discard, final_path, temp_path
from .materializer import corner_crop_image, crop_image
from .models import BatchSummary, CornerSettings, CropResult, CropSettings, Job, WorkerOutcome
from .scan_engine import collect_jobs
from ..ui.rich_ui import ConsoleReporter
from ..utils.log_utils import get_logger

logger = get_logger(__name__)

DEFAULT_THREADS = 4

Operation = Callable[[Job, Path], CropResult]


def run_job(job: Job, output_path: Path) -> CropResult:
    """Run the operation selected by the job's settings, writing to `output_path`."""
    settings = job.settings
    if isinstance(settings, CornerSettings):
        return corner_crop_image(job.input_path, output_path, settings.corner, settings.percent)
    return crop_image(job.input_path, output_path, settings.tolerance, settings.max_crop_percent)


class WorkerPool:
    """
    Thread pool for cropping images with collision-free output placement.

    Counters are guarded by their own lock; console output is serialized by the
    reporter's lock, so neither can block the other.
    """

    def __init__(
        self,
        jobs: List[Job],
        threads: int = DEFAULT_THREADS,
        reporter: Optional[ConsoleReporter] = None,
        operation: Operation = run_job,
    ) -> None:
        if threads < 1:
            raise ConfigurationError("--threads must be at least 1")
        self.jobs = list(jobs)
        self.threads = threads
        self.reporter = reporter
        self.operation = operation

        self.summary = BatchSummary()
        self.total_count = len(self.jobs)
        self._outcomes: Dict[int, WorkerOutcome] = {}
        self._counter_lock = threading.Lock()
        self._queue: "queue.Queue[Tuple[int, Job]]" = queue.Queue(maxsize=max(1, self.total_count))

    def run(self) -> BatchSummary:
        """
        Process every job and return the run totals.

        Returns:
            BatchSummary whose outcomes are listed in job order.
        """
        for index, job in enumerate(self.jobs):
            self._queue.put_nowait((index, job))

        logger.info(f"Starting {self.total_count} jobs on {self.threads} threads")
        workers = [
            threading.Thread(target=self._worker, args=(worker_id,), name=f"lightcrop-worker-{worker_id}")
            for worker_id in range(self.threads)
        ]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join()

        self.summary.outcomes = [self._outcomes[i] for i in range(self.total_count)]
        logger.info(f"Completed {self.summary.total}/{self.total_count} jobs")
        return self.summary

    def _worker(self, worker_id: int) -> None:
        while True:
            # Queue is pre-filled, so empty means done
            try:
                index, job = self._queue.get_nowait()
            except queue.Empty:
                return
            try:
                outcome = self._process_single(worker_id, job)
            except Exception as e:
                # Every job gets an outcome, even on unexpected errors
                logger.exception("Unexpected failure while processing %s", job.input_path)
                outcome = WorkerOutcome(filename=job.filename, success=False, message=str(e))
            finally:
                self._queue.task_done()
            self._record(index, outcome)

    def _process_single(self, worker_id: int, job: Job) -> WorkerOutcome:
        """Run one job end to end: process into a temp file, then rename into place."""
        if self.reporter:
            self.reporter.job_started(job.filename)

        # Temp name embeds the worker id so concurrent jobs never share a path
        tmp = temp_path(job.output_dir, worker_id, job.filename)
        try:
            result = self.operation(job, tmp)
        except Exception as e:
            discard(tmp)
            logger.debug("Job %s failed", job.input_path, exc_info=True)
            return self._failed(job, str(e))

        # Final name depends on whether the engine actually cropped
        dest = final_path(job.output_dir, job.filename, result.was_cropped)
        try:
            commit(tmp, dest)
        except OSError as e:
            logger.debug("Rename %s -> %s failed", tmp, dest, exc_info=True)
            return self._failed(job, f"renaming output file: {e}")

        if self.reporter:
            self.reporter.job_succeeded(result.message, dest)
        return WorkerOutcome(
            filename=job.filename,
            success=True,
            was_cropped=result.was_cropped,
            message=result.message,
            output_path=dest,
        )

    def _failed(self, job: Job, reason: str) -> WorkerOutcome:
        if self.reporter:
            self.reporter.job_failed(reason)
        return WorkerOutcome(filename=job.filename, success=False, message=reason)

    def _record(self, index: int, outcome: WorkerOutcome) -> None:
        with self._counter_lock:
            self._outcomes[index] = outcome
            # Failures count as errors only, never as processed
            if not outcome.success:
                self.summary.errors += 1
                return
            self.summary.processed += 1
            if outcome.was_cropped:
                self.summary.cropped += 1
            else:
                self.summary.unchanged += 1


def process_directory(
    input_dir: Path,
    output_dir: Path,
    settings: Union[CropSettings, CornerSettings],
    threads: int = DEFAULT_THREADS,
    reporter: Optional[ConsoleReporter] = None,
) -> BatchSummary:
    """
    Convenience function to crop every supported image under `input_dir`.

    Args:
        input_dir: Directory tree to scan.
        output_dir: Existing directory receiving the results.
        settings: Engine or corner-crop parameters shared by every job.
        threads: Number of worker threads.
        reporter: Optional console reporter for per-job lines and the summary.

    Returns:
        BatchSummary for the run. An empty summary when no images were found.
    """
    jobs = collect_jobs(input_dir, output_dir, settings)
    if not jobs:
        if reporter:
            reporter.no_images()
        return BatchSummary()

    if reporter:
        reporter.run_started(len(jobs), threads)
    summary = WorkerPool(jobs, threads=threads, reporter=reporter).run()
    if reporter:
        reporter.summary(summary)
    return summary
