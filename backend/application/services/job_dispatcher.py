"""
Job dispatcher.

Creates embedding jobs and runs their pipelines on a fixed pool of asyncio
worker tasks fed by a bounded queue:

    Selecting → BuildingMatrix → EmbeddingRelation → Complete

Pipeline failures are caught at the worker boundary and logged; the job
keeps its last committed stage. With record_failures enabled the failure
is also written as the Failed stage.

Dependencies: asyncio, backend.core
System role: Background execution orchestration for embedding jobs
"""

import asyncio
import logging
from dataclasses import dataclass

from backend.core.analysis.engine import AnalysisEngine
from backend.core.exceptions import DispatcherBusyError, PipelineFailure
from backend.core.job_stages import JobStage
from backend.core.job_store import JobStore
from backend.models.job import RecipeFilter
from backend.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkItem:
    """Queued pipeline run for one job."""

    job_id: int
    job_filter: RecipeFilter
    deadline: float | None = None
    correlation_id: str = ""


class JobDispatcher:
    """
    Job dispatcher with a bounded worker pool.

    Submission returns as soon as the job row exists and the work item is
    queued. At most worker_count pipelines run at once; when queue_size
    items are already waiting, new submissions are rejected before any
    job row is created.
    """

    def __init__(
        self,
        store: JobStore,
        engine: AnalysisEngine,
        worker_count: int = 4,
        queue_size: int = 100,
        job_timeout_seconds: float | None = None,
        record_failures: bool = False,
    ) -> None:
        """
        Initialize the dispatcher.

        Args:
            store: Job store used for every status read and write
            engine: Recipe analysis engine invoked by the pipeline
            worker_count: Number of concurrent pipeline workers
            queue_size: Maximum number of queued work items
            job_timeout_seconds: Deadline per job, measured from submission
            record_failures: Write the Failed stage when a pipeline fails
        """
        self._store = store
        self._engine = engine
        self._worker_count = worker_count
        self._job_timeout_seconds = job_timeout_seconds
        self._record_failures = record_failures
        self._queue: asyncio.Queue[WorkItem] = asyncio.Queue(maxsize=queue_size)
        self._workers: list[asyncio.Task] = []

    @property
    def running(self) -> bool:
        return bool(self._workers)

    @property
    def pending(self) -> int:
        """Number of queued work items not yet picked up by a worker."""
        return self._queue.qsize()

    async def start(self) -> None:
        """Spawn the worker tasks. Calling start twice is a no-op."""
        if self._workers:
            return
        self._workers = [
            asyncio.create_task(self._worker(), name=f"embed-worker-{index}")
            for index in range(self._worker_count)
        ]
        logger.info(f"Dispatcher started with {self._worker_count} workers")

    async def stop(self) -> None:
        """
        Cancel the worker tasks and wait for them to exit.

        Jobs interrupted mid-pipeline keep their last committed stage.
        """
        workers, self._workers = self._workers, []
        for task in workers:
            task.cancel()
        await asyncio.gather(*workers, return_exceptions=True)
        if workers:
            logger.info(f"Dispatcher stopped ({self.pending} jobs left queued)")

    async def join(self) -> None:
        """Wait until every queued work item has been processed."""
        await self._queue.join()

    async def submit(self, job_filter: RecipeFilter) -> int:
        """
        Create a job and queue its pipeline.

        Args:
            job_filter: Immutable embedding request

        Returns:
            int: Assigned job id

        Raises:
            DispatcherBusyError: Queue full; no job is created
            StoreError: Job could not be created; nothing is queued
        """
        if self._queue.full():
            logger.warning("Dispatch queue full", extra={"queue_size": self._queue.maxsize})
            raise DispatcherBusyError(
                "Dispatch queue full",
                {"queue_size": self._queue.maxsize},
            )

        job_id = await self._store.create_job()

        deadline = None
        if self._job_timeout_seconds is not None:
            deadline = asyncio.get_running_loop().time() + self._job_timeout_seconds

        # Waits only if the queue filled up while the job row was inserted.
        await self._queue.put(WorkItem(job_id, job_filter, deadline, get_correlation_id()))

        logger.info(
            "Embedding request queued",
            extra={
                "job_id": job_id,
                "algorithm": job_filter.algorithm,
                "tag": job_filter.tag or "None",
                "ingredients": " ".join(job_filter.ingredients),
            },
        )
        return job_id

    async def _worker(self) -> None:
        while True:
            item = await self._queue.get()
            set_correlation_id(item.correlation_id or f"job-{item.job_id}")
            try:
                await self.run_pipeline(item)
            except Exception:
                logger.exception(
                    f"Worker error for id: {item.job_id}",
                    extra={"job_id": item.job_id},
                )
            finally:
                clear_correlation_id()
                self._queue.task_done()

    async def run_pipeline(self, item: WorkItem) -> JobStage:
        """
        Run one job's pipeline to completion or failure.

        Each stage is committed before the next step starts. A failure is
        logged and the job stays at its last committed stage, unless
        record_failures is set, in which case Failed is written too.

        Args:
            item: Work item to run

        Returns:
            JobStage: Stage the job ended in
        """
        job_id = item.job_id
        job_filter = item.job_filter
        stage = JobStage.SELECTING

        try:
            self._check_deadline(item, stage)
            recipes = await self._engine.pull_recipes(job_filter.tag)

            self._check_deadline(item, stage)
            stage = await self._advance(job_id, JobStage.BUILDING_MATRIX)
            # Result unused until an embedding step consumes it.
            await self._engine.make_coolist(recipes, job_filter.ingredients)

            self._check_deadline(item, stage)
            stage = await self._advance(job_id, JobStage.EMBEDDING_RELATION)

            self._check_deadline(item, stage)
            stage = await self._advance(job_id, JobStage.COMPLETE)
        except asyncio.CancelledError:
            logger.warning(
                f"Embedding cancelled for id: {job_id}",
                extra={"job_id": job_id, "stage": stage.value},
            )
            raise
        except Exception as e:
            failure = e if isinstance(e, PipelineFailure) else PipelineFailure(
                f"{type(e).__name__}: {e}", job_id, stage.value
            )
            logger.exception(
                f"Embedding failed for id: {job_id}",
                extra={"job_id": job_id, "stage": stage.value},
            )
            if self._record_failures and await self._record_failure(job_id, failure.message):
                return JobStage.FAILED
            return stage

        logger.info(f"Embedding complete for id: {job_id}", extra={"job_id": job_id})
        return stage

    async def _advance(self, job_id: int, stage: JobStage) -> JobStage:
        await self._store.set_status(job_id, stage)
        return stage

    def _check_deadline(self, item: WorkItem, stage: JobStage) -> None:
        if item.deadline is None:
            return
        if asyncio.get_running_loop().time() >= item.deadline:
            raise PipelineFailure("deadline exceeded", item.job_id, stage.value)

    async def _record_failure(self, job_id: int, detail: str) -> bool:
        """
        Write the Failed stage; returns False when the write itself fails.

        A job whose failure cannot be recorded stays at its last committed
        stage.
        """
        try:
            await self._store.set_status(job_id, JobStage.FAILED, error=detail)
        except Exception as e:
            logger.error(
                f"Could not record failure for id: {job_id}: {type(e).__name__}: {e}",
                extra={"job_id": job_id},
            )
            return False
        return True
