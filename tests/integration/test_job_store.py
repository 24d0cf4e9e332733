"""
Test suite for JobStore against a SQLite database.

Covers id assignment, stage writes and their transition checks, lookups of
unknown ids, and translation of driver failures into store errors.

System role: Verification of job persistence for status polling
"""

import asyncio
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError, ProgrammingError

from backend.core.exceptions import (
    ConnectivityError,
    InvalidTransitionError,
    JobNotFoundError,
    StoreError,
)
from backend.core.job_stages import JobStage
from backend.core.job_store import MAX_ERROR_LENGTH, JobStore


class TestCreateJob:
    """Test suite for JobStore.create_job()."""

    @pytest.mark.asyncio
    async def test_create_job_starts_in_selecting(self, job_store: JobStore) -> None:
        job_id = await job_store.create_job()

        snapshot = await job_store.get_status(job_id)
        assert snapshot.stage is JobStage.SELECTING
        assert snapshot.error is None

    @pytest.mark.asyncio
    async def test_create_job_ids_increase(self, job_store: JobStore) -> None:
        first = await job_store.create_job()
        second = await job_store.create_job()

        assert second > first

    @pytest.mark.asyncio
    async def test_concurrent_creates_return_distinct_ids(self, job_store: JobStore) -> None:
        ids = await asyncio.gather(*(job_store.create_job() for _ in range(20)))

        assert len(set(ids)) == 20


class TestSetStatus:
    """Test suite for JobStore.set_status()."""

    @pytest.mark.asyncio
    async def test_walks_full_pipeline(self, job_store: JobStore) -> None:
        job_id = await job_store.create_job()

        for stage in (JobStage.BUILDING_MATRIX, JobStage.EMBEDDING_RELATION, JobStage.COMPLETE):
            await job_store.set_status(job_id, stage)
            assert (await job_store.get_status(job_id)).stage is stage

    @pytest.mark.asyncio
    async def test_rejects_skipped_stage(self, job_store: JobStore) -> None:
        job_id = await job_store.create_job()

        with pytest.raises(InvalidTransitionError):
            await job_store.set_status(job_id, JobStage.COMPLETE)

        assert (await job_store.get_status(job_id)).stage is JobStage.SELECTING

    @pytest.mark.asyncio
    async def test_rejects_revert(self, job_store: JobStore) -> None:
        job_id = await job_store.create_job()
        await job_store.set_status(job_id, JobStage.BUILDING_MATRIX)

        with pytest.raises(InvalidTransitionError):
            await job_store.set_status(job_id, JobStage.SELECTING)

        assert (await job_store.get_status(job_id)).stage is JobStage.BUILDING_MATRIX

    @pytest.mark.asyncio
    async def test_failed_keeps_error_detail(self, job_store: JobStore) -> None:
        job_id = await job_store.create_job()
        await job_store.set_status(job_id, JobStage.BUILDING_MATRIX)

        await job_store.set_status(job_id, JobStage.FAILED, error="matrix construction failed")

        snapshot = await job_store.get_status(job_id)
        assert snapshot.stage is JobStage.FAILED
        assert snapshot.error == "matrix construction failed"

    @pytest.mark.asyncio
    async def test_failed_error_is_truncated(self, job_store: JobStore) -> None:
        job_id = await job_store.create_job()

        await job_store.set_status(job_id, JobStage.FAILED, error="x" * (MAX_ERROR_LENGTH + 50))

        snapshot = await job_store.get_status(job_id)
        assert len(snapshot.error) == MAX_ERROR_LENGTH

    @pytest.mark.asyncio
    async def test_error_dropped_for_non_failed_stage(self, job_store: JobStore) -> None:
        job_id = await job_store.create_job()

        await job_store.set_status(job_id, JobStage.BUILDING_MATRIX, error="ignored")

        assert (await job_store.get_status(job_id)).error is None

    @pytest.mark.asyncio
    async def test_complete_is_terminal(self, job_store: JobStore) -> None:
        job_id = await job_store.create_job()
        for stage in (JobStage.BUILDING_MATRIX, JobStage.EMBEDDING_RELATION, JobStage.COMPLETE):
            await job_store.set_status(job_id, stage)

        with pytest.raises(InvalidTransitionError):
            await job_store.set_status(job_id, JobStage.FAILED, error="late failure")

    @pytest.mark.asyncio
    async def test_unknown_job_raises_not_found(self, job_store: JobStore) -> None:
        with pytest.raises(JobNotFoundError):
            await job_store.set_status(999, JobStage.BUILDING_MATRIX)

    @pytest.mark.asyncio
    async def test_jobs_progress_independently(self, job_store: JobStore) -> None:
        first = await job_store.create_job()
        second = await job_store.create_job()

        await job_store.set_status(first, JobStage.BUILDING_MATRIX)

        assert (await job_store.get_status(first)).stage is JobStage.BUILDING_MATRIX
        assert (await job_store.get_status(second)).stage is JobStage.SELECTING


class TestGetStatus:
    """Test suite for JobStore.get_status()."""

    @pytest.mark.asyncio
    async def test_never_issued_id_raises_not_found(self, job_store: JobStore) -> None:
        await job_store.create_job()

        with pytest.raises(JobNotFoundError) as exc_info:
            await job_store.get_status(12345)

        assert exc_info.value.job_id == 12345

    @pytest.mark.asyncio
    async def test_requery_is_stable(self, job_store: JobStore) -> None:
        job_id = await job_store.create_job()
        await job_store.set_status(job_id, JobStage.BUILDING_MATRIX)

        results = [await job_store.get_status(job_id) for _ in range(3)]

        assert {r.stage for r in results} == {JobStage.BUILDING_MATRIX}


class _FailingBegin:
    """Stands in for session_factory.begin() and raises on entry."""

    def __init__(self, error: Exception) -> None:
        self.error = error

    async def __aenter__(self):
        raise self.error

    async def __aexit__(self, *exc_info) -> bool:
        return False


class TestStoreErrors:
    """Test suite for driver error translation."""

    @staticmethod
    def _store_raising(error: Exception) -> JobStore:
        factory = MagicMock()
        factory.begin = MagicMock(return_value=_FailingBegin(error))
        return JobStore(factory)

    @pytest.mark.asyncio
    async def test_operational_error_becomes_connectivity_error(self) -> None:
        store = self._store_raising(OperationalError("connect", {}, Exception("refused")))

        with pytest.raises(ConnectivityError) as exc_info:
            await store.create_job()

        assert exc_info.value.details["operation"] == "create_job"

    @pytest.mark.asyncio
    async def test_os_error_becomes_connectivity_error(self) -> None:
        store = self._store_raising(ConnectionRefusedError("refused"))

        with pytest.raises(ConnectivityError):
            await store.get_status(1)

    @pytest.mark.asyncio
    async def test_other_sqlalchemy_error_becomes_store_error(self) -> None:
        store = self._store_raising(ProgrammingError("UPDATE", {}, Exception("bad sql")))

        with pytest.raises(StoreError) as exc_info:
            await store.set_status(1, JobStage.BUILDING_MATRIX)

        assert not isinstance(exc_info.value, ConnectivityError)

    @pytest.mark.asyncio
    async def test_ping_succeeds_on_live_database(self, job_store: JobStore) -> None:
        await job_store.ping()
