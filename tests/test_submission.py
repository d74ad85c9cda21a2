"""Tests for wisejob.submission.

Tests cover:
- Local check failures reported and not submitted
- Submission with and without a status listener
- Reactions to validation, completion, scenario and statistics events
"""

import logging
from datetime import datetime, timezone

import pytest

from wisejob.compiler import compile_job_request
from wisejob.job import assemble_job
from wisejob.submission import (
    JobEngine,
    JobEventHandler,
    JobManager,
    JobStatus,
    ScenarioComplete,
    SimulationComplete,
    Statistic,
    StatisticsReceived,
    ValidationReceived,
    submit_job,
)


class FakeEngine(JobEngine):
    def __init__(self, problems=None, job_name="  job_20011016  "):
        self.problems = problems or []
        self.job_name = job_name
        self.validated = []

    def check_valid(self, job):
        return self.problems

    async def validate_job(self, job):
        self.validated.append(job)
        return self.job_name


class FakeManager(JobManager):
    def __init__(self, job_name):
        self.job_name = job_name
        self.started = False
        self.disposed = False
        self.callbacks = []
        self.reruns = []

    async def start(self):
        self.started = True

    def subscribe(self, callback):
        self.callbacks.append(callback)

    def dispose(self):
        self.disposed = True

    def broadcast_job_rerun(self, job_name):
        self.reruns.append(job_name)


@pytest.fixture
def job(setup_lines):
    request = compile_job_request(["-BG", "fire1", "2001-10-16T13:00:00-05:00"], setup_lines, "scen0/")
    return assemble_job(request, input_directory="jobs/test", scenario_name="scen0", timezone_id=25)


@pytest.fixture
def manager():
    return FakeManager("job_20011016")


@pytest.fixture
def handler(manager):
    return JobEventHandler(manager, "job_20011016", rerun_delay=0)


class TestSubmitJob:
    """Tests for submit_job."""

    @pytest.mark.asyncio
    async def test_invalid_job_not_submitted(self, job, caplog):
        problems = [{"propertyName": "scenario", "children": [{"value": "", "propertyName": "name", "message": "required"}]}]
        engine = FakeEngine(problems=problems)

        with caplog.at_level(logging.ERROR):
            result = await submit_job(engine, job)

        assert result is None
        assert engine.validated == []
        assert "'' is invalid for 'name': \"required\"" in caplog.text

    @pytest.mark.asyncio
    async def test_submitted_without_listener(self, job):
        engine = FakeEngine()
        result = await submit_job(engine, job)
        assert result.job_name == "job_20011016"
        assert result.handler is None
        assert engine.validated == [job]

    @pytest.mark.asyncio
    async def test_listener_started_for_trimmed_name(self, job):
        managers = []

        def factory(name):
            managers.append(FakeManager(name))
            return managers[-1]

        result = await submit_job(FakeEngine(), job, manager_factory=factory, rerun_delay=0)
        (manager,) = managers
        assert manager.job_name == "job_20011016"
        assert manager.started
        assert manager.callbacks == [result.handler.handle]


class TestJobEventHandler:
    """Tests for status event reactions."""

    @pytest.mark.asyncio
    async def test_valid_job_is_rerun(self, handler, manager):
        await handler.handle(ValidationReceived(success=True, valid=True))
        assert manager.reruns == ["job_20011016"]
        assert not manager.disposed
        assert handler.status is JobStatus.RUNNING

    @pytest.mark.asyncio
    async def test_validation_unavailable(self, handler, manager):
        await handler.handle(ValidationReceived(success=False))
        assert manager.disposed
        assert manager.reruns == []
        assert handler.status is JobStatus.VALIDATION_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_invalid_job(self, handler, manager, caplog):
        event = ValidationReceived(success=True, valid=False, error_list=("fuel map missing",))
        await handler.handle(event)
        assert manager.disposed
        assert handler.status is JobStatus.INVALID
        assert "fuel map missing" in caplog.text

    @pytest.mark.asyncio
    async def test_simulation_complete(self, handler, manager, caplog):
        with caplog.at_level(logging.INFO):
            await handler.handle(SimulationComplete(time=datetime(2024, 5, 1, tzinfo=timezone.utc)))
        assert manager.disposed
        assert handler.status is JobStatus.COMPLETE
        assert "Simulation complete at 2024-05-01T00:00:00+00:00." in caplog.text

    @pytest.mark.asyncio
    async def test_failed_scenario_logged(self, handler, manager, caplog):
        await handler.handle(ScenarioComplete(success=False, error_message="no fuel"))
        assert "A scenario failed: no fuel" in caplog.text
        assert not manager.disposed

    @pytest.mark.asyncio
    async def test_successful_scenario_ignored(self, handler, caplog):
        await handler.handle(ScenarioComplete(success=True))
        assert caplog.text == ""

    @pytest.mark.asyncio
    async def test_statistics_logged(self, handler, caplog):
        event = StatisticsReceived(statistics=(Statistic(key="TOTAL_BURN_AREA", value=12.5),))
        with caplog.at_level(logging.INFO):
            await handler.handle(event)
        assert "Received statistic TOTAL_BURN_AREA with value 12.5" in caplog.text

    @pytest.mark.asyncio
    async def test_unknown_event(self, handler):
        with pytest.raises(TypeError):
            await handler.handle(object())
