"""Job submission and status handling.

The engine and the message broker are external. JobEngine and JobManager
define the boundary this module needs from them; adapters implement them for
a concrete engine version.

Submission flow:
1. Ask the engine to check the assembled job. Problems are reported as one
   diagnostic line per failing property and the job is not submitted.
2. Send the job for validation; the engine answers with the job name.
3. When a status listener is configured, start it and react to events:
   rerun the job once validation passes, stop listening on failure or
   completion, log scenario failures and statistics.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from wisejob.job import JobSpec
from wisejob.validation_tree import report_validation_errors

logger = logging.getLogger(__name__)

# Pause before starting a validated job so the status change is visible
DEFAULT_RERUN_DELAY = 1.0


# =============================================================================
# Status Events
# =============================================================================


class ValidationReceived(BaseModel):
    """The engine finished validating the job."""

    model_config = ConfigDict(frozen=True)

    success: bool = Field(description="Whether validation could run at all")
    valid: bool = Field(default=False, description="Whether the job passed")
    error_list: tuple[str, ...] = ()


class SimulationComplete(BaseModel):
    model_config = ConfigDict(frozen=True)

    time: datetime | None = None


class ScenarioComplete(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    error_message: str = ""
    time: datetime | None = None


class Statistic(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    value: Any = None


class StatisticsReceived(BaseModel):
    model_config = ConfigDict(frozen=True)

    statistics: tuple[Statistic, ...] = ()
    time: datetime | None = None


JobEvent = ValidationReceived | SimulationComplete | ScenarioComplete | StatisticsReceived


class JobStatus(Enum):
    """Where a submitted job is, as seen from its status events."""

    WAITING = "waiting"
    VALIDATION_UNAVAILABLE = "validation_unavailable"
    INVALID = "invalid"
    RUNNING = "running"
    COMPLETE = "complete"


# =============================================================================
# External Boundary
# =============================================================================


class JobEngine(ABC):
    """The simulation engine's job API."""

    @abstractmethod
    def check_valid(self, job: JobSpec) -> list:
        """Check a job locally before sending it.

        Returns:
            Root validation nodes, empty when the job is complete
        """
        pass

    @abstractmethod
    async def validate_job(self, job: JobSpec) -> str:
        """Send the job to the engine for validation.

        Returns:
            Name the engine assigned to the job
        """
        pass


class JobManager(ABC):
    """Listener for status events of one job, backed by the message broker."""

    @abstractmethod
    async def start(self) -> None:
        pass

    @abstractmethod
    def subscribe(self, callback: Callable[[JobEvent], Awaitable[None]]) -> None:
        """Register a callback for every status event of the job."""
        pass

    @abstractmethod
    def dispose(self) -> None:
        """Stop listening and close the broker connection."""
        pass

    @abstractmethod
    def broadcast_job_rerun(self, job_name: str) -> None:
        """Ask the engine to (re)start a job it already knows."""
        pass


# =============================================================================
# Event Handling
# =============================================================================


class JobEventHandler:
    """Reacts to the status events of one submitted job."""

    def __init__(
        self,
        manager: JobManager,
        job_name: str,
        rerun_delay: float = DEFAULT_RERUN_DELAY,
    ) -> None:
        self.manager = manager
        self.job_name = job_name
        self.rerun_delay = rerun_delay
        self.status = JobStatus.WAITING

    async def handle(self, event: JobEvent) -> None:
        """Dispatch one event to its handler."""
        if isinstance(event, ValidationReceived):
            await self.on_validation_received(event)
        elif isinstance(event, SimulationComplete):
            self.on_simulation_complete(event)
        elif isinstance(event, ScenarioComplete):
            self.on_scenario_complete(event)
        elif isinstance(event, StatisticsReceived):
            self.on_statistics_received(event)
        else:
            raise TypeError(f"Unknown job event: {type(event).__name__}")

    async def on_validation_received(self, event: ValidationReceived) -> None:
        if not event.success:
            # Usually a version mismatch between the engine and its manager
            self.manager.dispose()
            self.status = JobStatus.VALIDATION_UNAVAILABLE
            logger.error("Validation could not be run, check your W.I.S.E. version")
        elif not event.valid:
            self.manager.dispose()
            self.status = JobStatus.INVALID
            logger.error("The submitted FGM is not valid")
            for error in event.error_list:
                logger.error(f"    {error}")
        else:
            logger.info("FGM valid, starting job")
            await asyncio.sleep(self.rerun_delay)
            self.manager.broadcast_job_rerun(self.job_name)
            self.status = JobStatus.RUNNING

    def on_simulation_complete(self, event: SimulationComplete) -> None:
        self.manager.dispose()
        self.status = JobStatus.COMPLETE
        if event.time is not None:
            logger.info(f"Simulation complete at {event.time.isoformat()}.")
        else:
            logger.info("Simulation complete.")

    def on_scenario_complete(self, event: ScenarioComplete) -> None:
        if event.success:
            return
        if event.time is not None:
            logger.error(f"At {event.time.isoformat()} a scenario failed: {event.error_message}")
        else:
            logger.error(f"A scenario failed: {event.error_message}")

    def on_statistics_received(self, event: StatisticsReceived) -> None:
        if event.time is not None:
            logger.info(f"Received statistics at {event.time.isoformat()}")
            for stat in event.statistics:
                logger.info(f"    Statistic {stat.key} with value {stat.value}")
        else:
            for stat in event.statistics:
                logger.info(f"Received statistic {stat.key} with value {stat.value}")


# =============================================================================
# Submission
# =============================================================================


@dataclass
class SubmittedJob:
    """A job accepted for validation by the engine."""

    job_name: str
    handler: JobEventHandler | None = None


async def submit_job(
    engine: JobEngine,
    job: JobSpec,
    manager_factory: Callable[[str], JobManager] | None = None,
    rerun_delay: float = DEFAULT_RERUN_DELAY,
) -> SubmittedJob | None:
    """Check and submit a job.

    Args:
        engine: Engine adapter
        job: Assembled job
        manager_factory: Creates a status listener for a job name; without one
            the job is submitted and no events are handled
        rerun_delay: Seconds to wait before starting a validated job

    Returns:
        The submitted job, or None when the local check found problems
    """
    problems = engine.check_valid(job)
    if problems:
        lines = report_validation_errors(problems)
        logger.error(f"Job not submitted: {len(lines)} invalid properties")
        return None

    job_name = (await engine.validate_job(job)).strip()
    logger.info(f"Job '{job_name}' sent for validation")

    if manager_factory is None:
        return SubmittedJob(job_name=job_name)

    manager = manager_factory(job_name)
    handler = JobEventHandler(manager, job_name, rerun_delay=rerun_delay)
    manager.subscribe(handler.handle)
    await manager.start()
    return SubmittedJob(job_name=job_name, handler=handler)
