"""Data models for export requests.

ExportEntry is one validated command line export request. ExportDescriptor is
the engine-ready form of an entry: resolved statistic, normalised output path
and temporal specification.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from wisejob.exports.statistics import (
    GlobalStatistic,
    GridInterpolation,
    flag_name,
    is_map_flag,
)


class ExportEntry(BaseModel):
    """A flag and the arguments collected after it.

    Attributes:
        flag: Export flag including its leading marker (e.g. "-BG")
        args: Filename followed by one or two ISO-8601 times
    """

    model_config = ConfigDict(frozen=True)

    flag: str
    args: tuple[str, ...] = Field(min_length=1)

    @property
    def name(self) -> str:
        """Flag without its leading marker."""
        return flag_name(self.flag)

    @property
    def filename(self) -> str:
        return self.args[0]

    @property
    def times(self) -> tuple[str, ...]:
        return self.args[1:]

    @property
    def is_map(self) -> bool:
        return is_map_flag(self.flag)


class TimeRange(BaseModel):
    """Closed time range for scalar exports.

    Ordering of start and end is not checked here; the engine decides
    whether a backwards range is acceptable.
    """

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @property
    def is_ordered(self) -> bool:
        """True when end falls after start."""
        return self.end > self.start


class ExportDescriptor(BaseModel):
    """A fully resolved grid export attached to a scenario."""

    model_config = ConfigDict(frozen=True)

    flag: str = Field(description="Flag the export was requested with")
    statistic: GlobalStatistic = Field(description="Statistic written to the grid")
    output_path: str = Field(description="Path relative to the job outputs folder")
    temporal: datetime | TimeRange = Field(
        description="Single export instant, or a range for scalar exports"
    )
    interpolation: GridInterpolation = Field(default=GridInterpolation.IDW)

    @property
    def is_range(self) -> bool:
        return isinstance(self.temporal, TimeRange)
