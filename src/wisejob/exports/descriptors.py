"""Conversion of validated export entries into engine-ready descriptors."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime

from wisejob.exports.errors import ExportTimeError
from wisejob.exports.models import ExportDescriptor, ExportEntry, TimeRange
from wisejob.exports.statistics import flag_name, get_statistic
from wisejob.exports.validator import OUTPUT_SUFFIX

logger = logging.getLogger(__name__)


def normalize_output_path(path: str) -> str:
    """Append the grid file suffix unless the path already ends with it."""
    if path.endswith(OUTPUT_SUFFIX):
        return path
    return path + OUTPUT_SUFFIX


def parse_export_time(flag: str, value: str) -> datetime:
    """Parse one ISO-8601 time argument of an export flag.

    Raises:
        ExportTimeError: Naming the flag and the raw value
    """
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise ExportTimeError(
            f'Invalid time "{value}" for `{flag_name(flag)}`: expected ISO-8601 '
            f"such as 2001-10-16T13:00:00-05:00",
            flag=flag,
            value=value,
        ) from e


def build_temporal(entry: ExportEntry) -> datetime | TimeRange:
    """Build the export time: a range when two times are given, else an instant."""
    start = parse_export_time(entry.flag, entry.args[1])
    if len(entry.args) < 3:
        return start

    end = parse_export_time(entry.flag, entry.args[2])
    time_range = TimeRange(start=start, end=end)
    if not time_range.is_ordered:
        logger.warning(
            f"Export `{entry.name}` has a range ending at or before its start "
            f"({entry.args[1]} -> {entry.args[2]})"
        )
    return time_range


def build_export_descriptor(entry: ExportEntry, filepath: str) -> ExportDescriptor:
    """Resolve a single validated entry.

    Args:
        entry: Validated export entry
        filepath: Prefix inside the job outputs folder (e.g. "scen0/")
    """
    return ExportDescriptor(
        flag=entry.flag,
        statistic=get_statistic(entry.flag),
        output_path=normalize_output_path(filepath + entry.filename),
        temporal=build_temporal(entry),
    )


def build_export_descriptors(
    entries: Iterable[ExportEntry], filepath: str
) -> tuple[ExportDescriptor, ...]:
    """Build descriptors for all validated entries.

    Either every entry is converted or an error is raised; partial results are
    never returned.
    """
    descriptors = tuple(build_export_descriptor(entry, filepath) for entry in entries)
    logger.debug(f"Built {len(descriptors)} export descriptors under '{filepath}'")
    return descriptors
