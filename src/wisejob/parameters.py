"""Simulation setup parameters for wisejob.

The setup file is a flat, newline-delimited list of values with no keys: line
N always means field N. PARAMETER_FIELDS is the single source of truth for
that ordering, used both to decode the file and to write it.

Decoding rules:
- text: the stripped line as-is
- float: parsed as a floating point number
- time: ISO-8601 timestamp (a plain date is accepted and means midnight)
- coords: two floats separated by a comma ("51.63,-115.57")
- bool: true for any non-empty line

Boolean fields use non-empty truthiness: the literal text "false" decodes as
True. Existing setup files depend on this.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class ParameterKind(Enum):
    """How a positional line is decoded."""

    TEXT = "text"
    FLOAT = "float"
    TIME = "time"
    COORDS = "coords"
    BOOL = "bool"


@dataclass(frozen=True)
class ParameterField:
    """One positional line of the setup file."""

    name: str
    label: str
    kind: ParameterKind


_T = ParameterKind.TEXT
_F = ParameterKind.FLOAT
_TM = ParameterKind.TIME
_C = ParameterKind.COORDS
_B = ParameterKind.BOOL

PARAMETER_FIELDS: tuple[ParameterField, ...] = (
    # Input files
    ParameterField("input_directory", "Input Directory", _T),
    ParameterField("fuel_map_file", "FBP Fuel Map File Name", _T),
    ParameterField("fuel_lookup_table_file", "FBP Fuel Map Lookup Table File Name", _T),
    ParameterField("elevation_file", "Elevation File Name", _T),
    ParameterField("projection_file", "Elevation Projection File Name", _T),
    ParameterField("weather_file", "Weather File Name", _T),
    # Ignition and simulation
    ParameterField("ignition_time", "Ignition Time", _TM),
    ParameterField("ignition_coords", "Ignition Coords", _C),
    ParameterField("simulation_end_time", "Simulation End Time", _TM),
    # Weather station
    ParameterField("weather_station_height", "Weather Station Height", _F),
    ParameterField("weather_station_coords", "Weather Station Coords", _C),
    ParameterField("weather_start_time", "Weather Station Start Date", _TM),
    ParameterField("weather_end_time", "Weather Station End Date", _TM),
    # Weather stream starting codes
    ParameterField("hffmc_value", "HFFMC Value", _F),
    ParameterField("hffmc_hour", "HFFMC Hour", _F),
    ParameterField("starting_ffmc", "Starting FFMC", _F),
    ParameterField("starting_dmc", "Starting DMC", _F),
    ParameterField("starting_dc", "Starting DC", _F),
    ParameterField("starting_precipitation", "Starting Precipitation", _F),
    # Burning conditions
    ParameterField("minimum_fwi", "Minimum FWI", _F),
    ParameterField("minimum_wind_speed", "Minimum Wind Speed", _F),
    ParameterField("maximum_relative_humidity", "Maximum Relative Humidity", _F),
    ParameterField("minimum_isi", "Minimum ISI", _F),
    # FGM options
    ParameterField("max_acceleration_time_step", "Maximum Acceleration Time Step (minutes)", _F),
    ParameterField("distance_resolution", "Distance Resolution", _F),
    ParameterField("perimeter_resolution", "Perimeter Resolution", _F),
    ParameterField("minimum_spread_ros", "Minimum Spread ROS", _F),
    ParameterField("stop_at_boundary", "Stop Simulation if Boundary Reached", _B),
    ParameterField("breaching", "Breaching", _B),
    ParameterField("dynamic_spatial_threshold", "Use Dynamic Spatial Threshold algorithm", _B),
    ParameterField("spotting", "Use Spotting", _B),
    ParameterField("retain_hidden_time_steps", "Retain hidden time steps", _B),
    ParameterField("apply_growth_percentile", "Apply growth percentile value", _B),
    ParameterField("growth_percentile", "Growth percentile", _F),
    # Probabilistic ignition
    ParameterField("ignition_dx", "Ignition dx", _F),
    ParameterField("ignition_dy", "Ignition dy", _F),
    ParameterField("ignition_dt", "Ignition dt (minutes, seconds)", _C),
    # FBP options
    ParameterField("terrain_effects", "Use Terrain Effects", _B),
    ParameterField("wind_effects", "Use Wind Effects", _B),
    # FMC options
    ParameterField("fmc_override", "FMC Override Value", _F),
    ParameterField("nodata_elevation", "NODATA Elevation", _F),
    # FWI options
    ParameterField("fwi_spatial_interpolation", "Apply FWI Spatial Interpolation", _B),
    ParameterField("fwi_from_temporal_weather", "FWI from temporal weather", _B),
    ParameterField("fwi_history", "apply history to FWI values", _B),
    ParameterField("use_burning_conditions", "Use burning conditions", _B),
    ParameterField("fwi_temporal_interpolation", "Apply FWI Temporal Interpolation", _B),
)

PARAMETER_LINE_COUNT = len(PARAMETER_FIELDS)

Coords = tuple[float, float]


class ParameterDecodeError(ValueError):
    """A setup file line could not be decoded.

    Attributes:
        index: Zero-based line number, or None when the file is too short
        field: Field name for that line
        value: Raw line text
    """

    def __init__(
        self,
        message: str,
        index: int | None = None,
        field: str | None = None,
        value: str | None = None,
    ):
        super().__init__(message)
        self.index = index
        self.field = field
        self.value = value


class SimulationParameters(BaseModel):
    """Decoded setup file. Read-only once built."""

    model_config = ConfigDict(frozen=True)

    input_directory: str
    fuel_map_file: str
    fuel_lookup_table_file: str
    elevation_file: str
    projection_file: str
    weather_file: str

    ignition_time: datetime
    ignition_coords: Coords = Field(description="Ignition (latitude, longitude)")
    simulation_end_time: datetime

    weather_station_height: float
    weather_station_coords: Coords = Field(description="Station (latitude, longitude)")
    weather_start_time: datetime
    weather_end_time: datetime

    hffmc_value: float
    hffmc_hour: float
    starting_ffmc: float
    starting_dmc: float
    starting_dc: float
    starting_precipitation: float

    minimum_fwi: float
    minimum_wind_speed: float
    maximum_relative_humidity: float
    minimum_isi: float

    max_acceleration_time_step: float = Field(description="Minutes")
    distance_resolution: float
    perimeter_resolution: float
    minimum_spread_ros: float
    stop_at_boundary: bool
    breaching: bool
    dynamic_spatial_threshold: bool
    spotting: bool
    retain_hidden_time_steps: bool
    apply_growth_percentile: bool
    growth_percentile: float

    ignition_dx: float
    ignition_dy: float
    ignition_dt: Coords = Field(description="(minutes, seconds)")

    terrain_effects: bool
    wind_effects: bool

    fmc_override: float
    nodata_elevation: float

    fwi_spatial_interpolation: bool
    fwi_from_temporal_weather: bool
    fwi_history: bool
    use_burning_conditions: bool
    fwi_temporal_interpolation: bool


def text_to_bool(text: str) -> bool:
    """Non-empty text is True, including "false" and "0"."""
    return bool(text)


def text_to_coords(text: str) -> Coords:
    """Split "a,b" on the comma and parse both halves as floats.

    Components after the second are ignored.

    Raises:
        ValueError: If there are fewer than two components or one is not a number
    """
    parts = text.split(",")
    if len(parts) < 2:
        raise ValueError(f"expected two comma-separated numbers, got '{text}'")
    return float(parts[0]), float(parts[1])


def _decode_value(kind: ParameterKind, text: str):
    if kind == ParameterKind.TEXT:
        return text
    if kind == ParameterKind.FLOAT:
        return float(text)
    if kind == ParameterKind.TIME:
        return datetime.fromisoformat(text)
    if kind == ParameterKind.COORDS:
        return text_to_coords(text)
    return text_to_bool(text)


def check_time_zones(values: dict) -> None:
    """Require the ignition and simulation end times to agree on having an offset.

    Naive and offset-aware times cannot be compared, so a setup file giving
    an offset on only one of them cannot be scheduled.

    Raises:
        ParameterDecodeError: Naming simulation_end_time
    """
    start = values["ignition_time"]
    end = values["simulation_end_time"]
    if (start.tzinfo is None) == (end.tzinfo is None):
        return

    index, field = next(
        (i, f) for i, f in enumerate(PARAMETER_FIELDS) if f.name == "simulation_end_time"
    )
    raise ParameterDecodeError(
        f"Line {index + 1} ({field.label}): '{end.isoformat()}' and the ignition time "
        f"'{start.isoformat()}' must both have a UTC offset or both omit it",
        index=index,
        field=field.name,
        value=end.isoformat(),
    )


def decode_parameters(lines: Sequence[str]) -> SimulationParameters:
    """Decode setup file lines by position.

    Lines are stripped before decoding. Lines past the last field (such as
    the empty string left by a trailing newline) are ignored.

    Raises:
        ParameterDecodeError: If the file is too short or a line is malformed
    """
    if len(lines) < PARAMETER_LINE_COUNT:
        raise ParameterDecodeError(
            f"Setup file has {len(lines)} lines, expected at least {PARAMETER_LINE_COUNT}"
        )

    values = {}
    for index, field in enumerate(PARAMETER_FIELDS):
        text = lines[index].strip()
        try:
            values[field.name] = _decode_value(field.kind, text)
        except ValueError as e:
            raise ParameterDecodeError(
                f"Line {index + 1} ({field.label}): cannot read '{text}' as {field.kind.value}: {e}",
                index=index,
                field=field.name,
                value=text,
            ) from e

    check_time_zones(values)
    return SimulationParameters(**values)


def read_parameter_lines(path: str | Path) -> list[str]:
    """Read the raw lines of a setup file."""
    path = Path(path)
    lines = path.read_text(encoding="utf-8-sig").split("\n")
    logger.info(f"Read {len(lines)} setup lines from {path}")
    return lines


def read_parameter_file(path: str | Path) -> SimulationParameters:
    """Read and decode a setup file from disk.

    Raises:
        FileNotFoundError: If the file does not exist
        ParameterDecodeError: If its contents cannot be decoded
    """
    return decode_parameters(read_parameter_lines(path))
