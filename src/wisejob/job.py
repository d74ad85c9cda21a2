"""Job assembly for wisejob.

Builds the engine-agnostic description of a single-scenario fire growth job
from a compiled request: input files, one weather station with one stream,
one point ignition, timestep statistics and a scenario carrying the burning
conditions, model options and grid exports.

An engine adapter translates a JobSpec into its own object model; nothing here
talks to the engine.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from wisejob.compiler import CompiledJobRequest
from wisejob.exports import TIMESTEP_STATISTICS, ExportDescriptor, GlobalStatistic
from wisejob.parameters import Coords, SimulationParameters

logger = logging.getLogger(__name__)

# Burning conditions cover the whole day
BURNING_START_HOUR = 0
BURNING_END_HOUR = 24


class HFFMCMethod(Enum):
    """Hourly FFMC calculation method for a weather stream."""

    VAN_WAGNER = "VAN_WAGNER"
    LAWSON = "LAWSON"


class JobInputs(BaseModel):
    """Landscape inputs shared by every scenario of the job."""

    model_config = ConfigDict(frozen=True)

    projection_file: str
    elevation_file: str
    fuel_map_file: str
    lookup_table_file: str
    timezone_id: int = Field(description="Engine timezone identifier")


class WeatherStream(BaseModel):
    model_config = ConfigDict(frozen=True)

    file: str
    hffmc_value: float
    hffmc_hour: float
    hffmc_method: HFFMCMethod = HFFMCMethod.LAWSON
    starting_ffmc: float
    starting_dmc: float
    starting_dc: float
    starting_precipitation: float
    start_time: datetime
    end_time: datetime


class WeatherStation(BaseModel):
    model_config = ConfigDict(frozen=True)

    height: float
    location: Coords
    streams: tuple[WeatherStream, ...]


class PointIgnition(BaseModel):
    model_config = ConfigDict(frozen=True)

    location: Coords
    time: datetime


class BurningCondition(BaseModel):
    """Thresholds below which the fire does not spread on a given day."""

    model_config = ConfigDict(frozen=True)

    day: date
    start_hour: int = BURNING_START_HOUR
    end_hour: int = BURNING_END_HOUR
    minimum_fwi: float
    minimum_wind_speed: float
    maximum_relative_humidity: float
    minimum_isi: float


class FgmOptions(BaseModel):
    """Fire growth model options."""

    model_config = ConfigDict(frozen=True)

    max_acceleration_time_step: timedelta
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


class ProbabilisticValues(BaseModel):
    """Ignition perturbation deltas."""

    model_config = ConfigDict(frozen=True)

    dx: float
    dy: float
    dt: timedelta


class FbpOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    terrain_effects: bool
    wind_effects: bool


class FmcOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    override: float
    nodata_elevation: float
    terrain: bool = True
    accurate_location: bool = False


class FwiOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    spatial_interpolation: bool
    from_temporal_weather: bool
    history: bool
    use_burning_conditions: bool
    temporal_interpolation: bool


class ScenarioSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    start_time: datetime
    end_time: datetime
    burning_conditions: tuple[BurningCondition, ...]
    fgm_options: FgmOptions
    probabilistic_values: ProbabilisticValues
    fbp_options: FbpOptions
    fmc_options: FmcOptions
    fwi_options: FwiOptions
    exports: tuple[ExportDescriptor, ...]


class JobSpec(BaseModel):
    """Everything the engine needs to build and run one job."""

    model_config = ConfigDict(frozen=True)

    inputs: JobInputs
    weather_station: WeatherStation
    ignition: PointIgnition
    timestep_statistics: tuple[GlobalStatistic, ...] = TIMESTEP_STATISTICS
    scenario: ScenarioSpec


def burning_condition_dates(start: datetime, end: datetime) -> list[date]:
    """Calendar days from start to end, one per day, end inclusive.

    Aware times are converted to UTC before taking the date, so an evening
    ignition west of Greenwich may start on the following UTC day.
    """
    dates = []
    current = start
    while current <= end:
        day = current.astimezone(timezone.utc) if current.tzinfo else current
        dates.append(day.date())
        current += timedelta(days=1)
    return dates


def build_burning_conditions(params: SimulationParameters) -> tuple[BurningCondition, ...]:
    return tuple(
        BurningCondition(
            day=day,
            minimum_fwi=params.minimum_fwi,
            minimum_wind_speed=params.minimum_wind_speed,
            maximum_relative_humidity=params.maximum_relative_humidity,
            minimum_isi=params.minimum_isi,
        )
        for day in burning_condition_dates(params.ignition_time, params.simulation_end_time)
    )


def _duration(field: str, **amounts: float) -> timedelta:
    """Build a timedelta from a setup value, naming the field when it is out of range."""
    try:
        return timedelta(**amounts)
    except OverflowError as e:
        raise ValueError(f"Setup value '{field}' is out of range for a duration: {e}") from e


def build_scenario(
    params: SimulationParameters,
    exports: tuple[ExportDescriptor, ...],
    name: str,
) -> ScenarioSpec:
    """Build the scenario running from ignition to the simulation end time."""
    dt_minutes, dt_seconds = params.ignition_dt
    return ScenarioSpec(
        name=name,
        start_time=params.ignition_time,
        end_time=params.simulation_end_time,
        burning_conditions=build_burning_conditions(params),
        fgm_options=FgmOptions(
            max_acceleration_time_step=_duration(
                "max_acceleration_time_step", minutes=params.max_acceleration_time_step
            ),
            distance_resolution=params.distance_resolution,
            perimeter_resolution=params.perimeter_resolution,
            minimum_spread_ros=params.minimum_spread_ros,
            stop_at_boundary=params.stop_at_boundary,
            breaching=params.breaching,
            dynamic_spatial_threshold=params.dynamic_spatial_threshold,
            spotting=params.spotting,
            retain_hidden_time_steps=params.retain_hidden_time_steps,
            apply_growth_percentile=params.apply_growth_percentile,
            growth_percentile=params.growth_percentile,
        ),
        probabilistic_values=ProbabilisticValues(
            dx=params.ignition_dx,
            dy=params.ignition_dy,
            dt=_duration("ignition_dt", minutes=dt_minutes, seconds=dt_seconds),
        ),
        fbp_options=FbpOptions(
            terrain_effects=params.terrain_effects,
            wind_effects=params.wind_effects,
        ),
        fmc_options=FmcOptions(
            override=params.fmc_override,
            nodata_elevation=params.nodata_elevation,
        ),
        fwi_options=FwiOptions(
            spatial_interpolation=params.fwi_spatial_interpolation,
            from_temporal_weather=params.fwi_from_temporal_weather,
            history=params.fwi_history,
            use_burning_conditions=params.use_burning_conditions,
            temporal_interpolation=params.fwi_temporal_interpolation,
        ),
        exports=exports,
    )


def assemble_job(
    request: CompiledJobRequest,
    input_directory: str | Path,
    scenario_name: str,
    timezone_id: int,
) -> JobSpec:
    """Assemble a job from a compiled request.

    Args:
        request: Compiled setup parameters and exports
        input_directory: Directory on the engine host holding the input files
        scenario_name: Name of the single scenario
        timezone_id: Engine timezone identifier
    """
    params = request.parameters
    input_directory = Path(input_directory)

    inputs = JobInputs(
        projection_file=str(input_directory / params.projection_file),
        elevation_file=str(input_directory / params.elevation_file),
        fuel_map_file=str(input_directory / params.fuel_map_file),
        lookup_table_file=str(input_directory / params.fuel_lookup_table_file),
        timezone_id=timezone_id,
    )
    stream = WeatherStream(
        file=str(input_directory / params.weather_file),
        hffmc_value=params.hffmc_value,
        hffmc_hour=params.hffmc_hour,
        starting_ffmc=params.starting_ffmc,
        starting_dmc=params.starting_dmc,
        starting_dc=params.starting_dc,
        starting_precipitation=params.starting_precipitation,
        start_time=params.weather_start_time,
        end_time=params.weather_end_time,
    )
    job = JobSpec(
        inputs=inputs,
        weather_station=WeatherStation(
            height=params.weather_station_height,
            location=params.weather_station_coords,
            streams=(stream,),
        ),
        ignition=PointIgnition(location=params.ignition_coords, time=params.ignition_time),
        scenario=build_scenario(params, request.exports, scenario_name),
    )
    logger.info(
        f"Assembled job: scenario '{scenario_name}', "
        f"{len(job.scenario.burning_conditions)} burning days, "
        f"{len(job.scenario.exports)} exports"
    )
    return job
