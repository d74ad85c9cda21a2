"""Shared pytest fixtures and markers for all tests."""

import pytest

# Setup values as a launcher writes them, keyed by field name
SAMPLE_SETUP_VALUES = {
    "input_directory": "C:/jobs/five cases/windy/",
    "fuel_map_file": "fbp_fuel_type.asc",
    "fuel_lookup_table_file": "fbp_lookup_table.lut",
    "elevation_file": "elevation.asc",
    "projection_file": "elevation.prj",
    "weather_file": "weather_B3_hourly_Sep25toOct30_2001.txt",
    "ignition_time": "2001-10-16T13:00:00-05:00",
    "ignition_coords": "51.635991,-115.570094",
    "simulation_end_time": "2001-10-16T22:00:00-05:00",
    "weather_station_height": "2000",
    "weather_station_coords": "51.647837,-115.564756",
    "weather_start_time": "2001-09-25",
    "weather_end_time": "2001-10-30",
    "hffmc_value": "94.0",
    "hffmc_hour": "17",
    "starting_ffmc": "89.0",
    "starting_dmc": "58.0",
    "starting_dc": "482.0",
    "starting_precipitation": "0.0",
    "minimum_fwi": "19",
    "minimum_wind_speed": "0",
    "maximum_relative_humidity": "95.0",
    "minimum_isi": "0.0",
    "max_acceleration_time_step": "2",
    "distance_resolution": "1.0",
    "perimeter_resolution": "1.0",
    "minimum_spread_ros": "1.0",
    "stop_at_boundary": "false",
    "breaching": "true",
    "dynamic_spatial_threshold": "true",
    "spotting": "true",
    "retain_hidden_time_steps": "",
    "apply_growth_percentile": "true",
    "growth_percentile": "50.0",
    "ignition_dx": "1.0",
    "ignition_dy": "1.0",
    "ignition_dt": "0,10",
    "terrain_effects": "true",
    "wind_effects": "true",
    "fmc_override": "-1",
    "nodata_elevation": "0.0",
    "fwi_spatial_interpolation": "",
    "fwi_from_temporal_weather": "true",
    "fwi_history": "false",
    "use_burning_conditions": "",
    "fwi_temporal_interpolation": "",
}


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "cli: marks command line application tests"
    )


@pytest.fixture
def setup_values():
    """Provide a copy of the sample setup values."""
    return dict(SAMPLE_SETUP_VALUES)


@pytest.fixture
def setup_lines(setup_values):
    """Provide the sample setup as positional lines, with a trailing newline."""
    from wisejob.setup_file import format_parameter_lines
    return format_parameter_lines(setup_values) + [""]


@pytest.fixture
def sample_parameters(setup_lines):
    """Provide decoded sample parameters."""
    from wisejob.parameters import decode_parameters
    return decode_parameters(setup_lines)
