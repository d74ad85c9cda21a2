"""Configuration for wisejob.

Settings come from environment variables with module-level defaults. Command
line options override them in the CLI.
"""

import os
from pathlib import Path

# Default configuration (can be overridden via environment variables)
DEFAULT_JOBS_DIR = "jobs"
DEFAULT_INPUT_SUBDIR = "test"
DEFAULT_SETUP_FILENAME = "SimulationDictionary.txt"
DEFAULT_SCENARIO_NAME = "scen0"
DEFAULT_TIMEZONE_ID = 25  # CDT
DEFAULT_LOG_LEVEL = "INFO"

# Left in the jobs path by the engine installer until it is configured
JOBS_DIR_PLACEHOLDER = "@JOBS@"


def get_jobs_directory() -> Path:
    """Get the engine jobs directory from environment."""
    return Path(os.environ.get("WISEJOB_JOBS_DIR", DEFAULT_JOBS_DIR))


def get_input_directory(jobs_dir: Path | None = None) -> Path:
    """Get the directory holding the job input files (<jobs>/test)."""
    if jobs_dir is None:
        jobs_dir = get_jobs_directory()
    return jobs_dir / DEFAULT_INPUT_SUBDIR


def get_setup_file_path(jobs_dir: Path | None = None) -> Path:
    """Get the setup file path.

    Uses WISEJOB_SETUP_FILE when set, otherwise the setup file inside the
    input directory.
    """
    override = os.environ.get("WISEJOB_SETUP_FILE")
    if override:
        return Path(override)
    return get_input_directory(jobs_dir) / DEFAULT_SETUP_FILENAME


def get_scenario_name() -> str:
    """Get configured scenario name from environment."""
    return os.environ.get("WISEJOB_SCENARIO_NAME", DEFAULT_SCENARIO_NAME)


def get_output_prefix(scenario_name: str | None = None) -> str:
    """Get the export path prefix inside the job outputs folder (e.g. "scen0/")."""
    if scenario_name is None:
        scenario_name = get_scenario_name()
    return f"{scenario_name}/"


def get_timezone_id() -> int:
    """Get the engine timezone identifier from environment.

    Raises:
        ValueError: If WISEJOB_TIMEZONE is not an integer
    """
    value = os.environ.get("WISEJOB_TIMEZONE")
    if value is None:
        return DEFAULT_TIMEZONE_ID
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"WISEJOB_TIMEZONE must be an integer, got '{value}'") from None


def get_log_level() -> str:
    """Get configured log level from environment."""
    return os.environ.get("WISEJOB_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()


def is_jobs_directory_configured(jobs_dir: Path | None = None) -> bool:
    """Return False while the jobs path still holds the installer placeholder."""
    if jobs_dir is None:
        jobs_dir = get_jobs_directory()
    return JOBS_DIR_PLACEHOLDER not in str(jobs_dir)
