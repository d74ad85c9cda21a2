"""Grid export requests.

Turns command line export flags into validated, engine-ready descriptors:

    grouped = parse_export_tokens(sys.argv[1:])
    entries = validate_exports(grouped)
    descriptors = build_export_descriptors(entries, "scen0/")
"""

from .descriptors import (
    build_export_descriptor,
    build_export_descriptors,
    normalize_output_path,
    parse_export_time,
)
from .errors import ExportSpecError, ExportTimeError
from .models import ExportDescriptor, ExportEntry, TimeRange
from .statistics import (
    MAP_FLAGS,
    SCALAR_FLAGS,
    STATISTIC_BY_FLAG,
    TIMESTEP_STATISTICS,
    GlobalStatistic,
    GridInterpolation,
    get_statistic,
)
from .tokens import parse_export_tokens
from .validator import OUTPUT_SUFFIX, is_valid_filename, validate_exports

__all__ = [
    # Enums and tables
    "GlobalStatistic",
    "GridInterpolation",
    "MAP_FLAGS",
    "OUTPUT_SUFFIX",
    "SCALAR_FLAGS",
    "STATISTIC_BY_FLAG",
    "TIMESTEP_STATISTICS",
    # Models
    "ExportDescriptor",
    "ExportEntry",
    "TimeRange",
    # Errors
    "ExportSpecError",
    "ExportTimeError",
    # Functions
    "build_export_descriptor",
    "build_export_descriptors",
    "get_statistic",
    "is_valid_filename",
    "normalize_output_path",
    "parse_export_time",
    "parse_export_tokens",
    "validate_exports",
]
