"""Export flags and the engine statistics they map to.

Scalar flags accept a single instant or a time range. Map flags accept a
single instant only.

Adding a statistic is a one-row edit to STATISTIC_BY_FLAG plus the flag tuple
it belongs to.
"""

from enum import Enum

from wisejob.exports.errors import ExportSpecError

FLAG_MARKER = "-"


class GlobalStatistic(Enum):
    """Statistics the simulation engine can export or emit per timestep."""

    # Scalar grid statistics
    MAX_FI = "MAX_FI"
    MAX_FL = "MAX_FL"
    MAX_ROS = "MAX_ROS"
    MAX_SFC = "MAX_SFC"
    MAX_CFC = "MAX_CFC"
    MAX_TFC = "MAX_TFC"
    MAX_CFB = "MAX_CFB"
    RAZ = "RAZ"
    BURN_GRID = "BURN_GRID"
    HROS = "HROS"
    FROS = "FROS"
    BROS = "BROS"
    FIRE_ARRIVAL_TIME = "FIRE_ARRIVAL_TIME"
    FIRE_ARRIVAL_TIME_MIN = "FIRE_ARRIVAL_TIME_MIN"
    FIRE_ARRIVAL_TIME_MAX = "FIRE_ARRIVAL_TIME_MAX"

    # Map grid statistics
    BROS_MAP = "BROS_MAP"
    CBH_MAP = "CBH_MAP"
    CFB_MAP = "CFB_MAP"
    CFC_MAP = "CFC_MAP"
    CFL_MAP = "CFL_MAP"
    FI_MAP = "FI_MAP"
    FL_MAP = "FL_MAP"
    FMC_MAP = "FMC_MAP"
    FROS_MAP = "FROS_MAP"
    HROS_MAP = "HROS_MAP"
    PC_MAP = "PC_MAP"
    PDF_MAP = "PDF_MAP"
    RAZ_MAP = "RAZ_MAP"
    RSS_MAP = "RSS_MAP"
    SFC_MAP = "SFC_MAP"
    TFC_MAP = "TFC_MAP"
    CURINGDEGREE_MAP = "CURINGDEGREE_MAP"
    DIRVECTOR_MAP = "DIRVECTOR_MAP"
    FUEL_LOAD_MAP = "FUEL_LOAD_MAP"
    GRASSPHENOLOGY_MAP = "GRASSPHENOLOGY_MAP"
    GREENUP_MAP = "GREENUP_MAP"
    ROSVECTOR_MAP = "ROSVECTOR_MAP"
    TREE_HEIGHT_MAP = "TREE_HEIGHT_MAP"

    # Timestep statistics (never exported as grids)
    TOTAL_BURN_AREA = "TOTAL_BURN_AREA"
    DATE_TIME = "DATE_TIME"
    SCENARIO_NAME = "SCENARIO_NAME"


class GridInterpolation(Enum):
    """Interpolation used when writing grid exports."""

    IDW = "IDW"


SCALAR_FLAGS: tuple[str, ...] = (
    "-FI", "-FL", "-ROS", "-SFC", "-CFC", "-TFC", "-CFB", "-RAZ",
    "-BG", "-HROS", "-FROS", "-BROS", "-AT", "-ATMIN", "-ATMAX",
)

MAP_FLAGS: tuple[str, ...] = (
    "-BROS_MAP", "-CBH_MAP", "-CFB_MAP", "-CFC_MAP", "-CFL_MAP", "-FI_MAP",
    "-FL_MAP", "-FMC_MAP", "-FROS_MAP", "-HROS_MAP", "-PC_MAP", "-PDF_MAP",
    "-RAZ_MAP", "-RSS_MAP", "-SFC_MAP", "-TFC_MAP", "-CURINGDEGREE_MAP",
    "-DIRVECTOR_MAP", "-FUELLOAD_MAP", "-GRASSPHENOLOGY_MAP", "-GREENUP_MAP",
    "-ROSVECTOR_MAP", "-TREEHEIGHT_MAP",
)

STATISTIC_BY_FLAG: dict[str, GlobalStatistic] = {
    "-FI": GlobalStatistic.MAX_FI,
    "-FL": GlobalStatistic.MAX_FL,
    "-ROS": GlobalStatistic.MAX_ROS,
    "-SFC": GlobalStatistic.MAX_SFC,
    "-CFC": GlobalStatistic.MAX_CFC,
    "-TFC": GlobalStatistic.MAX_TFC,
    "-CFB": GlobalStatistic.MAX_CFB,
    "-RAZ": GlobalStatistic.RAZ,
    "-BG": GlobalStatistic.BURN_GRID,
    "-HROS": GlobalStatistic.HROS,
    "-FROS": GlobalStatistic.FROS,
    "-BROS": GlobalStatistic.BROS,
    "-AT": GlobalStatistic.FIRE_ARRIVAL_TIME,
    "-ATMIN": GlobalStatistic.FIRE_ARRIVAL_TIME_MIN,
    "-ATMAX": GlobalStatistic.FIRE_ARRIVAL_TIME_MAX,
    "-BROS_MAP": GlobalStatistic.BROS_MAP,
    "-CBH_MAP": GlobalStatistic.CBH_MAP,
    "-CFB_MAP": GlobalStatistic.CFB_MAP,
    "-CFC_MAP": GlobalStatistic.CFC_MAP,
    "-CFL_MAP": GlobalStatistic.CFL_MAP,
    "-FI_MAP": GlobalStatistic.FI_MAP,
    "-FL_MAP": GlobalStatistic.FL_MAP,
    "-FMC_MAP": GlobalStatistic.FMC_MAP,
    "-FROS_MAP": GlobalStatistic.FROS_MAP,
    "-HROS_MAP": GlobalStatistic.HROS_MAP,
    "-PC_MAP": GlobalStatistic.PC_MAP,
    "-PDF_MAP": GlobalStatistic.PDF_MAP,
    "-RAZ_MAP": GlobalStatistic.RAZ_MAP,
    "-RSS_MAP": GlobalStatistic.RSS_MAP,
    "-SFC_MAP": GlobalStatistic.SFC_MAP,
    "-TFC_MAP": GlobalStatistic.TFC_MAP,
    "-CURINGDEGREE_MAP": GlobalStatistic.CURINGDEGREE_MAP,
    "-DIRVECTOR_MAP": GlobalStatistic.DIRVECTOR_MAP,
    "-FUELLOAD_MAP": GlobalStatistic.FUEL_LOAD_MAP,
    "-GRASSPHENOLOGY_MAP": GlobalStatistic.GRASSPHENOLOGY_MAP,
    "-GREENUP_MAP": GlobalStatistic.GREENUP_MAP,
    "-ROSVECTOR_MAP": GlobalStatistic.ROSVECTOR_MAP,
    "-TREEHEIGHT_MAP": GlobalStatistic.TREE_HEIGHT_MAP,
}

# Statistics emitted at the end of every timestep
TIMESTEP_STATISTICS: tuple[GlobalStatistic, ...] = (
    GlobalStatistic.TOTAL_BURN_AREA,
    GlobalStatistic.DATE_TIME,
    GlobalStatistic.SCENARIO_NAME,
)


def flag_name(flag: str) -> str:
    """Strip the leading marker from a flag for use in messages."""
    return flag[len(FLAG_MARKER):] if flag.startswith(FLAG_MARKER) else flag


def is_flag(token: str) -> bool:
    """Return True if a command line token opens a new export entry."""
    return token.startswith(FLAG_MARKER)


def is_scalar_flag(flag: str) -> bool:
    return flag in SCALAR_FLAGS


def is_map_flag(flag: str) -> bool:
    return flag in MAP_FLAGS


def get_statistic(flag: str) -> GlobalStatistic:
    """Resolve the statistic exported by a flag.

    Raises:
        ExportSpecError: If the flag is not a recognised export flag
    """
    statistic = STATISTIC_BY_FLAG.get(flag)
    if statistic is None:
        raise ExportSpecError(f"Unknown export type `{flag_name(flag)}`", flag=flag)
    return statistic
