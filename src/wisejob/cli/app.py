"""wisejob command line application.

Reads the simulation setup file, compiles the export flags given on the
command line and writes the assembled job as JSON.

Usage:
    wisejob [options] -<EXPORT> <filename> <time> [<time>] ...

Examples:
    # Burn grid over a time range
    wisejob -BG fire1 2001-10-16T13:00:00-05:00 2001-10-16T21:00:00-05:00

    # Several exports, explicit setup file, job written to a file
    wisejob --setup-file setup.txt -o job.json \\
        -ROS ros 2001-10-16T22:00:00-05:00 -FI_MAP fi 2001-10-16T22:00:00-05:00

Scalar exports (filename, time, optional end time):
    FI FL ROS SFC CFC TFC CFB RAZ BG HROS FROS BROS AT ATMIN ATMAX

Map exports (filename, time):
    BROS_MAP CBH_MAP CFB_MAP CFC_MAP CFL_MAP FI_MAP FL_MAP FMC_MAP FROS_MAP
    HROS_MAP PC_MAP PDF_MAP RAZ_MAP RSS_MAP SFC_MAP TFC_MAP CURINGDEGREE_MAP
    DIRVECTOR_MAP FUELLOAD_MAP GRASSPHENOLOGY_MAP GREENUP_MAP ROSVECTOR_MAP
    TREEHEIGHT_MAP

Filenames may end in .tif and cannot contain <>:"/\\|?*, spaces or periods.

Exit codes: 0 on success, 1 when the jobs directory or setup file is missing,
2 when the setup file or export flags are invalid.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from wisejob.compiler import compile_job_request
from wisejob.config import (
    get_input_directory,
    get_jobs_directory,
    get_log_level,
    get_output_prefix,
    get_scenario_name,
    get_setup_file_path,
    get_timezone_id,
    is_jobs_directory_configured,
)
from wisejob.job import assemble_job
from wisejob.parameters import read_parameter_lines

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_MISSING_INPUT = 1
EXIT_INVALID_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the option parser.

    Only long options and lowercase short options are defined so that the
    uppercase export flags are left over for the export compiler.
    """
    parser = argparse.ArgumentParser(
        prog="wisejob",
        description="Build a W.I.S.E. job from a setup file and export flags",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--setup-file",
        type=str,
        default=None,
        help="Setup file (default: <jobs-dir>/test/SimulationDictionary.txt)",
    )
    parser.add_argument(
        "--jobs-dir",
        type=str,
        default=None,
        help="Engine jobs directory (default: $WISEJOB_JOBS_DIR or ./jobs)",
    )
    parser.add_argument(
        "--scenario",
        type=str,
        default=None,
        help="Scenario name, also the export folder (default: scen0)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Write the job JSON to this file instead of stdout",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: $WISEJOB_LOG_LEVEL or INFO)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the wisejob command.

    Returns:
        Process exit code
    """
    parser = build_parser()
    args, export_tokens = parser.parse_known_args(argv)

    logging.basicConfig(
        level=(args.log_level or get_log_level()).upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    jobs_dir = Path(args.jobs_dir) if args.jobs_dir else get_jobs_directory()
    if not is_jobs_directory_configured(jobs_dir):
        logger.error(
            "The job directory has not been configured. "
            "Please edit the job directory before building jobs."
        )
        return EXIT_MISSING_INPUT

    setup_path = Path(args.setup_file) if args.setup_file else get_setup_file_path(jobs_dir)
    if not setup_path.exists():
        logger.error(f"Setup file not found: {setup_path}")
        return EXIT_MISSING_INPUT

    scenario_name = args.scenario or get_scenario_name()

    try:
        request = compile_job_request(
            export_tokens,
            read_parameter_lines(setup_path),
            get_output_prefix(scenario_name),
        )
        job = assemble_job(
            request,
            input_directory=get_input_directory(jobs_dir),
            scenario_name=scenario_name,
            timezone_id=get_timezone_id(),
        )
    except ValueError as e:
        logger.error(str(e))
        return EXIT_INVALID_INPUT

    payload = job.model_dump_json(indent=2)
    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(payload + "\n", encoding="utf-8")
        logger.info(f"Job written to: {output_path}")
    else:
        print(payload)

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
