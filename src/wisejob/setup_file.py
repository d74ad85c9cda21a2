"""Writing setup files and export arguments.

The counterpart of parameters.decode_parameters: a launcher keeps the setup as
named values, writes them out in positional order and passes the wanted
exports on the command line.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

from wisejob.exports.statistics import FLAG_MARKER, flag_name
from wisejob.parameters import PARAMETER_FIELDS

logger = logging.getLogger(__name__)


def format_parameter_lines(values: Mapping[str, str]) -> list[str]:
    """Order named setup values by position.

    Values are looked up by field name first, then by label.

    Raises:
        KeyError: If a field has no value
    """
    lines = []
    for field in PARAMETER_FIELDS:
        if field.name in values:
            lines.append(str(values[field.name]))
        elif field.label in values:
            lines.append(str(values[field.label]))
        else:
            raise KeyError(f"Missing setup value for '{field.name}' ({field.label})")
    return lines


def write_parameter_file(path: str | Path, values: Mapping[str, str]) -> Path:
    """Write a setup file, one value per line in positional order."""
    path = Path(path)
    lines = format_parameter_lines(values)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
    logger.info(f"Wrote {len(lines)} setup values to {path}")
    return path


def format_export_arguments(flags: Iterable[str], time: str) -> list[str]:
    """Build command line export arguments, one export per flag at a single time.

    Each export is written to a file named after its flag:

        >>> format_export_arguments(["ROS", "AT"], "2001-10-16T22:00:00-05:00")
        ['-ROS', 'ROS', '2001-10-16T22:00:00-05:00', '-AT', 'AT', '2001-10-16T22:00:00-05:00']
    """
    arguments = []
    for flag in flags:
        name = flag_name(flag)
        arguments.extend([f"{FLAG_MARKER}{name}", name, time])
    return arguments
