"""Export request validation.

Checks run per entry, in order, and stop at the first failure:
1. Known flag: the flag is one of the scalar or map export flags
2. Argument count: scalar flags take 2 or 3 arguments, map flags exactly 2
3. Unique filename: no two entries write to the same file
4. Filename restrictions: optional ".tif", no reserved characters, spaces or periods

Structural checks run before any time parsing.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

from wisejob.exports.errors import ExportSpecError
from wisejob.exports.models import ExportEntry
from wisejob.exports.statistics import flag_name, is_map_flag, is_scalar_flag

OUTPUT_SUFFIX = ".tif"

# Argument counts including the filename
SCALAR_ARG_COUNTS = (2, 3)
MAP_ARG_COUNT = 2

FORBIDDEN_FILENAME_CHARS = '<>:"/\\|?*'
_FORBIDDEN_FILENAME_RE = re.compile(r'[<>:"/\\|?*\s.]')


def check_known_flag(flag: str) -> None:
    """Raise if the flag is neither a scalar nor a map export flag."""
    if not is_scalar_flag(flag) and not is_map_flag(flag):
        raise ExportSpecError(f"Unknown export type `{flag_name(flag)}`", flag=flag)


def check_argument_count(flag: str, args: Sequence[str]) -> None:
    """Raise if the number of arguments does not suit the flag's class."""
    if is_scalar_flag(flag):
        valid = len(args) in SCALAR_ARG_COUNTS
    else:
        valid = len(args) == MAP_ARG_COUNT
    if not valid:
        raise ExportSpecError(
            f"Incorrect number of arguments for `{flag_name(flag)}`", flag=flag
        )


def check_unique_filename(flag: str, filename: str, seen: set[str]) -> None:
    """Raise if the filename was already claimed by an earlier entry.

    The filename is recorded in ``seen`` when it passes.
    """
    if filename in seen:
        raise ExportSpecError(
            f'The export filename "{filename}" is used more than once',
            flag=flag,
            filename=filename,
        )
    seen.add(filename)


def is_valid_filename(filename: str) -> bool:
    """Check a requested export filename against the naming restrictions.

    The ".tif" extension is optional. The remaining stem must be non-empty and
    may not contain reserved characters, whitespace or periods.
    """
    stem = filename[: -len(OUTPUT_SUFFIX)] if filename.endswith(OUTPUT_SUFFIX) else filename
    return bool(stem) and _FORBIDDEN_FILENAME_RE.search(stem) is None


def check_filename(flag: str, filename: str) -> None:
    if not is_valid_filename(filename):
        raise ExportSpecError(
            f'Invalid export filename "{filename}" for `{flag_name(flag)}`: '
            f"names may end in {OUTPUT_SUFFIX} but cannot contain "
            f"{FORBIDDEN_FILENAME_CHARS}, spaces or periods",
            flag=flag,
            filename=filename,
        )


def validate_exports(grouped: Mapping[str, Sequence[str]]) -> tuple[ExportEntry, ...]:
    """Validate grouped export tokens.

    Args:
        grouped: Flag -> arguments, as returned by parse_export_tokens

    Returns:
        One ExportEntry per flag, in mapping order

    Raises:
        ExportSpecError: On the first violated rule
    """
    seen_filenames: set[str] = set()
    entries = []

    for flag, args in grouped.items():
        check_known_flag(flag)
        check_argument_count(flag, args)
        check_unique_filename(flag, args[0], seen_filenames)
        check_filename(flag, args[0])
        entries.append(ExportEntry(flag=flag, args=tuple(args)))

    return tuple(entries)
