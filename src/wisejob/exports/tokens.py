"""Grouping of command line tokens into export requests."""

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from wisejob.exports.statistics import is_flag


def parse_export_tokens(tokens: Iterable[str]) -> Mapping[str, tuple[str, ...]]:
    """Group a flat token stream into flag -> arguments.

    Every token starting with the flag marker opens a new entry. A repeated
    flag replaces the arguments of the earlier one but keeps its position.
    Values seen before the first flag are dropped.

    Example:
        >>> grouped = parse_export_tokens(["-BG", "fire1", "2001-10-16T13:00:00-05:00"])
        >>> grouped["-BG"]
        ('fire1', '2001-10-16T13:00:00-05:00')

    Returns:
        Read-only mapping in first-seen flag order
    """
    grouped: dict[str, list[str]] = {}
    current_flag: str | None = None

    for token in tokens:
        if is_flag(token):
            current_flag = token
            grouped[current_flag] = []
        elif current_flag is not None:
            grouped[current_flag].append(token)

    return MappingProxyType({flag: tuple(args) for flag, args in grouped.items()})
