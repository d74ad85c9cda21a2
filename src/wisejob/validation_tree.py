"""Validation tree reporting.

When the simulation engine rejects a job it returns a tree of validation
results. Only leaves describe an actual problem; branches group them by the
part of the job they belong to. This module converts engine nodes into a typed
tree and flattens it into one diagnostic line per leaf, in depth-first order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class ValidationLeaf(BaseModel):
    """A single property that failed validation."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["leaf"] = "leaf"
    value: Any = None
    property_name: str = ""
    message: str = ""


class ValidationBranch(BaseModel):
    """A group of validation results; never reported on its own."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["branch"] = "branch"
    value: Any = None
    property_name: str = ""
    message: str = ""
    children: tuple[ValidationNode, ...] = Field(min_length=1)


ValidationNode = Annotated[
    Union[ValidationLeaf, ValidationBranch], Field(discriminator="kind")
]

ValidationBranch.model_rebuild()


def _read(raw: Any, *names: str, default: Any = None) -> Any:
    """Read the first attribute or key present on an engine node."""
    for name in names:
        if isinstance(raw, dict):
            if name in raw:
                return raw[name]
        elif hasattr(raw, name):
            return getattr(raw, name)
    return default


def _node_fields(raw: Any) -> dict:
    value = _read(raw, "value")
    if value is None:
        get_value = _read(raw, "get_value", "getValue")
        if callable(get_value):
            value = get_value()
    return {
        "value": value,
        "property_name": _read(raw, "property_name", "propertyName", default="") or "",
        "message": _read(raw, "message", default="") or "",
    }


def as_validation_node(raw: Any) -> ValidationLeaf | ValidationBranch:
    """Convert an engine validation node (object or dict) into the typed tree.

    Nodes are classified by their children alone: a node without children is
    a leaf, even when it is the root. The tree is walked with an explicit
    stack, so its depth is not bounded by the recursion limit.
    """
    # Entries are (node, None) before its children are converted and
    # (node, children) once they have been pushed
    stack: list[tuple[Any, tuple | None]] = [(raw, None)]
    built: list[ValidationLeaf | ValidationBranch] = []

    while stack:
        node, children = stack.pop()
        if children is not None:
            converted = tuple(built[-len(children):])
            del built[-len(children):]
            built.append(ValidationBranch(children=converted, **_node_fields(node)))
            continue

        if isinstance(node, (ValidationLeaf, ValidationBranch)):
            built.append(node)
            continue

        children = tuple(_read(node, "children", default=None) or ())
        if not children:
            built.append(ValidationLeaf(**_node_fields(node)))
            continue
        stack.append((node, children))
        stack.extend((child, None) for child in reversed(children))

    return built[0]


def format_diagnostic(leaf: ValidationLeaf) -> str:
    """Format a leaf as: 'value' is invalid for 'property': "message".

    A missing value prints as ''.
    """
    value = "" if leaf.value is None else leaf.value
    return f"'{value}' is invalid for '{leaf.property_name}': \"{leaf.message}\""


def iter_failures(node: ValidationLeaf | ValidationBranch) -> Iterator[ValidationLeaf]:
    """Yield the leaves under a node, depth-first, children in order."""
    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, ValidationLeaf):
            yield current
        else:
            stack.extend(reversed(current.children))


def iter_diagnostics(node: Any) -> Iterator[str]:
    """Yield one diagnostic line per leaf failure under an engine node."""
    for leaf in iter_failures(as_validation_node(node)):
        yield format_diagnostic(leaf)


def report_validation_errors(
    nodes: Iterable[Any],
    emit: Callable[[str], None] | None = None,
) -> list[str]:
    """Report every leaf failure of a list of validation trees.

    Args:
        nodes: Root nodes as returned by the engine's validity check
        emit: Called once per diagnostic line (defaults to logging at ERROR)

    Returns:
        All diagnostic lines, in report order
    """
    if emit is None:
        emit = logger.error

    lines = []
    for node in nodes:
        for line in iter_diagnostics(node):
            emit(line)
            lines.append(line)
    return lines
