"""Compilation of a job request from the setup file and export flags.

The whole request is built before anything talks to the engine: either a
complete CompiledJobRequest is returned or an error is raised.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from wisejob.exports import (
    ExportDescriptor,
    build_export_descriptors,
    parse_export_tokens,
    validate_exports,
)
from wisejob.parameters import SimulationParameters, decode_parameters

logger = logging.getLogger(__name__)


class CompiledJobRequest(BaseModel):
    """Decoded setup parameters plus the grid exports to attach."""

    model_config = ConfigDict(frozen=True)

    parameters: SimulationParameters
    exports: tuple[ExportDescriptor, ...]


def compile_exports(tokens: Sequence[str], filepath: str) -> tuple[ExportDescriptor, ...]:
    """Parse, validate and build the exports requested on the command line."""
    grouped = parse_export_tokens(tokens)
    entries = validate_exports(grouped)
    return build_export_descriptors(entries, filepath)


def compile_job_request(
    tokens: Sequence[str],
    parameter_lines: Sequence[str],
    filepath: str,
) -> CompiledJobRequest:
    """Compile export tokens and setup lines into a job request.

    Args:
        tokens: Export flags and their arguments
        parameter_lines: Lines of the setup file
        filepath: Output prefix for exports (e.g. "scen0/")

    Raises:
        ExportSpecError: If the export flags are malformed
        ParameterDecodeError: If the setup lines are malformed
    """
    parameters = decode_parameters(parameter_lines)
    exports = compile_exports(tokens, filepath)
    logger.info(f"Compiled job request with {len(exports)} exports")
    return CompiledJobRequest(parameters=parameters, exports=exports)
