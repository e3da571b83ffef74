"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern used by
the command line, and the pipeline() helper for composing stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, Callable
from dataclasses import dataclass, field, fields
from functools import reduce


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the reference pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: verbosity, format, outputFile, strict
        - registry_build: registry
        - reference_generate: reference
        - reference_write: outputPath
        - results_report: (no additions, terminal stage)

    Attributes:
        verbosity: Logging verbosity level (1-3)
        format: Reference output format ("markdown" or "yaml")
        outputFile: Optional file to write the reference to (stdout if empty)
        strict: Build the registry in strict mode (None: DOCMARK_STRICT_MODE)
        registry: Frozen TagRegistry with the built-in tags
        reference: Generated reference text
        outputPath: Where the reference was written (None for stdout)
    """

    # CLI arguments
    verbosity: int = field(default=1)
    format: str = field(default="markdown")
    outputFile: str = field(default="")
    strict: Optional[bool] = field(default=None)  # None: use settings

    # Pipeline state
    registry: Optional[Any] = field(default=None)  # TagRegistry at runtime
    reference: str = field(default="")
    outputPath: Optional[Path] = field(default=None)

    @classmethod
    def state_createFromNamespace(cls: Type["ProgramState"], options: Namespace) -> "ProgramState":
        """
        Create ProgramState from an argparse Namespace.

        Options that are not ProgramState fields are ignored.
        """
        valid_fields = {f.name for f in fields(cls)}
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}
        return cls(**filtered_options)

    def copy(self: PS) -> PS:
        """Shallow copy of the state"""
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            registry_build,
            reference_generate,
            reference_write,
        )
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
