"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Callable
from dataclasses import dataclass, field
from functools import reduce
import dataclasses


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the CLI pipeline (state bus pattern).

    Each stage copies the state it receives and adds its own fields.

    Pipeline stages and their state additions:
        - Initial: sourceFile, to, transformers, highlight, verbosity
        - env_check: inputSourceFile, outputFormat, transformerNames, envOK
        - source_parse: parsedSource
        - tree_write: output
    """

    # CLI arguments
    sourceFile: str = field(default="")
    to: Optional[str] = field(default=None)
    transformers: Optional[List[str]] = field(default=None)
    highlight: bool = field(default=False)
    verbosity: int = field(default=0)

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    outputFormat: str = field(default="html")
    transformerNames: List[str] = field(default_factory=list)
    parsedSource: Optional[List[Any]] = field(default=None)  # List[Node] at runtime
    output: Optional[str] = field(default=None)

    @classmethod
    def state_createFromNamespace(cls: Type["ProgramState"], options: Namespace) -> "ProgramState":
        """
        Create ProgramState from an argparse Namespace.

        Options without a matching field are ignored.
        """
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}
        return cls(**filtered_options)

    def copy(self: PS) -> PS:
        """Shallow copy, so a stage never modifies its input state"""
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Example:
        final_state = pipeline(initial_state, env_check, source_parse, tree_write)

    is tree_write(source_parse(env_check(initial_state))), read left to right.
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
