"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional CLI pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

import dataclasses
from pathlib import Path
from argparse import Namespace
from functools import reduce
from typing import Any, Optional, Type, TypeVar, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the CLI pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the run progresses.

    Pipeline stages and their state additions:
        - Initial: inputFile, outputFile, metaFile, verbosity, feature flags
        - env_check: inputSourceFile, envOK
        - source_read: source
        - markdown_transform: transformResult
        - results_write: (no additions, terminal stage)

    Attributes:
        inputFile: Markdown source file
        outputFile: HTML output file (None = stdout)
        metaFile: Optional YAML file receiving title, headings, meta and assets
        verbosity: Logging verbosity level (0-3)
        extractTitle: Remove the first top-level heading and report it as title
        needTitle: Report the title without removing the heading
        flatHeadings: Report headings as a flat list
        allowHTML: Pass raw HTML through
        linkify: Detect bare links
        noBreaks: Do not render soft breaks as <br>
        sanitize: Sanitize the compiled HTML
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the input file
        source: Markdown text read from the input file
        transformResult: TransformResult produced by the transform stage
    """

    # CLI arguments
    inputFile: str = field(default="")
    outputFile: Optional[str] = field(default=None)
    metaFile: Optional[str] = field(default=None)
    verbosity: int = field(default=1)
    extractTitle: bool = field(default=False)
    needTitle: bool = field(default=False)
    flatHeadings: bool = field(default=False)
    allowHTML: bool = field(default=False)
    linkify: bool = field(default=False)
    noBreaks: bool = field(default=False)
    sanitize: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    source: str = field(default="")
    transformResult: Optional[Any] = field(default=None)  # TransformResult at runtime

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace.

        Args:
            options: Parsed CLI arguments

        Returns:
            ProgramState instance with all matching CLI options as attributes
        """
        options_dict = vars(options)

        # Keep only options that are ProgramState fields
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        return cls(**filtered_options)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
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
            env_check,
            source_read,
            markdown_transform,
            results_write
        )

    This is equivalent to:
        results_write(markdown_transform(source_read(env_check(initial_state))))
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
