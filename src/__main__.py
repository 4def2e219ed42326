#!/usr/bin/env python3
"""
mdtransform - Markdown to HTML through a pluggable token pipeline

Command line front end for the parse -> process -> compile pipeline. Reads a
markdown file, writes the compiled HTML, and optionally writes the derived
document data (title, headings, front matter, assets) as YAML.

Usage:
    python -m mdtransform --inputFile doc.md --outputFile doc.html

Examples:
    # HTML to stdout
    python -m mdtransform --inputFile README.md

    # Use the first heading as title and report it with the headings
    python -m mdtransform --inputFile guide.md --outputFile guide.html \\
        --extractTitle --metaFile guide.yaml

    # Untrusted input
    python -m mdtransform --inputFile comment.md --allowHTML --sanitize -vv
"""

import asyncio
import dataclasses
import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter
from typing import List, Optional

import yaml

from .lib import transform, __version__, LOG, state_connectToLogger
from .models import ProgramState, pipeline, TransformOptions


# Define CLI arguments
parser = ArgumentParser(
    description="mdtransform - Markdown to HTML through a pluggable token pipeline",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument("--inputFile", required=True, type=str, help="Markdown source file")

parser.add_argument(
    "--outputFile", default=None, type=str, help="HTML output file (stdout when omitted)"
)

parser.add_argument(
    "--metaFile",
    default=None,
    type=str,
    help="YAML file receiving title, headings, front matter and assets",
)

parser.add_argument(
    "--extractTitle",
    action="store_true",
    help="Remove the first top-level heading from the output and report it as title",
)

parser.add_argument(
    "--needTitle", action="store_true", help="Report the title without removing the heading"
)

parser.add_argument(
    "--flatHeadings", action="store_true", help="Report headings as a flat list"
)

parser.add_argument("--allowHTML", action="store_true", help="Pass raw HTML through")

parser.add_argument("--linkify", action="store_true", help="Turn bare URLs into links")

parser.add_argument(
    "--noBreaks", action="store_true", help="Do not render soft line breaks as <br>"
)

parser.add_argument("--sanitize", action="store_true", help="Sanitize the compiled HTML")

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate the input file and prepare output directories.

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the markdown file
            - envOK: True if environment is valid

    Exits:
        1 if the input file does not exist
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    input_file = Path(state.inputFile)
    if not input_file.is_file():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    for target in (state.outputFile, state.metaFile):
        if target:
            Path(target).parent.mkdir(parents=True, exist_ok=True)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the markdown source.

    Returns:
        ProgramState with added field:
            - source: Markdown text

    Exits:
        1 if the file cannot be read
    """
    state = inputstate.copy()

    try:
        state.source = state.inputSourceFile.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Read {len(state.source)} characters from {state.inputSourceFile.name}", level=2)
    return state


def options_fromState(state: ProgramState) -> TransformOptions:
    """Transform options matching the CLI flags"""
    return TransformOptions(
        allow_html=state.allowHTML,
        linkify=state.linkify,
        breaks=not state.noBreaks,
        extract_title=state.extractTitle,
        need_title=state.needTitle,
        need_flat_list_headings=state.flatHeadings,
        need_to_sanitize_html=state.sanitize,
        path=str(state.inputSourceFile),
    )


def markdown_transform(inputstate: ProgramState) -> ProgramState:
    """
    Run parse -> process -> compile over the source.

    Returns:
        ProgramState with added field:
            - transformResult: TransformResult

    Exits:
        1 if any stage fails
    """
    state = inputstate.copy()

    LOG("Transforming markdown...", level=1)

    try:
        state.transformResult = asyncio.run(transform(state.source, options_fromState(state)))
    except Exception as e:
        print(f"Transform error: {e}", file=sys.stderr)
        if state.verbosity >= 3:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    LOG(f"Compiled {len(state.transformResult.html)} characters of HTML", level=2)
    return state


def results_write(inputstate: ProgramState) -> ProgramState:
    """
    Write HTML and document data.

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if transformResult is missing
    """
    state: ProgramState = inputstate.copy()
    result = state.transformResult
    if result is None:
        print("Error: Transform failed", file=sys.stderr)
        sys.exit(1)

    if state.outputFile:
        Path(state.outputFile).write_text(result.html, encoding="utf-8")
        LOG(f"Wrote {state.outputFile}", level=1)
    else:
        sys.stdout.write(result.html)

    if state.metaFile:
        document = {
            "title": result.title,
            "headings": [dataclasses.asdict(heading) for heading in result.headings],
            "meta": result.meta,
            "assets": result.assets,
        }
        Path(state.metaFile).write_text(
            yaml.safe_dump(document, allow_unicode=True, sort_keys=False), encoding="utf-8"
        )
        LOG(f"Wrote {state.metaFile}", level=1)

    return state


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point - transform one markdown file.

    Orchestrates the CLI pipeline:
        1. env_check: Validate paths
        2. source_read: Read the markdown file
        3. markdown_transform: Parse, process and compile
        4. results_write: Write HTML and document data
    """
    options: Namespace = parser.parse_args(argv)

    state: ProgramState = ProgramState.state_createFromNamespace(options=options)

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, source_read, markdown_transform, results_write)


if __name__ == "__main__":
    main()
