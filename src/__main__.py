#!/usr/bin/env python3
"""
minml - MinML converter

Parses a MinML source file and writes it back out as HTML, XML, or
normalized MinML on standard output.

Usage:
    minml SOURCEFILE [--to html|xml|minml] [--transformers NAME ...]

Examples:
    # HTML, with the default entity and quote transformers
    minml notes.minml > notes.html

    # XML, references left as they are
    minml notes.minml --to xml --transformers

    # Normalized MinML, colorized for the terminal
    minml notes.minml --to minml --highlight

    # Stage progress on stderr
    minml notes.minml -v
"""

import io
import sys
import traceback
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter
from typing import List, Optional

from pygments import highlight
from pygments.formatters import Terminal256Formatter

from . import __version__
from .config import appsettings
from .lib import (
    HtmlTreeWriter,
    MinmlLexer,
    MinmlTreeWriter,
    TransformerRegistry,
    TreeParser,
    XmlTreeWriter,
    LOG,
    state_connectToLogger,
)
from .models import ProgramState, pipeline


WRITERS = {
    "html": HtmlTreeWriter,
    "xml": XmlTreeWriter,
    "minml": MinmlTreeWriter,
}

# Define CLI arguments
parser = ArgumentParser(
    prog="minml",
    description="minml - convert MinML markup to HTML, XML, or normalized MinML",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument("sourceFile", type=str, help="MinML source file")

parser.add_argument(
    "--to",
    choices=sorted(WRITERS),
    default=None,
    help=f"Output format (default from MATCHERTEXT_OUTPUT_FORMAT, currently {appsettings.output_format})",
)

parser.add_argument(
    "--transformers",
    nargs="*",
    default=None,
    metavar="NAME",
    help="Transformers to apply while parsing, in order; give none to disable all "
         f"(default from MATCHERTEXT_TRANSFORMERS, currently {' '.join(appsettings.transformers)})",
)

parser.add_argument(
    "--highlight",
    action="store_true",
    help="Colorize MinML output for a terminal",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=0,
    help="Increase logging verbosity on stderr (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def error_exit(state: ProgramState, doing: str, e: BaseException) -> None:
    """Report a failed stage on stderr and exit with status 1"""
    print(f"Error {doing} {state.sourceFile}: {e}", file=sys.stderr)
    if appsettings.debug_mode:
        traceback.print_exception(e)
    sys.exit(1)


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate the source file and resolve output options.

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Path of the source file
            - outputFormat: html, xml or minml
            - transformerNames: registry names to apply, in order
            - envOK: True if the environment is valid

    Exits:
        1 if the source file is missing or a transformer name is unknown
    """
    state = inputstate.copy()
    state_connectToLogger(state)

    LOG("Checking environment...", level=2)

    input_file = Path(state.sourceFile)
    if not input_file.is_file():
        error_exit(state, "opening", FileNotFoundError("no such file"))
    state.inputSourceFile = input_file

    state.outputFormat = state.to or appsettings.output_format
    names = list(appsettings.transformers if state.transformers is None else state.transformers)

    # MinML output must stay valid matchertext
    if state.outputFormat == "minml":
        names.append("matcher-minml")

    unknown = [n for n in names if TransformerRegistry().spec_get(n) is None]
    if unknown:
        error_exit(state, "configuring", ValueError(f"unknown transformer '{unknown[0]}'"))
    state.transformerNames = names

    LOG(f"Output format: {state.outputFormat}", level=2)
    LOG(f"Transformers: {', '.join(names) or '(none)'}", level=2)

    state.envOK = True
    return state


def source_parse(inputstate: ProgramState) -> ProgramState:
    """
    Read and parse the MinML source into an AST.

    Returns:
        ProgramState with added field:
            - parsedSource: List[Node] for the whole document

    Exits:
        1 if the file cannot be read or does not parse
    """
    state = inputstate.copy()
    state_connectToLogger(state)

    LOG("Reading source file...", level=1)
    try:
        source = state.inputSourceFile.read_bytes()
    except OSError as e:
        error_exit(state, "opening", e)
    LOG(f"Read {len(source)} bytes from {state.inputSourceFile.name}", level=2)

    LOG("Parsing source into AST...", level=1)
    try:
        tree_parser = TreeParser(source)
        for t in TransformerRegistry().pipeline_build(state.transformerNames):
            tree_parser.transformer_add(t)
        state.parsedSource = tree_parser.ast_parse()
    except (SyntaxError, ValueError, RuntimeError) as e:
        error_exit(state, "parsing", e)
    return state


def tree_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the AST to standard output in the chosen format.

    Returns:
        ProgramState with added field:
            - output: the text written

    Exits:
        1 if the AST cannot be encoded
    """
    state = inputstate.copy()
    state_connectToLogger(state)

    LOG(f"Writing {state.outputFormat}...", level=1)
    sink = io.StringIO()
    try:
        WRITERS[state.outputFormat](sink).ast_write(state.parsedSource or [])
    except ValueError as e:
        error_exit(state, "writing", e)
    state.output = sink.getvalue()

    text = state.output
    if state.highlight and state.outputFormat == "minml":
        text = highlight(text, MinmlLexer(), Terminal256Formatter(style=appsettings.highlight_style))
    sys.stdout.write(text)
    return state


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point - convert one MinML source file.

    Orchestrates the pipeline:
        1. env_check: Validate the source file and options
        2. source_parse: Read and parse the source into an AST
        3. tree_write: Write the AST to stdout

    Args:
        argv: Command line arguments, sys.argv[1:] if None

    Returns:
        0 on success; failures exit with status 1
    """
    options: Namespace = parser.parse_args(argv)
    state: ProgramState = ProgramState.state_createFromNamespace(options)

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, source_parse, tree_write)
    return 0


if __name__ == "__main__":
    sys.exit(main())
