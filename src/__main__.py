#!/usr/bin/env python3
"""
docmark - tag reference for documentation authors

Writes the reference of every built-in documentation tag: its name,
whether it is self-closing, and each attribute's type, default, allowed
values and severity.

Usage:
    docmark                                  # Markdown to stdout
    docmark --format yaml --outputFile tags.yaml
    docmark --strict -vv                     # severities as enforced in strict mode
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter
from typing import List, Optional

from . import __version__
from .lib.log import LOG, state_connectToLogger
from .models import ProgramState, pipeline


parser = ArgumentParser(
    prog="docmark",
    description="docmark - reference of the documentation markup tags",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--format",
    choices=["markdown", "yaml"],
    default="markdown",
    help="Output format of the reference",
)

parser.add_argument(
    "--outputFile",
    default="",
    type=str,
    help="File to write the reference to (stdout if omitted)",
)

parser.add_argument(
    "--strict",
    action="store_true",
    default=None,
    help="Document severities as enforced in strict mode (every violation blocks); "
    "without it DOCMARK_STRICT_MODE decides",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def registry_build(inputstate: ProgramState) -> ProgramState:
    """Build the frozen registry of built-in tags"""
    from .lib.tags import registry_createDefault

    state = inputstate.copy()
    LOG("Building tag registry...", level=2)
    state.registry = registry_createDefault(strict=state.strict)
    LOG(f"Registry holds {len(state.registry)} tags", level=2)
    return state


def reference_generate(inputstate: ProgramState) -> ProgramState:
    """Render the reference in the requested format"""
    from .lib.reference import reference_toMarkdown, reference_toYAML

    state = inputstate.copy()
    if state.registry is None:
        print("Error: No tag registry available", file=sys.stderr)
        sys.exit(1)

    LOG(f"Generating {state.format} reference...", level=2)
    if state.format == "yaml":
        state.reference = reference_toYAML(state.registry)
    else:
        state.reference = reference_toMarkdown(state.registry)
    return state


def reference_write(inputstate: ProgramState) -> ProgramState:
    """Write the reference to outputFile, or stdout"""
    state = inputstate.copy()

    if not state.outputFile:
        sys.stdout.write(state.reference)
        return state

    path = Path(state.outputFile)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(state.reference, encoding="utf-8")
    except OSError as e:
        print(f"Error writing {path}: {e}", file=sys.stderr)
        sys.exit(1)

    state.outputPath = path
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """Report where the reference went"""
    state = inputstate.copy()
    if state.outputPath is not None:
        LOG(f"Wrote tag reference to {state.outputPath}", level=1)
    return state


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point - generate the tag reference.

    Orchestrates the pipeline:
        1. registry_build: Build the frozen built-in registry
        2. reference_generate: Render Markdown or YAML
        3. reference_write: Write to file or stdout
        4. results_report: Report the outcome
    """
    options: Namespace = parser.parse_args(argv)
    state: ProgramState = ProgramState.state_createFromNamespace(options)

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, registry_build, reference_generate, reference_write, results_report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
