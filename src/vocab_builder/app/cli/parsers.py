"""
CLI argument parser configuration.

This module defines the argument parser structure for all CLI commands.
It centralizes all argument parsing logic and provides a clean interface
for the main entry point.

Command Structure:
    - run   [options] <input-file-or-url> [<output-file>]
    - build --config <config.json> [--offline] [--output DIR] [--force]
"""

import argparse
from typing import List, Sequence

from ... import __version__
from ...constants import GenerationConfig, ToolInfo


INDENT_FLAGS = ('-s', '--indent')


def _indent_value(value: str) -> int:
    """argparse type for the indent width."""
    try:
        spaces = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid indent width: {value!r}")
    if spaces < 0:
        raise argparse.ArgumentTypeError(f"indent width must not be negative: {value!r}")
    return spaces


def normalize_indent_args(argv: Sequence[str]) -> List[str]:
    """
    Attach the default width to a bare ``-s``/``--indent`` flag.
    
    ``-s`` takes an optional number. A bare flag followed by a positional
    argument (``-s in.ttl``) would otherwise swallow that argument as the
    width, so the flag is rewritten to ``--indent=4`` unless the next
    argument is a number.
    """
    result: List[str] = []
    args = list(argv)
    for index, arg in enumerate(args):
        if arg in INDENT_FLAGS:
            following = args[index + 1] if index + 1 < len(args) else None
            if following is None or not following.lstrip('-').isdigit():
                result.append(f"--indent={GenerationConfig.DEFAULT_SPACE_INDENT}")
                continue
        result.append(arg)
    return result


# ============================================================================
# Shared Flag Group Builders
# ============================================================================

def add_logging_flags(parser: argparse.ArgumentParser) -> None:
    """Add logging flags."""
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        type=str.upper,
        help='Log level (default: INFO, or the config file setting)'
    )
    parser.add_argument(
        '--log-file',
        help='Also write log output to this file'
    )


def add_generation_flags(parser: argparse.ArgumentParser) -> None:
    """Add flags controlling a single vocabulary's generation."""
    parser.add_argument(
        '--format', '-f',
        dest='mime_type',
        metavar='MIME_TYPE',
        help='Explicit input media type, e.g. text/turtle or application/rdf+xml'
    )
    parser.add_argument(
        '--package', '-p',
        dest='package_name',
        help='Target package of the generated module (dotted)'
    )
    parser.add_argument(
        '--name', '-n',
        help='Vocabulary name; guessed from the document prefixes if omitted'
    )
    parser.add_argument(
        '--uri', '-u',
        dest='prefix',
        help='Namespace URI override; guessed from the document if omitted'
    )
    parser.add_argument(
        *INDENT_FLAGS,
        dest='indent',
        nargs='?',
        const=GenerationConfig.DEFAULT_SPACE_INDENT,
        type=_indent_value,
        metavar='N',
        help=(
            'Indent generated code with N spaces (-sN or --indent=N). '
            f'A bare flag means {GenerationConfig.DEFAULT_SPACE_INDENT} spaces; '
            'omitted means tabs'
        )
    )
    parser.add_argument(
        '--language', '-l',
        dest='preferred_language',
        help='Preferred language for labels and comments, e.g. en'
    )


# ============================================================================
# Main Parser Factory
# ============================================================================

def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the main argument parser.
    
    Returns:
        Configured ArgumentParser with all subcommands.
    """
    parser = argparse.ArgumentParser(
        prog=ToolInfo.NAME,
        description=ToolInfo.DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Generate a module from a local file, printing it to stdout
    %(prog)s run vocab/foaf.ttl
    
    # Fetch a remote vocabulary and write FOAF.py with 4-space indents
    %(prog)s run -s -n foaf https://xmlns.com/foaf/0.1/index.rdf build/FOAF.py
    
    # Build every vocabulary of a configuration file
    %(prog)s build --config vocabularies.json
    %(prog)s build --config vocabularies.json --offline
        """,
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f"%(prog)s {__version__}"
    )
    add_logging_flags(parser)
    
    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    
    _add_run_parser(subparsers)
    _add_build_parser(subparsers)
    
    return parser


# ============================================================================
# Command Parsers
# ============================================================================

def _add_run_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the single-vocabulary run command parser."""
    parser = subparsers.add_parser(
        'run',
        help='Generate one vocabulary module from a file or URL',
        description=(
            'Generate a Python vocabulary module from one RDF document. '
            'http(s) inputs are downloaded to a temporary file first. '
            'Without an output file the module is written to stdout.'
        ),
    )
    parser.add_argument('input', help='Input RDF file or http(s) URL')
    parser.add_argument(
        'output',
        nargs='?',
        help='Output file; its stem becomes the class name (default: stdout)'
    )
    add_generation_flags(parser)


def _add_build_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the batch build command parser."""
    parser = subparsers.add_parser(
        'build',
        help='Build every vocabulary of a configuration file',
        description=(
            'Generate all vocabularies declared in a JSON configuration. '
            'Unchanged remote and local vocabularies are skipped.'
        ),
    )
    parser.add_argument(
        '--config', '-c',
        required=True,
        help='Path to the JSON build configuration'
    )
    parser.add_argument(
        '--offline',
        action='store_true',
        help='Skip remote vocabularies without touching the network'
    )
    parser.add_argument(
        '--output', '-o',
        help='Override the output root of generated modules'
    )
    parser.add_argument(
        '--force',
        action='store_true',
        help='Regenerate local vocabularies even if they did not change'
    )
