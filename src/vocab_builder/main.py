#!/usr/bin/env python3
"""
vocab-builder command-line entry point.

Usage:
    vocab-builder run [options] <input-file-or-url> [<output-file>]
    vocab-builder build --config <config.json> [--offline] [--output DIR] [--force]
    python -m vocab_builder.main ...
"""

import sys
from typing import Dict, Optional, Sequence, Type

from .app.cli.commands import BaseCommand, BuildCommand, RunCommand
from .app.cli.parsers import create_argument_parser, normalize_indent_args
from .constants import ExitCode


COMMANDS: Dict[str, Type[BaseCommand]] = {
    'run': RunCommand,
    'build': BuildCommand,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point.
    
    Args:
        argv: Arguments without the program name (default: ``sys.argv[1:]``).
        
    Returns:
        Process exit code.
    """
    parser = create_argument_parser()
    raw = sys.argv[1:] if argv is None else argv
    args = parser.parse_args(normalize_indent_args(raw))
    
    if not args.command:
        parser.print_help()
        return ExitCode.USAGE_ERROR
    
    command = COMMANDS[args.command]()
    try:
        return int(command.execute(args))
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return ExitCode.ERROR


if __name__ == '__main__':
    sys.exit(main())
