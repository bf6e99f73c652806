#!/usr/bin/env python3
"""
ECSchema Repository to RDF Turtle Exporter

This is the main entry point for exporting repository snapshots to Turtle.

Usage:
    python main.py export <snapshot.json> [--output <out.ttl>] [--config <config.json>] [--no-progress]
    python main.py validate <file.ttl> [--verbose]
    python main.py vocabulary [--output <ec.ttl>]
    python main.py compare <first.ttl> <second.ttl> [--verbose]
"""

import sys
from typing import Dict, List, Optional, Type

from app.cli.commands import (
    BaseCommand,
    CompareCommand,
    ExportCommand,
    ValidateCommand,
    VocabularyCommand,
)
from app.cli.parsers import create_argument_parser
from constants import ExitCode


COMMANDS: Dict[str, Type[BaseCommand]] = {
    'export': ExportCommand,
    'validate': ValidateCommand,
    'vocabulary': VocabularyCommand,
    'compare': CompareCommand,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return ExitCode.ERROR

    command = COMMANDS[args.command](config_path=getattr(args, 'config', None))
    try:
        return int(command.execute(args))
    except KeyboardInterrupt:
        print("\n✗ Interrupted")
        return ExitCode.CANCELLED


if __name__ == '__main__':
    sys.exit(main())
