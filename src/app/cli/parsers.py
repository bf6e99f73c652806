"""
CLI argument parser configuration.

This module defines the argument parser structure for all CLI commands.
It centralizes all argument parsing logic and provides a clean interface
for the main entry point.

Command Structure:
    - export     <snapshot.json> [--output out.ttl]
    - validate   <file.ttl>
    - vocabulary [--output out.ttl]
    - compare    <first.ttl> <second.ttl>
"""

import argparse


# ============================================================================
# Shared Flag Group Builders
# ============================================================================

def add_config_flags(parser: argparse.ArgumentParser) -> None:
    """Add configuration file flag."""
    parser.add_argument(
        '--config', '-c',
        help='Path to configuration file (default: config.json in the project root, if present)'
    )


def add_output_flags(parser: argparse.ArgumentParser, help_text: str = 'Output TTL file path') -> None:
    """Add common output-related flags."""
    parser.add_argument(
        '--output', '-o',
        help=help_text
    )


def add_namespace_flags(parser: argparse.ArgumentParser) -> None:
    """Add namespace IRI overrides."""
    parser.add_argument(
        '--base-iri',
        help='Base IRI of the schema and instance namespaces (overrides config)'
    )
    parser.add_argument(
        '--ec-iri',
        help='IRI of the ec upper vocabulary (overrides config)'
    )


def add_export_flags(parser: argparse.ArgumentParser) -> None:
    """Add export behaviour flags."""
    parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable progress bars'
    )
    parser.add_argument(
        '--strict',
        action='store_true',
        help='Report skipped values as warnings and treat snapshot warnings as errors'
    )
    parser.add_argument(
        '--save-report', '-s',
        action='store_true',
        help='Save the export summary to <output>.export.json'
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
        description="ECSchema repository to RDF Turtle exporter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Export a repository snapshot
    %(prog)s export repository.json --output repository.ttl
    %(prog)s export repository.json --config config.json --no-progress

    # Check an exported file
    %(prog)s validate repository.ttl --verbose

    # Write the upper vocabulary only
    %(prog)s vocabulary --output ec.ttl

    # Compare two exports
    %(prog)s compare previous.ttl repository.ttl
        """,
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    _add_export_parser(subparsers)
    _add_validate_parser(subparsers)
    _add_vocabulary_parser(subparsers)
    _add_compare_parser(subparsers)

    return parser


# ============================================================================
# Command Parsers
# ============================================================================

def _add_export_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the export command parser."""
    parser = subparsers.add_parser(
        'export',
        help='Export a repository snapshot to TTL'
    )
    parser.add_argument('snapshot', help='Path to the repository snapshot JSON file')
    add_output_flags(parser, 'Output TTL file path (default: <snapshot>.ttl)')
    add_config_flags(parser)
    add_namespace_flags(parser)
    add_export_flags(parser)


def _add_validate_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the validate command parser."""
    parser = subparsers.add_parser(
        'validate',
        help='Parse an exported TTL file and report its contents'
    )
    parser.add_argument('ttl_file', help='Path to the TTL file to check')
    add_config_flags(parser)
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show the detailed report'
    )
    parser.add_argument(
        '--save-report', '-s',
        action='store_true',
        help='Save the report to <ttl_file>.validation.json'
    )


def _add_vocabulary_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the vocabulary command parser."""
    parser = subparsers.add_parser(
        'vocabulary',
        help='Write the ec upper vocabulary'
    )
    add_output_flags(parser, 'Output TTL file path (default: standard output)')
    add_config_flags(parser)
    parser.add_argument(
        '--ec-iri',
        help='IRI of the ec upper vocabulary (overrides config)'
    )


def _add_compare_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the compare command parser."""
    parser = subparsers.add_parser(
        'compare',
        help='Compare the classes, properties and instances of two TTL files'
    )
    parser.add_argument('ttl_file1', help='First TTL file')
    parser.add_argument('ttl_file2', help='Second TTL file')
    add_config_flags(parser)
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show detailed comparison results'
    )
