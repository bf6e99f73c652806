"""
Common commands that do not read a repository snapshot.

Commands:
    - VocabularyCommand: Write the ec upper vocabulary
    - CompareCommand: Compare two exported TTL files
"""

import argparse
import logging
import sys

from .base import BaseCommand, exit_code_for_error
from constants import ExitCode, NamespaceConfig


logger = logging.getLogger(__name__)


class VocabularyCommand(BaseCommand):
    """Write the upper vocabulary alone, to a file or to standard output."""

    def execute(self, args: argparse.Namespace) -> int:
        """Execute the vocabulary command."""
        from core import InputValidator
        from formats.turtle import TripleSink, TurtleExportError, declare_vocabulary

        self.resolve_config_path(args)
        self.setup_logging_from_config()

        ec_iri = getattr(args, 'ec_iri', None) or self.config.get('export', {}).get(
            'ec_iri', NamespaceConfig.EC_IRI
        )
        try:
            ec_iri = InputValidator.validate_namespace_iri(ec_iri)
        except (ValueError, TypeError) as e:
            print(f"✗ Configuration error: {e}")
            return ExitCode.CONFIG_ERROR

        if not args.output:
            sink = TripleSink(sys.stdout)
            declare_vocabulary(sink, ec_iri=ec_iri)
            return ExitCode.SUCCESS

        try:
            output_path = InputValidator.validate_output_file_path(
                args.output, allowed_extensions=InputValidator.TTL_EXTENSIONS
            )
        except (ValueError, TypeError, PermissionError) as e:
            print(f"✗ Invalid output path: {e}")
            return exit_code_for_error(e)

        try:
            with TripleSink.open(output_path) as sink:
                declare_vocabulary(sink, ec_iri=ec_iri)
        except TurtleExportError as e:
            print(f"✗ {e}")
            return ExitCode.ERROR

        print(f"✓ Wrote {sink.prefixes_written} prefixes and {sink.triples_written} triples to: {output_path}")
        return ExitCode.SUCCESS


class CompareCommand(BaseCommand):
    """Compare two TTL files by their classes, properties and instances."""

    def execute(self, args: argparse.Namespace) -> int:
        """Execute the compare command."""
        from core import InputValidator
        from formats.turtle import compare_outputs

        self.resolve_config_path(args)
        self.setup_logging_from_config()
        ec_iri = self.config.get('export', {}).get('ec_iri', NamespaceConfig.EC_IRI)

        try:
            validated_path1 = InputValidator.validate_input_ttl_path(args.ttl_file1)
            validated_path2 = InputValidator.validate_input_ttl_path(args.ttl_file2)
        except (ValueError, TypeError, FileNotFoundError, PermissionError) as e:
            print(f"Error: Invalid TTL file path: {e}")
            return exit_code_for_error(e)

        try:
            with open(validated_path1, 'r', encoding='utf-8') as f:
                ttl_content1 = f.read()
            with open(validated_path2, 'r', encoding='utf-8') as f:
                ttl_content2 = f.read()
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error reading TTL files: {e}")
            return ExitCode.ERROR

        print("Comparing:")
        print(f"  File 1: {validated_path1}")
        print(f"  File 2: {validated_path2}")
        print()

        try:
            comparison = compare_outputs(ttl_content1, ttl_content2, ec_iri=ec_iri)
        except Exception as e:
            print(f"✗ Could not parse TTL: {e}")
            return ExitCode.VALIDATION_ERROR

        if comparison["is_equivalent"]:
            print("✓ Exports are EQUIVALENT")
        else:
            print("✗ Exports are NOT equivalent")

        print()
        verbose = getattr(args, 'verbose', False)
        for section, title in (
            ("classes", "Classes"),
            ("properties", "Properties"),
            ("instances", "Instances"),
        ):
            details = comparison[section]
            print(f"{title}: {details['count1']} vs {details['count2']}")
            if verbose or section != "instances":
                if details['only_in_first']:
                    print(f"  Only in file 1: {details['only_in_first']}")
                if details['only_in_second']:
                    print(f"  Only in file 2: {details['only_in_second']}")
        print(f"Triples: {comparison['triple_count_first']} vs {comparison['triple_count_second']}")

        return ExitCode.SUCCESS if comparison["is_equivalent"] else ExitCode.ERROR
