"""
Validate command for checking an exported Turtle file.
"""

import argparse
import json
import logging
from pathlib import Path

from ..base import BaseCommand, exit_code_for_error
from constants import ExitCode, NamespaceConfig


logger = logging.getLogger(__name__)


class ValidateCommand(BaseCommand):
    """
    Parse a Turtle file with rdflib and report what it contains.

    Usage:
        validate <file.ttl> [options]
    """

    def execute(self, args: argparse.Namespace) -> int:
        """Execute the validate command."""
        from core import InputValidator
        from formats.turtle import check_output

        self.resolve_config_path(args)
        self.setup_logging_from_config()
        ec_iri = self.config.get('export', {}).get('ec_iri', NamespaceConfig.EC_IRI)

        try:
            validated_path = InputValidator.validate_input_ttl_path(args.ttl_file)
        except (ValueError, TypeError, FileNotFoundError, PermissionError) as e:
            print(f"✗ {e}")
            return exit_code_for_error(e)

        try:
            report = check_output(validated_path, ec_iri=ec_iri)
        except (OSError, UnicodeDecodeError) as e:
            print(f"✗ Error reading file: {e}")
            return ExitCode.ERROR

        if getattr(args, 'verbose', False) or not report.is_valid:
            print(report.get_summary())

        if getattr(args, 'save_report', False):
            report_path = Path(f"{validated_path}.validation.json")
            with open(report_path, 'w', encoding='utf-8') as f:
                json.dump(report.to_dict(), f, indent=2)
            print(f"Report saved to: {report_path}")

        if not report.is_valid:
            print("✗ Validation failed: the file is not valid Turtle.")
            return ExitCode.VALIDATION_ERROR

        print(
            f"✓ Valid Turtle: {report.triple_count} triples, {report.class_count} classes, "
            f"{report.property_count} properties, {report.instance_count} instances"
        )
        return ExitCode.SUCCESS
