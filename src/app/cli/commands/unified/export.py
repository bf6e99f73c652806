"""
Export command for exporting a repository snapshot to TTL format.
"""

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict

from ..base import BaseCommand, exit_code_for_error, print_export_summary
from ...helpers import default_output_path, setup_logging
from constants import ExitCode


logger = logging.getLogger(__name__)


class ExportCommand(BaseCommand):
    """
    Export a repository snapshot to a Turtle file.

    Usage:
        export <snapshot.json> [options]
    """

    @staticmethod
    def build_export_settings(config_data: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
        """Merge the "export" config section with command-line overrides."""
        settings = dict(config_data.get('export', {}) or {})
        if getattr(args, 'base_iri', None):
            settings['base_iri'] = args.base_iri
        if getattr(args, 'ec_iri', None):
            settings['ec_iri'] = args.ec_iri
        if getattr(args, 'no_progress', False):
            settings['show_progress'] = False
        if getattr(args, 'strict', False):
            settings['strict'] = True
        return settings

    def execute(self, args: argparse.Namespace) -> int:
        """Execute the export command."""
        from core import ExportConfig, InputValidator
        from core.services import (
            SimpleCancellationToken,
            setup_cancellation_handler,
            restore_default_handler,
        )
        from core.services.pipeline import ExportPipeline, PipelineState
        from formats.turtle import IOFailure

        self.resolve_config_path(args)
        try:
            config_data = self.config
            setup_logging(config=config_data.get('logging', {}))
        except Exception as e:
            print(f"✗ {e}")
            return ExitCode.CONFIG_ERROR

        try:
            export_config = ExportConfig.from_dict(self.build_export_settings(config_data, args))
        except (ValueError, TypeError) as e:
            print(f"✗ Configuration error: {e}")
            return ExitCode.CONFIG_ERROR

        try:
            snapshot_path = InputValidator.validate_input_snapshot_path(args.snapshot)
        except (ValueError, TypeError, FileNotFoundError, PermissionError) as e:
            print(f"✗ Invalid snapshot path: {e}")
            return exit_code_for_error(e)

        output_arg = args.output or default_output_path(str(snapshot_path))
        try:
            output_path = InputValidator.validate_output_file_path(
                output_arg, allowed_extensions=InputValidator.TTL_EXTENSIONS
            )
        except (ValueError, TypeError, PermissionError) as e:
            print(f"✗ Invalid output path: {e}")
            return exit_code_for_error(e)

        print(f"✓ Exporting {snapshot_path} to TTL...")

        pipeline = self._pipeline or ExportPipeline(export_config)
        token = SimpleCancellationToken()
        previous_handler = setup_cancellation_handler(token)
        try:
            result = pipeline.execute(snapshot_path, output_path, cancellation_token=token)
        finally:
            restore_default_handler(previous_handler)

        if result.export_result is not None:
            print_export_summary(result.export_result, heading="Export Summary")
        print(result.stats.get_summary())

        if getattr(args, 'save_report', False):
            self._save_report(result, output_path)

        if result.stats.state == PipelineState.CANCELLED:
            print("⚠ Export cancelled; the output is complete up to its last line.")
            return ExitCode.CANCELLED

        if not result.success:
            print(f"✗ Export failed: {result.error}")
            if result.export_result is None:
                return ExitCode.VALIDATION_ERROR
            if isinstance(result.exception, IOFailure):
                return ExitCode.ERROR
            return ExitCode.MAPPING_ERROR

        if result.stats.skipped_items:
            print(f"⚠ Export completed with {result.stats.skipped_items} skipped item(s).")
        print(f"✓ Exported to: {output_path}")
        return ExitCode.SUCCESS

    @staticmethod
    def _save_report(result: Any, output_path: Path) -> None:
        report_path = Path(f"{output_path}.export.json")
        report = {
            "success": result.success,
            "error": result.error,
            "state": result.stats.state.value,
            "duration_seconds": result.stats.duration_seconds,
            "warnings": list(result.stats.warnings),
            "export": result.export_result.to_dict() if result.export_result else None,
        }
        try:
            with open(report_path, 'w', encoding='utf-8') as f:
                json.dump(report, f, indent=2)
            print(f"Report saved to: {report_path}")
        except OSError as e:
            logger.error(f"Could not save report to {report_path}: {e}")
