"""JSON report generator."""

import json
from pathlib import Path
from datetime import datetime
from typing import Any, Dict, Optional

from ..__version__ import __version__
from ..features.sync import PhaseResult, SyncSummary


class JSONReporter:
    """Generate JSON reports for sync runs."""

    @staticmethod
    def build(summary: SyncSummary) -> Dict[str, Any]:
        """Build the report structure for a sync summary."""
        return {
            'metadata': {
                'generated_at': datetime.now().isoformat(),
                'version': __version__,
            },
            'language': summary.language,
            'dry_run': summary.dry_run,
            'outcome': summary.outcome.value,
            'aborted_reason': summary.aborted_reason or None,
            'counts': {
                'local': summary.local_count,
                'remote': summary.remote_count,
                'insertions': len(summary.difference.insertions),
                'removals': len(summary.difference.removals),
            },
            'difference': {
                'insertions': summary.difference.sorted_insertions(),
                'removals': summary.difference.sorted_removals(),
            },
            'phases': {
                'delete': JSONReporter._phase(summary.delete),
                'add': JSONReporter._phase(summary.add),
            },
        }

    @staticmethod
    def _phase(result: Optional[PhaseResult]) -> Optional[Dict[str, Any]]:
        if result is None:
            return None
        return {
            'status': result.status.value,
            'failure': result.failure.value,
            'requested': result.requested,
            'parsed': result.parsed,
            'succeeded': result.succeeded,
            'error': str(result.error) if result.error else None,
        }

    @staticmethod
    def generate(
        summary: SyncSummary,
        output_path: Optional[Path] = None,
        pretty: bool = True
    ) -> Path:
        """
        Generate JSON report.

        Args:
            summary: Sync summary
            output_path: Output file path
            pretty: Pretty print JSON

        Returns:
            Path to generated report
        """
        if output_path is None:
            output_path = Path.cwd() / 'poeditor_sync_report.json'

        report = JSONReporter.build(summary)

        # Create output directory if needed
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            if pretty:
                json.dump(report, f, indent=2, ensure_ascii=False)
            else:
                json.dump(report, f, ensure_ascii=False)

        return output_path

    @staticmethod
    def load(report_path: Path) -> dict:
        """Load JSON report from file."""
        with open(report_path, 'r', encoding='utf-8') as f:
            return json.load(f)
