"""JsonWriter — renders an AuditReport as the summary or the detailed document."""

import json
import re
from pathlib import Path

from cardanoaudit.audit.types import AuditReport


def default_output_path(address: str, directory: Path | None = None) -> Path:
    """audit_<alphanumeric address>.json in the given (or current) directory."""
    name = f"audit_{re.sub(r'[^a-z0-9]', '', address, flags=re.IGNORECASE)}.json"
    return (directory or Path.cwd()) / name


class JsonWriter:
    def __init__(self, indent: int = 2) -> None:
        self._indent = indent

    def render_summary(self, report: AuditReport) -> str:
        return json.dumps(report.summary(), indent=self._indent)

    def detailed_document(self, report: AuditReport) -> dict:
        return {
            "summary": report.summary(),
            "totals_lovelace": {
                "total_received": report.total_received_lovelace,
                "total_spent": report.total_spent_lovelace,
                "net_change": report.total_received_lovelace - report.total_spent_lovelace,
                "fees_attributed": report.total_fees_attributed_lovelace,
            },
            "per_tx_summary": [s.model_dump(mode="json") for s in report.per_tx_summary],
            "failures": [f.model_dump(mode="json") for f in report.failures],
        }

    def write_detailed(self, report: AuditReport, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.detailed_document(report), indent=self._indent))
        return path
