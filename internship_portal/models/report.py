from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..utils.filters import now_local, fmt_local


@dataclass
class Report:
    """
    A staff report keyed by its free-text criteria.
    Only the summary header is produced; aggregation over listings and
    applications is left to callers.
    """
    criteria: str
    requested_by: Optional[str] = None
    generated_at: datetime = field(default_factory=now_local)

    def summary_lines(self) -> list[str]:
        return [
            "=== Report Summary ===",
            f"Criteria: {self.criteria}",
            f"Generated at: {fmt_local(self.generated_at)}",
            "",
            "Report generated successfully.",
        ]

    def generate_summary(self) -> list[str]:
        lines = self.summary_lines()
        for line in lines:
            print(line)
        return lines

    def to_dict(self) -> dict:
        return {
            "criteria": self.criteria,
            "requested_by": self.requested_by,
            "generated_at": self.generated_at.isoformat(),
            "summary": self.summary_lines(),
        }
