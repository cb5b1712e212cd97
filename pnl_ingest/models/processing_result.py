from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

"""Processing result models for directory batch runs.

FileStat is recorded per report file; ProcessingResult aggregates one run and
feeds the SUMMARY line.
"""

__all__ = [
    "FileStat",
    "ProcessingResult",
    "STATUS_SUCCESS",
    "STATUS_FAILED",
]

STATUS_SUCCESS = "success"
STATUS_FAILED = "failed"


@dataclass(frozen=True)
class FileStat:
    file_name: str
    status: str  # success / failed
    layout: str  # vertical / horizontal / unknown
    stores: int
    line_items: int
    elapsed_seconds: float
    output_path: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of one batch run."""
    success_files: int
    failed_files: int
    total_stores: int
    total_line_items: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files

    @classmethod
    def from_stats(cls, stats: list[FileStat], start_time: datetime, end_time: datetime) -> ProcessingResult:
        ok = [s for s in stats if s.status == STATUS_SUCCESS]
        return cls(
            success_files=len(ok),
            failed_files=len(stats) - len(ok),
            total_stores=sum(s.stores for s in ok),
            total_line_items=sum(s.line_items for s in ok),
            start_time=start_time,
            end_time=end_time,
            elapsed_seconds=(end_time - start_time).total_seconds(),
            file_stats=stats,
        )
