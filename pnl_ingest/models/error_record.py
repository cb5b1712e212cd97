from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the JSON Lines error log.

One record per report file that could not be parsed. The key set is fixed:
timestamp, file, layout, error_type, message.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: report filename
        layout: layout in use when the error happened ("unknown" before detection)
        error_type: UPPER_SNAKE_CASE classification (MALFORMED_INPUT, INSUFFICIENT_ROWS, ...)
        message: human-readable description
    """
    timestamp: str
    file: str
    layout: str
    error_type: str
    message: str

    @staticmethod
    def create(file: str, layout: str, error_type: str, message: str) -> ErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            layout=layout,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
