"""Record inference calls to a JSONL log."""

import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


@dataclass
class InferenceCallRecord:
    """Record of a single inference call."""

    timestamp: str
    operation: str
    model: str
    prompt_chars: int
    status: str  # "ok" or the failure class name
    duration_ms: Optional[float] = None
    usage: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)


class InferenceCallLogger:
    """Keeps per-session call records and optionally appends them to disk."""

    def __init__(self, log_path: Path, enabled: bool = True):
        self.log_path = Path(log_path)
        self.enabled = enabled
        self.session_calls: list[InferenceCallRecord] = []

        if self.enabled:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)

    def log_call(
        self,
        operation: str,
        model: str,
        prompt_chars: int,
        status: str,
        duration_ms: Optional[float] = None,
        usage: Optional[dict[str, Any]] = None,
    ) -> InferenceCallRecord:
        record = InferenceCallRecord(
            timestamp=datetime.now(timezone.utc).isoformat(),
            operation=operation,
            model=model,
            prompt_chars=prompt_chars,
            status=status,
            duration_ms=duration_ms,
            usage=usage or {},
        )
        self.session_calls.append(record)

        if self.enabled:
            self._write_to_log(record)

        return record

    def _write_to_log(self, record: InferenceCallRecord):
        try:
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(json.dumps(record.to_dict(), ensure_ascii=False) + "\n")
        except OSError as e:
            # Logging the call must not fail the call itself
            logger.warning(f"Failed to write inference call log: {e}")

    def get_session_summary(self) -> dict[str, Any]:
        """Summarize calls made in this session."""
        if not self.session_calls:
            return {"total_calls": 0, "failed_calls": 0, "last_call": None}

        return {
            "total_calls": len(self.session_calls),
            "failed_calls": sum(1 for call in self.session_calls if call.status != "ok"),
            "last_call": self.session_calls[-1].to_dict(),
        }
