"""Per-action JSONL audit log.

Every invocation appends to ``<log_dir>/<date>/<action>.jsonl``. Entries
from the same invocation share a ``run`` id, so repeated runs on one day
can be told apart in a single file.
"""

import json
import os
import uuid
from datetime import date, datetime, timezone
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any

if TYPE_CHECKING:
    from kdumpctl.core.output import Output


def default_log_dir() -> Path:
    return Path(os.environ.get("HOME", "/tmp")) / "var" / "log" / "kdumpctl"


def get_log_path(action: str, base_path: Path | None = None) -> Path:
    """
    Log file for ``action`` today.

    Args:
        action: Action name (setup, load, ...)
        base_path: Log directory (default: ~/var/log/kdumpctl)

    Returns:
        {base}/{YYYY-MM-DD}/{action}.jsonl
    """
    base = base_path if base_path is not None else default_log_dir()
    return base / date.today().isoformat() / f"{action}.jsonl"


class ActionLogger:
    """Append-only JSONL log for one kdumpctl action.

    The file is opened on the first entry, so an action that logs nothing
    leaves no file behind.
    """

    def __init__(self, action: str, log_path: Path | None = None):
        self.action = action
        self.log_path = log_path or get_log_path(action)
        self.run_id = uuid.uuid4().hex[:12]
        self.open_error: str | None = None
        self._file: IO[str] | None = None

    def _open(self) -> bool:
        """Open the log file once; a failure disables logging for this run."""
        if self._file is not None:
            return True
        if self.open_error is not None:
            return False
        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.log_path, "a")
        except OSError as e:
            self.open_error = f"cannot write log {self.log_path}: {e.strerror or e}"
            return False
        return True

    def _write(self, level: str, message: str, fields: dict[str, Any]) -> None:
        if not self._open():
            return
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "run": self.run_id,
            "action": self.action,
            "level": level,
            "message": message,
        }
        entry.update(fields)
        self._file.write(json.dumps(entry, default=str) + "\n")
        self._file.flush()

    def debug(self, message: str, **fields: Any) -> None:
        self._write("debug", message, fields)

    def info(self, message: str, **fields: Any) -> None:
        self._write("info", message, fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._write("warning", message, fields)

    def error(self, message: str, **fields: Any) -> None:
        self._write("error", message, fields)

    def record_result(self, output: "Output", exit_code: int) -> None:
        """Log everything the action reported, then its outcome."""
        for message in output.messages:
            self.info(message)
        for warning in output.warnings:
            self.warning(warning)
        for error in output.errors:
            self.error(error, exit_code=exit_code)
        if not output.errors:
            self.info("finished", data=output.data)

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "ActionLogger":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
