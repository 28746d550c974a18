"""Collected, user-facing output for an action."""

import json
import sys
from typing import Any


class Output:
    """Helper for action output."""

    def __init__(self, action: str | None = None):
        self.action = action
        self.data: dict[str, Any] = {}
        self.messages: list[str] = []
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self._printed: bool = False

    def note(self, message: str) -> None:
        """Record a progress or result line."""
        self.messages.append(message)

    def emit(self, data: dict[str, Any]) -> None:
        """Store structured output data."""
        self.data.update(data)

    def error(self, message: str) -> None:
        """Record an error message."""
        self.errors.append(message)

    def warning(self, message: str) -> None:
        """Record a warning message."""
        self.warnings.append(message)

    @property
    def status(self) -> str:
        """ok or failed, depending on recorded errors."""
        return "failed" if self.errors else "ok"

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": self.action,
            "status": self.status,
            "messages": self.messages,
            "warnings": self.warnings,
            "errors": self.errors,
            "data": self.data,
        }

    def to_json(self) -> str:
        """Return output as JSON string."""
        return json.dumps(self.to_dict(), indent=2, default=str)

    def to_plain(self) -> str:
        """Return messages and data as plain text."""
        lines = list(self.messages)
        for key, value in self.data.items():
            display_key = str(key).replace("_", " ").title()
            if isinstance(value, bool):
                value = "yes" if value else "no"
            elif isinstance(value, list):
                value = ", ".join(str(v) for v in value) or "(none)"
            elif value is None:
                value = "unknown"
            lines.append(f"{display_key}: {value}")
        for warning in self.warnings:
            lines.append(f"[WARNING] {warning}")
        return "\n".join(lines)

    def render(self, format: str = "plain") -> None:
        """Print output in the specified format.

        Errors always go to stderr; json mode additionally prints a
        single object to stdout.
        """
        if self._printed:
            return
        self._printed = True

        if format == "json":
            print(self.to_json())
        else:
            text = self.to_plain()
            if text:
                print(text)
        for error in self.errors:
            print(f"error: {error}", file=sys.stderr)
