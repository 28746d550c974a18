"""Shared test fixtures."""

import subprocess
import sys
from pathlib import Path

import pytest

# Add project root to path so the package imports without installation
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


class MockContext:
    """Mock Context for testing without real system access.

    Files live in ``file_contents``; every mutation (write, remove, chmod,
    makedirs) is appended to ``mutations`` so tests can assert that nothing
    was touched.
    """

    def __init__(
        self,
        tools_available: list[str] | None = None,
        command_outputs: dict[tuple, str | Exception | subprocess.CompletedProcess] | None = None,
        file_contents: dict[str, str] | None = None,
        directories: list[str] | None = None,
        euid: int = 0,
    ):
        self.tools_available = set(tools_available or [])
        self.command_outputs = command_outputs or {}
        self.file_contents = dict(file_contents or {})
        self.directories = set(directories or [])
        self.file_modes: dict[str, int] = {}
        self.euid = euid
        self.commands_run: list[list[str]] = []
        self.mutations: list[tuple[str, str]] = []

    def check_tool(self, name: str) -> bool:
        """Check if tool is in mocked available list."""
        return name in self.tools_available

    def run(
        self,
        cmd: list[str],
        check: bool = False,
        **kwargs,
    ) -> subprocess.CompletedProcess:
        """Return mocked command output."""
        self.commands_run.append(cmd)
        key = tuple(cmd)
        if key not in self.command_outputs:
            raise KeyError(f"No mock output for command: {cmd}")

        output = self.command_outputs[key]
        if isinstance(output, Exception):
            raise output

        # Allow passing CompletedProcess directly for non-zero return codes
        if isinstance(output, subprocess.CompletedProcess):
            result = output
        else:
            result = subprocess.CompletedProcess(cmd, returncode=0, stdout=output, stderr="")

        if check and result.returncode != 0:
            raise subprocess.CalledProcessError(
                result.returncode, cmd, result.stdout, result.stderr
            )
        return result

    def read_file(self, path: str) -> str:
        """Return mocked file content."""
        if path not in self.file_contents:
            raise FileNotFoundError(f"No mock content for: {path}")
        return self.file_contents[path]

    def write_file(self, path: str, content: str) -> None:
        """Store file content."""
        self.mutations.append(("write", path))
        self.file_contents[path] = content

    def remove_file(self, path: str) -> None:
        """Drop a mocked file."""
        if path not in self.file_contents:
            raise FileNotFoundError(f"No mock content for: {path}")
        self.mutations.append(("remove", path))
        del self.file_contents[path]
        self.file_modes.pop(path, None)

    def file_exists(self, path: str) -> bool:
        """Check if path is a mocked file or directory."""
        return path in self.file_contents or self.is_dir(path)

    def is_dir(self, path: str) -> bool:
        """A path is a directory if registered as one or if it holds files."""
        path = path.rstrip("/")
        if path in self.directories:
            return True
        return any(p.startswith(path + "/") for p in self.file_contents)

    def makedirs(self, path: str) -> None:
        """Register a directory."""
        self.mutations.append(("makedirs", path))
        self.directories.add(path.rstrip("/"))

    def chmod(self, path: str, mode: int) -> None:
        """Record permission bits for a mocked file."""
        if path not in self.file_contents:
            raise FileNotFoundError(f"No mock content for: {path}")
        self.mutations.append(("chmod", path))
        self.file_modes[path] = mode

    def geteuid(self) -> int:
        """Return mocked effective uid."""
        return self.euid


@pytest.fixture
def mock_context():
    """Factory fixture for creating MockContext instances."""
    def _create(**kwargs) -> MockContext:
        return MockContext(**kwargs)
    return _create
