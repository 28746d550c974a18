"""Tests for process utilities."""

import subprocess

import pytest

from kdumpctl.lib.process import CommandError, check_tool, command_succeeds, run_command


class TestRunCommand:
    """Tests for run_command function."""

    def test_runs_simple_command(self, mock_context):
        """Runs command and returns output."""
        ctx = mock_context(command_outputs={("echo", "hello"): "hello\n"})

        assert run_command(["echo", "hello"], context=ctx) == "hello\n"

    def test_raises_on_failure(self, mock_context):
        """Raises CommandError with stderr on non-zero exit."""
        failed = subprocess.CompletedProcess(
            ["grub-mkconfig"], returncode=1, stdout="", stderr="syntax error\n"
        )
        ctx = mock_context(command_outputs={("grub-mkconfig",): failed})

        with pytest.raises(CommandError, match="syntax error"):
            run_command(["grub-mkconfig"], context=ctx, check=True)

    def test_raises_when_tool_cannot_start(self, mock_context):
        """A missing executable becomes CommandError."""
        ctx = mock_context(command_outputs={("kexec", "-p", "-u"): FileNotFoundError("kexec")})

        with pytest.raises(CommandError, match="Command failed"):
            run_command(["kexec", "-p", "-u"], context=ctx)

    def test_no_raise_without_check(self, mock_context):
        """Non-zero exit is tolerated when check=False."""
        failed = subprocess.CompletedProcess(["false"], returncode=1, stdout="", stderr="")
        ctx = mock_context(command_outputs={("false",): failed})

        assert run_command(["false"], context=ctx) == ""


class TestCommandSucceeds:
    """Tests for command_succeeds."""

    def test_zero_exit(self, mock_context):
        """Exit 0 means yes."""
        ctx = mock_context(command_outputs={("bootctl", "is-installed"): "yes\n"})
        assert command_succeeds(["bootctl", "is-installed"], context=ctx) is True

    def test_nonzero_exit(self, mock_context):
        """Non-zero exit means no."""
        no = subprocess.CompletedProcess(["bootctl"], returncode=1, stdout="no\n", stderr="")
        ctx = mock_context(command_outputs={("bootctl", "is-installed"): no})
        assert command_succeeds(["bootctl", "is-installed"], context=ctx) is False

    def test_unstartable(self, mock_context):
        """A command that cannot start means no."""
        ctx = mock_context(command_outputs={("bootctl", "is-installed"): PermissionError("denied")})
        assert command_succeeds(["bootctl", "is-installed"], context=ctx) is False


class TestCheckTool:
    """Tests for check_tool function."""

    def test_returns_true_for_available_tool(self, mock_context):
        """Returns True when tool is in PATH."""
        ctx = mock_context(tools_available=["kexec"])

        assert check_tool("kexec", context=ctx) is True

    def test_returns_false_for_missing_tool(self, mock_context):
        """Returns False when tool is not in PATH."""
        ctx = mock_context(tools_available=[])

        assert check_tool("sdboot-manage", context=ctx) is False

    def test_raises_when_required(self, mock_context):
        """Raises CommandError when required tool is missing."""
        ctx = mock_context(tools_available=[])

        with pytest.raises(CommandError, match="Required tool"):
            check_tool("kexec", required=True, context=ctx)
