"""Tests for filesystem utilities."""

import pytest

from kdumpctl.lib.filesystem import FileError, file_exists, read_file, read_int


class TestReadFile:
    """Tests for read_file function."""

    def test_reads_existing_file(self, mock_context):
        """Reads content from existing file."""
        ctx = mock_context(file_contents={"/boot/refind_linux.conf": '"Boot" "rw"\n'})

        assert read_file("/boot/refind_linux.conf", context=ctx) == '"Boot" "rw"\n'

    def test_raises_for_missing(self, mock_context):
        """Raises FileError when file doesn't exist."""
        ctx = mock_context()

        with pytest.raises(FileError, match="not found"):
            read_file("/nonexistent", context=ctx)

    def test_wraps_permission_errors(self, tmp_path):
        """Unreadable files raise FileError with the OS reason."""
        from kdumpctl.core.context import Context

        class Denied(Context):
            def read_file(self, path):
                raise PermissionError(13, "Permission denied")

        with pytest.raises(FileError, match="Permission denied"):
            read_file("/proc/sys/kernel/bootloader_type", context=Denied())


class TestReadInt:
    """Tests for read_int."""

    def test_decimal(self, mock_context):
        """Decimal with trailing newline."""
        ctx = mock_context(file_contents={"/sys/kernel/kexec_crash_size": "268435456\n"})
        assert read_int("/sys/kernel/kexec_crash_size", context=ctx) == 268435456

    def test_hex(self, mock_context):
        """0x-prefixed values are accepted."""
        ctx = mock_context(file_contents={"/x": "0x71\n"})
        assert read_int("/x", context=ctx) == 0x71

    def test_garbage(self, mock_context):
        """Non-integer content raises FileError."""
        ctx = mock_context(file_contents={"/x": "yes\n"})
        with pytest.raises(FileError, match="Not an integer"):
            read_int("/x", context=ctx)


class TestFileExists:
    """Tests for file_exists function."""

    def test_true_for_existing(self, mock_context):
        """Returns True when file exists."""
        ctx = mock_context(file_contents={"/etc/default/grub": ""})

        assert file_exists("/etc/default/grub", context=ctx) is True

    def test_false_for_missing(self, mock_context):
        """Returns False when file doesn't exist."""
        ctx = mock_context()

        assert file_exists("/etc/default/grub", context=ctx) is False
