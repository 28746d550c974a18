"""Filesystem utilities."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kdumpctl.core.context import Context


class FileError(Exception):
    """Error accessing a file."""

    pass


def read_file(
    path: str,
    context: "Context | None" = None,
) -> str:
    """
    Read file contents.

    Args:
        path: Path to file
        context: Execution context (for testing)

    Returns:
        File contents

    Raises:
        FileError: If the file doesn't exist or cannot be read
    """
    if context is None:
        from kdumpctl.core.context import Context
        context = Context()

    try:
        return context.read_file(path)
    except FileNotFoundError:
        raise FileError(f"File not found: {path}")
    except OSError as e:
        raise FileError(f"Cannot read {path}: {e.strerror or e}") from e


def read_int(
    path: str,
    context: "Context | None" = None,
) -> int:
    """
    Read a single integer from a kernel pseudo-file.

    Accepts decimal and 0x-prefixed hex.

    Raises:
        FileError: If the file is missing, unreadable or not an integer
    """
    text = read_file(path, context).strip()
    try:
        return int(text, 0)
    except ValueError:
        raise FileError(f"Not an integer in {path}: {text!r}")


def file_exists(
    path: str,
    context: "Context | None" = None,
) -> bool:
    """
    Check if file exists.

    Args:
        path: Path to check
        context: Execution context (for testing)

    Returns:
        True if file exists
    """
    if context is None:
        from kdumpctl.core.context import Context
        context = Context()

    return context.file_exists(path)
