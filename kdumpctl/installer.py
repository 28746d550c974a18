"""Install and remove the crashkernel= boot parameter per bootloader.

Each bootloader gets one apply and one remove function, looked up by
variant in HANDLERS. GRUB and systemd-boot receive a small dedicated
drop-in file so the main configuration is never edited. rEFInd keeps its
kernel options on a single quoted line, which is edited in place.
"""

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, NamedTuple

from kdumpctl.bootloader import BootloaderVariant
from kdumpctl.core.errors import (
    EnvironmentUnavailableError,
    PreconditionFailedError,
    RegenerationFailedError,
)
from kdumpctl.lib.filesystem import FileError, file_exists, read_file
from kdumpctl.lib.process import CommandError, check_tool, run_command

if TYPE_CHECKING:
    from kdumpctl.core.context import Context
    from kdumpctl.core.output import Output


@dataclass(frozen=True)
class CrashKernelConfig:
    """Where and how a bootloader receives the crashkernel parameter."""

    path: str
    parameter: str
    regenerate: tuple[str, ...] = ()


GRUB_MAIN_CONFIG = "/etc/default/grub"
SDBOOT_MANAGER = "sdboot-manage"

GRUB = CrashKernelConfig(
    path="/etc/default/grub.d/kdump.cfg",
    parameter="crashkernel=256M",
    regenerate=("grub-mkconfig", "-o", "/boot/grub/grub.cfg"),
)
SYSTEMD_BOOT = CrashKernelConfig(
    path="/etc/sdboot-manage.d/kdump.conf",
    parameter="crashkernel=256M",
    regenerate=(SDBOOT_MANAGER, "gen"),
)
REFIND = CrashKernelConfig(
    path="/boot/refind_linux.conf",
    parameter="crashkernel=128M",
)

# cleanup strips this literal from the rEFInd file; it differs from
# REFIND.parameter.
REFIND_CLEANUP_LITERAL = "crashkernel=256M"

FRAGMENT_MODE = 0o755


def grub_fragment_text() -> str:
    return f'GRUB_CMDLINE_LINUX_DEFAULT="$GRUB_CMDLINE_LINUX_DEFAULT {GRUB.parameter}"\n'


def sdboot_dropin_text() -> str:
    return f'LINUX_OPTIONS+=" {SYSTEMD_BOOT.parameter}"\n'


def _write(context: "Context", path: str, content: str) -> None:
    try:
        context.makedirs(os.path.dirname(path))
        context.write_file(path, content)
    except OSError as e:
        raise EnvironmentUnavailableError(f"cannot write {path}: {e.strerror or e}") from e


def _read(context: "Context", path: str) -> str:
    try:
        return read_file(path, context)
    except FileError as e:
        raise EnvironmentUnavailableError(str(e)) from e


def _remove(context: "Context", path: str) -> None:
    try:
        context.remove_file(path)
    except OSError as e:
        raise EnvironmentUnavailableError(f"cannot remove {path}: {e.strerror or e}") from e


def _regenerate(config: CrashKernelConfig, context: "Context", output: "Output") -> None:
    cmd = list(config.regenerate)
    try:
        run_command(cmd, context, check=True)
    except CommandError as e:
        raise RegenerationFailedError(
            f"{e}. {config.path} is written but {config.parameter} is NOT active "
            "until regeneration succeeds"
        ) from e
    output.note(f"Regenerated boot configuration ({' '.join(cmd)})")


def apply_grub(context: "Context", output: "Output") -> None:
    if not file_exists(GRUB_MAIN_CONFIG, context):
        raise PreconditionFailedError(
            f"GRUB doesn't seem installed: {GRUB_MAIN_CONFIG} not found"
        )
    _write(context, GRUB.path, grub_fragment_text())
    try:
        context.chmod(GRUB.path, FRAGMENT_MODE)
    except OSError as e:
        raise EnvironmentUnavailableError(f"cannot chmod {GRUB.path}: {e.strerror or e}") from e
    output.note(f"Wrote {GRUB.path}")
    _regenerate(GRUB, context, output)


def remove_grub(context: "Context", output: "Output") -> None:
    if file_exists(GRUB.path, context):
        _remove(context, GRUB.path)
        output.note(f"Removed {GRUB.path}")


def apply_systemd_boot(context: "Context", output: "Output") -> None:
    try:
        check_tool(SDBOOT_MANAGER, context, required=True)
    except CommandError as e:
        raise PreconditionFailedError(f"systemd-boot manager missing: {e}") from e
    _write(context, SYSTEMD_BOOT.path, sdboot_dropin_text())
    output.note(f"Wrote {SYSTEMD_BOOT.path}")
    _regenerate(SYSTEMD_BOOT, context, output)


def remove_systemd_boot(context: "Context", output: "Output") -> None:
    if file_exists(SYSTEMD_BOOT.path, context):
        _remove(context, SYSTEMD_BOOT.path)
        output.note(f"Removed {SYSTEMD_BOOT.path}")


def _options_line_index(lines: list[str]) -> int | None:
    """Index of the first non-comment line ending in a double quote."""
    for index, line in enumerate(lines):
        body = line.strip()
        if not body or body.startswith("#"):
            continue
        if body.endswith('"'):
            return index
    return None


def insert_parameter(text: str, parameter: str) -> str | None:
    """
    Insert ``parameter`` before the closing quote of the options line.

    Returns:
        The edited text, or None when the options line already carries a
        crashkernel= parameter

    Raises:
        PreconditionFailedError: If no line ends in a double quote
    """
    lines = text.splitlines(keepends=True)
    index = _options_line_index(lines)
    if index is None:
        raise PreconditionFailedError("no quoted kernel options line to edit")

    line = lines[index]
    content = line.rstrip("\r\n")
    ending = line[len(content):]
    stripped = content.rstrip()
    trailing = content[len(stripped):]
    if "crashkernel=" in stripped:
        return None

    lines[index] = f'{stripped[:-1]} {parameter}"{trailing}{ending}'
    return "".join(lines)


def apply_refind(context: "Context", output: "Output") -> None:
    if not file_exists(REFIND.path, context):
        raise PreconditionFailedError(f"rEFInd config {REFIND.path} not found")
    try:
        edited = insert_parameter(_read(context, REFIND.path), REFIND.parameter)
    except PreconditionFailedError as e:
        raise PreconditionFailedError(f"{REFIND.path}: {e}") from e
    if edited is None:
        output.note(f"{REFIND.path} already has a crashkernel parameter, left unchanged")
        return
    _write(context, REFIND.path, edited)
    output.note(f"Added {REFIND.parameter} to {REFIND.path}")


def remove_refind(context: "Context", output: "Output") -> None:
    if not file_exists(REFIND.path, context):
        return
    text = _read(context, REFIND.path)
    if REFIND_CLEANUP_LITERAL in text:
        text = text.replace(REFIND_CLEANUP_LITERAL, "")
        _write(context, REFIND.path, text)
        output.note(f"Removed {REFIND_CLEANUP_LITERAL} from {REFIND.path}")
    if "crashkernel=" in text:
        output.warning(f"{REFIND.path} still contains a crashkernel= parameter; remove it by hand")


class Handler(NamedTuple):
    apply: Callable[["Context", "Output"], None]
    remove: Callable[["Context", "Output"], None]


HANDLERS: dict[BootloaderVariant, Handler] = {
    BootloaderVariant.GRUB: Handler(apply_grub, remove_grub),
    BootloaderVariant.SYSTEMD_BOOT: Handler(apply_systemd_boot, remove_systemd_boot),
    BootloaderVariant.REFIND: Handler(apply_refind, remove_refind),
}


def apply(variant: BootloaderVariant, context: "Context", output: "Output") -> None:
    """
    Install the crashkernel parameter for ``variant``.

    Raises:
        PreconditionFailedError: If the variant is UNKNOWN or its tool or
            config file is missing
        RegenerationFailedError: If the bootloader's regeneration fails
    """
    handler = HANDLERS.get(variant)
    if handler is None:
        raise PreconditionFailedError(
            "could not detect a supported bootloader; "
            "add crashkernel=256M to the kernel command line manually"
        )
    handler.apply(context, output)


def remove_all(context: "Context", output: "Output") -> None:
    """Remove every artifact apply may have written, for all bootloaders."""
    for handler in HANDLERS.values():
        handler.remove(context, output)


def installed_artifacts(context: "Context") -> list[str]:
    """Paths of crashkernel artifacts currently present on disk."""
    found = [
        config.path
        for config in (GRUB, SYSTEMD_BOOT)
        if file_exists(config.path, context)
    ]
    if file_exists(REFIND.path, context):
        if "crashkernel=" in _read(context, REFIND.path):
            found.append(REFIND.path)
    return found
