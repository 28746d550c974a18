"""Reads of kernel-exposed state.

Nothing here is cached: the kernel owns these values and they can change
between invocations (a reboot, a panic, another administrator).
"""

from typing import TYPE_CHECKING

from kdumpctl.core.errors import EnvironmentUnavailableError
from kdumpctl.lib.filesystem import FileError, read_file, read_int

if TYPE_CHECKING:
    from kdumpctl.core.context import Context

BOOTLOADER_TYPE = "/proc/sys/kernel/bootloader_type"
KEXEC_CRASH_SIZE = "/sys/kernel/kexec_crash_size"
KEXEC_CRASH_LOADED = "/sys/kernel/kexec_crash_loaded"
OSRELEASE = "/proc/sys/kernel/osrelease"
MODULES_DIR = "/usr/lib/modules"


def read_bootloader_descriptor(context: "Context") -> int:
    """Raw bootloader type value set by the boot protocol."""
    try:
        return read_int(BOOTLOADER_TYPE, context)
    except FileError as e:
        raise EnvironmentUnavailableError(f"cannot read bootloader type: {e}") from e


def read_crash_size(context: "Context") -> int:
    """Bytes reserved for the crash kernel (0 when crashkernel= is not active)."""
    try:
        return read_int(KEXEC_CRASH_SIZE, context)
    except FileError as e:
        raise EnvironmentUnavailableError(f"cannot read crash kernel size: {e}") from e


def read_crash_loaded(context: "Context") -> bool:
    """Whether a crash kernel is currently loaded."""
    try:
        return read_int(KEXEC_CRASH_LOADED, context) == 1
    except FileError as e:
        raise EnvironmentUnavailableError(f"cannot read crash kernel state: {e}") from e


def kernel_release(context: "Context") -> str:
    """Release string of the running kernel, as uname -r prints it."""
    try:
        release = read_file(OSRELEASE, context).strip()
    except FileError as e:
        raise EnvironmentUnavailableError(f"cannot read kernel release: {e}") from e
    if not release:
        raise EnvironmentUnavailableError(f"empty kernel release in {OSRELEASE}")
    return release


def kernel_pkgbase(context: "Context", release: str) -> str:
    """Package base name of the running kernel (e.g. linux, linux-lts)."""
    path = f"{MODULES_DIR}/{release}/pkgbase"
    try:
        pkgbase = read_file(path, context).strip()
    except FileError as e:
        raise EnvironmentUnavailableError(f"cannot determine kernel base name: {e}") from e
    if not pkgbase:
        raise EnvironmentUnavailableError(f"empty kernel base name in {path}")
    return pkgbase
