"""kexec crash kernel load/unload.

The loaded/not-loaded state belongs to the kernel and is read fresh from
/sys on every call. Loading reuses the running kernel and initramfs as
the capture kernel, with extra options that make it tolerate the device
and interrupt state left behind by a panic.
"""

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

from kdumpctl.core.errors import (
    EnvironmentUnavailableError,
    LoadFailedError,
    PreconditionFailedError,
    ResourceNotFoundError,
)
from kdumpctl.lib.filesystem import file_exists
from kdumpctl.lib.kernel import (
    kernel_pkgbase,
    kernel_release,
    read_crash_loaded,
    read_crash_size,
)
from kdumpctl.lib.process import CommandError, check_tool, run_command

if TYPE_CHECKING:
    from kdumpctl.core.context import Context
    from kdumpctl.core.output import Output

KEXEC = "kexec"
CRASH_APPEND = "fsck.mode=force fsck.repair=yes nr_cpus=1 irqpoll reset_devices"
UNLOAD_COMMAND = [KEXEC, "-p", "-u"]


class LoadState(enum.Enum):
    NOT_LOADED = "not-loaded"
    LOADED = "loaded"


@dataclass(frozen=True)
class KernelFiles:
    image: str
    initramfs: str


def load_command(files: KernelFiles) -> list[str]:
    """kexec invocation that loads ``files`` as the crash kernel."""
    return [
        KEXEC,
        "-p",
        files.image,
        f"--initrd={files.initramfs}",
        "--reuse-cmdline",
        f"--append={CRASH_APPEND}",
    ]


class CrashKernelController:
    """Reads and changes the crash kernel load state."""

    def __init__(
        self,
        context: "Context",
        boot_dir: str = "/boot",
        crash_dir: str = "/var/crash",
    ):
        self.context = context
        self.boot_dir = boot_dir.rstrip("/") or "/"
        self.crash_dir = crash_dir

    def state(self) -> LoadState:
        if read_crash_loaded(self.context):
            return LoadState.LOADED
        return LoadState.NOT_LOADED

    def reserved_size(self) -> int:
        return read_crash_size(self.context)

    def kernel_files(self) -> KernelFiles:
        """Image and initramfs of the running kernel under boot_dir."""
        pkgbase = kernel_pkgbase(self.context, kernel_release(self.context))
        prefix = self.boot_dir.rstrip("/")
        return KernelFiles(
            image=f"{prefix}/vmlinuz-{pkgbase}",
            initramfs=f"{prefix}/initramfs-{pkgbase}.img",
        )

    def _ensure_crash_dir(self, output: "Output") -> None:
        if self.context.is_dir(self.crash_dir):
            return
        try:
            self.context.makedirs(self.crash_dir)
        except OSError as e:
            raise EnvironmentUnavailableError(
                f"cannot create {self.crash_dir}: {e.strerror or e}"
            ) from e
        output.note(f"Created {self.crash_dir}")

    def load(self, output: "Output") -> None:
        """
        Load the running kernel as the crash kernel.

        Raises:
            PreconditionFailedError: If no crash memory is reserved or
                kexec is not installed
            ResourceNotFoundError: If the kernel image or initramfs is missing
            LoadFailedError: If kexec fails
        """
        size = self.reserved_size()
        if size <= 0:
            raise PreconditionFailedError(
                "no memory reserved for the crash kernel; run 'kdumpctl setup' "
                "and reboot, or add crashkernel= to the kernel command line"
            )

        files = self.kernel_files()
        for path in (files.image, files.initramfs):
            if not file_exists(path, self.context):
                raise ResourceNotFoundError(
                    f"{path} not found; is {self.boot_dir} mounted?"
                )

        try:
            check_tool(KEXEC, self.context, required=True)
        except CommandError as e:
            raise PreconditionFailedError(f"{e}; install kexec-tools") from e

        self._ensure_crash_dir(output)

        try:
            run_command(load_command(files), self.context, check=True)
        except CommandError as e:
            raise LoadFailedError(str(e)) from e

        output.note(f"Crash kernel loaded ({files.image}, {size} bytes reserved)")
        output.emit({"image": files.image, "initramfs": files.initramfs, "reserved_bytes": size})

    def unload(self, output: "Output") -> None:
        """Unload the crash kernel; a no-op when nothing is loaded."""
        if self.state() is LoadState.NOT_LOADED:
            output.note("No crash kernel loaded, nothing to unload")
            return

        try:
            run_command(UNLOAD_COMMAND, self.context, check=True)
        except CommandError as e:
            raise LoadFailedError(str(e)) from e
        output.note("Crash kernel unloaded")
