"""Bootloader detection.

The kernel's boot protocol records which loader started it in
``/proc/sys/kernel/bootloader_type``. The high nibble is the loader family:
0x7 is GRUB, 0x2 is the EFI stub. EFI-stub boots are split further by
asking systemd-boot whether it is installed; when it is not, rEFInd is
assumed and its config file is checked later, at install time.
"""

import enum
from typing import TYPE_CHECKING

from kdumpctl.lib.kernel import read_bootloader_descriptor
from kdumpctl.lib.process import check_tool, command_succeeds

if TYPE_CHECKING:
    from kdumpctl.core.context import Context

GRUB_FAMILY = 0x7
EFI_STUB_FAMILY = 0x2

SYSTEMD_BOOT_PROBE = ["bootctl", "is-installed"]


class BootloaderVariant(enum.Enum):
    GRUB = "grub"
    SYSTEMD_BOOT = "systemd-boot"
    REFIND = "refind"
    UNKNOWN = "unknown"


def family_of(descriptor: int) -> int:
    """Loader family code from a raw bootloader type value."""
    return descriptor >> 4


def systemd_boot_installed(context: "Context") -> bool:
    """Ask bootctl whether systemd-boot is installed in the ESP."""
    if not check_tool(SYSTEMD_BOOT_PROBE[0], context):
        return False
    return command_succeeds(SYSTEMD_BOOT_PROBE, context)


def classify(descriptor: int, context: "Context") -> BootloaderVariant:
    """Map a bootloader type value to a variant."""
    family = family_of(descriptor)
    if family == GRUB_FAMILY:
        return BootloaderVariant.GRUB
    if family == EFI_STUB_FAMILY:
        if systemd_boot_installed(context):
            return BootloaderVariant.SYSTEMD_BOOT
        return BootloaderVariant.REFIND
    return BootloaderVariant.UNKNOWN


def detect(context: "Context") -> BootloaderVariant:
    """
    Detect the bootloader of the running system.

    Unrecognized families yield UNKNOWN rather than an error.

    Raises:
        EnvironmentUnavailableError: If the bootloader type cannot be read
    """
    return classify(read_bootloader_descriptor(context), context)
