"""Error taxonomy for kdumpctl actions.

Every failure is terminal for the invocation. Components raise one of
these and the CLI turns it into a message on stderr and a non-zero exit
code. "Nothing to do" outcomes (unloading when nothing is loaded,
cleaning up absent files) are not errors and never raise.
"""


class KdumpError(Exception):
    """Base class for all kdumpctl failures."""

    exit_code = 1


class PermissionDeniedError(KdumpError):
    """Not running with root privilege."""

    exit_code = 1


class EnvironmentUnavailableError(KdumpError):
    """An expected kernel interface or system file is missing or unreadable."""

    exit_code = 2


class PreconditionFailedError(KdumpError):
    """A required tool, file or reservation for the requested path is absent."""

    exit_code = 3


class ResourceNotFoundError(KdumpError):
    """Kernel image or initramfs for the running kernel is missing."""

    exit_code = 4


class RegenerationFailedError(KdumpError):
    """The bootloader's config regeneration command failed."""

    exit_code = 5


class LoadFailedError(KdumpError):
    """The kexec load call failed."""

    exit_code = 6
