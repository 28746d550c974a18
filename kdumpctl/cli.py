"""Command-line interface for kdumpctl."""

import argparse
import sys
from pathlib import Path

from kdumpctl import __version__, installer
from kdumpctl.bootloader import detect
from kdumpctl.core import (
    ActionLogger,
    Context,
    EnvironmentUnavailableError,
    KdumpError,
    Output,
    PermissionDeniedError,
    Settings,
    get_log_path,
    load_settings,
)
from kdumpctl.crashkernel import CrashKernelController

PRIVILEGED_ACTIONS = {"setup", "load", "unload", "cleanup"}

USAGE_EPILOG = """\
actions:
  setup    detect the bootloader and add the crashkernel= boot parameter
  load     load the running kernel as the crash kernel via kexec
  unload   unload the crash kernel if one is loaded
  cleanup  remove every crashkernel= artifact kdumpctl may have written
  status   show bootloader, reservation and load state
"""


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="kdumpctl",
        description="Configure and control kernel crash-dump capture",
        epilog=USAGE_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"kdumpctl {__version__}",
    )
    parser.add_argument(
        "--format",
        choices=["plain", "json"],
        default=None,
        help="Output format (default: from config, else plain)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Extra YAML config file, applied last",
    )
    parser.add_argument("action", nargs="?", help="Action to perform")
    return parser


def require_root(context: Context) -> None:
    if context.geteuid() != 0:
        raise PermissionDeniedError("must be run as root")


def cmd_setup(context: Context, settings: Settings, output: Output) -> None:
    """Detect the bootloader and install the crashkernel parameter."""
    variant = detect(context)
    output.emit({"bootloader": variant.value})
    output.note(f"Detected bootloader: {variant.value}")
    installer.apply(variant, context, output)
    output.note("Reboot for the crash memory reservation to take effect")


def cmd_load(context: Context, settings: Settings, output: Output) -> None:
    """Load the crash kernel."""
    controller = CrashKernelController(context, settings.boot_dir, settings.crash_dir)
    controller.load(output)


def cmd_unload(context: Context, settings: Settings, output: Output) -> None:
    """Unload the crash kernel."""
    controller = CrashKernelController(context, settings.boot_dir, settings.crash_dir)
    controller.unload(output)


def cmd_cleanup(context: Context, settings: Settings, output: Output) -> None:
    """Remove installed crashkernel artifacts for all bootloaders."""
    installer.remove_all(context, output)
    if not output.messages:
        output.note("Nothing to clean up")


def cmd_status(context: Context, settings: Settings, output: Output) -> None:
    """Report what kdumpctl can see; unreadable values show as unknown."""
    controller = CrashKernelController(context, settings.boot_dir, settings.crash_dir)
    probes = {
        "bootloader": lambda: detect(context).value,
        "reserved_bytes": controller.reserved_size,
        "crash_kernel": lambda: controller.state().value,
        "artifacts": lambda: installer.installed_artifacts(context),
    }
    for key, probe in probes.items():
        try:
            output.emit({key: probe()})
        except EnvironmentUnavailableError as e:
            output.emit({key: None})
            output.warning(str(e))


COMMANDS = {
    "setup": cmd_setup,
    "load": cmd_load,
    "unload": cmd_unload,
    "cleanup": cmd_cleanup,
    "status": cmd_status,
}


def run_action(
    action: str,
    context: Context,
    settings: Settings,
    output: Output,
    logger: ActionLogger,
) -> int:
    """Run one action, record it in the log and return the exit code."""
    code = 0
    logger.info("started", euid=context.geteuid())
    logger.debug(
        "settings",
        format=settings.format,
        boot_dir=settings.boot_dir,
        crash_dir=settings.crash_dir,
    )
    try:
        if action in PRIVILEGED_ACTIONS:
            require_root(context)
        COMMANDS[action](context, settings, output)
    except KdumpError as e:
        output.error(str(e))
        code = e.exit_code

    logger.record_result(output, code)
    return code


def main(argv: list[str] | None = None, context: Context | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.action not in COMMANDS:
        parser.print_help()
        return 0

    settings = load_settings(args.config)
    if args.format:
        settings.format = args.format
    context = context or Context()
    output = Output(args.action)

    log_path = get_log_path(args.action, settings.log_dir)
    with ActionLogger(args.action, log_path) as logger:
        code = run_action(args.action, context, settings, output, logger)

    if logger.open_error:
        output.warning(logger.open_error)

    output.render(settings.format)
    return code


if __name__ == "__main__":
    sys.exit(main())
