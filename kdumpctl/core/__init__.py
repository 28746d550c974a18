"""Core kdumpctl functionality."""

from kdumpctl.core.config import Settings, load_settings
from kdumpctl.core.context import Context
from kdumpctl.core.errors import (
    EnvironmentUnavailableError,
    KdumpError,
    LoadFailedError,
    PermissionDeniedError,
    PreconditionFailedError,
    RegenerationFailedError,
    ResourceNotFoundError,
)
from kdumpctl.core.logging import ActionLogger, get_log_path
from kdumpctl.core.output import Output

__all__ = [
    "ActionLogger",
    "Context",
    "EnvironmentUnavailableError",
    "KdumpError",
    "LoadFailedError",
    "Output",
    "PermissionDeniedError",
    "PreconditionFailedError",
    "RegenerationFailedError",
    "ResourceNotFoundError",
    "Settings",
    "get_log_path",
    "load_settings",
]
