"""kdumpctl - configure and control Linux kernel crash-dump capture."""

__version__ = "0.1.0"
