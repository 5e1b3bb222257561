"""Line editor engine: [LINE]COMMAND[COUNT] parsing over a growable buffer."""

__all__ = [
    "adapters",
    "buffer",
    "cli",
    "commands",
    "config",
    "runtime",
    "session",
    "storage",
]

__version__ = "0.1.0"
