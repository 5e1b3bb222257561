"""Backing-file collaborator used by the engine."""

from .files import (
    DiskFileStore,
    FileStore,
    MemoryFileStore,
    ResourceError,
    load_lines,
    save_lines,
)

__all__ = [
    "DiskFileStore",
    "FileStore",
    "MemoryFileStore",
    "ResourceError",
    "load_lines",
    "save_lines",
]
