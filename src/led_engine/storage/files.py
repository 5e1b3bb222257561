"""Reading and writing a buffer's lines to disk."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Union

from led_engine.buffer import split_lines
from led_engine.runtime import telemetry

PathLike = Union[str, Path]


class ResourceError(OSError):
    """Raised when a backing file exists but cannot be read or written."""

    def __init__(self, message: str, *, path: Optional[PathLike] = None) -> None:
        super().__init__(message)
        self.path = str(path) if path is not None else None


def load_lines(path: PathLike) -> List[str]:
    """Return the file's lines without newlines; a missing file is empty."""

    target = Path(path)
    try:
        with target.open("r", encoding="utf-8", newline="") as handle:
            lines = split_lines(handle.read())
    except FileNotFoundError:
        telemetry.record_event(
            "file.missing", level="debug", data={"path": str(target)}
        )
        return []
    except (OSError, ValueError) as exc:
        raise ResourceError(f"cannot open {target}: {exc}", path=target) from exc
    telemetry.record_event(
        "file.load", level="debug", data={"path": str(target), "lines": len(lines)}
    )
    return lines


def save_lines(path: PathLike, lines: Iterable[str]) -> int:
    """Truncate ``path`` and write one newline-terminated record per line."""

    target = Path(path)
    records = list(lines)
    try:
        with target.open("w", encoding="utf-8", newline="\n") as handle:
            for line in records:
                handle.write(f"{line}\n")
    except (OSError, ValueError) as exc:
        raise ResourceError(f"cannot write {target}: {exc}", path=target) from exc
    telemetry.record_event(
        "file.save", level="debug", data={"path": str(target), "lines": len(records)}
    )
    return len(records)


class FileStore(Protocol):
    """What the engine needs from wherever lines are persisted."""

    def exists(self, path: str) -> bool:
        ...

    def load(self, path: str) -> Sequence[str]:
        ...

    def save(self, path: str, lines: Sequence[str]) -> None:
        ...


class DiskFileStore:
    """FileStore backed by the local filesystem."""

    def exists(self, path: str) -> bool:
        try:
            return Path(path).exists()
        except (OSError, ValueError) as exc:
            raise ResourceError(f"cannot open {path}: {exc}", path=path) from exc

    def load(self, path: str) -> Sequence[str]:
        return load_lines(path)

    def save(self, path: str, lines: Sequence[str]) -> None:
        save_lines(path, lines)


@dataclass
class MemoryFileStore:
    """In-memory FileStore, handy for tests and scripted sessions."""

    files: Dict[str, List[str]] = field(default_factory=dict)
    unreadable: set[str] = field(default_factory=set)

    def exists(self, path: str) -> bool:
        return path in self.files or path in self.unreadable

    def load(self, path: str) -> Sequence[str]:
        if path in self.unreadable:
            raise ResourceError(f"cannot open {path}", path=path)
        return list(self.files.get(path, []))

    def save(self, path: str, lines: Sequence[str]) -> None:
        if path in self.unreadable:
            raise ResourceError(f"cannot write {path}", path=path)
        self.files[path] = list(lines)
