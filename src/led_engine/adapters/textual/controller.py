"""Minimal adapter that turns key events into cursor edits on a Buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple

from led_engine.buffer import Buffer, BufferMirror
from led_engine.runtime import telemetry
from led_engine.storage import DiskFileStore, FileStore, ResourceError


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


_MOVES: Dict[str, Tuple[int, int]] = {
    "LEFT": (-1, 0),
    "RIGHT": (1, 0),
    "UP": (0, -1),
    "DOWN": (0, 1),
}


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualPageAdapter:
    """Bridges key presses to ``add_char`` / ``add_newline`` / ``move_cursor``."""

    def __init__(
        self,
        buffer: Buffer,
        hooks: TextualUIHooks,
        *,
        files: Optional[FileStore] = None,
        path: Optional[str] = None,
    ) -> None:
        self.buffer = buffer
        self.hooks = hooks
        self.files: FileStore = files or DiskFileStore()
        self.path = path
        self._refresh_buffer()

    @classmethod
    def open(
        cls,
        path: str,
        hooks: TextualUIHooks,
        *,
        files: Optional[FileStore] = None,
    ) -> "TextualPageAdapter":
        """Load ``path`` for screen editing; an empty file gets one blank line."""

        store = files or DiskFileStore()
        lines = list(store.load(path)) if store.exists(path) else []
        buffer = Buffer.load(lines or [""], name=path)
        return cls(buffer, hooks, files=store, path=path)

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> str:
        """Apply one key press and return the status line it produced."""

        mods = tuple(str(mod).upper() for mod in modifiers)
        self.hooks.log(f"key -> {key!r} text={text!r} mods={mods}")

        if "CTRL" in mods and key.lower() == "s":
            status = self.save()
        elif key in _MOVES:
            self.buffer.move_cursor(*_MOVES[key])
            status = "move"
        elif key == "ENTER":
            self.buffer.add_newline()
            status = "newline"
        elif text and len(text) == 1 and text.isprintable():
            self.buffer.add_char(text)
            status = "insert"
        else:
            status = "ignored"

        self.hooks.update_status(status)
        self._refresh_buffer()
        self.hooks.log(f"result <- {status} cursor={self.buffer.cursor}")
        return status

    def save(self) -> str:
        if self.path is None:
            return "no file"
        try:
            self.files.save(self.path, self.buffer.save())
        except ResourceError as exc:
            telemetry.record_event(
                "file.write_failed",
                level="error",
                data={"path": self.path, "reason": str(exc)},
            )
            return "write failed"
        return f"wrote {self.path}"

    def _refresh_buffer(self) -> None:
        attributes = {"path": self.path} if self.path else None
        self.hooks.update_buffer(self.buffer.mirror(attributes=attributes))
