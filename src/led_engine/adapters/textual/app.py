"""Executable Textual app for screen-style editing of one file."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the app is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use led_engine.adapters.textual.app"
    ) from exc

from led_engine.buffer import BufferMirror

from .controller import TextualPageAdapter, TextualUIHooks


@dataclass
class UIState:
    buffer_text: Text = field(default_factory=Text)
    status_text: str = ""


def _with_cursor(mirror: BufferMirror) -> Text:
    lines = mirror.text.split("\n")
    row, col = mirror.cursor
    while len(lines) <= row:
        lines.append("")
    page = Text()
    for index, line in enumerate(lines):
        if index:
            page.append("\n")
        if index != row:
            page.append(line)
            continue
        padded = line.ljust(col + 1)
        page.append(padded[:col])
        page.append(padded[col], style="reverse")
        page.append(padded[col + 1 :])
    return page


class LedApp(App[None]):
    """Single-file editor: type to overwrite, arrows move, ctrl+s saves."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#page {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, path: str) -> None:
        super().__init__()
        self.path = path
        self._state = UIState()
        self.adapter: TextualPageAdapter | None = None
        self._page_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._page_widget = Static("", id="page")
        self._status_widget = Static("", id="status-line")
        yield self._page_widget
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
        )
        self.adapter = TextualPageAdapter.open(self.path, hooks)
        self._update_status(f"editing {self.path}")

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        self._state.buffer_text = _with_cursor(mirror)
        if self._page_widget:
            self._page_widget.update(self._state.buffer_text)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        key = event.key
        if key in {"ctrl+c", "ctrl+q"}:
            return None
        if key == "ctrl+s":
            return ("s", None, ("CTRL",))
        if key in {"enter", "return"}:
            return ("ENTER", None, ())
        if key in {"left", "right", "up", "down"}:
            return (key.upper(), None, ())
        if event.character and event.is_printable:
            return (event.character, event.character, ())
        return (key.upper(), None, ())


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit a file on screen with led.")
    parser.add_argument("file", help="File to edit or create")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    LedApp(args.file).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
