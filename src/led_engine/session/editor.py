"""Line-at-a-time command loop driving a BufferEngine."""

from __future__ import annotations

from typing import Iterable, Optional, TextIO, Tuple

from led_engine.commands import (
    BufferEngine,
    Command,
    CommandId,
    CommandParser,
    EngineResult,
    Exit,
    ParseError,
    render,
)
from led_engine.runtime import telemetry

from .base import SessionBus, SessionState

_PROMPTS = {
    CommandId.FILE: "Enter filename: ",
    CommandId.INSERT: "Text: ",
    CommandId.APPEND: "Text: ",
    CommandId.CHANGE: "Text: ",
}


def _split_token(text: str) -> Tuple[Optional[str], str]:
    parts = text.split(None, 1)
    if not parts:
        return None, ""
    return parts[0], parts[1] if len(parts) > 1 else ""


class EditorSession:
    """Feeds input lines through the parser and engine.

    In ``COMMAND`` state each whitespace-delimited token is one command. A
    verb that needs text (``f``, ``i``, ``a``, ``c``) moves the session to
    ``TEXT``: the rest of the same input line is the text if there is any,
    otherwise the next input line is. ``q`` or end of input ends the session.
    """

    def __init__(
        self,
        engine: BufferEngine,
        *,
        output: TextIO,
        errors: Optional[TextIO] = None,
        parser: Optional[CommandParser] = None,
        bus: Optional[SessionBus] = None,
        prompts: bool = False,
    ) -> None:
        self.engine = engine
        self.output = output
        self.errors = errors or output
        self.parser = parser or CommandParser()
        self.bus = bus or SessionBus()
        self.prompts = prompts
        self.state = SessionState.COMMAND
        self._pending: Optional[Command] = None

    @property
    def finished(self) -> bool:
        return self.state is SessionState.EXIT

    @property
    def pending(self) -> Optional[Command]:
        return self._pending

    def run(self, stream: Iterable[str]) -> None:
        """Consume ``stream`` until ``q`` or end of input."""

        with telemetry.span("session::run", component="session"):
            for line in stream:
                self.feed_line(line)
                if self.finished:
                    return
            self.finish()

    def finish(self) -> None:
        """Treat end of input as an implicit exit."""

        if self.finished:
            return
        if self._pending is not None:
            telemetry.record_event(
                "session.text_dropped",
                level="warning",
                data={"command": self._pending.id.value},
            )
            self._pending = None
        self._switch(SessionState.EXIT)
        self.bus.emit("session.exit", None)

    def feed_line(self, line: str) -> SessionState:
        if self.state is SessionState.EXIT:
            return self.state
        if self.state is SessionState.TEXT:
            self.submit_text(line.rstrip("\r\n"))
            return self.state

        rest = line
        while self.state is SessionState.COMMAND:
            token, rest = _split_token(rest)
            if token is None:
                break
            self.handle_token(token)
            if self.state is SessionState.TEXT:
                inline = rest.rstrip("\r\n")
                if inline:
                    self.submit_text(inline)
                    rest = ""
        return self.state

    def handle_token(self, token: str) -> Optional[EngineResult]:
        if self.state is not SessionState.COMMAND:
            raise RuntimeError(f"Cannot take a command token in state '{self.state}'")
        try:
            cmd = self.parser.parse(token, self.engine.buffer.current_line)
        except ParseError as exc:
            self.errors.write("Invalid command\n")
            self.bus.emit("command.error", exc.token)
            return None

        self.bus.emit("command.parsed", cmd)
        if cmd.id.needs_text:
            self._pending = cmd
            self._switch(SessionState.TEXT)
            if self.prompts:
                self.output.write(_PROMPTS[cmd.id])
            return None
        return self._execute(cmd)

    def submit_text(self, text: str) -> Optional[EngineResult]:
        if self._pending is None:
            raise RuntimeError("No command is waiting for text")
        cmd = self._pending.with_text(text)
        self._pending = None
        self._switch(SessionState.COMMAND)
        return self._execute(cmd)

    def _execute(self, cmd: Command) -> EngineResult:
        result = self.engine.execute(cmd)
        self.output.write(render(result))
        self.bus.emit("command.result", result)
        if isinstance(result, Exit):
            self._switch(SessionState.EXIT)
            self.bus.emit("session.exit", result)
        return result

    def _switch(self, state: SessionState) -> None:
        if state is self.state:
            return
        self.state = state
        self.bus.emit("session.state", state)
        telemetry.record_event(
            "session.state", level="debug", data={"state": state.value}
        )
