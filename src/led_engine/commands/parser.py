"""Turns raw ``[LINE]ID[COUNT]`` tokens into Command values."""

from __future__ import annotations

import re
from typing import Optional

from led_engine.runtime import telemetry

from .models import Command, CommandId

# Leading digits are the address, trailing digits the count, and whatever
# sits between them is the verb.
_TOKEN = re.compile(r"(?P<line>\d*)(?P<id>.*?)(?P<count>\d*)", re.ASCII | re.DOTALL)


class ParseError(ValueError):
    """Raised when a token's verb portion is not exactly one known character."""

    def __init__(self, message: str, *, token: str) -> None:
        super().__init__(message)
        self.token = token


class CommandParser:
    """Parses command tokens against the current-line default."""

    def __init__(self, *, logger_name: Optional[str] = None) -> None:
        self._logger_name = logger_name

    def parse(self, token: str, current_line: int) -> Command:
        match = _TOKEN.fullmatch(token.strip())
        verb = None
        if match is not None and len(match["id"]) == 1:
            verb = CommandId.lookup(match["id"])

        if match is None or verb is None:
            telemetry.record_event(
                "command.invalid",
                level="debug",
                data={"token": token},
                logger_name=self._logger_name,
            )
            raise ParseError("invalid command", token=token)

        line = int(match["line"] or 0) or current_line
        count = int(match["count"] or 0) or 1
        return Command(line=max(line, 0), id=verb, count=count)


_DEFAULT_PARSER = CommandParser()


def parse(token: str, current_line: int) -> Command:
    """Parse ``token`` with the shared default parser."""

    return _DEFAULT_PARSER.parse(token, current_line)


__all__ = ["CommandParser", "ParseError", "parse"]
