"""Command-line entry point: ``led [options] [FILE]``."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence, TextIO

from led_engine.commands import BufferEngine
from led_engine.config import Config, ConfigError
from led_engine.runtime import telemetry
from led_engine.session import EditorSession
from led_engine.storage import DiskFileStore, FileStore, ResourceError


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="led",
        description="Line editor driven by [LINE]COMMAND[COUNT] tokens.",
    )
    parser.add_argument("file", nargs="?", help="File to edit or create")
    parser.add_argument(
        "--bl",
        "--buffer-length",
        dest="buffer_length",
        type=int,
        help="Number of line slots to allocate up front (default: 100)",
    )
    parser.add_argument(
        "--is",
        "--input-stream",
        dest="input_stream",
        help="Read commands from this file instead of stdin",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "quiet", "production"),
        help="telelog preset to use instead of LED_ENGINE_* variables",
    )
    return parser.parse_args(argv)


def _fatal(program: str, message: str, stream: TextIO) -> int:
    stream.write(f"{program}: {message}\n")
    return 1


def run(
    config: Config,
    *,
    stdin: TextIO,
    stdout: TextIO,
    stderr: TextIO,
    files: Optional[FileStore] = None,
) -> int:
    """Open the configured file, then drive the command loop to completion."""

    engine = BufferEngine(files=files or DiskFileStore(), capacity=config.buffer_length)
    if config.file_path:
        try:
            stdout.write(engine.open_file(config.file_path, strict=True).text)
        except ResourceError as exc:
            return _fatal(config.program_name, str(exc), stderr)

    if config.input_path:
        try:
            source = open(config.input_path, "r", encoding="utf-8")
        except OSError as exc:
            return _fatal(
                config.program_name, f"cannot open {config.input_path}: {exc}", stderr
            )
        prompts = False
    else:
        source = stdin
        prompts = stdin.isatty()

    session = EditorSession(engine, output=stdout, errors=stderr, prompts=prompts)
    try:
        session.run(source)
    finally:
        if source is not stdin:
            source.close()
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    program = "led"
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    try:
        config = Config.from_env(
            program_name=program,
            file_path=args.file,
            input_path=args.input_stream,
            buffer_length=args.buffer_length,
        )
    except ConfigError as exc:
        return _fatal(program, str(exc), sys.stderr)
    return run(config, stdin=sys.stdin, stdout=sys.stdout, stderr=sys.stderr)


if __name__ == "__main__":  # pragma: no cover - manual entry
    sys.exit(main())
