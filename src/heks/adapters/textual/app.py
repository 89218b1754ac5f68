"""Executable Textual app hosting the viewer."""

from __future__ import annotations

import argparse
import shlex
import sys
from typing import Optional, Sequence, Tuple

from textual import events
from textual.app import App, ComposeResult
from textual.containers import Horizontal
from textual.widgets import Static

from heks.runtime import SettingsError, ViewerSettings, telemetry
from heks.session import Session, SessionView
from heks.source import ByteSource, ByteSourceError, FileSource, MemorySource

from .controller import TextualHexAdapter, TextualUIHooks, create_default_manager
from .rendering import render_hex, render_info, render_position, render_unicode

TITLE_SUFFIX = "𝓱𝓮𝓴𝓼"

_NAMED_KEYS = {
    "right": "RIGHT",
    "left": "LEFT",
    "up": "UP",
    "down": "DOWN",
    "pageup": "PAGEUP",
    "pagedown": "PAGEDOWN",
    "home": "HOME",
    "end": "END",
    "tab": "TAB",
    "shift+tab": "BACKTAB",
    "escape": "ESC",
    "enter": "ENTER",
    "backspace": "BACKSPACE",
}


def normalize_key(
    key: str, character: Optional[str]
) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
    """Map a Textual key name to ``(key, text, modifiers)`` for the adapter."""

    if key in {"ctrl+c", "ctrl+q"}:
        return None
    if key in _NAMED_KEYS:
        return (_NAMED_KEYS[key], None, ())
    if key.startswith("alt+") and len(key) == 5:
        return (key[-1], None, ("ALT",))
    if character and len(character) == 1 and character.isprintable():
        return (character, character, ())
    return (key.upper(), None, ())


class HeksApp(App[None]):
    """Hex and unicode panes over a byte source, with a position bar."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#title, #info, #position, #status {
		height: 1;
	}

	#title {
		background: rgb(0, 0, 192);
		color: rgb(224, 224, 224);
		content-align: center middle;
	}

	#display {
		height: 1fr;
	}

	#hex-view {
		width: 55%;
		background: rgb(32, 32, 32);
		color: rgb(192, 192, 192);
	}

	#unicode-view {
		width: 45%;
		background: rgb(64, 64, 64);
		color: rgb(192, 192, 192);
	}

	#info {
		background: rgb(128, 128, 255);
	}

	#status {
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, session: Session, settings: ViewerSettings) -> None:
        super().__init__()
        self.session = session
        self.settings = settings
        self.adapter: TextualHexAdapter | None = None
        self._command_text = ""

    def compose(self) -> ComposeResult:
        yield Static(
            f"{self.session.source.name()} - {TITLE_SUFFIX}", id="title"
        )
        with Horizontal(id="display"):
            yield Static("", id="hex-view")
            yield Static("", id="unicode-view")
        yield Static("", id="info")
        yield Static("", id="status")
        yield Static("", id="position")

    def on_mount(self) -> None:
        manager = create_default_manager(
            self.session, sequence_timeout_ms=self.settings.sequence_timeout_ms
        )
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            show_command=self._show_command,
            request_quit=self.exit,
        )
        self.adapter = TextualHexAdapter(manager, hooks)
        self.set_interval(self.settings.tick_interval, self._tick)

    def on_resize(self, event: events.Resize) -> None:
        del event
        if self.adapter:
            self.adapter.dirty = True

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = normalize_key(event.key, event.character)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()

    def _tick(self) -> None:
        if not self.adapter:
            return
        self.adapter.process_timeouts()
        rows = self.query_one("#display").size.height
        if rows <= 0:
            # Not laid out yet; positioning into zero rows would collapse the
            # selection to an empty range.
            return
        self.adapter.refresh(rows)

    def _update_view(self, view: SessionView) -> None:
        data = view.slice.data
        start = view.slice.location_start
        self.query_one("#hex-view", Static).update(
            render_hex(data, start, view.cursor, view.columns)
        )
        self.query_one("#unicode-view", Static).update(
            render_unicode(data, start, view.cursor, view.columns)
        )
        self.query_one("#info", Static).update(
            render_info(view.cursor, view.slice.fetch(view.cursor))
        )
        width = self.query_one("#position").size.width
        self.query_one("#position", Static).update(
            render_position(view.fraction, width)
        )

    def _update_status(self, status: str) -> None:
        if not self._command_text:
            self.query_one("#status", Static).update(status)

    def _show_command(self, command: str) -> None:
        self._command_text = command
        if command:
            self.query_one("#status", Static).update(command)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="heks", description="Inspect the bytes of a file in the terminal."
    )
    parser.add_argument("filename", nargs="?", help="File to open")
    parser.add_argument(
        "--columns",
        type=int,
        default=None,
        help="Bytes per row (default: HEKS_COLUMNS or 16)",
    )
    parser.add_argument(
        "--tick-hz",
        type=float,
        default=None,
        help="Redraw rate in frames per second (default: HEKS_TICK_HZ or 60)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Minimum log level written to the log file (default: HEKS_LOG_LEVEL)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Open a built-in sample buffer instead of a file",
    )
    args = parser.parse_args(argv)
    if args.filename is None and not args.debug:
        parser.error("a filename is required unless --debug is given")
    return args


def open_source(args: argparse.Namespace) -> ByteSource:
    if args.debug:
        return MemorySource.debug()
    return FileSource(args.filename)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    if args.log_level:
        telemetry.configure(level=args.log_level)

    command_line = ["heks", *(sys.argv[1:] if argv is None else argv)]
    telemetry.get_logger().info("========")
    telemetry.get_logger().info(f"STARTUP: {shlex.join(command_line)}")
    telemetry.get_logger().info("========")

    try:
        settings = ViewerSettings.from_env().override(
            columns=args.columns, tick_hz=args.tick_hz
        )
    except SettingsError as exc:
        print(f"heks: {exc}", file=sys.stderr)
        return 2

    try:
        source = open_source(args)
    except ByteSourceError as exc:
        print(exc, file=sys.stderr)
        telemetry.record_event(
            "source.open_failed", level="error", data={"path": args.filename}
        )
        return 1

    session = Session(source, columns=settings.columns)
    try:
        HeksApp(session, settings).run()
    finally:
        close = getattr(source, "close", None)
        if close is not None:
            close()
    return 0


def run() -> None:  # pragma: no cover - console script entry point
    sys.exit(main())


if __name__ == "__main__":  # pragma: no cover
    run()
