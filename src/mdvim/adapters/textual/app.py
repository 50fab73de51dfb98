"""Executable Textual app that hosts the markdown keystroke dispatcher."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use mdvim.adapters.textual.app"
    ) from exc

from mdvim.actions import paste_text
from mdvim.buffer import Buffer, BufferMirror, MoveOperation
from mdvim.modes import InterpreterMode, ModeBus, ModeContext
from mdvim.modes.dispatcher import KeystrokeDispatcher
from mdvim.runtime import EditorConfig, telemetry

from .controller import TextualModalAdapter, TextualUIHooks, normalize_textual_key

_FALLBACK_MOTIONS = {
    "LEFT": MoveOperation.LEFT,
    "RIGHT": MoveOperation.RIGHT,
    "UP": MoveOperation.UP,
    "DOWN": MoveOperation.DOWN,
    "HOME": MoveOperation.START_OF_LINE,
    "END": MoveOperation.END_OF_LINE,
}


def create_dispatcher(
    text: str = "", *, config: Optional[EditorConfig] = None
) -> KeystrokeDispatcher:
    """Build a dispatcher over a fresh :class:`Buffer` with the default keymap."""

    buffer = Buffer.from_text(text)
    context = ModeContext(
        buffer=buffer,
        clipboard=buffer.registers,
        bus=ModeBus(),
        config=config or EditorConfig.from_env(),
    )
    return KeystrokeDispatcher(context)


def render_mirror(mirror: BufferMirror) -> Text:
    """Render buffer text with the cursor cell reversed and the selection shaded."""

    source = mirror.text
    # a cell past the last character keeps the cursor visible at line ends
    rendered = Text(source + " ")
    selection = mirror.selection
    if selection is not None:
        rendered.stylize("on blue", selection[0], selection[1])
    cursor = mirror.position
    if cursor < len(source) and source[cursor] == "\n":
        rendered = Text(source[:cursor] + " " + source[cursor:] + " ")
        if selection is not None:
            start, end = selection
            rendered.stylize(
                "on blue",
                start if start <= cursor else start + 1,
                end if end <= cursor else end + 1,
            )
    rendered.stylize("reverse", cursor, cursor + 1)
    return rendered


@dataclass
class UIState:
    mode: InterpreterMode = InterpreterMode.RESTING
    status_text: str = ""


class MarkdownEditorApp(App[None]):
    """Minimal Textual UI embedding the keystroke dispatcher."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
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
        ("ctrl+s", "save", "Save"),
    ]

    def __init__(
        self,
        *,
        path: Optional[Path] = None,
        config: Optional[EditorConfig] = None,
    ) -> None:
        super().__init__()
        self._state = UIState()
        self._path = path
        self._config = config or EditorConfig.from_env()
        self.dispatcher: KeystrokeDispatcher | None = None
        self.adapter: TextualModalAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None

    @property
    def image_folder(self) -> Path:
        base = self._path.parent if self._path is not None else Path.cwd()
        return base / "images"

    def on_image_inserted(self, file_name: str) -> None:
        self._update_status(f"image:{file_name}")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        text = ""
        if self._path is not None and self._path.is_file():
            text = self._path.read_text(encoding="utf-8")
        self.dispatcher = create_dispatcher(text, config=self._config)
        buffer = self.dispatcher.context.buffer
        if isinstance(buffer, Buffer):
            buffer.registers.on_clipboard_set = self.copy_to_clipboard
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            update_mode=self._update_mode,
            log=self._log_line,
        )
        self.adapter = TextualModalAdapter(self.dispatcher, hooks)
        self.set_interval(0.1, self._process_timeouts)

    def _process_timeouts(self) -> None:
        if self.adapter:
            self.adapter.process_timeouts()

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = normalize_textual_key(event.key, event.character)
        if normalized is None:
            return
        key, text, modifiers = normalized
        consumed = self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        if not consumed:
            self._apply_default(key, text, modifiers)
        event.stop()

    async def on_paste(self, event: events.Paste) -> None:
        if not self.dispatcher:
            return
        paste_text(self.dispatcher.context, self, event.text)
        self._update_buffer(self.dispatcher.context.buffer.mirror())
        event.stop()

    def action_save(self) -> None:
        if self._path is None or not self.dispatcher:
            self._update_status("save: no file")
            return
        self._path.write_text(self.dispatcher.context.buffer.text, encoding="utf-8")
        telemetry.record_event("buffer.saved", data={"path": str(self._path)})
        self._update_status(f"saved {self._path.name}")

    def _apply_default(
        self, key: str, text: Optional[str], modifiers: Sequence[str]
    ) -> None:
        """Plain typing and cursor keys the dispatcher left to the widget."""

        if self.dispatcher is None:
            return
        buffer = self.dispatcher.context.buffer
        if key in _FALLBACK_MOTIONS:
            buffer.move(_FALLBACK_MOTIONS[key])
        elif key == "ENTER":
            buffer.insert_text("\n")
        elif key == "BACKSPACE":
            buffer.delete_previous_char()
        elif key == "DELETE":
            buffer.delete_char()
        elif text is not None and "ctrl" not in modifiers and "alt" not in modifiers:
            buffer.insert_text(text)
        else:
            return
        self._update_buffer(buffer.mirror())

    def _update_buffer(self, mirror: BufferMirror) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_mirror(mirror))

    def _update_mode(self, mode: InterpreterMode) -> None:
        self._state.mode = mode
        self._render_status()

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        self._render_status()

    def _render_status(self) -> None:
        if self._status_widget:
            label = f"-- {self._state.mode.value.upper()} --"
            self._status_widget.update(f"{label}  {self._state.status_text}")

    def _log_line(self, line: str) -> None:
        self.log(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the mdvim Textual demo.")
    parser.add_argument("path", nargs="?", type=Path, help="Markdown file to edit")
    parser.add_argument(
        "--decay-ms",
        type=int,
        default=None,
        help="Idle time before a pending command is abandoned (default: 2000)",
    )
    parser.add_argument(
        "--tab-width",
        type=int,
        default=None,
        help="Spaces per indent level (default: 4)",
    )
    parser.add_argument(
        "--no-expand-tab",
        action="store_true",
        help="Indent with a literal tab instead of spaces",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> EditorConfig:
    config = EditorConfig.from_env()
    changes: dict[str, object] = {}
    if args.decay_ms is not None:
        changes["decay_ms"] = args.decay_ms
    if args.tab_width is not None:
        changes["tab_width"] = args.tab_width
    if args.no_expand_tab:
        changes["expand_tab"] = False
    return config.with_overrides(**changes) if changes else config


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    app = MarkdownEditorApp(path=args.path, config=build_config(args))
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
