"""Executable Textual app that hosts the modal engine over a TextArea."""

from __future__ import annotations

import argparse
import os
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Header, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use modal_engine.adapters.textual.app"
    ) from exc

from modal_engine.adapters.status_stream import ModeStatusStreamer
from modal_engine.modes import EngineMode
from modal_engine.modes.mode_manager import ModeManager, create_engine
from modal_engine.runtime import telemetry
from modal_engine.runtime.config import EngineConfig

from .buffer import TextAreaBuffer
from .controller import TextualEngineAdapter, TextualUIHooks


class EngineTextArea(TextArea):
    """TextArea that offers every key to the engine before editing."""

    adapter: TextualEngineAdapter | None = None

    async def _on_key(self, event: events.Key) -> None:
        adapter = self.adapter
        if adapter is None or event.key in {"ctrl+c", "ctrl+q"}:
            await super()._on_key(event)
            return
        result = adapter.handle_textual_key(event.key, character=event.character)
        if result.consumed or (
            adapter.manager.mode is not EngineMode.INSERT and event.is_printable
        ):
            # Outside Insert, unmapped printable keys must not type into the text.
            event.prevent_default()
            event.stop()
            return
        await super()._on_key(event)


class ModalEngineApp(App[None]):
    """Minimal Textual UI embedding the modal engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor {
		height: 1fr;
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

    def __init__(
        self,
        *,
        text: str = "",
        config: EngineConfig | None = None,
        status_host: str = "127.0.0.1",
        status_port: int | None = 8766,
    ) -> None:
        super().__init__()
        self._initial_text = text
        self._config = config or EngineConfig.from_env()
        self.manager: ModeManager | None = None
        self.adapter: TextualEngineAdapter | None = None
        self._editor: EngineTextArea | None = None
        self._status_widget: Static | None = None
        self._status_streamer: ModeStatusStreamer | None = None
        self._status_host = status_host
        self._requested_status_port = status_port
        self.logger = telemetry.get_logger("modal_engine.app")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._editor = EngineTextArea(self._initial_text, id="editor")
        yield self._editor
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        assert self._editor is not None
        self.manager = create_engine(TextAreaBuffer(self._editor), config=self._config)
        hooks = TextualUIHooks(
            update_status=self._update_status,
            log=self._log_line,
        )
        self.adapter = TextualEngineAdapter(self.manager, hooks)
        self._editor.adapter = self.adapter
        self._editor.focus()
        await self._maybe_start_status_stream()

    async def on_unmount(self) -> None:
        if self._status_streamer:
            await self._status_streamer.stop()
            self._status_streamer = None

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _log_line(self, line: str) -> None:
        self.logger.debug(line)

    async def _maybe_start_status_stream(self) -> None:
        if self._requested_status_port is None or self.manager is None:
            return
        self._status_streamer = ModeStatusStreamer(
            self._status_host, self._requested_status_port
        )
        await self._status_streamer.start()
        self.manager.notifier.add_sink(self._status_streamer)
        self._status_streamer(self.manager.mode)
        self.logger.info(
            "mode status stream @ %s:%s", self._status_host, self._status_streamer.port
        )


def _env_int(key: str, fallback: int) -> int:
    value = os.environ.get(key)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the modal engine Textual demo.")
    parser.add_argument("file", nargs="?", help="Text file to load into the editor")
    parser.add_argument(
        "--status-host",
        default=os.environ.get("MODAL_ENGINE_STATUS_HOST", "127.0.0.1"),
        help="Host interface for the mode status stream (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--status-port",
        type=int,
        default=_env_int("MODAL_ENGINE_STATUS_PORT", 8766),
        help="TCP port for the mode status stream (0 for ephemeral, default: 8766)",
    )
    parser.add_argument(
        "--no-status-server",
        action="store_true",
        help="Disable the mode status stream",
    )
    parser.add_argument(
        "--escape-sequence",
        help="Keys typed in Insert mode that return to Normal (default: jk)",
    )
    parser.add_argument(
        "--escape-timeout-ms",
        type=int,
        help="Maximum gap between escape sequence keys in milliseconds",
    )
    return parser.parse_args(argv)


def _build_config(args: argparse.Namespace) -> EngineConfig:
    config = EngineConfig.from_env()
    overrides = {}
    if args.escape_sequence is not None:
        overrides["escape_sequence"] = args.escape_sequence
    if args.escape_timeout_ms is not None:
        overrides["escape_timeout_ms"] = args.escape_timeout_ms
    return replace(config, **overrides) if overrides else config


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    # Console logging would draw over the Textual screen.
    telemetry.configure(preset="production")
    text = Path(args.file).read_text(encoding="utf-8") if args.file else ""
    status_port: int | None = None if args.no_status_server else args.status_port
    app = ModalEngineApp(
        text=text,
        config=_build_config(args),
        status_host=args.status_host,
        status_port=status_port,
    )
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
