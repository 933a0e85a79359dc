"""
Interactive terminal front end for the gridsketch diagram editor.
Display the diagram full screen and edit it with keyboard commands.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import readchar
from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.text import Text
from simple_chalk import chalk

from canvas import compose
from editor import Action, EditorState, SaveError, handle, save_frame
from grid_types import ArrowMode, BoxMode, InsertMode, Viewport
from keymap import command_for_key, describe_bindings

logger = logging.getLogger(__name__)

# Panel border plus horizontal padding, and border plus status block
_CHROME_WIDTH = 4
_CHROME_HEIGHT = 2 + 2


@dataclass(frozen=True)
class EditorConfig:
    """Settings for one editing session."""

    output_path: Path = Path("output.txt")
    refresh_per_second: float = 4  # 250 ms tick
    color: bool = False
    log_file: Path | None = None


def mode_name(state: EditorState) -> str:
    """Short upper-case label for the active mode, shown on the status line."""
    match state.mode:
        case InsertMode():
            return "INSERT"
        case BoxMode():
            return "BOX"
        case ArrowMode():
            return "ARROW"


class InteractiveEditor:
    """Full-screen diagram editor driven by single key presses."""

    def __init__(
        self,
        config: EditorConfig | None = None,
        console: Console | None = None,
        read_key: Callable[[], str] = readchar.readkey,
    ) -> None:
        self.config = config or EditorConfig()
        self.console = console or Console()
        self.read_key = read_key
        self.state = EditorState(color=self.config.color)
        self.status_message = "Ready"

    def viewport_for_console(self) -> Viewport:
        """Drawable area left inside the panel for the current console size."""
        width, height = self.console.size
        return Viewport(max(0, width - _CHROME_WIDTH), max(0, height - _CHROME_HEIGHT))

    def generate_display(self) -> Panel:
        """Generate the current display with diagram and status."""
        state = self.state
        rows = compose(state.viewport, state.diagram, state.preview)
        canvas = Text("\n".join(rows), style="yellow" if state.color else "")

        # Highlight the cursor cell
        if state.viewport.width > 0 and state.viewport.height > 0:
            offset = state.cursor.y * (state.viewport.width + 1) + state.cursor.x
            canvas.stylize("reverse", offset, offset + 1)

        rule = Text("─" * max(0, state.viewport.width), style="dim")

        # Exactly one line, however long the message
        status = Text(no_wrap=True, overflow="ellipsis")
        status.append("Mode: ", style="bold")
        status.append(f"{mode_name(state)}  ")
        status.append("Cursor: ", style="bold")
        status.append(f"({state.cursor.x}, {state.cursor.y})  ")
        if state.anchor is not None:
            status.append("Anchor: ", style="bold")
            status.append(f"({state.anchor.x}, {state.anchor.y})  ")
        status.append(Text.from_ansi(self.status_message))

        keys = "  ".join(f"{label} {name}" for label, name in describe_bindings())
        return Panel(
            Group(canvas, rule, status),
            title="gridsketch",
            subtitle=keys,
            border_style="green",
        )

    def save(self) -> None:
        """Write the composed frame to the configured file and report the outcome."""
        try:
            path = save_frame(self.state, self.config.output_path)
        except SaveError as exc:
            logger.warning("%s", exc)
            self.status_message = f"{chalk.red('✗')} {exc}"
        else:
            self.status_message = f"{chalk.green('✓')} Saved to {path}"

    def process_key(self, pressed: str) -> None:
        """Route one key press through the editor."""
        command = command_for_key(pressed)
        if command is None:
            self.status_message = f"Unknown key: {repr(pressed)}"
            return

        handle(self.state, command)

        if command is Action.SAVE:
            self.save()
        elif command is Action.QUIT:
            self.status_message = "Quitting..."

    def run(self) -> None:
        """Run the editor until quit."""
        logger.info("session started, output file %s", self.config.output_path)
        self.state.resize(self.viewport_for_console())

        with Live(
            self.generate_display(),
            console=self.console,
            refresh_per_second=self.config.refresh_per_second,
            screen=True,
        ) as live:
            try:
                while not self.state.should_quit:
                    # Terminal may have been resized since the last key
                    self.state.resize(self.viewport_for_console())
                    live.update(self.generate_display())

                    self.process_key(self.read_key())

                live.update(self.generate_display())

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())

        logger.info("session ended")


def parse_args(argv: list[str]) -> EditorConfig:
    parser = argparse.ArgumentParser(description="Draw text diagrams in the terminal.")
    parser.add_argument(
        "output_path",
        nargs="?",
        default="output.txt",
        type=Path,
        help="file written by Ctrl+W (default: output.txt)",
    )
    parser.add_argument("--color", action="store_true", help="start with colored output")
    parser.add_argument(
        "--refresh",
        type=float,
        default=4,
        help="screen refreshes per second while idle (default: 4)",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="write debug logging here")
    args = parser.parse_args(argv)

    if args.refresh <= 0:
        parser.error("--refresh must be positive")

    return EditorConfig(
        output_path=args.output_path,
        refresh_per_second=args.refresh,
        color=args.color,
        log_file=args.log_file,
    )


def main(argv: list[str] | None = None) -> None:
    """Run an interactive editing session."""
    config = parse_args(sys.argv[1:] if argv is None else argv)
    if config.log_file is not None:
        # The live screen owns stdout, so logging only goes to a file
        logging.basicConfig(
            filename=config.log_file,
            level=logging.DEBUG,
            format='%(levelname)s: %(message)s',
        )

    InteractiveEditor(config).run()


if __name__ == "__main__":
    main()
