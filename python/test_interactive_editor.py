"""Tests for the interactive editor front end, driven by scripted key presses."""

import io
from pathlib import Path
from typing import Callable

from readchar import key
from rich.console import Console

from grid_types import BoxMode, Coordinate, InsertMode, Viewport
from interactive_editor import EditorConfig, InteractiveEditor, mode_name, parse_args


def scripted(keys: list[str]) -> Callable[[], str]:
    """Return a read_key replacement yielding keys in order."""
    pending = iter(keys)
    return lambda: next(pending)


def make_editor(keys: list[str], tmp_path: Path, width: int = 40, height: int = 12) -> InteractiveEditor:
    console = Console(file=io.StringIO(), width=width, height=height, color_system=None)
    config = EditorConfig(output_path=tmp_path / "diagram.txt")
    return InteractiveEditor(config, console=console, read_key=scripted(keys))


class TestProcessKey:
    """Tests for single key handling."""

    def test_viewport_leaves_room_for_chrome(self, tmp_path: Path) -> None:
        """The drawable area excludes the panel border and status block."""
        editor = make_editor([], tmp_path, width=40, height=12)
        assert editor.viewport_for_console() == Viewport(36, 8)

    def test_tiny_console(self, tmp_path: Path) -> None:
        """A console smaller than the chrome gives an empty viewport."""
        editor = make_editor([], tmp_path, width=3, height=2)
        assert editor.viewport_for_console() == Viewport(0, 0)

    def test_unknown_key_reports(self, tmp_path: Path) -> None:
        """Unbound keys leave state alone and say so."""
        editor = make_editor([], tmp_path)
        editor.process_key(key.CTRL_G)
        assert "Unknown key" in editor.status_message
        assert editor.state.diagram == {}

    def test_save_success(self, tmp_path: Path) -> None:
        """Ctrl+W writes the frame and reports success."""
        editor = make_editor([], tmp_path)
        editor.state.resize(Viewport(3, 1))
        for pressed in ["h", "i", key.CTRL_W]:
            editor.process_key(pressed)
        assert (tmp_path / "diagram.txt").read_text(encoding="utf-8") == "hi \n"
        assert "Saved to" in editor.status_message

    def test_save_failure_is_not_fatal(self, tmp_path: Path) -> None:
        """A failed save is reported and the session carries on."""
        console = Console(file=io.StringIO(), width=40, height=12, color_system=None)
        config = EditorConfig(output_path=tmp_path / "no" / "such" / "dir.txt")
        editor = InteractiveEditor(config, console=console, read_key=scripted([]))
        editor.process_key(key.CTRL_W)
        assert "Could not save" in editor.status_message
        editor.process_key("x")
        assert editor.state.diagram == {Coordinate(0, 0): "x"}

    def test_mode_name(self, tmp_path: Path) -> None:
        editor = make_editor([], tmp_path)
        assert mode_name(editor.state) == "INSERT"
        editor.process_key(key.CTRL_B)
        assert mode_name(editor.state) == "BOX"
        editor.process_key(key.CTRL_A)
        assert mode_name(editor.state) == "ARROW"


class TestDisplay:
    """Tests for generate_display."""

    def test_renders_diagram_and_status(self, tmp_path: Path) -> None:
        """The panel shows the typed text, the mode and the cursor."""
        editor = make_editor([], tmp_path)
        editor.state.resize(editor.viewport_for_console())
        for pressed in "hello":
            editor.process_key(pressed)

        editor.console.print(editor.generate_display())
        output = editor.console.file.getvalue()
        assert "hello" in output
        assert "INSERT" in output
        assert "(5, 0)" in output

    def test_shows_anchor_in_shape_mode(self, tmp_path: Path) -> None:
        """The anchor is listed while drawing."""
        editor = make_editor([], tmp_path, width=60)
        editor.state.resize(editor.viewport_for_console())
        for pressed in [key.RIGHT, key.CTRL_A, key.DOWN]:
            editor.process_key(pressed)

        editor.console.print(editor.generate_display())
        output = editor.console.file.getvalue()
        assert "ARROW" in output
        assert "Anchor" in output
        assert "▼" in output


class TestRun:
    """Tests for the main loop."""

    def test_session_until_quit(self, tmp_path: Path) -> None:
        """Keys are processed in order until Ctrl+X."""
        keys = [
            "a",
            key.ENTER,
            key.CTRL_A,
            key.RIGHT,
            key.RIGHT,
            key.ENTER,
            key.CTRL_W,
            key.CTRL_X,
            "never read",
        ]
        editor = make_editor(keys, tmp_path)
        editor.run()

        assert editor.state.should_quit
        assert isinstance(editor.state.mode, InsertMode)
        assert editor.state.diagram == {
            Coordinate(0, 0): "a",
            Coordinate(0, 1): "─",
            Coordinate(1, 1): "─",
            Coordinate(2, 1): "▶",
        }
        saved = (tmp_path / "diagram.txt").read_text(encoding="utf-8").splitlines()
        assert len(saved) == 8
        assert saved[0].rstrip() == "a"
        assert saved[1].rstrip() == "──▶"

    def test_keyboard_interrupt_ends_session(self, tmp_path: Path) -> None:
        """Ctrl+C stops the loop cleanly."""

        def interrupt() -> str:
            raise KeyboardInterrupt

        editor = make_editor([], tmp_path)
        editor.read_key = interrupt
        editor.run()
        assert editor.status_message == "Interrupted by user"

    def test_quit_discards_preview(self, tmp_path: Path) -> None:
        """Quitting mid-shape commits nothing."""
        editor = make_editor([key.CTRL_B, key.RIGHT, key.DOWN, key.CTRL_X], tmp_path)
        editor.run()
        assert editor.state.diagram == {}
        assert editor.state.mode == BoxMode(Coordinate(0, 0))


class TestParseArgs:
    """Tests for command line configuration."""

    def test_defaults(self) -> None:
        config = parse_args([])
        assert config.output_path == Path("output.txt")
        assert config.refresh_per_second == 4
        assert not config.color
        assert config.log_file is None

    def test_all_options(self) -> None:
        config = parse_args(["art.txt", "--color", "--refresh", "10", "--log-file", "edit.log"])
        assert config.output_path == Path("art.txt")
        assert config.color
        assert config.refresh_per_second == 10
        assert config.log_file == Path("edit.log")

    def test_color_flag_seeds_state(self) -> None:
        """The initial color flag is carried into the editor state."""
        editor = InteractiveEditor(EditorConfig(color=True), read_key=scripted([]))
        assert editor.state.color
        editor.process_key(key.CTRL_T)
        assert not editor.state.color


class TestStatusLine:
    """Tests for the status block height."""

    def test_long_message_stays_on_one_line(self, tmp_path: Path) -> None:
        """A long save error is truncated so the panel still fits the console."""
        console = Console(file=io.StringIO(), width=40, height=12, color_system=None)
        config = EditorConfig(output_path=tmp_path / ("very_long_directory_name_" * 4) / "out.txt")
        editor = InteractiveEditor(config, console=console, read_key=scripted([]))
        editor.state.resize(editor.viewport_for_console())
        editor.process_key(key.CTRL_W)
        assert "Could not save" in editor.status_message

        console.print(editor.generate_display())
        lines = console.file.getvalue().splitlines()
        assert len(lines) == 12
        assert all(len(line) <= 40 for line in lines)
