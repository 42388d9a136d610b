"""Profile Path Modal - choose a profile file to open or save"""

from pathlib import Path
from typing import Optional

from textual.screen import ModalScreen
from textual.widgets import Static, Input
from textual.containers import Container
from textual.binding import Binding
from textual.app import ComposeResult


class ProfilePathModal(ModalScreen[Optional[Path]]):
    """Prompt for a profile path. Dismisses with the Path, or None if cancelled."""

    CSS = """
    ProfilePathModal {
        align: center middle;
    }

    #profile-container {
        width: 80;
        height: auto;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }

    #profile-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    #profile-error {
        color: $error;
        height: auto;
    }

    #profile-hint {
        text-align: center;
        color: $text-muted;
        margin-top: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", priority=True),
    ]

    def __init__(self, title: str, default_path: Path, must_exist: bool = False):
        super().__init__()
        self.title_text = title
        self.default_path = default_path
        self.must_exist = must_exist

    def compose(self) -> ComposeResult:
        with Container(id="profile-container"):
            yield Static(self.title_text, id="profile-title")
            yield Input(value=str(self.default_path), placeholder="Path to profile JSON", id="profile-input")
            yield Static("", id="profile-error")
            yield Static("Enter Confirm | Esc Cancel", id="profile-hint")

    def on_mount(self) -> None:
        self.query_one("#profile-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        value = event.value.strip()
        if not value:
            return

        path = Path(value).expanduser()
        if path.suffix.lower() != ".json":
            path = path.with_suffix(".json")

        if self.must_exist and not path.is_file():
            self.query_one("#profile-error", Static).update(f"No such file: {path}")
            return

        self.dismiss(path)

    def action_cancel(self) -> None:
        self.dismiss(None)
