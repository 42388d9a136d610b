"""Update Available Modal - offer to open the release page"""

import webbrowser

from textual.screen import ModalScreen
from textual.widgets import Static, Button
from textual.containers import Container, Horizontal
from textual.binding import Binding
from textual.app import ComposeResult

from backend.data.update import ReleaseInfo
from common import logger as debug_logger


class UpdateAvailableModal(ModalScreen[bool]):
    """Asks whether to open the download page for a newer release"""

    CSS = """
    UpdateAvailableModal {
        align: center middle;
    }

    #update-container {
        width: 60;
        height: auto;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }

    #update-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    #update-buttons {
        height: auto;
        align: center middle;
        margin-top: 1;
    }

    #update-buttons Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("escape", "decline", "No", priority=True),
    ]

    def __init__(self, release: ReleaseInfo):
        super().__init__()
        self.release = release

    def compose(self) -> ComposeResult:
        with Container(id="update-container"):
            yield Static("New version", id="update-title")
            yield Static(
                f"A new version ({self.release.version}) was found. "
                "Do you want to open the download page?"
            )
            with Horizontal(id="update-buttons"):
                yield Button("Yes", id="update-yes", variant="primary")
                yield Button("No", id="update-no")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "update-yes":
            if self.release.html_url:
                debug_logger.info(f"Opening release page {self.release.html_url}")
                webbrowser.open(self.release.html_url)
            self.dismiss(True)
        else:
            self.dismiss(False)

    def action_decline(self) -> None:
        self.dismiss(False)
