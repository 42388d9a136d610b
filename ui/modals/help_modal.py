"""Help Modal Screen - Shows all keyboard shortcuts"""

from textual.screen import ModalScreen
from textual.widgets import Static
from textual.containers import Container
from textual.binding import Binding
from textual.app import ComposeResult


HELP_TEXT = """\
[bold]Stations[/bold]
 Enter        Add station (in input) / show ATIS text (on a row)
 Delete       Remove selected station
 Click        Show/hide raw METAR

[bold]Display[/bold]
 Ctrl+D       Show/hide station input
 Ctrl+U       Toggle inHg / hPa

[bold]Profiles[/bold]
 Ctrl+O       Open profile
 Ctrl+S       Save profile
 F2           Save profile as

[bold]Meta[/bold]
 ?/F1         This help
 Ctrl+C       Quit
"""


class HelpScreen(ModalScreen):
    """Modal screen showing all keyboard shortcuts"""

    CSS = """
    HelpScreen {
        align: center middle;
    }

    #help-container {
        width: 64;
        height: auto;
        max-height: 80%;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }

    #help-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    #help-hint {
        text-align: center;
        color: $text-muted;
        margin-top: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "close", "Close", priority=True),
        Binding("question_mark", "close", "Close", show=False),
        Binding("f1", "close", "Close", show=False),
    ]

    def compose(self) -> ComposeResult:
        with Container(id="help-container"):
            yield Static("Keyboard Shortcuts", id="help-title")
            yield Static(HELP_TEXT)
            yield Static("Press Esc to close", id="help-hint")

    def action_close(self) -> None:
        self.dismiss()
