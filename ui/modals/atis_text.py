"""ATIS Text Modal Screen - full broadcast text for one airport"""

from typing import List

from textual.screen import ModalScreen
from textual.widgets import Static
from textual.containers import Container, VerticalScroll
from textual.binding import Binding
from textual.app import ComposeResult


class AtisTextScreen(ModalScreen):
    """Modal screen showing every ATIS broadcast published for an airport"""

    CSS = """
    AtisTextScreen {
        align: center middle;
    }

    #atis-container {
        width: 80;
        height: auto;
        max-height: 80%;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }

    #atis-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    .atis-text {
        margin-bottom: 1;
    }

    #atis-hint {
        text-align: center;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("escape", "close", "Close", priority=True),
        Binding("enter", "close", "Close", show=False),
    ]

    def __init__(self, station_id: str, letter: str, texts: List[str]):
        super().__init__()
        self.station_id = station_id
        self.letter = letter
        self.texts = list(texts)

    def compose(self) -> ComposeResult:
        with Container(id="atis-container"):
            yield Static(f"{self.station_id} ATIS {self.letter}", id="atis-title")
            with VerticalScroll():
                if not self.texts:
                    yield Static("No ATIS text published", classes="atis-text")
                for text in self.texts:
                    # Broadcast text is user-generated; don't interpret it as markup
                    yield Static(text, classes="atis-text", markup=False)
            yield Static("Esc Close", id="atis-hint")

    def action_close(self) -> None:
        self.dismiss()
