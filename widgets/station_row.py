"""
Station Row Widget
One line per airport: identifier, ATIS letter, wind and altimeter.
Polls METAR and ATIS on independent, randomised timers.
"""

import asyncio
from datetime import datetime, timezone
from typing import List, Optional, TYPE_CHECKING

from rich.text import Text
from textual.widgets import Static

from backend import CommandError, fetch_metar, get_atis, lookup_station
from backend.config.constants import ATIS_POLL_RANGE, METAR_POLL_RANGE
from ui import config
from ui.utils import debug_log, format_altimeter, random_poll_interval

if TYPE_CHECKING:
    from ui.app import MiniMetarsApp


class StationRow(Static):
    """A single airport in the station list."""

    can_focus = True

    DEFAULT_CSS = """
    StationRow {
        height: auto;
        padding: 0 1;
    }

    StationRow:focus {
        background: $boost;
    }
    """

    def __init__(self, requested_id: str, **kwargs):
        super().__init__("", **kwargs)
        self.requested_id = requested_id.upper()
        self.icao_id = ""
        self.display_id = self.requested_id
        self.valid_id = False
        self.wind = ""
        self.altimeter_in_hg: Optional[float] = None
        self.altimeter_hpa: Optional[float] = None
        self.raw_metar = ""
        self.observed_at: Optional[datetime] = None
        self.atis_letter = "-"
        self.atis_texts: List[str] = []
        self.show_full_metar = False

    @property
    def mini_app(self) -> "MiniMetarsApp":
        """Return the app with proper type hint"""
        return self.app  # type: ignore[return-value]

    def on_mount(self) -> None:
        self.update(self.render_row())
        self.run_worker(self.start_polling(), exclusive=True)

    async def start_polling(self) -> None:
        """Resolve the station, then start the METAR and ATIS timers."""
        await self.fetch_and_update_station()
        if not self.valid_id:
            return

        await self.update_metar()
        self.set_interval(random_poll_interval(METAR_POLL_RANGE), self.update_metar)

        await self.update_atis()
        self.set_interval(random_poll_interval(ATIS_POLL_RANGE), self.update_atis)

    async def fetch_and_update_station(self) -> None:
        debug_log(f"Looking up requested ID: {self.requested_id}")
        loop = asyncio.get_running_loop()
        try:
            station = await loop.run_in_executor(
                None, lookup_station, self.mini_app.state, self.requested_id
            )
        except CommandError as e:
            self.display_id = self.requested_id
            self.mini_app.set_status(str(e))
            self.update(self.render_row())
            return

        self.icao_id = station.icao_id
        self.display_id = station.display_id
        self.valid_id = True
        self.update(self.render_row())

    async def update_metar(self) -> None:
        if not self.valid_id:
            return

        loop = asyncio.get_running_loop()
        try:
            res = await loop.run_in_executor(None, fetch_metar, self.mini_app.state, self.icao_id)
        except CommandError as e:
            debug_log(f"METAR update for {self.icao_id} failed: {e}")
            return

        new_time = None
        if res.metar.obs_time is not None:
            new_time = datetime.fromtimestamp(res.metar.obs_time, tz=timezone.utc)

        if self.observed_at is not None and new_time is not None and new_time <= self.observed_at:
            debug_log(f"Fetched METAR for {self.icao_id} same as displayed")
            return

        self.observed_at = new_time
        self.wind = res.wind_string
        self.altimeter_in_hg = res.altimeter_in_hg
        self.altimeter_hpa = res.altimeter_hpa
        self.raw_metar = res.metar.raw_ob
        self.update(self.render_row())

    async def update_atis(self) -> None:
        if not self.valid_id:
            return

        loop = asyncio.get_running_loop()
        try:
            res = await loop.run_in_executor(None, get_atis, self.mini_app.state, self.icao_id)
        except CommandError as e:
            debug_log(f"ATIS update for {self.icao_id} failed: {e}")
            return

        self.atis_letter = res.letter
        self.atis_texts = list(res.texts)
        self.update(self.render_row())

    def on_click(self) -> None:
        """Toggle the raw METAR line."""
        self.show_full_metar = not self.show_full_metar
        self.update(self.render_row())

    def render_row(self) -> Text:
        """Build the row text for the current state and the app's altimeter units."""
        id_style = config.ID_STYLE if self.valid_id else config.INVALID_ID_STYLE
        letter_style = config.ATIS_STYLE if self.atis_letter != "-" else config.ATIS_MISSING_STYLE
        altimeter = format_altimeter(self.altimeter_in_hg, self.altimeter_hpa, self.mini_app.units)

        row = Text.assemble(
            (self.display_id.ljust(config.ID_COLUMN_WIDTH), id_style),
            (self.atis_letter.ljust(config.ATIS_COLUMN_WIDTH), letter_style),
            self.wind.ljust(config.WIND_COLUMN_WIDTH),
            altimeter,
        )
        if self.show_full_metar and self.raw_metar:
            row.append("\n")
            row.append(self.raw_metar, style=config.RAW_METAR_STYLE)
        return row

    def refresh_display(self) -> None:
        """Re-render after an app-wide display change (e.g. units)."""
        self.update(self.render_row())
