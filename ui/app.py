"""
Main Application Module
Contains the MiniMetarsApp Textual application class
"""

import asyncio
from pathlib import Path
from typing import List, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Footer, Input, Static

from backend import (
    AppState,
    CommandError,
    check_for_updates,
    initialize_datafeed,
    load_profile_from_path,
    load_settings,
    load_settings_initial,
    save_current_profile,
    save_profile_as,
    save_settings,
    suggested_profile_path,
)
from backend.config.constants import UNITS_HPA, UNITS_IN_HG
from backend.data.profiles import Profile, ProfileWindowState
from backend.data.settings import Settings
from widgets.station_row import StationRow
from . import config
from .modals import AtisTextScreen, HelpScreen, ProfilePathModal, UpdateAvailableModal
from .utils import debug_log, is_plausible_station_id


class MiniMetarsApp(App):
    """Textual app showing METAR wind/altimeter and ATIS letters for a list of airports"""

    CSS = """
    #stations {
        height: 1fr;
    }

    #station-input {
        width: 16;
        margin: 0 1;
    }

    #station-input.hidden {
        display: none;
    }

    #status-bar {
        height: 1;
        background: $surface;
        color: $text-muted;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", priority=True),
        Binding("ctrl+o", "open_profile", "Open", priority=True),
        Binding("ctrl+s", "save_profile", "Save", priority=True),
        Binding("f2", "save_profile_as", "Save As", priority=True),
        Binding("ctrl+shift+s", "save_profile_as", "Save As", show=False, priority=True),
        Binding("ctrl+d", "toggle_input", "Input", priority=True),
        Binding("ctrl+u", "toggle_units", "Units", priority=True),
        Binding("delete", "remove_station", "Remove"),
        Binding("enter", "show_atis", "ATIS", show=False),
        Binding("question_mark,f1", "show_help", "Help"),
    ]

    def __init__(self, state: AppState, args=None):
        super().__init__()
        self.title = config.APP_TITLE
        self.state = state
        self.args = args
        self.units = getattr(args, 'units', None) or UNITS_IN_HG
        self.show_input = True
        self.profile_name = ""
        self.loaded_window: Optional[ProfileWindowState] = None

    def compose(self) -> ComposeResult:
        yield VerticalScroll(id="stations")
        yield Input(placeholder="ICAO", id="station-input")
        yield Static("", id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#station-input", Input).focus()
        self.run_worker(self.warm_datafeed())
        self.run_worker(self.startup(), exclusive=True)

    async def warm_datafeed(self) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, initialize_datafeed, self.state)

    async def startup(self) -> None:
        """Load settings and the initial profile/stations, then check for updates."""
        loop = asyncio.get_running_loop()
        profile = None
        try:
            initial = await loop.run_in_executor(None, load_settings_initial, self.state)
            profile = initial.profile
        except CommandError as e:
            # Most recent profile is gone or broken; keep going with settings only
            self.set_status(str(e))
            await loop.run_in_executor(None, load_settings, self.state)

        profile_arg = getattr(self.args, 'profile', None)
        if profile_arg:
            await self.open_profile_path(Path(profile_arg))
        elif profile is not None:
            await self.apply_profile(profile)

        for station_id in getattr(self.args, 'stations', None) or []:
            await self.add_station(station_id)

        if not getattr(self.args, 'no_update_check', False):
            await self.run_update_check()

    async def run_update_check(self) -> None:
        loop = asyncio.get_running_loop()
        try:
            release = await loop.run_in_executor(None, check_for_updates)
        except CommandError as e:
            debug_log(f"Update check failed: {e}")
            return
        if release is not None:
            self.push_screen(UpdateAvailableModal(release))

    # Station list

    @property
    def station_rows(self) -> List[StationRow]:
        return list(self.query(StationRow))

    async def add_station(self, station_id: str) -> None:
        await self.query_one("#stations", VerticalScroll).mount(StationRow(station_id))

    async def clear_stations(self) -> None:
        await self.query(StationRow).remove()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "station-input":
            return
        value = event.value.strip().upper()
        if is_plausible_station_id(value, config.STATION_ID_MIN_LENGTH, config.STATION_ID_MAX_LENGTH):
            self.run_worker(self.add_station(value))
            event.input.value = ""

    async def action_remove_station(self) -> None:
        if isinstance(self.focused, StationRow):
            await self.focused.remove()

    def action_show_atis(self) -> None:
        row = self.focused
        if isinstance(row, StationRow):
            self.push_screen(AtisTextScreen(row.display_id, row.atis_letter, row.atis_texts))

    def action_show_help(self) -> None:
        self.push_screen(HelpScreen())

    # Display options

    def action_toggle_input(self) -> None:
        if not self.station_rows:
            return
        self.set_input_visible(not self.show_input)

    def set_input_visible(self, visible: bool) -> None:
        self.show_input = visible
        station_input = self.query_one("#station-input", Input)
        station_input.set_class(not visible, "hidden")
        if visible:
            station_input.focus()

    def action_toggle_units(self) -> None:
        self.units = UNITS_HPA if self.units == UNITS_IN_HG else UNITS_IN_HG
        for row in self.station_rows:
            row.refresh_display()

    def set_status(self, message: str) -> None:
        self.query_one("#status-bar", Static).update(message)

    # Profiles

    def current_profile(self) -> Profile:
        return Profile(
            name=self.profile_name,
            stations=[row.requested_id for row in self.station_rows],
            show_input=self.show_input,
            show_titlebar=True,
            window=self.loaded_window,
            units=self.units,
        )

    async def apply_profile(self, profile: Profile) -> None:
        await self.clear_stations()
        self.profile_name = profile.name
        self.loaded_window = profile.window
        self.units = profile.units
        for station_id in profile.stations:
            await self.add_station(station_id)
        self.set_input_visible(profile.show_input or not profile.stations)

    async def open_profile_path(self, path: Path) -> None:
        loop = asyncio.get_running_loop()
        try:
            profile = await loop.run_in_executor(None, load_profile_from_path, self.state, path)
        except CommandError as e:
            self.set_status(str(e))
            return
        await self.apply_profile(profile)
        self.set_status(f"Loaded {path.name}")
        await self.persist_settings()

    async def persist_settings(self) -> None:
        loop = asyncio.get_running_loop()
        settings = self.state.settings or Settings()
        try:
            await loop.run_in_executor(None, save_settings, self.state, settings)
        except CommandError as e:
            self.set_status(str(e))

    def action_open_profile(self) -> None:
        def on_path(path: Optional[Path]) -> None:
            if path is not None:
                self.run_worker(self.open_profile_path(path))

        default = suggested_profile_path(self.state, self.profile_name)
        self.push_screen(ProfilePathModal("Open Profile", default, must_exist=True), on_path)

    async def action_save_profile(self) -> None:
        if self.state.last_profile_path is None:
            self.action_save_profile_as()
            return

        loop = asyncio.get_running_loop()
        try:
            path = await loop.run_in_executor(None, save_current_profile, self.state, self.current_profile())
        except CommandError as e:
            self.set_status(str(e))
            return
        self.set_status(f"Saved {path.name}")
        await self.persist_settings()

    def action_save_profile_as(self) -> None:
        def on_path(path: Optional[Path]) -> None:
            if path is not None:
                self.run_worker(self.save_profile_to(path))

        default = suggested_profile_path(self.state, self.profile_name)
        self.push_screen(ProfilePathModal("Save Profile As", default), on_path)

    async def save_profile_to(self, path: Path) -> None:
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, save_profile_as, self.state, self.current_profile(), path)
        except CommandError as e:
            self.set_status(str(e))
            return
        self.set_status(f"Saved {path.name}")
        await self.persist_settings()
