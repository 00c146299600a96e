"""Timer panel state and HTML rendering for the coffee machine front end."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from html import escape

import requests

from .client import CoffeeClient, TimePayload

DEFAULT_TIME = "00:00"

log = logging.getLogger(__name__)


@dataclass
class TimerState:
    """The time shown as set, and whether the timer is active."""

    time: str = DEFAULT_TIME
    is_active: bool = False


def render_title(state: TimerState) -> str:
    """Render the heading showing the set time, or NONE when inactive."""
    shown = escape(state.time) if state.is_active else "NONE"
    return (
        '<div class="title-container">'
        "<div>"
        '<h1 class="title-text">The currently set time is</h1>'
        f'<h1 class="title-time">{shown}</h1>'
        "</div>"
        "</div>"
    )


class TimerPanel:
    """Holds the shared timer state and the value being edited."""

    def __init__(self, client: CoffeeClient) -> None:
        self.client = client
        self.state = TimerState()
        self.local_time = self.state.time

    def load(self) -> bool:
        """Fetch the current time from the server; return True on success."""
        try:
            fetched = self.client.get_time()
        except requests.RequestException as exc:
            log.warning("Could not fetch time: %s", exc)
            self.local_time = DEFAULT_TIME
            self.state.is_active = False
            return False
        if fetched is not None:
            self.state.time = fetched
            self.local_time = fetched
            self.state.is_active = True
        else:
            self.state.time = DEFAULT_TIME
            self.local_time = DEFAULT_TIME
            self.state.is_active = False
        return True

    def input(self, value: str) -> None:
        """Update the value in the time field."""
        self.local_time = value

    def submit(self) -> bool:
        """Send the edited time to the server; return True on success."""
        log.info("Submitting time: %s", self.local_time)
        try:
            self.client.set_time(TimePayload(self.local_time))
        except requests.RequestException as exc:
            log.warning("Could not submit time: %s", exc)
            return False
        self.state.time = self.local_time
        self.state.is_active = True
        log.info("Time set: %s", self.local_time)
        return True

    def unset(self) -> bool:
        """Remove the time on the server; return True on success."""
        try:
            self.client.unset_time()
        except requests.RequestException as exc:
            log.warning("Can't delete time: %s", exc)
            return False
        self.state.is_active = False
        self.state.time = DEFAULT_TIME
        log.info("Time unset")
        return True

    def toggle(self) -> bool:
        """Send the on/off signal; return True on success."""
        log.info("Sending toggle")
        try:
            self.client.toggle()
        except requests.RequestException as exc:
            log.warning("Could not toggle: %s", exc)
            return False
        log.info("Toggled")
        return True

    def render(self) -> str:
        """Render the whole page body as HTML."""
        return (
            "<div>"
            f"{render_title(self.state)}"
            '<div class="main-container">'
            '<div class="timer-container">'
            "<form>"
            '<div class="timer-left">'
            f'<input type="time" id="time-input" value="{escape(self.local_time)}" />'
            "</div>"
            '<div class="timer-right">'
            '<button type="submit" class="my-btn first">Set</button>'
            '<button type="button" class="my-btn red">Unset</button>'
            "</div>"
            "</form>"
            "</div>"
            '<button class="on-off-btn my-btn">Toggle On/Off</button>'
            "</div>"
            "</div>"
        )