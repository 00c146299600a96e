"""HTTP client for the coffee machine timer API."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import requests

DEFAULT_BASE_URL = "http://localhost:8099"
API_PREFIX = "/api/coffee"


@dataclass(frozen=True)
class TimePayload:
    """The JSON body carrying a time as ``HH:MM``."""

    time: str

    def to_json(self) -> str:
        """Serialise to a compact JSON object."""
        return json.dumps({"time": self.time}, separators=(",", ":"))

    @classmethod
    def from_json(cls, data: str | bytes | Mapping[str, Any]) -> "TimePayload":
        """Build a payload from JSON text or an already decoded mapping."""
        if isinstance(data, (str, bytes, bytearray)):
            try:
                data = json.loads(data)
            except json.JSONDecodeError as exc:
                raise ValueError(f"invalid JSON payload: {exc}") from exc
        if not isinstance(data, Mapping):
            raise ValueError("payload must be a JSON object")
        value = data.get("time")
        if not isinstance(value, str):
            raise ValueError("payload must have a string 'time' field")
        return cls(value)


class CoffeeClient:
    """Talks to the timer server; transport errors propagate from requests."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}{API_PREFIX}/{endpoint}"

    def get_time(self) -> str | None:
        """Return the set time, or None when the server reports none."""
        response = self.session.get(self._url("start_time"))
        if response.status_code != 200:
            return None
        return TimePayload.from_json(response.text).time

    def set_time(self, time: TimePayload | str) -> None:
        """Ask the server to set the start time."""
        payload = time if isinstance(time, TimePayload) else TimePayload(time)
        self.session.post(
            self._url("set_time"),
            headers={"Content-Type": "application/json"},
            data=payload.to_json(),
        )

    def unset_time(self) -> None:
        """Ask the server to remove the start time."""
        self.session.delete(self._url("unset_time"))

    def toggle(self) -> None:
        """Send the on/off signal."""
        self.session.post(self._url("toggle_on_off"))