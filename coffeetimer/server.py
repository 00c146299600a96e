"""HTTP API for the coffee machine timer and the background scheduler."""

from __future__ import annotations

import argparse
import logging
import os
import threading
from collections.abc import Callable, Sequence
from datetime import datetime, time, timedelta
from pathlib import Path
from typing import Any

from flask import Blueprint, Flask, jsonify, request

from .client import API_PREFIX, TimePayload
from .gpio import blink
from .store import TimeStore, format_time, parse_time

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8099
POLL_INTERVAL = 2.0

Signal = Callable[[], Any]

log = logging.getLogger(__name__)


def _default_signal() -> Any:
    return blink()


def create_app(store: TimeStore | None = None, signal: Signal | None = None) -> Flask:
    """Build the Flask application serving the ``/api/coffee`` endpoints."""
    store = store if store is not None else TimeStore.from_env()
    signal = signal if signal is not None else _default_signal

    api = Blueprint("coffee", __name__, url_prefix=API_PREFIX)

    @api.get("/start_time")
    def start_time():
        log.info("Connection to /start_time")
        current = store.get_time()
        if current is None:
            return "No time set.", 204
        return jsonify({"time": format_time(current)}), 200

    @api.post("/set_time")
    def set_time():
        log.info("Connection to /set_time")
        body = request.get_json(silent=True)
        try:
            payload = TimePayload.from_json(body if body is not None else {})
        except ValueError as exc:
            return f"Invalid payload: {exc}", 400
        try:
            parsed = parse_time(payload.time)
        except ValueError:
            return "Not a valid time. Expected format: %H:%M (for exmaple 14:00)", 400
        saved = store.set_time(parsed)
        text = format_time(saved)
        log.info("Inserted new time %s into db.", text)
        return f"The time was set to: {text}", 200

    @api.post("/toggle_on_off")
    def toggle_on_off():
        log.info("Connection to /toggle_on_off")
        try:
            signal()
        except Exception:
            log.warning("can't blink", exc_info=True)
        else:
            log.info("blinked")
        return "Sending on/off signal to machine", 200

    @api.delete("/unset_time")
    def unset_time():
        log.info("Connection to /unset_time")
        store.clear()
        return "Removed time", 200

    app = Flask(__name__)
    app.register_blueprint(api)
    return app


class Scheduler:
    """Fires the signal once a day after the stored start time has passed."""

    def __init__(self, store: TimeStore, signal: Signal | None = None) -> None:
        self.store = store
        self.signal = signal if signal is not None else _default_signal

    def tick(self, now: datetime) -> float:
        """Check the stored time against ``now``; return seconds until the next check."""
        start: time | None = self.store.get_time()
        if start is None or not now.time() > start:
            return POLL_INTERVAL
        try:
            self.signal()
        except Exception:
            log.warning("scheduled signal failed", exc_info=True)
        midnight = datetime.combine(now.date() + timedelta(days=1), time.min, now.tzinfo)
        return (midnight - now).total_seconds() + POLL_INTERVAL

    def run(self, stop_event: threading.Event) -> None:
        """Loop until ``stop_event`` is set."""
        while not stop_event.is_set():
            delay = self.tick(datetime.now())
            stop_event.wait(delay)


def _load_env_file(path: Path) -> None:
    """Set variables from a ``KEY=VALUE`` file without overriding existing ones."""
    if not path.is_file():
        return
    for raw in path.read_text().splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        key = key.strip().removeprefix("export ").strip()
        value = value.strip().strip("'\"")
        os.environ.setdefault(key, value)


def main(argv: Sequence[str] | None = None) -> int:
    """Start the scheduler thread and serve the API."""
    parser = argparse.ArgumentParser(description="Coffee machine timer server")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--env-file", type=Path, default=Path(".env"))
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s"
    )
    log.info("Loading env")
    _load_env_file(args.env_file)

    store = TimeStore.from_env()
    app = create_app(store)
    stop = threading.Event()
    worker = threading.Thread(
        target=Scheduler(store).run, args=(stop,), name="scheduler", daemon=True
    )
    worker.start()

    log.info("Starting server on %s:%d", args.host, args.port)
    try:
        app.run(host=args.host, port=args.port)
    finally:
        stop.set()
    return 0