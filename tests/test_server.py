import threading
from datetime import datetime

import pytest

from coffeetimer.server import POLL_INTERVAL, Scheduler, create_app
from coffeetimer.store import TimeStore, parse_time


class Recorder:
    def __init__(self, error=None):
        self.calls = 0
        self.error = error

    def __call__(self):
        self.calls += 1
        if self.error is not None:
            raise self.error


@pytest.fixture
def store(tmp_path):
    return TimeStore(str(tmp_path / "times.db"))


@pytest.fixture
def signal():
    return Recorder()


@pytest.fixture
def client(store, signal):
    return create_app(store, signal).test_client()


def test_start_time_endpoint(client):
    resp = client.get("/api/coffee/start_time")
    assert resp.status_code in (200, 204)


def test_set_time_endpoint(client):
    resp = client.post("/api/coffee/set_time", json={"time": "10:00"})
    resp2 = client.get("/api/coffee/start_time")
    assert resp.status_code == 200
    assert resp2.get_json()["time"] == "10:00"


def test_unset_time_endpoint(client):
    client.post("/api/coffee/set_time", json={"time": "10:00"})
    resp = client.delete("/api/coffee/unset_time")
    resp2 = client.get("/api/coffee/start_time")
    assert resp.status_code == 200
    assert resp2.status_code == 204


def test_toggle_endpoint(client, signal):
    resp = client.post("/api/coffee/toggle_on_off")
    assert resp.status_code == 200
    assert signal.calls == 1


def test_toggle_survives_signal_error(store):
    failing = Recorder(OSError("no gpio"))
    resp = create_app(store, failing).test_client().post("/api/coffee/toggle_on_off")
    assert resp.status_code == 200
    assert resp.get_data(as_text=True) == "Sending on/off signal to machine"


def test_set_time_response_body(client):
    resp = client.post("/api/coffee/set_time", json={"time": "14:00"})
    assert resp.get_data(as_text=True) == "The time was set to: 14:00"


@pytest.mark.parametrize("bad", ["25:00", "abc", "10-00", ""])
def test_set_time_rejects_invalid(client, store, bad):
    resp = client.post("/api/coffee/set_time", json={"time": bad})
    assert resp.status_code == 400
    assert store.get_time() is None


def test_set_time_rejects_missing_field(client):
    resp = client.post("/api/coffee/set_time", json={"other": "10:00"})
    assert resp.status_code == 400


def test_set_time_replaces_previous(client, store):
    client.post("/api/coffee/set_time", json={"time": "08:00"})
    client.post("/api/coffee/set_time", json={"time": "09:30"})
    assert store.get_time() == parse_time("09:30")


def test_tick_without_time_waits_poll_interval(store, signal):
    scheduler = Scheduler(store, signal)
    assert scheduler.tick(datetime(2024, 5, 1, 12, 0)) == POLL_INTERVAL
    assert signal.calls == 0


def test_tick_before_time_does_not_fire(store, signal):
    store.set_time("10:00")
    scheduler = Scheduler(store, signal)
    assert scheduler.tick(datetime(2024, 5, 1, 9, 59)) == POLL_INTERVAL
    assert signal.calls == 0


def test_tick_after_time_fires_and_waits_past_midnight(store, signal):
    store.set_time("10:00")
    scheduler = Scheduler(store, signal)
    now = datetime(2024, 5, 1, 10, 30)
    delay = scheduler.tick(now)
    assert signal.calls == 1
    assert delay > POLL_INTERVAL
    after = now.timestamp() + delay
    assert datetime.fromtimestamp(after).date() == datetime(2024, 5, 2).date()


def test_tick_ignores_signal_errors(store):
    store.set_time("06:00")
    failing = Recorder(OSError("no gpio"))
    delay = Scheduler(store, failing).tick(datetime(2024, 5, 1, 7, 0))
    assert failing.calls == 1
    assert delay > POLL_INTERVAL


def test_run_stops_when_event_set(store, signal):
    stop = threading.Event()
    stop.set()
    Scheduler(store, signal).run(stop)
    assert signal.calls == 0