# coffeetimer

Switch a coffee machine on at a set time every day. A small Flask server keeps
the chosen start time in an SQLite database, and a background scheduler pulses
a GPIO pin wired to the machine's power button once that time has passed. It
fires at most once a day.

## Installation

```
pip install .
```

## Running the server

The server takes the database location from the `DATABASE_URL` environment
variable. This is a path to an SQLite file; a leading `sqlite://` or
`sqlite:///` is stripped. The `times` table is created if it does not exist.

```
export DATABASE_URL=/var/lib/coffeetimer/times.db
coffeetimer
```

Options:

- `--host` (default `0.0.0.0`)
- `--port` (default `8099`)
- `--env-file` (default `.env`): a `KEY=VALUE` file read at start-up. Its
  values never override variables already set in the environment; a missing
  file is ignored.

If `DATABASE_URL` is not set, the server stops with an error.

### Endpoints

All under `/api/coffee`:

| Method | Path             | Effect                                                                 |
|--------|------------------|------------------------------------------------------------------------|
| GET    | `/start_time`    | `{"time": "HH:MM"}` with 200, or 204 when no time is set               |
| POST   | `/set_time`      | JSON body `{"time": "HH:MM"}`; replaces the stored time; 400 if invalid |
| DELETE | `/unset_time`    | removes the stored time                                                |
| POST   | `/toggle_on_off` | pulses the pin once; always answers 200, a failed pulse is only logged |

### Scheduler

Every two seconds the scheduler reads the stored time. When the current local
time is later than it, the pin is pulsed and the scheduler waits until shortly
after the next midnight before checking again. A server started after the day's
start time has passed therefore pulses the pin straight away.

The pulse drives GPIO 27 through the Linux sysfs interface
(`/sys/class/gpio`), holding it high for one second in a background thread.

## Using the pieces from Python

```python
from coffeetimer.server import create_app
from coffeetimer.store import TimeStore

store = TimeStore("/tmp/times.db")
app = create_app(store, signal=lambda: print("pulse"))
```

`create_app` takes any callable as the signal, so the API can run without GPIO
hardware. `TimeStore` offers `get_time()`, `set_time()` and `clear()`;
`parse_time` and `format_time` convert between `HH:MM` strings and
`datetime.time`.

### Client

```python
from coffeetimer.client import CoffeeClient, TimePayload

client = CoffeeClient("http://raspberrypi.local:8099")
client.set_time(TimePayload("06:45"))
print(client.get_time())   # "06:45"
client.toggle()
client.unset_time()
print(client.get_time())   # None
```

`get_time()` returns `None` for any status other than 200. The other calls do
not check the status code; only transport errors from `requests` are raised.

### Panel state

`coffeetimer.ui.TimerPanel` wraps a client with what a control panel needs: the
value being edited (`local_time`) and a `TimerState` holding the active time and
whether a timer is set. `load()`, `submit()`, `unset()` and `toggle()` call the
server and return `False` when the request fails. `render()` returns the panel
as an HTML string, and `render_title()` the heading alone, showing `NONE` when
no timer is active.

## What it does not do

The server offers only the JSON API. It does not serve a web page: the HTML
from `TimerPanel.render()` is a plain string with no scripts attached, and
nothing in the package puts it in front of a browser.

## Tests

```
pip install .[test]
pytest
```