"""Driving the machine's signal line through the sysfs GPIO interface."""

from __future__ import annotations

import threading
import time
from pathlib import Path

GPIO_LED = 27
DEFAULT_ROOT = "/sys/class/gpio"


class GpioError(OSError):
    """Raised when a GPIO pin cannot be prepared or driven."""


class SysfsPin:
    """An output pin exported through ``/sys/class/gpio``."""

    def __init__(self, number: int = GPIO_LED, root: str | Path = DEFAULT_ROOT) -> None:
        self.number = number
        self.root = Path(root)
        self.path = self.root / f"gpio{number}"
        try:
            if not self.path.is_dir():
                (self.root / "export").write_text(str(number))
            (self.path / "direction").write_text("out")
        except OSError as exc:
            raise GpioError(f"cannot set up GPIO pin {number}: {exc}") from exc

    def _write(self, level: str) -> None:
        try:
            (self.path / "value").write_text(level)
        except OSError as exc:
            raise GpioError(f"cannot drive GPIO pin {self.number}: {exc}") from exc

    def set_high(self) -> None:
        """Drive the pin high."""
        self._write("1")

    def set_low(self) -> None:
        """Drive the pin low."""
        self._write("0")


def blink(
    pin: int = GPIO_LED, duration: float = 1.0, root: str | Path = DEFAULT_ROOT
) -> threading.Thread:
    """Pulse ``pin`` high for ``duration`` seconds in a background thread."""
    output = SysfsPin(pin, root)

    def pulse() -> None:
        output.set_high()
        time.sleep(duration)
        output.set_low()

    worker = threading.Thread(target=pulse, name=f"blink-gpio{pin}", daemon=True)
    worker.start()
    return worker