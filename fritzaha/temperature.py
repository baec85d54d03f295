"""Conversion between Celsius and the AHA temperature format.

The thermostat verbs of the AHA interface use an integer encoding where
16 to 56 stand for 8°C to 28°C in half degree steps, 253 switches the
heater off and 254 switches it fully on.
"""

from __future__ import annotations

import math

from .exceptions import InvalidValueError

DEVICE_MIN = 16
DEVICE_MAX = 56
DEVICE_OFF = 253
DEVICE_ON = 254

CELSIUS_MIN = 8.0
CELSIUS_MAX = 28.0
STEP = 0.5

HUMAN_OFF = "OFF"
HUMAN_ON = "ON"

_OFF_VALUES = {"off", "0"}
_ON_VALUES = {"on"}


def _round_half_up(celsius: float) -> float:
    return math.floor(celsius / STEP + 0.5) * STEP


def to_device_format(value: float | int | str) -> int:
    """Convert Celsius or "ON" / "OFF" to the device format.

    Temperatures are rounded to the nearest half degree (14.2 -> 14).
    Values below 8°C switch the heater off, values that round above 28°C
    switch it on.
    """
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _OFF_VALUES:
            return DEVICE_OFF
        if text in _ON_VALUES:
            return DEVICE_ON
        try:
            celsius = float(text)
        except ValueError:
            raise InvalidValueError(
                f"Invalid temperature: {value}. Must be a number or 'on' or 'off'."
            ) from None
    elif isinstance(value, bool):
        raise InvalidValueError(f"Invalid temperature: {value!r}")
    else:
        celsius = float(value)

    if not math.isfinite(celsius):
        raise InvalidValueError(f"Invalid temperature: {value}")

    # Below 8°C the heater is switched off before snapping to the grid,
    # so 7.8 turns it off instead of rounding up to 8.
    if celsius < CELSIUS_MIN:
        return DEVICE_OFF

    device_value = int(DEVICE_MIN + (_round_half_up(celsius) - CELSIUS_MIN) / STEP)
    if device_value > DEVICE_MAX:
        return DEVICE_ON
    return device_value


def to_human_format(value: int | str) -> float | str:
    """Convert the device format to Celsius, or "ON" / "OFF"."""
    if isinstance(value, str):
        try:
            device_value = int(value.strip())
        except ValueError:
            raise InvalidValueError(
                f"Invalid device temperature: {value!r}"
            ) from None
    else:
        device_value = int(value)

    if device_value == DEVICE_OFF:
        return HUMAN_OFF
    if device_value == DEVICE_ON:
        return HUMAN_ON
    return (device_value - DEVICE_MIN) * STEP + CELSIUS_MIN
