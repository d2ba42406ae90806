"""Unit conversion and display formatting.

Everything arrives in metric (°C, m/s); imperial is derived here only.
"""

from weatherdash.config.schema import Units

MS_TO_MPH = 2.23694


def convert_temp(celsius: float, unit: Units | str) -> float:
    return celsius * 9 / 5 + 32 if unit == Units.IMPERIAL else celsius


def convert_wind(ms: float, unit: Units | str) -> float:
    return ms * MS_TO_MPH if unit == Units.IMPERIAL else ms


def temp_suffix(unit: Units | str) -> str:
    return "°F" if unit == Units.IMPERIAL else "°C"


def fmt_temp(celsius: float | None, unit: Units | str) -> str:
    if celsius is None:
        return "—"
    return f"{convert_temp(celsius, unit):.1f}{temp_suffix(unit)}"


def fmt_wind(ms: float | None, unit: Units | str) -> str:
    if ms is None:
        return "—"
    suffix = "mph" if unit == Units.IMPERIAL else "m/s"
    return f"{convert_wind(ms, unit):.1f} {suffix}"
