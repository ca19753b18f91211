"""
Core container for environmental readings.

This module defines the immutable reading vector consumed by every scorer in
the engine, together with the declared bounds of each field.

Classes
-------
Readings
    Frozen dataclass storing the current field readings (soil moisture,
    temperature, humidity, soil pH, light) and the optional weather
    readings (pressure, radiation, wind, rainfall).

Constants
---------
READING_BOUNDS
    Mapping ``field -> (low, high)`` with the physical bounds of each field.
REQUIRED_FIELDS, OPTIONAL_FIELDS
    Names of the mandatory and optional fields.

Notes
-----
- Construction coerces every value to ``float`` but does **not** clamp:
  scorers are total over any real input. Use :meth:`Readings.clamped` to
  force values into their bounds.
- Optional fields default to ``None`` and stay ``None`` through
  :meth:`Readings.replace` and :meth:`Readings.clamped` unless set
  explicitly.
- :meth:`Readings.from_mapping` accepts snake_case or camelCase keys
  (``soil_ph`` or ``soilPh``), which is how external callers ship readings.

Examples
--------
>>> r = Readings(moisture=70, temperature=28, humidity=60, soil_ph=6.5,
...              light_intensity=80)
>>> r.replace(temperature=35).temperature
35.0
>>> Readings(moisture=120, temperature=25, humidity=60, soil_ph=6.5,
...          light_intensity=80).clamped().moisture
100.0
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields, replace
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

READING_BOUNDS: Mapping[str, Tuple[float, float]] = MappingProxyType(
    {
        "moisture": (0.0, 100.0),  # %
        "temperature": (-20.0, 60.0),  # °C
        "humidity": (0.0, 100.0),  # %
        "soil_ph": (0.0, 14.0),
        "light_intensity": (0.0, 100.0),  # %
        "air_pressure": (870.0, 1085.0),  # hPa
        "solar_radiation": (0.0, 1400.0),  # W/m²
        "wind_speed": (0.0, 60.0),  # m/s
        "wind_direction": (0.0, 360.0),  # degrees
        "rainfall_today": (0.0, 500.0),  # mm
        "rainfall_total": (0.0, 10000.0),  # mm
    }
)

REQUIRED_FIELDS: Tuple[str, ...] = (
    "moisture",
    "temperature",
    "humidity",
    "soil_ph",
    "light_intensity",
)
OPTIONAL_FIELDS: Tuple[str, ...] = (
    "air_pressure",
    "solar_radiation",
    "wind_speed",
    "wind_direction",
    "rainfall_today",
    "rainfall_total",
)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        **{_camel(name): name for name in READING_BOUNDS},
        **{name: name for name in READING_BOUNDS},
    }
)


def clamp_to_bounds(name: str, value: float) -> float:
    """
    Clamp `value` into the declared bounds of field `name`.

    NaN is left untouched; infinities clamp to the nearest bound.
    """
    low, high = READING_BOUNDS[name]
    if math.isnan(value):
        return value
    return min(high, max(low, value))


# -------------------------
# Data containers
# -------------------------


@dataclass(frozen=True, slots=True)
class Readings:
    """
    Environmental readings for one field at one instant.

    Attributes
    ----------
    moisture : float
        Soil moisture [%].
    temperature : float
        Air temperature [°C].
    humidity : float
        Relative humidity [%].
    soil_ph : float
        Soil pH.
    light_intensity : float
        Light intensity [% of full sun].
    air_pressure, solar_radiation, wind_speed, wind_direction,
    rainfall_today, rainfall_total : float or None
        Optional weather readings [hPa, W/m², m/s, degrees, mm, mm].

    Raises
    ------
    ValueError
        If a value cannot be converted to ``float``.
    """

    moisture: float
    temperature: float
    humidity: float
    soil_ph: float
    light_intensity: float
    air_pressure: Optional[float] = None
    solar_radiation: Optional[float] = None
    wind_speed: Optional[float] = None
    wind_direction: Optional[float] = None
    rainfall_today: Optional[float] = None
    rainfall_total: Optional[float] = None

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                if f.name in REQUIRED_FIELDS:
                    raise ValueError(f"Reading '{f.name}' is required.")
                continue
            try:
                coerced = float(value)
            except (TypeError, ValueError) as e:
                raise ValueError(
                    f"Reading '{f.name}' must be numeric, got {value!r}."
                ) from e
            # We assign using object.__setattr__ because the dataclass is
            # frozen
            object.__setattr__(self, f.name, coerced)

    # -------------------------
    # Derived copies
    # -------------------------
    def replace(self, **changes: float) -> "Readings":
        """Return a new vector with `changes` applied (no clamping)."""
        unknown = set(changes) - set(READING_BOUNDS)
        if unknown:
            raise ValueError(f"Unknown reading field(s): {sorted(unknown)}")
        return replace(self, **changes)

    def clamped(self) -> "Readings":
        """Return a new vector with every present field clamped."""
        return replace(
            self,
            **{
                name: clamp_to_bounds(name, value)
                for name, value in self.as_dict().items()
                if value is not None
            },
        )

    # -------------------------
    # Conversion
    # -------------------------
    def as_dict(self) -> Dict[str, Optional[float]]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Readings":
        """
        Build readings from a plain mapping.

        Parameters
        ----------
        data : Mapping[str, Any]
            Keys in snake_case (``soil_ph``) or camelCase (``soilPh``).

        Returns
        -------
        Readings

        Raises
        ------
        ValueError
            If a key is unknown, a required field is missing, or a value
            is not numeric.
        """
        kwargs: Dict[str, Any] = {}
        unknown = []
        for key, value in data.items():
            try:
                kwargs[_ALIASES[key]] = value
            except KeyError:
                unknown.append(key)
        if unknown:
            raise ValueError(f"Unknown reading field(s): {sorted(unknown)}")
        missing = [name for name in REQUIRED_FIELDS if name not in kwargs]
        if missing:
            raise ValueError(f"Missing reading field(s): {missing}")
        return cls(**kwargs)


def as_readings(readings: "Readings | Mapping[str, Any]") -> Readings:
    """Coerce a :class:`Readings` or plain mapping to :class:`Readings`."""
    if isinstance(readings, Readings):
        return readings
    return Readings.from_mapping(readings)
