"""
Environmental interdependency propagator.

When the caller deliberately changes one reading, related readings move with
it: warmer air dries the soil and the air, rain wets both, wind dries both
and cools the field, radiation warms and brightens it. Each rule is a linear
response to a normalised effect::

    effect = (new_value - point) / scale
    other_field += delta * effect

Functions
---------
propagate
    Apply a single-factor change and its one-hop cascade; return new
    readings.
field_warnings
    Threshold warnings for the current readings.
field_effects
    Per-factor advisory (moisture, temperature, soil pH).

Notes
-----
- Single hop: deltas applied by a rule never trigger further rules.
- The changed factor is clamped to its bounds before the effect is
  computed, and every derived field is clamped immediately after its update.
- Optional fields that are ``None`` stay ``None``; rules skip them.
- Factors with no rule are set directly, without a cascade.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

import structlog

from cropsim.core.crops import get_crop
from cropsim.core.data_containers import (
    READING_BOUNDS,
    Readings,
    clamp_to_bounds,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PropagationRule:
    """
    Linear cascade triggered by a change of one factor.

    Parameters
    ----------
    point : float
        Normalisation point (no effect at this value).
    scale : float
        Normalisation scale (value change giving one unit of effect).
    deltas : tuple of (str, float)
        ``(field, delta per unit effect)`` pairs.
    """

    point: float
    scale: float
    deltas: Tuple[Tuple[str, float], ...]

    def __post_init__(self):
        if self.scale <= 0.0:
            raise ValueError("Propagation scale must be positive.")
        for name, _ in self.deltas:
            if name not in READING_BOUNDS:
                raise ValueError(f"Unknown reading field '{name}'.")

    def effect(self, value: float) -> float:
        return (value - self.point) / self.scale


RULES: Mapping[str, PropagationRule] = MappingProxyType(
    {
        "temperature": PropagationRule(
            point=25.0,
            scale=10.0,
            deltas=(
                ("humidity", -4.0),
                ("moisture", -2.0),
                ("air_pressure", -2.0),
            ),
        ),
        "solar_radiation": PropagationRule(
            point=100.0,
            scale=100.0,
            deltas=(
                ("temperature", 2.0),
                ("light_intensity", 5.0),
                ("humidity", -3.0),
                ("moisture", -1.5),
            ),
        ),
        "rainfall_today": PropagationRule(
            point=0.0,
            scale=10.0,
            deltas=(
                ("moisture", 8.0),
                ("humidity", 5.0),
                ("temperature", -0.5),
            ),
        ),
        "wind_speed": PropagationRule(
            point=2.0,
            scale=2.0,
            deltas=(
                ("moisture", -3.0),
                ("humidity", -4.0),
                ("temperature", -1.5),
            ),
        ),
    }
)


def propagate(
    changed_factor: str,
    new_value: float,
    readings: Readings,
    crop_id: Optional[str] = None,
) -> Readings:
    """
    Set `changed_factor` to `new_value` and apply its one-hop cascade.

    Parameters
    ----------
    changed_factor : str
        Field name of :class:`~cropsim.core.data_containers.Readings`.
    new_value : float
        New value for the factor (clamped to its bounds).
    readings : Readings
        Current readings; not modified.
    crop_id : str, optional
        Unused by the cascade. Validated against the catalog when given.

    Returns
    -------
    Readings
        New readings.

    Raises
    ------
    ValueError
        If `changed_factor` is not a reading field.
    UnknownCropError
        If `crop_id` is given and unknown.

    Examples
    --------
    >>> r = Readings(moisture=60, temperature=25, humidity=60, soil_ph=6.5,
    ...              light_intensity=70)
    >>> new = propagate("temperature", 35, r)
    >>> new.humidity, new.moisture
    (56.0, 58.0)
    """
    if changed_factor not in READING_BOUNDS:
        raise ValueError(
            f"Unknown factor '{changed_factor}'. "
            f"Known: {sorted(READING_BOUNDS)}"
        )
    if crop_id is not None:
        get_crop(crop_id)

    value = clamp_to_bounds(changed_factor, float(new_value))
    updates: Dict[str, float] = {changed_factor: value}

    rule = RULES.get(changed_factor)
    if rule is not None and not math.isnan(value):
        effect = rule.effect(value)
        for name, delta in rule.deltas:
            current = getattr(readings, name)
            if current is None:
                continue
            updates[name] = clamp_to_bounds(name, current + delta * effect)

    logger.debug(
        "readings_propagated",
        factor=changed_factor,
        value=value,
        cascaded=sorted(set(updates) - {changed_factor}),
    )
    return readings.replace(**updates)


def field_warnings(readings: Readings) -> List[str]:
    """
    Threshold warnings for the field, in display order.

    Moisture below 20 % is a severe drought (below 30 % low moisture),
    above 80 % a waterlogging risk; temperature above 40 °C is heat stress,
    below 5 °C a frost warning; pH above 8 is high alkalinity, below 5.5
    high acidity; light below 30 % and humidity above 90 % are flagged too.
    """
    r = readings
    warnings: List[str] = []
    if r.moisture < 20:
        warnings.append("Severe Drought")
    elif r.moisture < 30:
        warnings.append("Low Moisture")
    if r.moisture > 80:
        warnings.append("Waterlogging Risk")

    if r.temperature > 40:
        warnings.append("Heat Stress")
    elif r.temperature < 5:
        warnings.append("Frost Warning")

    if r.soil_ph > 8:
        warnings.append("High Alkalinity")
    elif r.soil_ph < 5.5:
        warnings.append("High Acidity")

    if r.light_intensity < 30:
        warnings.append("Low Light")
    if r.humidity > 90:
        warnings.append("High Humidity")
    return warnings


def field_effects(readings: Readings) -> List[str]:
    """One advisory line each for moisture, temperature and soil pH."""
    r = readings
    if r.moisture < 30:
        moisture = "Dry soil - Irrigation needed"
    elif r.moisture > 70:
        moisture = "Waterlogged - Reduce irrigation"
    else:
        moisture = "Optimal moisture level"

    if r.temperature < 20:
        temperature = "Low temperature - Slow growth"
    elif r.temperature > 35:
        temperature = "High temperature - Heat stress"
    else:
        temperature = "Ideal temperature range"

    if r.soil_ph < 6:
        ph = "Acidic soil - Add lime"
    elif r.soil_ph > 7.5:
        ph = "Alkaline soil - Add sulfur"
    else:
        ph = "Balanced pH"
    return [moisture, temperature, ph]
