"""
Deviation-penalty health scorer.

For each tracked factor the scorer measures how far the reading lies outside
its optimal range and multiplies that distance by a direction-specific
weight taken from :class:`~cropsim.core.crops.HealthWeights`. The health
index is ``clip(100 - sum(penalties), 0, 100)``.

Applicable ranges
-----------------
- moisture, temperature, pH: the stage ranges when a week is given and
  resolves to a stage, the crop-level ranges otherwise;
- humidity: always the crop-level range;
- light: a fixed floor (``HealthWeights.light_floor``), no ceiling.

Notes
-----
A reading exactly on a bound contributes nothing. NaN readings contribute
nothing either, while infinite readings drive the index to 0. The result is
returned unrounded; presentation layers round as they see fit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from cropsim.core.crops import Crop, Range
from cropsim.core.data_containers import Readings
from cropsim.core.phenology import resolve_stage

MAX_HEALTH = 100.0


@dataclass(frozen=True, slots=True)
class Penalty:
    """One active health penalty."""

    factor: str
    direction: str  # "low" | "high"
    deviation: float
    penalty: float


def applicable_ranges(
    crop: Crop, week: Optional[float] = None
) -> Tuple[Range, Range, Range, Range]:
    """
    Ranges used to score ``(moisture, temperature, soil_ph, humidity)``.
    """
    stage = resolve_stage(crop, week) if week is not None else None
    if stage is None:
        return (
            crop.optimal_moisture,
            crop.optimal_temp,
            crop.optimal_ph,
            crop.optimal_humidity,
        )
    return (
        stage.optimal_moisture,
        stage.optimal_temp,
        stage.optimal_ph,
        crop.optimal_humidity,
    )


def health_breakdown(
    crop: Crop, readings: Readings, week: Optional[float] = None
) -> List[Penalty]:
    """
    Itemised penalties for `readings`.

    Parameters
    ----------
    crop : Crop
        Catalog entry.
    readings : Readings
        Current readings.
    week : float, optional
        Weeks since planting. Selects the stage ranges when it resolves to
        a stage.

    Returns
    -------
    list of Penalty
        Non-zero penalties in factor order (moisture, temperature, pH,
        humidity, light).
    """
    w = crop.health_weights
    moisture, temp, ph, humidity = applicable_ranges(crop, week)
    checks = (
        ("moisture", readings.moisture, moisture, w.moisture_low,
         w.moisture_high),
        ("temperature", readings.temperature, temp, w.temp_low, w.temp_high),
        ("soil_ph", readings.soil_ph, ph, w.ph_low, w.ph_high),
        ("humidity", readings.humidity, humidity, w.humidity_low,
         w.humidity_high),
    )

    penalties: List[Penalty] = []
    for factor, value, rng, low_weight, high_weight in checks:
        below = rng.shortfall(value)
        above = rng.excess(value)
        if below > 0.0:
            penalties.append(Penalty(factor, "low", below, below * low_weight))
        elif above > 0.0:
            penalties.append(
                Penalty(factor, "high", above, above * high_weight)
            )

    dark = w.light_floor - readings.light_intensity
    if dark > 0.0:
        penalties.append(
            Penalty("light_intensity", "low", dark, dark * w.light_low)
        )
    return penalties


def score_health(
    crop: Crop, readings: Readings, week: Optional[float] = None
) -> float:
    """
    Health index in ``[0, 100]``.

    Examples
    --------
    >>> from cropsim.core.crops import get_crop
    >>> r = Readings(moisture=70, temperature=28, humidity=65, soil_ph=6.5,
    ...              light_intensity=70)
    >>> score_health(get_crop("tomato"), r, week=9)
    97.5
    """
    total = sum(p.penalty for p in health_breakdown(crop, readings, week))
    return float(np.clip(MAX_HEALTH - total, 0.0, MAX_HEALTH))
