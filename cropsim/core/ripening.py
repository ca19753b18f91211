"""
Temperature-driven ripening model.

Ripening advances in *adjusted days*: elapsed ripening days scaled by a
speed multiplier ``S(T)`` that depends on the ambient temperature relative
to the crop's optimal ripening range ``[Tmin, Tmax]``.

Speed regions
-------------
=============================  =========================================
``T < Tmin - cold_window``     0.0 (ripening stalls)
``Tmin - cold_window <= T``    linear ramp from ``ramp_floor`` to 1.0
``< Tmin``
``Tmin <= T <= Tmax``          1.0
``Tmax < T <= Tmax + hot``     ``hot_multiplier`` (faster)
``T > Tmax + hot``             ``degraded_multiplier`` (quality degrades)
=============================  =========================================

Functions
---------
ripening_speed
    Speed multiplier ``S(T)``.
ripeness_stage
    Highest color stage reached after ``days * speed`` adjusted days.
ripeness_percentage
    ``min(100, adjusted / max_ripening_days * 100)``, floored at 0.
characteristics
    Presentation values (firmness, heat level, ...) for a percentage.
ripeness_for
    Full :class:`RipenessState` for elapsed days and temperature.
ripening_days_for_week
    Ripening days implied by the crop calendar.
forecast_ripeness
    States a few days ahead at the same temperature.

See Also
--------
cropsim.core.crops.RipenessProfile : per-crop ripening data.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from cropsim.core.crops import Crop, RipenessStage

RIPENING_DAYS_PER_WEEK = 1.5
FORECAST_HORIZONS: Tuple[int, ...] = (3, 7, 14)
NEAR_OPTIMAL_STAGES = 3


@dataclass(frozen=True, slots=True)
class RipenessState:
    """
    Ripeness of a crop's fruit at one instant.

    Attributes
    ----------
    stage : RipenessStage
        Highest color stage reached.
    stage_index : int
        Position of `stage` in the crop's ripeness profile.
    percentage : float
        Ripeness in ``[0, 100]``.
    speed : float
        Speed multiplier used.
    adjusted_days : float
        ``elapsed_days * speed``.
    characteristics : dict
        Presentation values keyed by label.
    is_optimal_harvest : bool
        `stage` is the crop's optimal harvest stage.
    is_near_optimal : bool
        `stage` is one of the last three stages.
    is_overripe : bool
        `stage` is named overripe, or the percentage reached 100.
    """

    stage: RipenessStage
    stage_index: int
    percentage: float
    speed: float
    adjusted_days: float
    characteristics: Dict[str, str]
    is_optimal_harvest: bool
    is_near_optimal: bool
    is_overripe: bool


def ripening_speed(crop: Crop, temperature: float) -> float:
    """
    Speed multiplier ``S(T)`` for `temperature` [°C].

    Lower bounds of each region are inclusive, so ``S(Tmin) == 1.0`` and
    ``S(Tmax) == 1.0``. NaN gives 0.0.

    Examples
    --------
    >>> from cropsim.core.crops import get_crop
    >>> chili = get_crop("chili")
    >>> ripening_speed(chili, 33.0), ripening_speed(chili, 34.0)
    (1.2, 0.8)
    """
    p = crop.ripeness
    t_min, t_max = p.optimal_temp.low, p.optimal_temp.high
    if math.isnan(temperature):
        return 0.0
    if temperature < t_min - p.cold_window:
        return 0.0
    if temperature < t_min:
        frac = (temperature - (t_min - p.cold_window)) / p.cold_window
        return p.ramp_floor + (1.0 - p.ramp_floor) * frac
    if temperature <= t_max:
        return 1.0
    if temperature <= t_max + p.hot_window:
        return p.hot_multiplier
    return p.degraded_multiplier


def _adjusted_days(days: float, speed: float) -> float:
    adjusted = days * speed
    if math.isnan(adjusted):
        return 0.0
    return max(0.0, adjusted)


def ripeness_stage_index(crop: Crop, days: float, speed: float) -> int:
    adjusted = _adjusted_days(days, speed)
    stages = crop.ripeness.stages
    for i in range(len(stages) - 1, -1, -1):
        if stages[i].days_from_start <= adjusted:
            return i
    return 0


def ripeness_stage(crop: Crop, days: float, speed: float) -> RipenessStage:
    """Last stage whose ``days_from_start <= days * speed``."""
    return crop.ripeness.stages[ripeness_stage_index(crop, days, speed)]


def ripeness_percentage(crop: Crop, days: float, speed: float) -> float:
    """Ripeness percentage in ``[0, 100]``."""
    adjusted = _adjusted_days(days, speed)
    return min(100.0, adjusted / crop.ripeness.max_ripening_days * 100.0)


def characteristics(crop: Crop, percentage: float) -> Dict[str, str]:
    """Presentation characteristics for `percentage`, keyed by label."""
    return {c.label: c(percentage) for c in crop.ripeness.characteristics}


def ripeness_for(
    crop: Crop, elapsed_days: float, temperature: float
) -> RipenessState:
    """
    Ripeness state after `elapsed_days` of ripening at `temperature`.

    Parameters
    ----------
    crop : Crop
        Catalog entry.
    elapsed_days : float
        Days since ripening started. Negative values count as 0.
    temperature : float
        Ambient temperature [°C].

    Returns
    -------
    RipenessState
    """
    speed = ripening_speed(crop, temperature)
    i = ripeness_stage_index(crop, elapsed_days, speed)
    stage = crop.ripeness.stages[i]
    pct = ripeness_percentage(crop, elapsed_days, speed)
    n = len(crop.ripeness.stages)
    return RipenessState(
        stage=stage,
        stage_index=i,
        percentage=pct,
        speed=speed,
        adjusted_days=_adjusted_days(elapsed_days, speed),
        characteristics=characteristics(crop, pct),
        is_optimal_harvest=stage.name == crop.ripeness.optimal_harvest_stage,
        is_near_optimal=i >= n - NEAR_OPTIMAL_STAGES,
        is_overripe="overripe" in stage.name.lower() or pct >= 100.0,
    )


def ripening_days_for_week(crop: Crop, week: float) -> float:
    """
    Ripening days implied by the crop calendar at `week`.

    ``min(max_ripening_days, (week - fruit_start_week) * 1.5)`` once fruit
    development has started, 0 before.
    """
    p = crop.ripeness
    if math.isnan(week) or week < p.fruit_start_week:
        return 0.0
    return min(
        p.max_ripening_days,
        (week - p.fruit_start_week) * RIPENING_DAYS_PER_WEEK,
    )


def forecast_ripeness(
    crop: Crop,
    elapsed_days: float,
    temperature: float,
    horizons: Iterable[float] = FORECAST_HORIZONS,
) -> List[Tuple[float, RipenessState]]:
    """
    Ripeness ``horizon`` days ahead, assuming a constant temperature.

    Returns
    -------
    list of (float, RipenessState)
        One ``(horizon, state)`` pair per horizon, in input order.
    """
    return [
        (h, ripeness_for(crop, elapsed_days + h, temperature))
        for h in horizons
    ]
