"""
Yield estimator and condition-based yield outlook.

The estimate is gated on phenology: before flowering (stage index below 2)
there is nothing to estimate. From flowering on, the expected yield, as a
percentage of the crop's baseline, is health times cycle progress.

The outlook ignores the crop calendar. It starts from a score of 100 and
deducts fixed points for each field condition outside its acceptable band
(moisture, temperature, soil pH, light and soil N, P, K), collecting one
recommendation per deduction.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from cropsim.core.crops import Crop
from cropsim.core.data_containers import Readings
from cropsim.core.phenology import (
    effective_stage_index,
    overall_progress,
)
from cropsim.library.nutrients import NutrientLevel, estimate_nutrients
from cropsim.library.rounding import round_half_up

MIN_STAGE_INDEX = 2
TOO_EARLY = "Too early to estimate"


@dataclass(frozen=True, slots=True)
class YieldEstimate:
    """Yield percentage of the crop baseline and its label."""

    percentage: int
    label: str


def estimate_yield(crop: Crop, health: float, week: float) -> YieldEstimate:
    """
    Expected yield at `week` given the current `health`.

    Parameters
    ----------
    crop : Crop
        Catalog entry.
    health : float
        Health index; clamped to ``[0, 100]`` (NaN counts as 0).
    week : float
        Weeks since planting. Weeks past the cycle use the last stage and a
        progress of 1.

    Returns
    -------
    YieldEstimate
        ``(0, "Too early to estimate")`` before the third stage, otherwise
        ``round_half_up(health / 100 * progress * 100)`` labelled with the
        crop's ``yield_per_hectare``.

    Examples
    --------
    >>> from cropsim.core.crops import get_crop
    >>> estimate_yield(get_crop("tomato"), 90.0, 8)
    YieldEstimate(percentage=45, label='25-40 tons')
    """
    if effective_stage_index(crop, week) < MIN_STAGE_INDEX:
        return YieldEstimate(0, TOO_EARLY)
    h = 0.0 if math.isnan(health) else min(100.0, max(0.0, health))
    # (health / 100) * progress * 100
    pct = h * overall_progress(crop, week)
    return YieldEstimate(round_half_up(pct), crop.yield_per_hectare)


# -------------------------
# Condition-based outlook
# -------------------------
MAX_OUTLOOK = 100
NUTRIENT_FLOOR = 50.0

# (minimum score, prediction), highest band first
OUTLOOK_BANDS: Tuple[Tuple[int, str], ...] = (
    (85, "Excellent conditions - expect high yield"),
    (70, "Good conditions - above average yield expected"),
    (55, "Moderate conditions - average yield expected"),
    (0, "Poor conditions - yield may be below average"),
)

_NUTRIENT_ADVICE = (
    ("nitrogen", "Low nitrogen - apply nitrogen-rich fertilizer"),
    ("phosphorus", "Low phosphorus - add bone meal or rock phosphate"),
    ("potassium", "Low potassium - apply potash or wood ash"),
)


@dataclass(frozen=True, slots=True)
class YieldOutlook:
    """Condition score (0-100), its prediction band and the advice."""

    score: int
    prediction: str
    recommendations: Tuple[str, ...]


def outlook_prediction(score: float) -> str:
    for floor, prediction in OUTLOOK_BANDS:
        if score >= floor:
            return prediction
    return OUTLOOK_BANDS[-1][1]


def yield_outlook(
    readings: Readings,
    nutrients: Optional[Mapping[str, NutrientLevel]] = None,
) -> YieldOutlook:
    """
    Yield outlook from the current field conditions.

    Parameters
    ----------
    readings : Readings
        Current readings.
    nutrients : Mapping[str, NutrientLevel], optional
        Soil N, P, K levels keyed ``nitrogen``, ``phosphorus`` and
        ``potassium``. Estimated from `readings` when omitted.

    Returns
    -------
    YieldOutlook
        Recommendations follow the order moisture, temperature, pH, light,
        nitrogen, phosphorus, potassium.

    Notes
    -----
    ==========================  =========
    condition                   deduction
    ==========================  =========
    moisture < 30               15
    moisture > 70               10
    temperature < 20 or > 32    12
    pH < 5.5 or > 7.5           15
    light < 50                  10
    N, P or K < 50 (each)       8
    ==========================  =========

    Bounds themselves are acceptable; NaN readings deduct nothing.
    """
    if nutrients is None:
        nutrients = estimate_nutrients(readings)
    r = readings
    deductions = []

    if r.moisture < 30:
        deductions.append((15, "Increase irrigation - soil too dry"))
    elif r.moisture > 70:
        deductions.append((10, "Reduce irrigation - risk of waterlogging"))

    if r.temperature < 20:
        deductions.append(
            (12, "Temperature too low - consider greenhouse protection")
        )
    elif r.temperature > 32:
        deductions.append((12, "High temperature - increase shade/mulching"))

    if r.soil_ph < 5.5:
        deductions.append((15, "Soil too acidic - add lime to raise pH"))
    elif r.soil_ph > 7.5:
        deductions.append((15, "Soil too alkaline - add sulfur to lower pH"))

    if r.light_intensity < 50:
        deductions.append(
            (10, "Insufficient light - prune surrounding vegetation")
        )

    for name, advice in _NUTRIENT_ADVICE:
        if nutrients[name].value < NUTRIENT_FLOOR:
            deductions.append((8, advice))

    score = max(0, MAX_OUTLOOK - sum(d for d, _ in deductions))
    return YieldOutlook(
        score=score,
        prediction=outlook_prediction(score),
        recommendations=tuple(advice for _, advice in deductions),
    )
