"""
Rule-based disease and pest risk.

Disease risk is a forward-chaining evaluation over a fixed vocabulary of
Boolean trigger conditions (see :class:`~cropsim.core.crops.Condition`).
The conditions are derived from the readings by comparing them with the
current stage's optimal ranges widened by the crop's
:class:`~cropsim.core.crops.RiskMargins`. Each disease in the crop's profile
scores ``matched / required * 100``.

Functions
---------
condition_flags
    Evaluate every trigger condition for a stage.
assess_disease_risk
    Ranked :class:`DiseaseAssessment` list for a crop, week and readings.
overall_status
    Aggregate :class:`HealthStatus` from ranked assessments.
assess_pest_risk
    Pest alerts from temperature, humidity and moisture thresholds.

Notes
-----
- Ranking is by descending risk score. Python's sort is stable, so ties
  keep the catalog order.
- Weeks outside the cycle are evaluated against the nearest stage (the last
  one past harvest).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Dict, List, Sequence, Tuple

from cropsim.core.crops import Condition, Crop, Disease, Stage
from cropsim.core.data_containers import Readings
from cropsim.core.phenology import effective_stage


class RiskLevel(StrEnum):
    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"


# (lower bound on score, level), checked in order
RISK_BANDS: Tuple[Tuple[float, RiskLevel], ...] = (
    (75.0, RiskLevel.critical),
    (50.0, RiskLevel.high),
    (25.0, RiskLevel.medium),
)


def risk_level(score: float) -> RiskLevel:
    for threshold, level in RISK_BANDS:
        if score >= threshold:
            return level
    return RiskLevel.low


@dataclass(frozen=True, slots=True)
class DiseaseAssessment:
    """Risk of one disease under the current readings."""

    name: str
    risk_score: float
    risk_level: RiskLevel
    triggers: Tuple[str, ...]
    symptoms: Tuple[str, ...]
    prevention: Tuple[str, ...]


@dataclass(frozen=True, slots=True)
class HealthStatus:
    """Aggregate status derived from disease assessments."""

    status: str
    score: int


@dataclass(frozen=True, slots=True)
class PestAlert:
    name: str
    risk: str
    description: str
    recommendation: str


def condition_flags(
    crop: Crop, stage: Stage, readings: Readings
) -> Dict[Condition, bool]:
    """
    Evaluate every trigger condition.

    Parameters
    ----------
    crop : Crop
        Supplies the humidity range and the risk margins.
    stage : Stage
        Supplies the moisture, temperature and pH ranges.
    readings : Readings
        Current readings.

    Returns
    -------
    dict
        ``Condition -> bool`` for every member of :class:`Condition`.
    """
    m = crop.risk_margins
    r = readings
    ph = stage.optimal_ph.widened(m.ph)
    return {
        Condition.high_moisture: (
            r.moisture > stage.optimal_moisture.high + m.moisture
        ),
        Condition.low_moisture: (
            r.moisture < stage.optimal_moisture.low - m.moisture
        ),
        Condition.high_temp: (
            r.temperature > stage.optimal_temp.high + m.temperature
        ),
        Condition.low_temp: (
            r.temperature < stage.optimal_temp.low - m.temperature
        ),
        Condition.high_humidity: (
            r.humidity > crop.optimal_humidity.high + m.humidity
        ),
        Condition.wrong_ph: r.soil_ph < ph.low or r.soil_ph > ph.high,
        Condition.low_light: r.light_intensity < m.light_floor,
    }


def _assess(
    disease: Disease, flags: Dict[Condition, bool]
) -> DiseaseAssessment:
    required = disease.conditions
    matched = [c for c in required if flags[c]]
    score = len(matched) / len(required) * 100.0 if required else 0.0
    return DiseaseAssessment(
        name=disease.name,
        risk_score=score,
        risk_level=risk_level(score),
        triggers=tuple(c.label for c in matched),
        symptoms=disease.symptoms,
        prevention=disease.prevention,
    )


def assess_disease_risk(
    crop: Crop, week: float, readings: Readings
) -> List[DiseaseAssessment]:
    """
    Disease assessments sorted by descending risk score.

    Examples
    --------
    >>> from cropsim.core.crops import get_crop
    >>> r = Readings(moisture=95, temperature=24, humidity=85, soil_ph=6.5,
    ...              light_intensity=70)
    >>> top = assess_disease_risk(get_crop("chili"), 15, r)[0]
    >>> top.name, top.risk_score
    ('Anthracnose', 100.0)
    """
    stage = effective_stage(crop, week)
    flags = condition_flags(crop, stage, readings)
    assessments = [_assess(d, flags) for d in crop.diseases]
    return sorted(assessments, key=lambda a: a.risk_score, reverse=True)


def overall_status(assessments: Sequence[DiseaseAssessment]) -> HealthStatus:
    """
    Aggregate status: any critical disease puts the crop "At Risk", more
    than one high-risk disease gives "Moderate Risk", exactly one gives
    "Low Risk", anything else is "Healthy".
    """
    critical = sum(a.risk_level is RiskLevel.critical for a in assessments)
    high = sum(a.risk_level is RiskLevel.high for a in assessments)
    if critical > 0:
        return HealthStatus("At Risk", 25)
    if high > 1:
        return HealthStatus("Moderate Risk", 50)
    if high == 1:
        return HealthStatus("Low Risk", 75)
    return HealthStatus("Healthy", 100)


def assess_pest_risk(readings: Readings) -> List[PestAlert]:
    """Pest alerts for the current readings, in rule order."""
    r = readings
    alerts: List[PestAlert] = []
    if r.temperature > 25 and r.humidity > 60:
        alerts.append(
            PestAlert(
                "Aphids",
                "High" if r.temperature > 30 else "Medium",
                "Small sap-sucking insects that can weaken plants",
                "Apply neem oil spray or introduce ladybugs",
            )
        )
    if r.moisture > 70 and r.humidity > 75:
        alerts.append(
            PestAlert(
                "Fungal Disease Risk",
                "High",
                "High moisture creates ideal conditions for fungal growth",
                "Reduce watering frequency and improve air circulation",
            )
        )
    if r.moisture > 80:
        alerts.append(
            PestAlert(
                "Root Rot Risk",
                "High",
                "Excessive moisture can lead to root damage",
                "Improve drainage and reduce irrigation",
            )
        )
    if r.temperature > 32 and r.humidity < 40:
        alerts.append(
            PestAlert(
                "Spider Mites",
                "Medium",
                "Tiny pests that thrive in hot, dry environments",
                "Increase humidity and apply miticide if needed",
            )
        )
    return alerts
