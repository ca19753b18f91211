"""
Call-compatible engine boundary.

Each function takes a crop id instead of a :class:`~cropsim.core.crops.Crop`
and accepts readings either as :class:`~cropsim.core.data_containers.Readings`
or as a plain mapping (snake_case or camelCase keys). Unknown crop ids raise
:class:`~cropsim.core.crops.UnknownCropError`; everything else is total.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Union

from cropsim.core import disease, environment, harvest, health, phenology
from cropsim.core import ripening
from cropsim.core.crops import Stage, get_crop
from cropsim.core.data_containers import Readings, as_readings

ReadingsLike = Union[Readings, Mapping[str, Any]]


def resolve_stage(crop_id: str, week: float) -> Optional[Stage]:
    return phenology.resolve_stage(get_crop(crop_id), week)


def score_health(
    crop_id: str, readings: ReadingsLike, week: Optional[float] = None
) -> float:
    return health.score_health(get_crop(crop_id), as_readings(readings), week)


def propagate(
    crop_id: Optional[str],
    changed_factor: str,
    new_value: float,
    readings: ReadingsLike,
) -> Readings:
    return environment.propagate(
        changed_factor, new_value, as_readings(readings), crop_id=crop_id
    )


def ripeness_for(
    crop_id: str, elapsed_days: float, temperature: float
) -> ripening.RipenessState:
    return ripening.ripeness_for(get_crop(crop_id), elapsed_days, temperature)


def assess_disease_risk(
    crop_id: str, week: float, readings: ReadingsLike
) -> List[disease.DiseaseAssessment]:
    return disease.assess_disease_risk(
        get_crop(crop_id), week, as_readings(readings)
    )


def estimate_yield(
    crop_id: str, health: float, week: float
) -> harvest.YieldEstimate:
    return harvest.estimate_yield(get_crop(crop_id), health, week)


def expected_height(crop_id: str, week: float) -> float:
    return phenology.expected_height(get_crop(crop_id), week)
