"""cropsim: deterministic crop growth, health and ripening engine."""

from cropsim.core.crops import CROP_IDS, Crop, UnknownCropError, get_crop
from cropsim.core.data_containers import Readings
from cropsim.core.main import (
    assess_disease_risk,
    estimate_yield,
    expected_height,
    propagate,
    resolve_stage,
    ripeness_for,
    score_health,
)
from cropsim.core.model import FieldModel

__version__ = "0.1.0"

__all__ = [
    "CROP_IDS",
    "Crop",
    "FieldModel",
    "Readings",
    "UnknownCropError",
    "assess_disease_risk",
    "estimate_yield",
    "expected_height",
    "get_crop",
    "propagate",
    "resolve_stage",
    "ripeness_for",
    "score_health",
]
