from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np

from cropsim.core.data_containers import Readings

Array = np.ndarray


@dataclass(frozen=True, slots=True)
class NutrientLevel:
    value: float  # availability index, 0-100
    status: str  # "Optimal" | "Moderate" | "Low"


def nutrient_indices(
    moisture, temperature, soil_ph
) -> Tuple[Array, Array, Array]:
    """
    Soil N, P and K availability indices (0-100) from field readings.

    Linear proxies: nitrogen rises with pH and moisture, phosphorus peaks
    below neutral pH and rises with temperature, potassium follows
    moisture. Inputs may be scalars or arrays.

    Returns
    -------
    tuple of ndarray
        ``(nitrogen, phosphorus, potassium)``, each clipped to [0, 100].
    """
    m = np.asarray(moisture, dtype=float)
    t = np.asarray(temperature, dtype=float)
    ph = np.asarray(soil_ph, dtype=float)
    n = 70.0 + (ph - 6.5) * 10.0 + (m - 50.0) * 0.3
    p = 60.0 - (ph - 7.0) * 8.0 + (t - 25.0) * 1.5
    k = 75.0 + (m - 50.0) * 0.4
    return np.clip(n, 0, 100), np.clip(p, 0, 100), np.clip(k, 0, 100)


def nutrient_status(value: float) -> str:
    if value > 70:
        return "Optimal"
    if value > 40:
        return "Moderate"
    return "Low"


def estimate_nutrients(readings: Readings) -> Dict[str, NutrientLevel]:
    """Nitrogen, phosphorus and potassium levels keyed by nutrient name."""
    n, p, k = nutrient_indices(
        readings.moisture, readings.temperature, readings.soil_ph
    )
    return {
        name: NutrientLevel(float(v), nutrient_status(float(v)))
        for name, v in (("nitrogen", n), ("phosphorus", p), ("potassium", k))
    }
