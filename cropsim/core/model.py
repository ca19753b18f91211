"""
Field model: one crop, one set of readings, one point in the season.

This module composes the pure engine components (stage resolver, health
scorer, ripening model, disease/pest rules, yield estimator, height
interpolator and nutrient proxy) into a single view of a field. The public
entry point is :class:`FieldModel`, which produces a :class:`FieldSnapshot`
for the current week and a :class:`SeasonResults` trajectory over the crop
calendar.

Design Principles
-----------------
- **Deterministic & reproducible**: given the same inputs, ``snapshot()``
  and ``evolve()`` return the same outputs.
- **Caller-owned state**: the readings and the week are inputs. The model
  keeps no state between calls; updating a reading means building a new
  model from :func:`~cropsim.core.environment.propagate`'s output.
- **Separation of concerns**: crop data in ``crops.py``, readings in
  ``data_containers.py``, one module per engine component, numerical
  helpers in ``library/``.

See Also
--------
cropsim.core.crops : crop catalog (``get_crop``, ``Crop.from_preset``).
cropsim.core.data_containers : ``Readings``.
cropsim.core.main : call-compatible facade over the components.

Examples
--------
>>> from cropsim.core.data_containers import Readings
>>> from cropsim.core.model import FieldModel
>>> r = Readings(moisture=70, temperature=24, humidity=60, soil_ph=6.5,
...              light_intensity=80)
>>> m = FieldModel("tomato", r, week=9)
>>> m.snapshot().stage.name
'Flowering Stage'
>>> m.evolve().to_frame().shape[0]
16
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from cropsim.core.crops import Crop, Stage, get_crop
from cropsim.core.data_containers import Readings, as_readings
from cropsim.core.disease import (
    DiseaseAssessment,
    HealthStatus,
    PestAlert,
    assess_disease_risk,
    assess_pest_risk,
    overall_status,
)
from cropsim.core.environment import field_effects, field_warnings
from cropsim.core.harvest import (
    YieldEstimate,
    YieldOutlook,
    estimate_yield,
    yield_outlook,
)
from cropsim.core.health import score_health
from cropsim.core.phenology import (
    effective_stage_index,
    expected_height,
    overall_progress,
    resolve_stage,
    stage_progress,
)
from cropsim.core.ripening import (
    RipenessState,
    ripeness_for,
    ripening_days_for_week,
)
from cropsim.library.nutrients import NutrientLevel, estimate_nutrients

Array = np.ndarray


@dataclass(frozen=True, slots=True)
class FieldSnapshot:
    """Everything the engine derives for one field at one week."""

    crop_id: str
    week: float
    stage: Optional[Stage]
    stage_index: int
    stage_progress: float
    overall_progress: float
    height_cm: float
    health: float
    yield_estimate: YieldEstimate
    ripeness: Optional[RipenessState]
    diseases: List[DiseaseAssessment]
    status: HealthStatus
    pests: List[PestAlert]
    warnings: List[str]
    effects: List[str]
    nutrients: Dict[str, NutrientLevel]
    outlook: YieldOutlook

    @property
    def cycle_complete(self) -> bool:
        return self.stage is None and self.overall_progress >= 1.0


@dataclass
class SeasonResults:
    """Weekly outputs over the crop calendar (one entry per week)."""

    weeks: Array  # (T,), int
    stage_index: Array  # (T,), int
    stage_progress: Array  # (T,)
    overall_progress: Array  # (T,)
    height_cm: Array  # (T,)
    health: Array  # (T,)
    yield_pct: Array  # (T,), int
    ripeness_pct: Array  # (T,)

    def to_frame(self) -> pd.DataFrame:
        """Results as a DataFrame indexed by week."""
        return pd.DataFrame(
            {
                "stage_index": self.stage_index,
                "stage_progress": self.stage_progress,
                "overall_progress": self.overall_progress,
                "height_cm": self.height_cm,
                "health": self.health,
                "yield_pct": self.yield_pct,
                "ripeness_pct": self.ripeness_pct,
            },
            index=pd.Index(self.weeks, name="week"),
        )


@dataclass(frozen=True, slots=True)
class FieldModel:
    """
    A field of one crop under given readings.

    Parameters
    ----------
    crop_id : str
        Catalog id of the crop.
    readings : Readings or Mapping
        Current readings (mappings are converted).
    week : float
        Weeks since planting.
    ripening_days : float, optional
        Days since ripening started. Derived from the crop calendar
        (:func:`~cropsim.core.ripening.ripening_days_for_week`) when omitted.

    Raises
    ------
    UnknownCropError
        If `crop_id` is not in the catalog.
    """

    crop_id: str
    readings: Readings
    week: float
    ripening_days: Optional[float] = None
    crop: Crop = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "crop", get_crop(self.crop_id))
        object.__setattr__(self, "readings", as_readings(self.readings))

    # ---------------------------
    # Public API
    # ---------------------------
    def snapshot(self) -> FieldSnapshot:
        """Evaluate every engine component at the current week."""
        crop, r, week = self.crop, self.readings, self.week

        health = score_health(crop, r, week)
        diseases = assess_disease_risk(crop, week, r)
        nutrients = estimate_nutrients(r)
        return FieldSnapshot(
            crop_id=self.crop_id,
            week=week,
            stage=resolve_stage(crop, week),
            stage_index=effective_stage_index(crop, week),
            stage_progress=stage_progress(crop, week),
            overall_progress=overall_progress(crop, week),
            height_cm=expected_height(crop, week),
            health=health,
            yield_estimate=estimate_yield(crop, health, week),
            ripeness=self._ripeness(week),
            diseases=diseases,
            status=overall_status(diseases),
            pests=assess_pest_risk(r),
            warnings=field_warnings(r),
            effects=field_effects(r),
            nutrients=nutrients,
            outlook=yield_outlook(r, nutrients),
        )

    def evolve(self, weeks: Optional[int] = None) -> SeasonResults:
        """
        Step week by week through the season under the current readings.

        Parameters
        ----------
        weeks : int, optional
            Number of weeks to simulate, starting at week 1. Defaults to the
            crop's ``total_weeks``.

        Returns
        -------
        SeasonResults
            Arrays of shape ``(weeks,)``.
        """
        crop, r = self.crop, self.readings
        T = crop.total_weeks if weeks is None else int(weeks)
        if T < 1:
            raise ValueError("weeks must be >= 1.")

        state = self._alloc_state(T)
        for t in range(T):
            w = t + 1
            state["weeks"][t] = w
            state["stage_index"][t] = effective_stage_index(crop, w)
            state["stage_progress"][t] = stage_progress(crop, w)
            state["overall_progress"][t] = overall_progress(crop, w)
            state["height_cm"][t] = expected_height(crop, w)

            health = score_health(crop, r, w)
            state["health"][t] = health
            state["yield_pct"][t] = estimate_yield(crop, health, w).percentage

            ripeness = self._ripeness(w)
            state["ripeness_pct"][t] = (
                0.0 if ripeness is None else ripeness.percentage
            )

        return SeasonResults(**state)

    # ---------------------------
    # Helpers
    # ---------------------------
    def _ripeness(self, week: float) -> Optional[RipenessState]:
        """Ripeness from fruit development on; None before it."""
        crop = self.crop
        if self.ripening_days is not None:
            days = self.ripening_days
        elif week >= crop.ripeness.fruit_start_week:
            days = ripening_days_for_week(crop, week)
        else:
            return None
        return ripeness_for(crop, days, self.readings.temperature)

    @staticmethod
    def _alloc_state(T: int) -> Dict[str, Array]:
        """Zero-initialised weekly output arrays."""
        return {
            "weeks": np.zeros(T, dtype=int),
            "stage_index": np.zeros(T, dtype=int),
            "stage_progress": np.zeros(T, dtype=float),
            "overall_progress": np.zeros(T, dtype=float),
            "height_cm": np.zeros(T, dtype=float),
            "health": np.zeros(T, dtype=float),
            "yield_pct": np.zeros(T, dtype=int),
            "ripeness_pct": np.zeros(T, dtype=float),
        }
