"""
Stage resolution and height interpolation.

Maps elapsed weeks since planting onto a crop's phenological stages.

Functions
---------
resolve_stage
    Stage whose ``[start_week, end_week]`` contains the week, else None.
stage_index
    Position of the resolved stage, else None.
effective_stage
    Resolved stage, or the last stage once the cycle is complete.
stage_progress
    Fraction of the current stage that has elapsed, in [0, 1].
overall_progress
    Fraction of the whole cycle that has elapsed, in [0, 1].
expected_height
    Expected plant height [cm] interpolated within the current stage.

Notes
-----
- Weeks may be fractional. A week below 1 or above ``total_weeks`` resolves
  to no stage; such weeks are not errors.
- ``stage_progress`` counts the current week as elapsed:
  ``(w - start + 1) / (end - start + 1)``. It saturates at 1.0 when no stage
  resolves.
- Stage lists are short (five entries), so resolution is a linear scan.
"""

from __future__ import annotations

import math
from typing import Optional

from cropsim.core.crops import Crop, Stage


def _valid_week(week: float) -> bool:
    return not math.isnan(week)


def stage_index(crop: Crop, week: float) -> Optional[int]:
    """
    Index of the stage containing `week`.

    Parameters
    ----------
    crop : Crop
        Catalog entry.
    week : float
        Weeks since planting (1-based).

    Returns
    -------
    int or None
        Stage index, or None below week 1 or beyond ``crop.total_weeks``.
    """
    if not _valid_week(week):
        return None
    for i, stage in enumerate(crop.stages):
        if stage.start_week <= week <= stage.end_week:
            return i
    # fractional weeks between two integer stage bounds (e.g. 3.5 between
    # [1, 3] and [4, 7]) belong to the earlier stage
    for i, (prev, nxt) in enumerate(zip(crop.stages, crop.stages[1:])):
        if prev.end_week < week < nxt.start_week:
            return i
    return None


def resolve_stage(crop: Crop, week: float) -> Optional[Stage]:
    """Stage containing `week`, or None outside the cycle."""
    i = stage_index(crop, week)
    return None if i is None else crop.stages[i]


def effective_stage_index(crop: Crop, week: float) -> int:
    """Like :func:`stage_index` but weeks past the cycle map to the last
    stage and weeks before it to the first."""
    i = stage_index(crop, week)
    if i is not None:
        return i
    if not _valid_week(week) or week < 1:
        return 0
    return len(crop.stages) - 1


def effective_stage(crop: Crop, week: float) -> Stage:
    return crop.stages[effective_stage_index(crop, week)]


def stage_progress(crop: Crop, week: float) -> float:
    """
    Fraction of the current stage elapsed.

    Returns
    -------
    float
        ``(w - start + 1) / (end - start + 1)`` clamped to [0, 1], or 1.0
        when `week` resolves to no stage.
    """
    stage = resolve_stage(crop, week)
    if stage is None:
        return 1.0
    p = (week - stage.start_week + 1) / stage.n_weeks
    return min(1.0, max(0.0, p))


def overall_progress(crop: Crop, week: float) -> float:
    """``min(1, week / total_weeks)`` floored at 0 (NaN gives 0)."""
    if not _valid_week(week):
        return 0.0
    return min(1.0, max(0.0, week / crop.total_weeks))


def expected_height(crop: Crop, week: float) -> float:
    """
    Expected plant height [cm] at `week`.

    Linear interpolation ``h_min + (h_max - h_min) * stage_progress`` within
    the current stage. Beyond the cycle the last stage's ``h_max`` is
    returned; before week 1 the first stage's ``h_min``.
    """
    stage = resolve_stage(crop, week)
    if stage is None:
        if _valid_week(week) and week < 1:
            return crop.stages[0].expected_height.low
        return crop.last_stage.expected_height.high
    h = stage.expected_height
    return h.low + h.width * stage_progress(crop, week)
