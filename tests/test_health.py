import math

import numpy.testing as npt
import pytest

from cropsim.core.crops import CROP_IDS, get_crop
from cropsim.core.data_containers import Readings
from cropsim.core.health import health_breakdown, score_health
from cropsim.core.phenology import resolve_stage

ATOL = 1e-9


def _midpoint_readings(crop, week=None):
    stage = resolve_stage(crop, week) if week is not None else None
    src = stage or crop
    return Readings(
        moisture=src.optimal_moisture.midpoint,
        temperature=src.optimal_temp.midpoint,
        humidity=crop.optimal_humidity.midpoint,
        soil_ph=src.optimal_ph.midpoint,
        light_intensity=75.0,
    )


def test_tomato_flowering_example(tomato, flowering_tomato_readings):
    health = score_health(tomato, flowering_tomato_readings, week=9)
    npt.assert_allclose(health, 97.5, atol=ATOL)

    (penalty,) = health_breakdown(tomato, flowering_tomato_readings, week=9)
    assert penalty.factor == "temperature"
    assert penalty.direction == "high"
    npt.assert_allclose(penalty.penalty, 2.5, atol=ATOL)


def test_dry_flowering_tomato_adds_moisture_penalty(
    tomato, flowering_tomato_readings
):
    dry = flowering_tomato_readings.replace(moisture=45)
    # (65 - 45) * 0.8 on top of the 2.5 temperature penalty
    npt.assert_allclose(score_health(tomato, dry, week=9), 81.5, atol=ATOL)
    factors = [p.factor for p in health_breakdown(tomato, dry, week=9)]
    assert factors == ["moisture", "temperature"]


def test_without_week_crop_level_ranges_apply(
    tomato, flowering_tomato_readings
):
    # crop-level temperature range is 21-29
    assert score_health(tomato, flowering_tomato_readings) == 100.0


@pytest.mark.parametrize("crop_id", CROP_IDS)
def test_midpoints_score_100(crop_id):
    crop = get_crop(crop_id)
    assert score_health(crop, _midpoint_readings(crop)) == 100.0
    for w in range(1, crop.total_weeks + 1):
        assert score_health(crop, _midpoint_readings(crop, w), week=w) == 100.0


def test_value_on_bound_contributes_nothing(tomato):
    r = Readings(
        moisture=65, temperature=27, humidity=70, soil_ph=6.8,
        light_intensity=50,
    )
    assert score_health(tomato, r, week=9) == 100.0
    assert health_breakdown(tomato, r, week=9) == []


@pytest.mark.parametrize(
    "field", ["moisture", "temperature", "humidity", "soil_ph"]
)
@pytest.mark.parametrize("direction", [-1.0, 1.0])
def test_monotonic_in_deviation(tomato, field, direction):
    base = _midpoint_readings(tomato, 9)
    scores = []
    for step in range(0, 60):
        value = getattr(base, field) + direction * step * 0.5
        scores.append(score_health(tomato, base.replace(**{field: value}), 9))
    assert all(b <= a for a, b in zip(scores, scores[1:]))
    assert all(0.0 <= s <= 100.0 for s in scores)


def test_light_floor(tomato):
    base = _midpoint_readings(tomato)
    npt.assert_allclose(
        score_health(tomato, base.replace(light_intensity=40)), 96.0,
        atol=ATOL,
    )
    assert score_health(tomato, base.replace(light_intensity=100)) == 100.0


def test_direction_specific_weights(tomato):
    base = _midpoint_readings(tomato, 9)
    # flowering moisture 65-80: 10 below at 0.8, 10 above at 0.6
    npt.assert_allclose(
        score_health(tomato, base.replace(moisture=55), 9), 92.0, atol=ATOL
    )
    npt.assert_allclose(
        score_health(tomato, base.replace(moisture=90), 9), 94.0, atol=ATOL
    )


def test_extreme_inputs_are_clamped(tomato):
    r = Readings(
        moisture=-500, temperature=900, humidity=400, soil_ph=-3,
        light_intensity=-80,
    )
    assert score_health(tomato, r, week=9) == 0.0


def test_non_finite_inputs(tomato):
    base = _midpoint_readings(tomato, 9)
    assert score_health(tomato, base.replace(moisture=math.nan), 9) == 100.0
    assert score_health(tomato, base.replace(temperature=math.inf), 9) == 0.0
    assert score_health(tomato, base.replace(soil_ph=-math.inf), 9) == 0.0


def test_week_outside_cycle_uses_crop_ranges(tomato):
    r = _midpoint_readings(tomato)
    assert score_health(tomato, r, week=30) == 100.0
