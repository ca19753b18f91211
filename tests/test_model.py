import numpy as np
import numpy.testing as npt
import pandas as pd
import pytest

from cropsim.core.crops import CROP_IDS, UnknownCropError, get_crop
from cropsim.core.data_containers import Readings
from cropsim.core.model import FieldModel

ATOL = 1e-9


@pytest.fixture
def calm():
    return Readings(
        moisture=68, temperature=24, humidity=60, soil_ph=6.5,
        light_intensity=80,
    )


def test_snapshot_flowering_tomato(flowering_tomato_readings):
    snap = FieldModel("tomato", flowering_tomato_readings, week=9).snapshot()
    assert snap.stage.name == "Flowering Stage"
    assert snap.stage_index == 2
    npt.assert_allclose(snap.health, 97.5, atol=ATOL)
    npt.assert_allclose(snap.stage_progress, 2 / 3, atol=ATOL)
    npt.assert_allclose(snap.height_cm, 80.0, atol=ATOL)
    assert snap.yield_estimate.percentage == 55
    assert snap.ripeness is None  # fruit starts at week 11
    assert snap.status.status == "Healthy"
    assert [p.name for p in snap.pests] == ["Aphids"]
    assert snap.warnings == []
    assert set(snap.nutrients) == {"nitrogen", "phosphorus", "potassium"}
    assert snap.outlook.score == 100
    assert snap.outlook.recommendations == ()
    assert snap.effects[0] == "Optimal moisture level"
    assert not snap.cycle_complete


def test_snapshot_ripeness_from_calendar(calm):
    snap = FieldModel("tomato", calm, week=13).snapshot()
    assert snap.ripeness is not None
    assert snap.ripeness.adjusted_days == 3.0
    assert snap.ripeness.stage.name == "Turning"


def test_snapshot_explicit_ripening_days(calm):
    snap = FieldModel("brinjal", calm, week=5, ripening_days=7).snapshot()
    assert snap.ripeness.stage.name == "Deep Purple"


def test_snapshot_after_cycle(calm):
    snap = FieldModel("chili", calm, week=24).snapshot()
    assert snap.stage is None
    assert snap.cycle_complete
    assert snap.stage_index == len(get_crop("chili").stages) - 1
    assert snap.height_cm == 120.0


def test_accepts_mapping_readings():
    model = FieldModel(
        "chili",
        {
            "moisture": 60,
            "temperature": 25,
            "humidity": 55,
            "soilPh": 6.5,
            "lightIntensity": 80,
        },
        week=3,
    )
    assert isinstance(model.readings, Readings)
    assert model.readings.soil_ph == 6.5


def test_unknown_crop(calm):
    with pytest.raises(UnknownCropError):
        FieldModel("okra", calm, week=1)


@pytest.mark.parametrize("crop_id", CROP_IDS)
def test_evolve_covers_crop_calendar(crop_id, calm):
    crop = get_crop(crop_id)
    res = FieldModel(crop_id, calm, week=1).evolve()
    T = crop.total_weeks
    assert res.weeks.shape == (T,)
    npt.assert_array_equal(res.weeks, np.arange(1, T + 1))
    assert np.all(np.diff(res.height_cm) >= 0)
    assert np.all(np.diff(res.overall_progress) > 0)
    assert np.all(np.diff(res.stage_index) >= 0)
    assert np.all((res.health >= 0) & (res.health <= 100))
    assert np.all(res.yield_pct[res.stage_index < 2] == 0)
    assert res.overall_progress[-1] == 1.0
    assert np.all(np.diff(res.ripeness_pct) >= 0)


def test_evolve_custom_horizon(calm):
    res = FieldModel("tomato", calm, week=1).evolve(weeks=20)
    assert res.weeks.shape == (20,)
    assert res.height_cm[-1] == 180.0
    with pytest.raises(ValueError):
        FieldModel("tomato", calm, week=1).evolve(weeks=0)


def test_to_frame(calm):
    frame = FieldModel("brinjal", calm, week=1).evolve().to_frame()
    assert isinstance(frame, pd.DataFrame)
    assert frame.index.name == "week"
    assert list(frame.index) == list(range(1, 19))
    assert "health" in frame.columns
    assert frame.loc[18, "overall_progress"] == 1.0
