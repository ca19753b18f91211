import numpy as np
import numpy.testing as npt
import pytest

from cropsim.core.crops import CROP_IDS, get_crop
from cropsim.core.ripening import (
    characteristics,
    forecast_ripeness,
    ripeness_for,
    ripeness_percentage,
    ripeness_stage,
    ripening_days_for_week,
    ripening_speed,
)

ATOL = 1e-12


@pytest.mark.parametrize("crop_id", CROP_IDS)
def test_speed_is_one_on_optimal_bounds(crop_id):
    crop = get_crop(crop_id)
    rng = crop.ripeness.optimal_temp
    assert ripening_speed(crop, rng.low) == 1.0
    assert ripening_speed(crop, rng.high) == 1.0
    assert ripening_speed(crop, rng.midpoint) == 1.0


def test_chili_hot_regions(chili):
    # optimal 22-28
    assert ripening_speed(chili, 33.0) == 1.2
    assert ripening_speed(chili, 34.0) == 0.8
    assert ripening_speed(chili, 28.5) == 1.2


def test_cold_ramp(tomato):
    # optimal 20-25, ramp over [12, 20)
    assert ripening_speed(tomato, 11.9) == 0.0
    npt.assert_allclose(ripening_speed(tomato, 12.0), 0.3, atol=ATOL)
    npt.assert_allclose(ripening_speed(tomato, 16.0), 0.65, atol=ATOL)
    assert ripening_speed(tomato, 19.999) < 1.0
    assert ripening_speed(tomato, float("nan")) == 0.0


def test_stage_lookup(tomato):
    assert ripeness_stage(tomato, 0, 1.0).name == "Green"
    assert ripeness_stage(tomato, 1.9, 1.0).name == "Green"
    assert ripeness_stage(tomato, 2, 1.0).name == "Breaker"
    assert ripeness_stage(tomato, 5, 1.0).name == "Light Red"
    assert ripeness_stage(tomato, 6, 1.2).name == "Red Ripe"
    assert ripeness_stage(tomato, 30, 1.0).name == "Red Ripe"


def test_brinjal_percentage_saturates(brinjal):
    for speed in (0.8, 1.0, 1.2):
        assert ripeness_percentage(brinjal, 40, speed) == 100.0


@pytest.mark.parametrize("crop_id", CROP_IDS)
@pytest.mark.parametrize("temperature", [10.0, 18.0, 24.0, 31.0, 40.0])
def test_percentage_monotonic_and_bounded(crop_id, temperature):
    crop = get_crop(crop_id)
    pcts = [
        ripeness_for(crop, d, temperature).percentage
        for d in np.linspace(0, 30, 121)
    ]
    assert all(b >= a for a, b in zip(pcts, pcts[1:]))
    assert all(0.0 <= p <= 100.0 for p in pcts)


def test_negative_days_count_as_zero(tomato):
    state = ripeness_for(tomato, -5, 22)
    assert state.percentage == 0.0
    assert state.stage.name == "Green"


def test_ripeness_state_flags(tomato, brinjal):
    state = ripeness_for(tomato, 7, 22)
    assert state.stage.name == "Red Ripe"
    assert state.is_optimal_harvest
    assert state.is_overripe  # 100 %

    state = ripeness_for(tomato, 3, 22)
    assert state.stage.name == "Turning"
    assert not state.is_near_optimal
    assert ripeness_for(tomato, 4, 22).is_near_optimal

    state = ripeness_for(brinjal, 7, 27)
    assert state.stage.name == "Deep Purple"
    assert state.is_optimal_harvest
    assert state.is_near_optimal
    assert not state.is_overripe

    assert ripeness_for(brinjal, 8, 27).is_overripe


def test_tomato_characteristics(tomato):
    assert characteristics(tomato, 0) == {
        "Firmness": "Very Firm",
        "Lycopene Content": "0 mg/100g",
        "Sugar Level (Brix)": "3.0°",
    }
    c = characteristics(tomato, 100)
    assert c["Firmness"] == "Soft"
    assert c["Lycopene Content"] == "45 mg/100g"
    assert c["Sugar Level (Brix)"] == "6.0°"


def test_chili_characteristics(chili):
    c = characteristics(chili, 100)
    assert c["Heat Level (Scoville)"] == "50K SHU"
    assert c["Capsaicin Content"] == "1.00%"
    assert c["Flavor Profile"] == "Sweet & Intense"
    assert characteristics(chili, 39)["Flavor Profile"] == "Fresh & Grassy"
    assert characteristics(chili, 40)["Flavor Profile"] == "Fruity & Spicy"


@pytest.mark.parametrize(
    "pct, expected", [(10, "5 mg/100g"), (50, "23 mg/100g")]
)
def test_lycopene_rounds_halves_up(tomato, pct, expected):
    assert characteristics(tomato, pct)["Lycopene Content"] == expected


@pytest.mark.parametrize(
    "pct, expected", [(30, "19K SHU"), (70, "37K SHU"), (0, "5K SHU")]
)
def test_scoville_rounds_halves_up(chili, pct, expected):
    assert characteristics(chili, pct)["Heat Level (Scoville)"] == expected


def test_half_way_tomato_characteristics(tomato):
    # 3.5 of 7 days at an optimal temperature -> exactly 50 %
    state = ripeness_for(tomato, 3.5, 24)
    assert state.percentage == 50.0
    assert state.characteristics["Lycopene Content"] == "23 mg/100g"


def test_brinjal_characteristics(brinjal):
    c = characteristics(brinjal, 90)
    assert c["Skin Glossiness"] == "Dull"
    assert c["Flesh Firmness"] == "Soft/Spongy"
    assert c["Seed Development"] == "Mature"
    assert characteristics(brinjal, 60)["Skin Glossiness"] == (
        "High (Harvest!)"
    )


def test_ripening_days_for_week(tomato):
    assert ripening_days_for_week(tomato, 10) == 0.0
    assert ripening_days_for_week(tomato, 11) == 0.0
    assert ripening_days_for_week(tomato, 13) == 3.0
    assert ripening_days_for_week(tomato, 16) == 7.0


def test_forecast(chili):
    forecast = forecast_ripeness(chili, 2, 25)
    assert [h for h, _ in forecast] == [3, 7, 14]
    states = [s for _, s in forecast]
    assert states[0].stage.name == "Breaking"
    assert states[-1].percentage == 100.0
