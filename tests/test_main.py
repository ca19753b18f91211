import numpy.testing as npt
import pytest

import cropsim
from cropsim.core import main
from cropsim.core.crops import UnknownCropError
from cropsim.core.data_containers import Readings

ATOL = 1e-9

EXAMPLE = {
    "moisture": 70,
    "temperature": 28,
    "humidity": 65,
    "soilPh": 6.5,
    "lightIntensity": 70,
}


def test_package_reexports_facade():
    assert cropsim.score_health is main.score_health
    assert cropsim.__version__


def test_resolve_stage():
    assert main.resolve_stage("tomato", 9).name == "Flowering Stage"
    assert main.resolve_stage("tomato", 17) is None


def test_score_health_accepts_mapping():
    npt.assert_allclose(
        main.score_health("tomato", EXAMPLE, week=9), 97.5, atol=ATOL
    )
    assert main.score_health("tomato", EXAMPLE) == 100.0


def test_propagate():
    new = main.propagate("tomato", "temperature", 35, EXAMPLE)
    assert isinstance(new, Readings)
    assert new.temperature == 35.0
    assert main.propagate(None, "moisture", 50, EXAMPLE).moisture == 50.0


def test_ripeness_for():
    state = main.ripeness_for("brinjal", 40, 35)
    assert state.percentage == 100.0


def test_assess_disease_risk():
    ranked = main.assess_disease_risk("chili", 15, EXAMPLE)
    scores = [a.risk_score for a in ranked]
    assert scores == sorted(scores, reverse=True)


def test_estimate_yield_and_height():
    assert main.estimate_yield("tomato", 90, 8).percentage == 45
    assert main.expected_height("tomato", 40) == 180.0


@pytest.mark.parametrize(
    "call",
    [
        lambda: main.resolve_stage("okra", 1),
        lambda: main.score_health("okra", EXAMPLE),
        lambda: main.propagate("okra", "temperature", 30, EXAMPLE),
        lambda: main.ripeness_for("okra", 1, 25),
        lambda: main.assess_disease_risk("okra", 1, EXAMPLE),
        lambda: main.estimate_yield("okra", 50, 10),
        lambda: main.expected_height("okra", 3),
    ],
)
def test_unknown_crop_is_the_only_failure(call):
    with pytest.raises(UnknownCropError):
        call()
