import numpy.testing as npt
import pytest

from cropsim.core.crops import CROP_IDS, get_crop
from cropsim.core.phenology import (
    effective_stage,
    expected_height,
    overall_progress,
    resolve_stage,
    stage_index,
    stage_progress,
)

ATOL = 1e-12


def test_resolve_stage_tomato(tomato):
    assert resolve_stage(tomato, 1).name == "Seedling Stage"
    assert resolve_stage(tomato, 3).name == "Seedling Stage"
    assert resolve_stage(tomato, 4).name == "Vegetative Growth"
    assert resolve_stage(tomato, 9).name == "Flowering Stage"
    assert resolve_stage(tomato, 16).name == "Harvesting Stage"


def test_resolve_stage_outside_cycle_is_none(tomato):
    assert resolve_stage(tomato, 17) is None
    assert resolve_stage(tomato, 0) is None
    assert stage_index(tomato, 17) is None
    assert effective_stage(tomato, 40).name == "Harvesting Stage"
    assert effective_stage(tomato, 0).name == "Seedling Stage"


def test_fractional_week_between_stages(tomato):
    assert stage_index(tomato, 3.5) == 0


@pytest.mark.parametrize("crop_id", CROP_IDS)
def test_every_week_resolves(crop_id):
    crop = get_crop(crop_id)
    for w in range(1, crop.total_weeks + 1):
        stage = resolve_stage(crop, w)
        assert stage is not None
        assert stage.start_week <= w <= stage.end_week


def test_stage_progress(tomato):
    # Vegetative Growth spans weeks 4-7
    npt.assert_allclose(stage_progress(tomato, 4), 0.25, atol=ATOL)
    npt.assert_allclose(stage_progress(tomato, 7), 1.0, atol=ATOL)
    assert stage_progress(tomato, 20) == 1.0


def test_overall_progress(chili):
    npt.assert_allclose(overall_progress(chili, 5), 0.25, atol=ATOL)
    assert overall_progress(chili, 25) == 1.0
    assert overall_progress(chili, -3) == 0.0
    assert overall_progress(chili, float("nan")) == 0.0


def test_expected_height_interpolates_within_stage(tomato):
    # Flowering Stage: weeks 8-10, 60-90 cm
    npt.assert_allclose(expected_height(tomato, 8), 70.0, atol=ATOL)
    npt.assert_allclose(expected_height(tomato, 10), 90.0, atol=ATOL)


@pytest.mark.parametrize("crop_id", CROP_IDS)
def test_expected_height_saturates_after_cycle(crop_id):
    crop = get_crop(crop_id)
    top = crop.stages[-1].expected_height.high
    assert expected_height(crop, crop.total_weeks + 1) == top
    assert expected_height(crop, 100) == top
    assert expected_height(crop, crop.total_weeks) == top
