import pytest

from cropsim.core.crops import get_crop
from cropsim.core.data_containers import Readings


@pytest.fixture
def tomato():
    return get_crop("tomato")


@pytest.fixture
def chili():
    return get_crop("chili")


@pytest.fixture
def brinjal():
    return get_crop("brinjal")


@pytest.fixture
def flowering_tomato_readings():
    """Tomato flowering-stage readings with only temperature off range."""
    # flowering moisture is 65-80 %; 45 % would add a 16-point penalty
    return Readings(
        moisture=70,
        temperature=28,
        humidity=65,
        soil_ph=6.5,
        light_intensity=70,
    )
