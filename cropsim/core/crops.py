"""
Crop catalog: static reference data and immutable dataclass containers.

This module provides the frozen dataclasses that describe a tracked crop
(:class:`Crop`) and its parts (phenological :class:`Stage` entries, the
:class:`RipenessProfile`, the :class:`Disease` profile, health penalty
weights and disease-risk margins), together with the built-in presets for
tomato, chili and brinjal (eggplant) grown under Bangalore climate
conditions.

Every coefficient consumed by the engine lives here as data. Adding a crop
means adding a preset; none of the scoring modules branch on crop ids.

Classes
-------
Range
    Closed numeric interval with distance helpers.
Stage
    One phenological stage of a crop (weeks, optimal ranges, height).
HealthWeights
    Direction-specific penalty weights for the health scorer.
RiskMargins
    Widening margins used to derive disease trigger conditions.
Condition
    Fixed vocabulary of disease trigger conditions.
Disease
    Named disease with its trigger conditions, symptoms and prevention.
RipenessStage
    One entry in a crop's ripening color sequence.
BandedCharacteristic, LinearCharacteristic
    Presentation characteristics derived from ripeness percentage.
RipenessProfile
    Ripening stages, optimal ripening temperatures and speed multipliers.
Crop
    Immutable container for a crop. Provides :meth:`Crop.from_preset`.
UnknownCropError
    Raised when a crop id is not in the catalog.

Functions
---------
get_crop
    Look up a crop in the catalog by id.
list_crops
    All catalog crops, in catalog order.

Notes
-----
- **Immutability**: all containers are frozen and use slots. Sequences are
  stored as tuples.
- **Validation**: :class:`Crop` checks that its stages are ordered and
  contiguous, i.e. ``stage[i].end_week + 1 == stage[i + 1].start_week``,
  ``stage[0].start_week == 1`` and ``stage[-1].end_week == total_weeks``.
  :class:`RipenessProfile` checks that thresholds strictly increase and that
  percentages run from 0 to 100 without decreasing.

Examples
--------
>>> from cropsim.core.crops import get_crop
>>> tomato = get_crop("tomato")
>>> tomato.total_weeks
16
>>> [s.name for s in tomato.stages][:2]
['Seedling Stage', 'Vegetative Growth']
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Callable, Mapping, Tuple

import structlog

from cropsim.library.rounding import quantize_half_up

logger = structlog.get_logger(__name__)


class UnknownCropError(KeyError):
    """Crop id not present in the catalog."""

    def __init__(self, crop_id: str, known: Tuple[str, ...] = ()):
        self.crop_id = crop_id
        self.known = tuple(known)
        super().__init__(f"Unknown crop '{crop_id}'. Known: {list(known)}")

    def __str__(self) -> str:
        return self.args[0]


# -------------------------
# Primitive containers
# -------------------------


@dataclass(frozen=True, slots=True)
class Range:
    """
    Closed interval ``[low, high]``.

    Parameters
    ----------
    low : float
        Lower bound (inclusive).
    high : float
        Upper bound (inclusive). Must satisfy ``low <= high``.
    """

    low: float
    high: float

    def __post_init__(self):
        if not self.low <= self.high:
            raise ValueError(
                f"Range must satisfy low <= high, got [{self.low}, "
                f"{self.high}]."
            )

    @property
    def midpoint(self) -> float:
        return (self.low + self.high) / 2.0

    @property
    def width(self) -> float:
        return self.high - self.low

    def contains(self, value: float) -> bool:
        return self.low <= value <= self.high

    def shortfall(self, value: float) -> float:
        """Distance below ``low`` (0 on or above the bound)."""
        d = self.low - value
        return d if d > 0.0 else 0.0

    def excess(self, value: float) -> float:
        """Distance above ``high`` (0 on or below the bound)."""
        d = value - self.high
        return d if d > 0.0 else 0.0

    def distance(self, value: float) -> float:
        """Distance to the nearest bound; 0 inside or on the boundary."""
        return self.shortfall(value) + self.excess(value)

    def widened(self, margin: float) -> "Range":
        return Range(self.low - margin, self.high + margin)


@dataclass(frozen=True, slots=True)
class Stage:
    """
    A phenological stage, bounded in weeks (both ends inclusive).

    Parameters
    ----------
    name : str
        Stage name, e.g. ``"Flowering Stage"``.
    start_week, end_week : int
        First and last week of the stage.
    description : str
        What happens to the plant during the stage.
    optimal_temp : Range
        Optimal air temperature [°C].
    optimal_moisture : Range
        Optimal soil moisture [%].
    optimal_ph : Range
        Optimal soil pH.
    expected_height : Range
        Expected plant height at the start/end of the stage [cm].
    water_requirement : str
        Weekly water requirement label, e.g. ``"35-45 mm"``.
    key_activities : tuple of str
        Recommended activities for the stage.
    """

    name: str
    start_week: int
    end_week: int
    description: str
    optimal_temp: Range
    optimal_moisture: Range
    optimal_ph: Range
    expected_height: Range
    water_requirement: str
    key_activities: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.start_week > self.end_week:
            raise ValueError(
                f"Stage '{self.name}' must satisfy start_week <= end_week."
            )

    @property
    def n_weeks(self) -> int:
        return self.end_week - self.start_week + 1

    def contains(self, week: float) -> bool:
        return self.start_week <= week <= self.end_week


@dataclass(frozen=True, slots=True)
class HealthWeights:
    """
    Health penalty per unit of deviation outside the optimal range.

    Each factor carries one weight for deviations below its range and one
    for deviations above it. Light only has a floor.

    Parameters
    ----------
    moisture_low, moisture_high : float
        Penalty per % of soil moisture below/above range.
    temp_low, temp_high : float
        Penalty per °C below/above range.
    ph_low, ph_high : float
        Penalty per pH unit below/above range.
    humidity_low, humidity_high : float
        Penalty per % of relative humidity below/above range.
    light_low : float
        Penalty per % of light intensity below ``light_floor``.
    light_floor : float, default=50.0
        Light intensity [%] under which the plant is penalised.
    """

    moisture_low: float = 0.8
    moisture_high: float = 0.6
    temp_low: float = 2.0
    temp_high: float = 2.5
    ph_low: float = 12.0
    ph_high: float = 12.0
    humidity_low: float = 0.3
    humidity_high: float = 0.4
    light_low: float = 0.4
    light_floor: float = 50.0

    def __post_init__(self):
        for name in (
            "moisture_low",
            "moisture_high",
            "temp_low",
            "temp_high",
            "ph_low",
            "ph_high",
            "humidity_low",
            "humidity_high",
            "light_low",
        ):
            if getattr(self, name) <= 0.0:
                raise ValueError("All health weights must be positive.")


@dataclass(frozen=True, slots=True)
class RiskMargins:
    """
    Margins by which optimal ranges are widened before flagging a disease
    trigger condition.

    Parameters
    ----------
    moisture : float, default=10.0
        Soil moisture margin [%].
    temperature : float, default=3.0
        Temperature margin [°C].
    humidity : float, default=10.0
        Relative humidity margin above the crop range [%].
    ph : float, default=0.5
        pH margin on both sides of the stage range.
    light_floor : float, default=40.0
        Light intensity [%] under which light is considered low.
    """

    moisture: float = 10.0
    temperature: float = 3.0
    humidity: float = 10.0
    ph: float = 0.5
    light_floor: float = 40.0


class Condition(StrEnum):
    """Disease trigger conditions derived from the current readings."""

    high_moisture = "high_moisture"
    low_moisture = "low_moisture"
    high_temp = "high_temp"
    low_temp = "low_temp"
    high_humidity = "high_humidity"
    wrong_ph = "wrong_ph"
    low_light = "low_light"

    @property
    def label(self) -> str:
        return CONDITION_LABELS[self]


CONDITION_LABELS: Mapping[Condition, str] = MappingProxyType(
    {
        Condition.high_moisture: "High soil moisture",
        Condition.low_moisture: "Low soil moisture",
        Condition.high_temp: "High temperature",
        Condition.low_temp: "Low temperature",
        Condition.high_humidity: "High humidity",
        Condition.wrong_ph: "Suboptimal pH",
        Condition.low_light: "Low light intensity",
    }
)


@dataclass(frozen=True, slots=True)
class Disease:
    """A disease and the conditions that favour it."""

    name: str
    conditions: Tuple[Condition, ...]
    symptoms: Tuple[str, ...] = ()
    prevention: Tuple[str, ...] = ()

    def __post_init__(self):
        # coerce plain strings coming from presets to the enum
        object.__setattr__(
            self, "conditions", tuple(Condition(c) for c in self.conditions)
        )


# -------------------------
# Ripening
# -------------------------


@dataclass(frozen=True, slots=True)
class RipenessStage:
    """One step of the ripening color sequence."""

    name: str
    color: str
    description: str
    days_from_start: float
    percentage: float


@dataclass(frozen=True, slots=True)
class BandedCharacteristic:
    """
    Label chosen by the first threshold that the percentage is below.

    ``values`` has one more entry than ``thresholds``; the last value is
    returned once every threshold has been reached.
    """

    label: str
    thresholds: Tuple[float, ...]
    values: Tuple[str, ...]

    def __post_init__(self):
        if len(self.values) != len(self.thresholds) + 1:
            raise ValueError(
                f"Characteristic '{self.label}' needs one more value than "
                "thresholds."
            )

    def __call__(self, percentage: float) -> str:
        for threshold, value in zip(self.thresholds, self.values):
            if percentage < threshold:
                return value
        return self.values[-1]


@dataclass(frozen=True, slots=True)
class LinearCharacteristic:
    """
    Value ``intercept + slope * percentage`` rendered with a template.

    The value is rounded half up to a multiple of each entry of `steps` in
    turn, then divided by `unit` before formatting.
    """

    label: str
    intercept: float
    slope: float
    template: str
    steps: Tuple[float, ...] = ()
    unit: float = 1.0

    def __call__(self, percentage: float) -> str:
        value = self.intercept + self.slope * percentage
        for step in self.steps:
            value = quantize_half_up(value, step)
        return self.template.format(value / self.unit)


Characteristic = BandedCharacteristic | LinearCharacteristic


@dataclass(frozen=True, slots=True)
class RipenessProfile:
    """
    Ripening sub-profile of a crop.

    Parameters
    ----------
    stages : tuple of RipenessStage
        Color stages, ``days_from_start`` strictly increasing and
        ``percentage`` non-decreasing from 0 to 100.
    optimal_temp : Range
        Temperature range [°C] where ripening runs at nominal speed.
    max_ripening_days : float
        Days (at nominal speed) to reach 100 % ripeness.
    fruit_start_week : int
        Week at which fruit development, and thus ripening, starts.
    optimal_harvest_stage : str
        Name of the stage at which fruit should be harvested.
    characteristics : tuple of Characteristic
        Presentation values derived from the ripeness percentage.
    hot_multiplier : float, default=1.2
        Speed just above ``optimal_temp.high`` (must be > 1).
    degraded_multiplier : float, default=0.8
        Speed once heat degrades quality (must be < 1).
    cold_window : float, default=8.0
        Width [°C] of the ramp below ``optimal_temp.low``.
    hot_window : float, default=5.0
        Width [°C] of the fast region above ``optimal_temp.high``.
    ramp_floor : float, default=0.3
        Speed at the bottom of the cold ramp.
    """

    stages: Tuple[RipenessStage, ...]
    optimal_temp: Range
    max_ripening_days: float
    fruit_start_week: int
    optimal_harvest_stage: str
    characteristics: Tuple[Characteristic, ...] = ()
    hot_multiplier: float = 1.2
    degraded_multiplier: float = 0.8
    cold_window: float = 8.0
    hot_window: float = 5.0
    ramp_floor: float = 0.3

    def __post_init__(self):
        if not self.stages:
            raise ValueError("A ripeness profile needs at least one stage.")
        days = [s.days_from_start for s in self.stages]
        pcts = [s.percentage for s in self.stages]
        if any(b <= a for a, b in zip(days, days[1:])):
            raise ValueError("days_from_start must be strictly increasing.")
        if any(b < a for a, b in zip(pcts, pcts[1:])):
            raise ValueError("Ripeness percentages must be non-decreasing.")
        if pcts[0] != 0.0 or pcts[-1] != 100.0:
            raise ValueError("Ripeness percentages must run from 0 to 100.")
        if self.max_ripening_days <= 0.0:
            raise ValueError("max_ripening_days must be positive.")
        if not (
            self.hot_multiplier > 1.0 and 0.0 < self.degraded_multiplier < 1.0
        ):
            raise ValueError(
                "Speed multipliers must satisfy hot > 1 and 0 < degraded < 1."
            )
        if self.optimal_harvest_stage not in {s.name for s in self.stages}:
            raise ValueError(
                "Unknown optimal harvest stage "
                f"'{self.optimal_harvest_stage}'."
            )


# -------------------------
# Crop
# -------------------------


@dataclass(frozen=True, slots=True)
class Crop:
    """
    Immutable crop description.

    Parameters
    ----------
    id : str
        Catalog identifier, e.g. ``"tomato"``.
    name : str
        Display name.
    scientific_name : str
        Binomial name.
    total_weeks : int
        Length of the phenological cycle in weeks.
    total_months : float
        The same cycle in months, as shown to growers.
    stages : tuple of Stage
        Ordered, contiguous stages covering ``[1, total_weeks]``.
    optimal_temp, optimal_moisture, optimal_ph, optimal_humidity : Range
        Crop-level optimal ranges.
    yield_per_plant, yield_per_hectare : str
        Static yield baselines (labels).
    spacing_cm : tuple of float
        ``(row, plant)`` spacing in cm.
    ripeness : RipenessProfile
        Ripening sub-profile.
    diseases : tuple of Disease
        Disease profile, in catalog order.
    health_weights : HealthWeights
        Penalty weights for the health scorer.
    risk_margins : RiskMargins
        Margins for disease trigger conditions.

    Raises
    ------
    ValueError
        If the stages are empty, unordered, overlapping, non-contiguous, or
        do not cover ``[1, total_weeks]``.
    """

    id: str
    name: str
    scientific_name: str
    total_weeks: int
    total_months: float
    stages: Tuple[Stage, ...]
    optimal_temp: Range
    optimal_moisture: Range
    optimal_ph: Range
    optimal_humidity: Range
    yield_per_plant: str
    yield_per_hectare: str
    spacing_cm: Tuple[float, float]
    ripeness: RipenessProfile
    diseases: Tuple[Disease, ...] = ()
    health_weights: HealthWeights = field(default_factory=HealthWeights)
    risk_margins: RiskMargins = field(default_factory=RiskMargins)

    def __post_init__(self):
        if not self.stages:
            raise ValueError(f"Crop '{self.id}' has no stages.")
        if self.stages[0].start_week != 1:
            raise ValueError(
                f"Crop '{self.id}': first stage must start at week 1."
            )
        for prev, nxt in zip(self.stages, self.stages[1:]):
            if prev.end_week + 1 != nxt.start_week:
                raise ValueError(
                    f"Crop '{self.id}': stages '{prev.name}' and "
                    f"'{nxt.name}' are not contiguous."
                )
        if self.stages[-1].end_week != self.total_weeks:
            raise ValueError(
                f"Crop '{self.id}': last stage must end at week "
                f"{self.total_weeks}."
            )

    @property
    def stage_names(self) -> Tuple[str, ...]:
        return tuple(s.name for s in self.stages)

    @property
    def last_stage(self) -> Stage:
        return self.stages[-1]

    @property
    def completion_message(self) -> str:
        return (
            f"{self.name} has completed its {self.total_months:g}-month "
            "growth cycle"
        )

    # -------------------------
    # Presets
    # -------------------------
    @classmethod
    def tomato(cls) -> "Crop":
        """Return the tomato preset."""
        return cls.from_preset("tomato")

    @classmethod
    def chili(cls) -> "Crop":
        """Return the chili preset."""
        return cls.from_preset("chili")

    @classmethod
    def brinjal(cls) -> "Crop":
        """Return the brinjal (eggplant) preset."""
        return cls.from_preset("brinjal")

    @classmethod
    def from_preset(cls, name: str) -> "Crop":
        """
        Instantiate from a named preset.

        Parameters
        ----------
        name : {'tomato', 'chili', 'brinjal'}
            Preset identifier.

        Returns
        -------
        Crop
            Freshly built crop description.

        Raises
        ------
        UnknownCropError
            If `name` is not a known preset.
        """
        try:
            builder = _PRESETS[name]
        except KeyError as e:
            raise UnknownCropError(name, tuple(_PRESETS)) from e
        return builder()


# -------------------------
# Preset data
# -------------------------


def _r(low: float, high: float) -> Range:
    return Range(float(low), float(high))


def _tomato() -> Crop:
    stages = (
        Stage(
            name="Seedling Stage",
            start_week=1,
            end_week=3,
            description=(
                "Seeds germinate in 5-10 days. Cotyledons emerge followed "
                "by first true leaves."
            ),
            optimal_temp=_r(24, 28),
            optimal_moisture=_r(70, 80),
            optimal_ph=_r(6.0, 6.5),
            expected_height=_r(5, 15),
            water_requirement="10-15 mm",
            key_activities=(
                "Maintain consistent moisture",
                "Provide 12-14 hours light",
                "Thin seedlings if crowded",
            ),
        ),
        Stage(
            name="Vegetative Growth",
            start_week=4,
            end_week=7,
            description=(
                "Rapid stem and leaf development. Plant establishes strong "
                "root system."
            ),
            optimal_temp=_r(22, 28),
            optimal_moisture=_r(60, 75),
            optimal_ph=_r(6.0, 6.8),
            expected_height=_r(30, 60),
            water_requirement="25-35 mm",
            key_activities=(
                "Apply nitrogen fertilizer",
                "Install stakes/cages",
                "Remove suckers below first flower",
            ),
        ),
        Stage(
            name="Flowering Stage",
            start_week=8,
            end_week=10,
            description=(
                "Yellow flowers appear in clusters. Pollination occurs. "
                "Critical period for fruit set."
            ),
            optimal_temp=_r(21, 27),
            optimal_moisture=_r(65, 80),
            optimal_ph=_r(6.2, 6.8),
            expected_height=_r(60, 90),
            water_requirement="35-45 mm",
            key_activities=(
                "Ensure consistent watering",
                "Apply phosphorus fertilizer",
                "Monitor for pests",
                "Avoid temperature extremes",
            ),
        ),
        Stage(
            name="Fruit Development",
            start_week=11,
            end_week=14,
            description=(
                "Green fruits grow and mature. Fruits develop color as "
                "they ripen."
            ),
            optimal_temp=_r(20, 28),
            optimal_moisture=_r(60, 75),
            optimal_ph=_r(6.0, 6.8),
            expected_height=_r(90, 150),
            water_requirement="40-50 mm",
            key_activities=(
                "Apply potassium fertilizer",
                "Support heavy fruit clusters",
                "Monitor for diseases",
                "Reduce nitrogen",
            ),
        ),
        Stage(
            name="Harvesting Stage",
            start_week=15,
            end_week=16,
            description=(
                "Fruits reach mature color. Harvest when firm and fully "
                "colored."
            ),
            optimal_temp=_r(20, 26),
            optimal_moisture=_r(55, 70),
            optimal_ph=_r(6.0, 6.8),
            expected_height=_r(120, 180),
            water_requirement="30-40 mm",
            key_activities=(
                "Harvest regularly",
                "Store at 12-15°C",
                "Continue monitoring for pests",
            ),
        ),
    )
    ripeness = RipenessProfile(
        stages=(
            RipenessStage(
                "Green", "#4CAF50",
                "Fully mature but unripe, firm texture", 0, 0,
            ),
            RipenessStage(
                "Breaker", "#8BC34A",
                "First sign of color change at blossom end", 2, 17,
            ),
            RipenessStage(
                "Turning", "#CDDC39",
                "10-30% of surface shows pink/red color", 3, 33,
            ),
            RipenessStage(
                "Pink", "#FFEB3B", "30-60% pink/red coloration", 4, 50,
            ),
            RipenessStage(
                "Light Red", "#FF9800", "60-90% red coloration", 5, 75,
            ),
            RipenessStage(
                "Red Ripe", "#F44336",
                "Over 90% red, optimal harvest", 7, 100,
            ),
        ),
        optimal_temp=_r(20, 25),
        max_ripening_days=7.0,
        fruit_start_week=11,
        optimal_harvest_stage="Red Ripe",
        characteristics=(
            BandedCharacteristic(
                "Firmness",
                (30, 60, 80),
                ("Very Firm", "Firm", "Slightly Soft", "Soft"),
            ),
            LinearCharacteristic(
                "Lycopene Content", 0.0, 0.45, "{:.0f} mg/100g", steps=(1,)
            ),
            LinearCharacteristic("Sugar Level (Brix)", 3.0, 0.03, "{:.1f}°"),
        ),
    )
    diseases = (
        Disease(
            "Early Blight (Alternaria)",
            ("high_humidity", "high_temp"),
            (
                "Dark brown spots on lower leaves",
                "Concentric rings on lesions",
                "Yellow halos around spots",
            ),
            (
                "Remove infected leaves",
                "Improve air circulation",
                "Apply copper-based fungicide",
            ),
        ),
        Disease(
            "Late Blight (Phytophthora)",
            ("high_moisture", "high_humidity", "low_temp"),
            (
                "Water-soaked lesions",
                "White fuzzy growth on undersides",
                "Rapid plant collapse",
            ),
            (
                "Avoid overhead watering",
                "Ensure good drainage",
                "Use resistant varieties",
            ),
        ),
        Disease(
            "Fusarium Wilt",
            ("high_temp", "wrong_ph"),
            (
                "Yellowing of lower leaves",
                "Wilting during day",
                "Brown vascular tissue",
            ),
            (
                "Rotate crops",
                "Use disease-free seeds",
                "Maintain proper pH 6.0-6.8",
            ),
        ),
        Disease(
            "Blossom End Rot",
            ("low_moisture", "wrong_ph"),
            (
                "Dark sunken spots at fruit bottom",
                "Leathery texture",
                "Secondary infections",
            ),
            (
                "Consistent watering",
                "Add calcium to soil",
                "Mulch to retain moisture",
            ),
        ),
    )
    return Crop(
        id="tomato",
        name="Tomato",
        scientific_name="Solanum lycopersicum",
        total_weeks=16,
        total_months=4,
        stages=stages,
        optimal_temp=_r(21, 29),
        optimal_moisture=_r(60, 80),
        optimal_ph=_r(6.0, 6.8),
        optimal_humidity=_r(50, 70),
        yield_per_plant="3-5 kg",
        yield_per_hectare="25-40 tons",
        spacing_cm=(60.0, 45.0),
        ripeness=ripeness,
        diseases=diseases,
    )


def _chili() -> Crop:
    stages = (
        Stage(
            name="Seedling Stage",
            start_week=1,
            end_week=4,
            description=(
                "Seeds germinate in 8-14 days. Slower germination than "
                "tomatoes. First true leaves appear."
            ),
            optimal_temp=_r(25, 30),
            optimal_moisture=_r(70, 80),
            optimal_ph=_r(6.0, 6.5),
            expected_height=_r(5, 12),
            water_requirement="8-12 mm",
            key_activities=(
                "Keep soil warm",
                "Light watering",
                "Provide indirect sunlight initially",
            ),
        ),
        Stage(
            name="Vegetative Growth",
            start_week=5,
            end_week=9,
            description=(
                "Branching pattern develops. Plant builds strong framework "
                "for fruit production."
            ),
            optimal_temp=_r(22, 30),
            optimal_moisture=_r(60, 75),
            optimal_ph=_r(6.0, 7.0),
            expected_height=_r(20, 45),
            water_requirement="20-30 mm",
            key_activities=(
                "Apply balanced NPK",
                "Pinch growing tip at 30cm",
                "Weed control",
                "Mulching",
            ),
        ),
        Stage(
            name="Flowering Stage",
            start_week=10,
            end_week=13,
            description=(
                "White flowers appear at branch nodes. Multiple flowering "
                "flushes occur."
            ),
            optimal_temp=_r(20, 28),
            optimal_moisture=_r(60, 70),
            optimal_ph=_r(6.2, 6.8),
            expected_height=_r(45, 65),
            water_requirement="25-35 mm",
            key_activities=(
                "Avoid water stress",
                "Apply calcium",
                "Monitor for aphids",
                "Maintain even moisture",
            ),
        ),
        Stage(
            name="Fruit Development",
            start_week=14,
            end_week=17,
            description=(
                "Green chilies develop and grow. Color change begins in "
                "late stage."
            ),
            optimal_temp=_r(22, 30),
            optimal_moisture=_r(55, 70),
            optimal_ph=_r(6.0, 7.0),
            expected_height=_r(60, 90),
            water_requirement="30-40 mm",
            key_activities=(
                "Increase potassium",
                "Support branches",
                "Regular pest monitoring",
                "Reduce nitrogen",
            ),
        ),
        Stage(
            name="Harvesting Stage",
            start_week=18,
            end_week=20,
            description=(
                "Harvest green or wait for full color. Multiple harvests "
                "possible."
            ),
            optimal_temp=_r(20, 28),
            optimal_moisture=_r(50, 65),
            optimal_ph=_r(6.0, 7.0),
            expected_height=_r(75, 120),
            water_requirement="25-35 mm",
            key_activities=(
                "Harvest every 5-7 days",
                "Handle carefully",
                "Continue watering for multiple harvests",
            ),
        ),
    )
    ripeness = RipenessProfile(
        stages=(
            RipenessStage(
                "Green (Immature)", "#2E7D32",
                "Young fruit, mild heat, crisp texture", 0, 0,
            ),
            RipenessStage(
                "Green (Mature)", "#4CAF50",
                "Full-sized green, moderate heat developing", 3, 25,
            ),
            RipenessStage(
                "Breaking", "#7CB342",
                "First color change at tip, heat increasing", 5, 40,
            ),
            RipenessStage(
                "Orange", "#FF9800",
                "50-70% orange coloration, strong heat", 7, 65,
            ),
            RipenessStage(
                "Red-Orange", "#FF5722",
                "80-95% red, peak capsaicin", 9, 85,
            ),
            RipenessStage(
                "Red", "#D32F2F",
                "Fully red, maximum heat and flavor", 10, 100,
            ),
        ),
        optimal_temp=_r(22, 28),
        max_ripening_days=10.0,
        fruit_start_week=14,
        optimal_harvest_stage="Red",
        characteristics=(
            # 5K-50K SHU over the ripening span
            LinearCharacteristic(
                "Heat Level (Scoville)",
                5000.0,
                450.0,
                "{:.0f}K SHU",
                steps=(1, 1000),
                unit=1000.0,
            ),
            LinearCharacteristic(
                "Capsaicin Content", 0.1, 0.009, "{:.2f}%"
            ),
            BandedCharacteristic(
                "Flavor Profile",
                (40, 70),
                ("Fresh & Grassy", "Fruity & Spicy", "Sweet & Intense"),
            ),
        ),
    )
    diseases = (
        Disease(
            "Anthracnose",
            ("high_moisture", "high_humidity"),
            (
                "Sunken circular spots on fruits",
                "Orange spore masses",
                "Premature fruit drop",
            ),
            (
                "Use disease-free seeds",
                "Avoid overhead irrigation",
                "Remove infected fruits",
            ),
        ),
        Disease(
            "Bacterial Leaf Spot",
            ("high_humidity", "high_temp"),
            (
                "Small water-soaked spots",
                "Spots turn brown with yellow halos",
                "Leaf defoliation",
            ),
            (
                "Use copper sprays",
                "Avoid working with wet plants",
                "Rotate crops",
            ),
        ),
        Disease(
            "Powdery Mildew",
            ("low_moisture", "high_temp", "low_light"),
            (
                "White powdery coating on leaves",
                "Leaf curling",
                "Stunted growth",
            ),
            (
                "Improve air circulation",
                "Apply sulfur-based fungicide",
                "Remove affected leaves",
            ),
        ),
        Disease(
            "Root Rot (Phytophthora)",
            ("high_moisture", "wrong_ph"),
            ("Wilting despite moist soil", "Brown roots", "Plant stunting"),
            ("Improve drainage", "Avoid overwatering", "Use raised beds"),
        ),
    )
    return Crop(
        id="chili",
        name="Chili",
        scientific_name="Capsicum annuum",
        total_weeks=20,
        total_months=5,
        stages=stages,
        optimal_temp=_r(20, 32),
        optimal_moisture=_r(55, 75),
        optimal_ph=_r(6.0, 7.0),
        optimal_humidity=_r(45, 65),
        yield_per_plant="1-2 kg",
        yield_per_hectare="8-15 tons",
        spacing_cm=(60.0, 45.0),
        ripeness=ripeness,
        diseases=diseases,
    )


def _brinjal() -> Crop:
    stages = (
        Stage(
            name="Seedling Stage",
            start_week=1,
            end_week=4,
            description=(
                "Seeds germinate in 7-14 days. Requires warm conditions for "
                "germination."
            ),
            optimal_temp=_r(25, 30),
            optimal_moisture=_r(70, 85),
            optimal_ph=_r(5.5, 6.5),
            expected_height=_r(8, 18),
            water_requirement="12-18 mm",
            key_activities=(
                "Maintain 25-30°C soil temp",
                "Light watering",
                "Harden off before transplanting",
            ),
        ),
        Stage(
            name="Vegetative Growth",
            start_week=5,
            end_week=8,
            description=(
                "Strong stem and leaf development. Dark green foliage "
                "indicates healthy growth."
            ),
            optimal_temp=_r(24, 32),
            optimal_moisture=_r(65, 80),
            optimal_ph=_r(5.5, 6.8),
            expected_height=_r(25, 50),
            water_requirement="30-40 mm",
            key_activities=(
                "Apply nitrogen-rich fertilizer",
                "Stake plants early",
                "Control weeds",
                "Deep watering",
            ),
        ),
        Stage(
            name="Flowering Stage",
            start_week=9,
            end_week=11,
            description=(
                "Purple flowers appear. Self-pollinating but benefits from "
                "insect activity."
            ),
            optimal_temp=_r(22, 30),
            optimal_moisture=_r(65, 75),
            optimal_ph=_r(6.0, 6.8),
            expected_height=_r(50, 75),
            water_requirement="35-45 mm",
            key_activities=(
                "Apply phosphorus",
                "Avoid high nitrogen",
                "Monitor for fruit borers",
                "Consistent watering",
            ),
        ),
        Stage(
            name="Fruit Development",
            start_week=12,
            end_week=15,
            description=(
                "Fruits grow rapidly. Skin develops characteristic "
                "purple/dark color."
            ),
            optimal_temp=_r(24, 32),
            optimal_moisture=_r(60, 75),
            optimal_ph=_r(5.5, 6.8),
            expected_height=_r(70, 100),
            water_requirement="40-55 mm",
            key_activities=(
                "Apply potassium",
                "Support heavy fruits",
                "Monitor for shoot borer",
                "Maintain mulch",
            ),
        ),
        Stage(
            name="Harvesting Stage",
            start_week=16,
            end_week=18,
            description=(
                "Harvest when fruits are firm and glossy. Continue for 2-3 "
                "months of production."
            ),
            optimal_temp=_r(22, 30),
            optimal_moisture=_r(55, 70),
            optimal_ph=_r(5.5, 6.8),
            expected_height=_r(90, 130),
            water_requirement="35-45 mm",
            key_activities=(
                "Harvest every 4-5 days",
                "Cut with stem attached",
                "Store at 10-12°C",
            ),
        ),
    )
    ripeness = RipenessProfile(
        stages=(
            RipenessStage(
                "Light Green", "#81C784",
                "Young fruit, still developing", 0, 0,
            ),
            RipenessStage(
                "Light Purple", "#9575CD",
                "Color beginning to develop", 2, 20,
            ),
            RipenessStage(
                "Medium Purple", "#7E57C2",
                "Half colored, firm flesh", 4, 45,
            ),
            RipenessStage(
                "Dark Purple", "#5E35B1",
                "80% colored, optimal texture", 6, 70,
            ),
            RipenessStage(
                "Deep Purple", "#4527A0",
                "Fully colored, glossy skin - HARVEST NOW", 7, 90,
            ),
            RipenessStage(
                "Overripe", "#311B92",
                "Dull skin, seeds hardening", 8, 100,
            ),
        ),
        optimal_temp=_r(24, 30),
        max_ripening_days=8.0,
        fruit_start_week=12,
        optimal_harvest_stage="Deep Purple",
        characteristics=(
            BandedCharacteristic(
                "Skin Glossiness",
                (20, 50, 90),
                ("Low", "Medium", "High (Harvest!)", "Dull"),
            ),
            BandedCharacteristic(
                "Flesh Firmness",
                (30, 70, 90),
                ("Very Firm", "Firm", "Optimal", "Soft/Spongy"),
            ),
            BandedCharacteristic(
                "Seed Development",
                (40, 80, 95),
                ("Immature", "Soft Seeds", "Mature", "Hard/Bitter"),
            ),
        ),
    )
    diseases = (
        Disease(
            "Verticillium Wilt",
            ("high_temp", "wrong_ph"),
            (
                "V-shaped yellowing on leaves",
                "One-sided wilting",
                "Brown vascular tissue",
            ),
            (
                "Soil solarization",
                "Use resistant varieties",
                "Long crop rotation",
            ),
        ),
        Disease(
            "Phomopsis Blight",
            ("high_humidity", "high_moisture"),
            (
                "Circular spots on leaves",
                "Stem cankers",
                "Fruit rot at calyx end",
            ),
            (
                "Remove plant debris",
                "Use fungicide during fruiting",
                "Avoid injuries to plants",
            ),
        ),
        Disease(
            "Bacterial Wilt",
            ("high_temp", "high_moisture"),
            (
                "Sudden wilting",
                "No leaf yellowing before wilt",
                "Brown vascular bundles",
            ),
            (
                "Use disease-free seedlings",
                "Avoid waterlogging",
                "Apply biocontrol agents",
            ),
        ),
        Disease(
            "Cercospora Leaf Spot",
            ("high_humidity", "low_light"),
            (
                "Small circular spots with gray centers",
                "Leaf yellowing",
                "Premature leaf drop",
            ),
            (
                "Wide plant spacing",
                "Remove infected leaves",
                "Apply copper fungicide",
            ),
        ),
    )
    return Crop(
        id="brinjal",
        name="Brinjal",
        scientific_name="Solanum melongena",
        total_weeks=18,
        total_months=4.5,
        stages=stages,
        optimal_temp=_r(22, 35),
        optimal_moisture=_r(60, 80),
        optimal_ph=_r(5.5, 6.8),
        optimal_humidity=_r(50, 70),
        yield_per_plant="2-4 kg",
        yield_per_hectare="20-35 tons",
        spacing_cm=(75.0, 60.0),
        ripeness=ripeness,
        diseases=diseases,
    )


_PRESETS: Mapping[str, Callable[[], Crop]] = {
    "tomato": _tomato,
    "chili": _chili,
    "brinjal": _brinjal,
}

CROP_IDS: Tuple[str, ...] = tuple(_PRESETS)

# Built once at import; every lookup returns the same frozen objects.
CATALOG: Mapping[str, Crop] = MappingProxyType(
    {crop_id: Crop.from_preset(crop_id) for crop_id in CROP_IDS}
)
logger.debug("crop_catalog_loaded", crops=list(CROP_IDS))


def get_crop(crop_id: str) -> Crop:
    """
    Return the catalog entry for `crop_id`.

    Raises
    ------
    UnknownCropError
        If `crop_id` is not in the catalog.
    """
    try:
        return CATALOG[crop_id]
    except KeyError as e:
        raise UnknownCropError(crop_id, CROP_IDS) from e


def list_crops() -> list[Crop]:
    """Return all catalog crops in catalog order."""
    return [CATALOG[crop_id] for crop_id in CROP_IDS]
