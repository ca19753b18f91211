from pathlib import Path

import pandas as pd

from cropsim.core.crops import list_crops
from cropsim.core.data_containers import Readings
from cropsim.core.environment import propagate
from cropsim.core.model import FieldModel
from cropsim.logs import configure_logging

OUT_PATH = Path(Path(__file__).parent, "output")


def season_table(readings: Readings) -> pd.DataFrame:
    """Weekly trajectories of every catalog crop under fixed readings."""
    frames = []
    for crop in list_crops():
        frame = FieldModel(crop.id, readings, week=1).evolve().to_frame()
        frame.insert(0, "crop", crop.id)
        frames.append(frame.reset_index())
    return pd.concat(frames, ignore_index=True)


def print_snapshot(model: FieldModel) -> None:
    snap = model.snapshot()
    stage = snap.stage.name if snap.stage else model.crop.completion_message
    print(f"[{snap.crop_id}] week {snap.week:g}: {stage}")
    print(f"  health {snap.health:.1f}  height {snap.height_cm:.0f} cm")
    print(
        f"  yield {snap.yield_estimate.percentage}% "
        f"({snap.yield_estimate.label})"
    )
    if snap.ripeness is not None:
        r = snap.ripeness
        print(f"  ripeness {r.percentage:.0f}% ({r.stage.name})")
    print(f"  status {snap.status.status}")
    print(f"  outlook {snap.outlook.score} ({snap.outlook.prediction})")
    for d in snap.diseases[:2]:
        print(f"  {d.name}: {d.risk_level} ({d.risk_score:.0f}%)")
    for p in snap.pests:
        print(f"  pest {p.name}: {p.risk}")
    for w in snap.warnings:
        print(f"  warning: {w}")
    for tip in snap.outlook.recommendations:
        print(f"  advice: {tip}")


# -----------------------------
# Initial field readings
# -----------------------------
configure_logging()

readings = Readings(
    moisture=68,
    temperature=24,
    humidity=62,
    soil_ph=6.5,
    light_intensity=80,
    air_pressure=1012,
    solar_radiation=100,
    wind_speed=2,
    wind_direction=270,
    rainfall_today=0,
    rainfall_total=140,
)

# -----------------------------
# Snapshots under changing weather
# -----------------------------
print_snapshot(FieldModel("tomato", readings, week=13))

hot = propagate("temperature", 34, readings)
print_snapshot(FieldModel("tomato", hot, week=13))

storm = propagate("rainfall_today", 40, readings)
print_snapshot(FieldModel("chili", storm, week=15))

# -----------------------------
# Season trajectories
# -----------------------------
table = season_table(readings)
OUT_PATH.mkdir(parents=True, exist_ok=True)
table.to_csv(Path(OUT_PATH, "season.csv"), index=False)
print(f"[ok] Wrote season table: {Path(OUT_PATH, 'season.csv').resolve()}")
