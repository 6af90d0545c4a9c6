from __future__ import annotations

import csv
import io

from gymlog.services.export import to_csv, to_markdown, to_pdf
from gymlog.services.progress import summarize_workout
from gymlog.store import InMemoryStore

from helpers import log_workout


def build_summary():
    store = InMemoryStore()
    log_workout(store, [("Squat", 100, 5), ("Squat", 100, 5)])
    w2 = log_workout(store, [("Squat", 110, 5), ("Lunge", 20, 10)])
    return summarize_workout(store, w2)


def test_csv_has_one_row_per_set() -> None:
    summary = build_summary()
    rows = list(csv.DictReader(io.StringIO(to_csv(summary).decode("utf-8"))))
    assert len(rows) == summary.total_sets
    squat = rows[0]
    assert squat["exercise_name"] == "Squat"
    assert squat["weight_change"] == "10"
    assert squat["volume_change"] == "-450"
    assert squat["is_pr"] == "1"
    assert rows[1]["previous_workout_id"] == ""


def test_csv_carries_the_display_unit() -> None:
    summary = build_summary()
    default_rows = list(csv.DictReader(io.StringIO(to_csv(summary).decode("utf-8"))))
    lb_rows = list(csv.DictReader(io.StringIO(to_csv(summary, unit="lb").decode("utf-8"))))
    assert {r["unit"] for r in default_rows} == {"kg"}
    assert {r["unit"] for r in lb_rows} == {"lb"}
    assert lb_rows[0]["weight"] == "110"


def test_markdown_mentions_pr_and_first_time() -> None:
    md = to_markdown(build_summary())
    assert md.startswith("# Workout")
    assert "## Squat 🏆" in md
    assert "weight +10 kg" in md
    assert "first time" in md


def test_export_pdf() -> None:
    pdf_bytes = to_pdf(build_summary())
    assert isinstance(pdf_bytes, (bytes, bytearray)) and pdf_bytes.startswith(b"%PDF")
