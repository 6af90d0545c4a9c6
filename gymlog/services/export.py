from __future__ import annotations

import csv
import io
from typing import List

from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from gymlog.models import ExerciseProgress, WorkoutSummary


def _num(x: float) -> str:
    return f"{x:g}"


def _signed(x: float) -> str:
    return f"{x:+g}"


def _change_text(p: ExerciseProgress, unit: str) -> str:
    if p.is_first_time:
        return "first time"
    text = f"weight {_signed(p.weight_change)} {unit}, volume {_signed(p.volume_change)} {unit}"
    if p.is_pr:
        text += " (PR)"
    return text


def _sets_text(p: ExerciseProgress, unit: str) -> str:
    return ", ".join(f"{_num(s.weight)} {unit} x {s.reps}" for s in p.current_sets)


def to_csv(summary: WorkoutSummary, unit: str = "kg") -> bytes:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow([
        "workout_id",
        "exercise_id",
        "exercise_name",
        "set_order",
        "weight",
        "unit",
        "reps",
        "volume",
        "previous_workout_id",
        "weight_change",
        "volume_change",
        "is_pr",
    ])
    for p in summary.exercises_progress:
        for s in p.current_sets:
            writer.writerow([
                summary.workout_id,
                p.exercise_id,
                p.exercise_name,
                s.set_order,
                _num(s.weight),
                unit,
                s.reps,
                _num(s.volume),
                "" if p.previous_workout_id is None else p.previous_workout_id,
                _num(p.weight_change),
                _num(p.volume_change),
                int(p.is_pr),
            ])
    return output.getvalue().encode("utf-8")


def to_markdown(summary: WorkoutSummary, unit: str = "kg") -> str:
    lines: List[str] = []
    lines.append(f"# Workout {summary.workout_id} Summary\n")
    lines.append(f"- Exercises: {summary.total_exercises}")
    lines.append(f"- Sets: {summary.total_sets}")
    lines.append(f"- Total volume: {_num(summary.total_volume)} {unit}")
    if summary.duration_minutes:
        lines.append(f"- Duration: {summary.duration_minutes} min")
    for p in summary.exercises_progress:
        badge = " 🏆" if p.is_pr else ""
        lines.append(f"\n## {p.exercise_name}{badge}")
        lines.append(f"- Sets: {_sets_text(p, unit)}")
        lines.append(f"- Change: {_change_text(p, unit)}")
    return "\n".join(lines) + "\n"


def to_pdf(summary: WorkoutSummary, unit: str = "kg") -> bytes:
    """Render the workout summary as a simple paginated PDF."""
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=letter)
    width, height = letter

    margin = 36
    x = margin
    y = height - margin

    def ensure_room(needed: float) -> None:
        nonlocal y
        if y < margin + needed:
            c.showPage()
            c.setFont("Helvetica", 10)
            y = height - margin

    c.setFont("Helvetica-Bold", 16)
    c.drawString(x, y, f"Workout {summary.workout_id} Summary")
    y -= 24

    c.setFont("Helvetica", 10)
    totals = (
        f"{summary.total_exercises} exercises, {summary.total_sets} sets, "
        f"total volume {_num(summary.total_volume)} {unit}"
    )
    if summary.duration_minutes:
        totals += f", {summary.duration_minutes} min"
    c.drawString(x, y, totals)
    y -= 20

    for p in summary.exercises_progress:
        ensure_room(60)
        c.setFont("Helvetica-Bold", 12)
        c.drawString(x, y, p.exercise_name + ("  - PR" if p.is_pr else ""))
        y -= 16
        c.setFont("Helvetica", 10)
        for line in (f"Sets: {_sets_text(p, unit)}", f"Change: {_change_text(p, unit)}"):
            # wrap long lines manually (simple)
            max_chars = 95
            parts = [line[i:i + max_chars] for i in range(0, len(line), max_chars)]
            for part in parts:
                ensure_room(24)
                c.drawString(x + 12, y, part)
                y -= 14
        y -= 6

    c.showPage()
    c.save()
    pdf_bytes = buffer.getvalue()
    buffer.close()
    return pdf_bytes
