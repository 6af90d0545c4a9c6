from __future__ import annotations

import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from gymlog.config import configure_logging
from gymlog.services.export import to_csv, to_markdown
from gymlog.services.history import recent_workouts
from gymlog.services.progress import summarize_workout
from gymlog.store import InMemoryStore


def main() -> None:
    configure_logging()
    store = InMemoryStore()
    squat = next(ex.id for ex in store.list_exercises() if ex.name == "Squat")

    w1 = store.create_workout()
    store.add_set(w1.id, squat, 100, 5)
    store.add_set(w1.id, squat, 100, 5)

    w2 = store.create_workout()
    store.add_set(w2.id, squat, 110, 5)
    store.finish_workout(w2.id)

    summary = summarize_workout(store, w2.id)
    p = summary.exercises_progress[0]
    assert p.weight_change == 10, "Weight change mismatch"
    assert p.volume_change == -450, "Volume change mismatch"
    assert p.is_pr, "Expected a PR"

    empty = summarize_workout(store, store.create_workout().id)
    assert empty.total_sets == 0 and not empty.exercises_progress, "Empty workout should have no progress"

    csv_bytes = to_csv(summary)
    md_text = to_markdown(summary)
    assert isinstance(csv_bytes, (bytes, bytearray)) and len(csv_bytes) > 0, "CSV export empty"
    assert isinstance(md_text, str) and len(md_text) > 0, "Markdown export empty"

    print(f"SMOKE OK — workouts={len(recent_workouts(store, limit=10))} volume={summary.total_volume:g} pr={p.is_pr}")


if __name__ == "__main__":
    main()
