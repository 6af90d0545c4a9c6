"""SQLite-backed record store."""

from __future__ import annotations

import logging
import sqlite3
import threading
from datetime import datetime, timezone
from functools import wraps
from pathlib import Path
from typing import Callable, Dict, List, Optional, TypeVar

from gymlog.config import get_settings
from gymlog.models import (
    DEFAULT_EXERCISES,
    Exercise,
    TemplateExercise,
    UserProfile,
    Workout,
    WorkoutExercise,
    WorkoutSet,
    WorkoutTemplate,
)
from .base import NotFoundError, RecordStore, check_set_values

logger = logging.getLogger(__name__)

# AUTOINCREMENT keeps ids monotonic after deletions
SCHEMA = """
PRAGMA foreign_keys = ON;

CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY NOT NULL,
    name TEXT,
    weight REAL,
    height REAL,
    goal TEXT,
    unit TEXT NOT NULL DEFAULT 'kg'
);

CREATE TABLE IF NOT EXISTS exercises (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    muscle_group TEXT,
    is_custom INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE IF NOT EXISTS workouts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    created_at TEXT NOT NULL,
    notes TEXT,
    finished_at TEXT
);

CREATE TABLE IF NOT EXISTS sets (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    workout_id INTEGER NOT NULL REFERENCES workouts (id) ON DELETE CASCADE,
    exercise_id INTEGER NOT NULL REFERENCES exercises (id),
    weight REAL NOT NULL,
    reps INTEGER NOT NULL,
    set_order INTEGER NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_sets_exercise_workout ON sets (exercise_id, workout_id);

CREATE TABLE IF NOT EXISTS workout_exercises (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    workout_id INTEGER NOT NULL REFERENCES workouts (id) ON DELETE CASCADE,
    exercise_id INTEGER NOT NULL REFERENCES exercises (id),
    UNIQUE (workout_id, exercise_id)
);

CREATE TABLE IF NOT EXISTS workout_templates (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    description TEXT,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS template_exercises (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    template_id INTEGER NOT NULL REFERENCES workout_templates (id) ON DELETE CASCADE,
    exercise_id INTEGER NOT NULL REFERENCES exercises (id),
    order_index INTEGER NOT NULL
);
"""


def _now_iso() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


def _row_to_exercise(row: sqlite3.Row) -> Exercise:
    return Exercise(
        id=row["id"],
        name=row["name"],
        muscle_group=row["muscle_group"] or "",
        is_custom=bool(row["is_custom"]),
    )


def _row_to_workout(row: sqlite3.Row) -> Workout:
    return Workout.model_validate(dict(row))


def _row_to_set(row: sqlite3.Row) -> WorkoutSet:
    return WorkoutSet.model_validate(dict(row))


F = TypeVar("F", bound=Callable)


def _locked(method: F) -> F:
    """Run a store method while holding the store's connection lock."""

    @wraps(method)
    def wrapper(self: "SQLiteStore", *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


class SQLiteStore(RecordStore):
    def __init__(self, path: str | Path = ":memory:", seed: bool = True) -> None:
        self.path = str(path)
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        # One store is shared by every Streamlit session thread; _lock serializes use of the connection
        self._lock = threading.RLock()
        self._conn = sqlite3.connect(self.path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.executescript(SCHEMA)
        logger.info("Opened SQLite store at %s", self.path)
        if seed:
            self._seed_exercises()

    def _seed_exercises(self) -> None:
        count = self._conn.execute("SELECT COUNT(*) FROM exercises").fetchone()[0]
        if count:
            return
        with self._conn:
            self._conn.executemany(
                "INSERT INTO exercises (name, muscle_group, is_custom) VALUES (?, ?, 0)",
                DEFAULT_EXERCISES,
            )
        logger.info("Seeded %d default exercises", len(DEFAULT_EXERCISES))

    def _require(self, table: str, row_id: int, label: str) -> None:
        row = self._conn.execute(f"SELECT 1 FROM {table} WHERE id = ?", (row_id,)).fetchone()
        if row is None:
            raise NotFoundError(f"{label} {row_id} does not exist.")

    @_locked
    def close(self) -> None:
        self._conn.close()

    # ----- exercises -----

    @_locked
    def list_exercises(self) -> List[Exercise]:
        rows = self._conn.execute("SELECT * FROM exercises ORDER BY name ASC, id ASC").fetchall()
        return [_row_to_exercise(r) for r in rows]

    @_locked
    def get_exercise(self, exercise_id: int) -> Optional[Exercise]:
        row = self._conn.execute("SELECT * FROM exercises WHERE id = ?", (exercise_id,)).fetchone()
        return _row_to_exercise(row) if row else None

    @_locked
    def add_exercise(self, name: str, muscle_group: str, is_custom: bool = True) -> Exercise:
        with self._conn:
            cur = self._conn.execute(
                "INSERT INTO exercises (name, muscle_group, is_custom) VALUES (?, ?, ?)",
                (name, muscle_group, int(is_custom)),
            )
        return Exercise(id=cur.lastrowid, name=name, muscle_group=muscle_group, is_custom=is_custom)

    @_locked
    def update_exercise(
        self, exercise_id: int, name: Optional[str] = None, muscle_group: Optional[str] = None
    ) -> Exercise:
        current = self.get_exercise(exercise_id)
        if current is None:
            raise NotFoundError(f"Exercise {exercise_id} does not exist.")
        new_name = current.name if name is None else name
        new_group = current.muscle_group if muscle_group is None else muscle_group
        updated = Exercise(id=exercise_id, name=new_name, muscle_group=new_group, is_custom=current.is_custom)
        with self._conn:
            self._conn.execute(
                "UPDATE exercises SET name = ?, muscle_group = ? WHERE id = ?",
                (updated.name, updated.muscle_group, exercise_id),
            )
        return updated

    @_locked
    def exercise_names(self) -> Dict[int, str]:
        rows = self._conn.execute("SELECT id, name FROM exercises").fetchall()
        return {r["id"]: r["name"] for r in rows}

    # ----- workouts -----

    @_locked
    def create_workout(self, notes: Optional[str] = None, created_at: Optional[datetime] = None) -> Workout:
        created = created_at or datetime.now(tz=timezone.utc)
        with self._conn:
            cur = self._conn.execute(
                "INSERT INTO workouts (created_at, notes) VALUES (?, ?)", (created.isoformat(), notes)
            )
        return Workout(id=cur.lastrowid, created_at=created, notes=notes)

    @_locked
    def get_workout(self, workout_id: int) -> Optional[Workout]:
        row = self._conn.execute("SELECT * FROM workouts WHERE id = ?", (workout_id,)).fetchone()
        return _row_to_workout(row) if row else None

    @_locked
    def list_workouts(self) -> List[Workout]:
        rows = self._conn.execute("SELECT * FROM workouts ORDER BY id ASC").fetchall()
        return [_row_to_workout(r) for r in rows]

    @_locked
    def workout_exists(self, workout_id: int) -> bool:
        return self._conn.execute("SELECT 1 FROM workouts WHERE id = ?", (workout_id,)).fetchone() is not None

    @_locked
    def finish_workout(self, workout_id: int, finished_at: Optional[datetime] = None) -> Workout:
        self._require("workouts", workout_id, "Workout")
        stamp = (finished_at or datetime.now(tz=timezone.utc)).isoformat()
        with self._conn:
            self._conn.execute("UPDATE workouts SET finished_at = ? WHERE id = ?", (stamp, workout_id))
        return self.get_workout(workout_id)  # type: ignore[return-value]

    @_locked
    def delete_workout(self, workout_id: int) -> None:
        with self._conn:
            self._conn.execute("DELETE FROM sets WHERE workout_id = ?", (workout_id,))
            self._conn.execute("DELETE FROM workout_exercises WHERE workout_id = ?", (workout_id,))
            cur = self._conn.execute("DELETE FROM workouts WHERE id = ?", (workout_id,))
        if cur.rowcount:
            logger.info("Deleted workout %d", workout_id)

    # ----- sets -----

    @_locked
    def add_set(
        self,
        workout_id: int,
        exercise_id: int,
        weight: float,
        reps: int,
        set_order: Optional[int] = None,
    ) -> WorkoutSet:
        check_set_values(weight, reps)
        self._require("workouts", workout_id, "Workout")
        self._require("exercises", exercise_id, "Exercise")
        with self._conn:
            if set_order is None:
                set_order = self._conn.execute(
                    "SELECT COALESCE(MAX(set_order), 0) FROM sets WHERE workout_id = ?", (workout_id,)
                ).fetchone()[0] + 1
            cur = self._conn.execute(
                "INSERT INTO sets (workout_id, exercise_id, weight, reps, set_order) VALUES (?, ?, ?, ?, ?)",
                (workout_id, exercise_id, float(weight), int(reps), set_order),
            )
            self._conn.execute(
                "INSERT OR IGNORE INTO workout_exercises (workout_id, exercise_id) VALUES (?, ?)",
                (workout_id, exercise_id),
            )
        return WorkoutSet(
            id=cur.lastrowid,
            workout_id=workout_id,
            exercise_id=exercise_id,
            weight=weight,
            reps=reps,
            set_order=set_order,
        )

    @_locked
    def update_set(self, set_id: int, weight: float, reps: int) -> WorkoutSet:
        check_set_values(weight, reps)
        with self._conn:
            cur = self._conn.execute(
                "UPDATE sets SET weight = ?, reps = ? WHERE id = ?", (float(weight), int(reps), set_id)
            )
        if not cur.rowcount:
            raise NotFoundError(f"Set {set_id} does not exist.")
        row = self._conn.execute("SELECT * FROM sets WHERE id = ?", (set_id,)).fetchone()
        return _row_to_set(row)

    @_locked
    def delete_set(self, set_id: int) -> None:
        with self._conn:
            self._conn.execute("DELETE FROM sets WHERE id = ?", (set_id,))

    @_locked
    def list_sets(self, workout_id: int) -> List[WorkoutSet]:
        rows = self._conn.execute(
            "SELECT * FROM sets WHERE workout_id = ? ORDER BY set_order ASC, id ASC", (workout_id,)
        ).fetchall()
        return [_row_to_set(r) for r in rows]

    @_locked
    def list_sets_for_exercise(
        self, exercise_id: int, before_workout_id: Optional[int] = None
    ) -> List[WorkoutSet]:
        query = "SELECT * FROM sets WHERE exercise_id = ?"
        params: list = [exercise_id]
        if before_workout_id is not None:
            query += " AND workout_id < ?"
            params.append(before_workout_id)
        query += " ORDER BY workout_id ASC, set_order ASC, id ASC"
        return [_row_to_set(r) for r in self._conn.execute(query, params).fetchall()]

    # ----- workout/exercise links -----

    @_locked
    def add_workout_exercise(self, workout_id: int, exercise_id: int) -> WorkoutExercise:
        self._require("workouts", workout_id, "Workout")
        self._require("exercises", exercise_id, "Exercise")
        with self._conn:
            self._conn.execute(
                "INSERT OR IGNORE INTO workout_exercises (workout_id, exercise_id) VALUES (?, ?)",
                (workout_id, exercise_id),
            )
        row = self._conn.execute(
            """
            SELECT we.id, we.workout_id, we.exercise_id, e.name AS exercise_name
            FROM workout_exercises we
            JOIN exercises e ON we.exercise_id = e.id
            WHERE we.workout_id = ? AND we.exercise_id = ?
            """,
            (workout_id, exercise_id),
        ).fetchone()
        return WorkoutExercise.model_validate(dict(row))

    @_locked
    def list_workout_exercises(self, workout_id: int) -> List[WorkoutExercise]:
        rows = self._conn.execute(
            """
            SELECT we.id, we.workout_id, we.exercise_id, e.name AS exercise_name
            FROM workout_exercises we
            LEFT JOIN exercises e ON we.exercise_id = e.id
            WHERE we.workout_id = ?
            ORDER BY we.id ASC
            """,
            (workout_id,),
        ).fetchall()
        unknown = get_settings().UNKNOWN_EXERCISE_NAME
        out: List[WorkoutExercise] = []
        for r in rows:
            data = dict(r)
            data["exercise_name"] = data["exercise_name"] or unknown
            out.append(WorkoutExercise.model_validate(data))
        return out

    # ----- templates -----

    @_locked
    def create_template(self, name: str, description: Optional[str] = None) -> WorkoutTemplate:
        created_at = _now_iso()
        with self._conn:
            cur = self._conn.execute(
                "INSERT INTO workout_templates (name, description, created_at) VALUES (?, ?, ?)",
                (name, description, created_at),
            )
        return WorkoutTemplate(id=cur.lastrowid, name=name, description=description, created_at=created_at)  # type: ignore[arg-type]

    @_locked
    def list_templates(self) -> List[WorkoutTemplate]:
        rows = self._conn.execute(
            "SELECT * FROM workout_templates ORDER BY created_at DESC, id DESC"
        ).fetchall()
        return [WorkoutTemplate.model_validate(dict(r)) for r in rows]

    @_locked
    def get_template(self, template_id: int) -> Optional[WorkoutTemplate]:
        row = self._conn.execute("SELECT * FROM workout_templates WHERE id = ?", (template_id,)).fetchone()
        return WorkoutTemplate.model_validate(dict(row)) if row else None

    @_locked
    def delete_template(self, template_id: int) -> None:
        with self._conn:
            self._conn.execute("DELETE FROM template_exercises WHERE template_id = ?", (template_id,))
            self._conn.execute("DELETE FROM workout_templates WHERE id = ?", (template_id,))

    @_locked
    def add_template_exercise(self, template_id: int, exercise_id: int, order_index: int) -> TemplateExercise:
        self._require("workout_templates", template_id, "Template")
        ex = self.get_exercise(exercise_id)
        if ex is None:
            raise NotFoundError(f"Exercise {exercise_id} does not exist.")
        with self._conn:
            cur = self._conn.execute(
                "INSERT INTO template_exercises (template_id, exercise_id, order_index) VALUES (?, ?, ?)",
                (template_id, exercise_id, order_index),
            )
        return TemplateExercise(
            id=cur.lastrowid,
            template_id=template_id,
            exercise_id=exercise_id,
            order_index=order_index,
            exercise_name=ex.name,
        )

    @_locked
    def list_template_exercises(self, template_id: int) -> List[TemplateExercise]:
        rows = self._conn.execute(
            """
            SELECT te.*, e.name AS exercise_name
            FROM template_exercises te
            LEFT JOIN exercises e ON te.exercise_id = e.id
            WHERE te.template_id = ?
            ORDER BY te.order_index ASC, te.id ASC
            """,
            (template_id,),
        ).fetchall()
        unknown = get_settings().UNKNOWN_EXERCISE_NAME
        out: List[TemplateExercise] = []
        for r in rows:
            data = dict(r)
            data["exercise_name"] = data["exercise_name"] or unknown
            out.append(TemplateExercise.model_validate(data))
        return out

    @_locked
    def remove_template_exercise(self, template_exercise_id: int) -> None:
        with self._conn:
            self._conn.execute("DELETE FROM template_exercises WHERE id = ?", (template_exercise_id,))

    # ----- user -----

    @_locked
    def get_user(self) -> Optional[UserProfile]:
        row = self._conn.execute("SELECT * FROM users ORDER BY id LIMIT 1").fetchone()
        if row is None:
            return None
        data = {k: row[k] for k in ("name", "weight", "height", "goal", "unit") if row[k] is not None}
        return UserProfile.model_validate(data)

    @_locked
    def save_user(self, profile: UserProfile) -> UserProfile:
        with self._conn:
            self._conn.execute(
                """
                INSERT INTO users (id, name, weight, height, goal, unit) VALUES (1, ?, ?, ?, ?, ?)
                ON CONFLICT (id) DO UPDATE SET
                    name = excluded.name,
                    weight = excluded.weight,
                    height = excluded.height,
                    goal = excluded.goal,
                    unit = excluded.unit
                """,
                (profile.name, profile.weight, profile.height, profile.goal, profile.unit),
            )
        return profile
