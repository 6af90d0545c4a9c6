from __future__ import annotations

# Ensure the repository root is on sys.path so that absolute imports like `gymlog.*` work
# when Streamlit runs this file from within the gymlog/ directory on cloud runtimes.
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from typing import Dict, List

import streamlit as st

from gymlog.config import configure_logging, get_settings
from gymlog.models import ExerciseProgress, UserProfile, WorkoutSummary
from gymlog.services.export import to_csv, to_markdown, to_pdf
from gymlog.services.history import recent_workouts, weekly_workout_count
from gymlog.services.progress import comparison_series, last_session_sets, summarize_workout
from gymlog.services.templates import create_template_with_exercises, start_workout_from_template
from gymlog.store import RecordStore, open_store

st.set_page_config(page_title="Gym Tracker", page_icon="🏋️", layout="wide")
settings = get_settings()
configure_logging()

st.markdown("""
<style>
.chip{ padding:2px 8px; border-radius:999px; font-size:12px; background:#eef2f7; color:#334155; }
.chip.pr{ background:#fef3c7; color:#92400e; font-weight:700; }
.chip.first{ background:#e7f5ff; color:#1e3a8a; }
.delta-up{ color:#15803d; }
.delta-down{ color:#b91c1c; }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_store() -> RecordStore:
    # One store per server process, owned by the app root
    return open_store(settings)


store = get_store()

if "active_workout_id" not in st.session_state:
    st.session_state["active_workout_id"] = None
if "summary_workout_id" not in st.session_state:
    st.session_state["summary_workout_id"] = None


def unit() -> str:
    user = store.get_user()
    return user.unit if user else settings.DEFAULT_UNIT


def fmt_delta(value: float, suffix: str) -> str:
    cls = "delta-up" if value > 0 else "delta-down" if value < 0 else ""
    return f"<span class='{cls}'>{value:+g} {suffix}</span>"


def render_progress_card(p: ExerciseProgress) -> None:
    u = unit()
    with st.container(border=True):
        chips: List[str] = []
        if p.is_pr:
            chips.append("<span class='chip pr'>🏆 PR</span>")
        if p.is_first_time:
            chips.append("<span class='chip first'>First time</span>")
        st.markdown(f"**{p.exercise_name}** {' '.join(chips)}", unsafe_allow_html=True)
        st.caption(", ".join(f"{s.weight:g} {u} × {s.reps}" for s in p.current_sets))
        if not p.is_first_time:
            st.markdown(
                f"Max weight {fmt_delta(p.weight_change, u)} · Volume {fmt_delta(p.volume_change, u)}",
                unsafe_allow_html=True,
            )
            st.caption("Last time: " + ", ".join(f"{s.weight:g} {u} × {s.reps}" for s in p.previous_sets))


def render_summary(summary: WorkoutSummary) -> None:
    u = unit()
    st.session_state["summary"] = summary
    st.session_state["unit"] = u
    st.subheader(f"Workout {summary.workout_id} Summary")
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Exercises", summary.total_exercises)
    c2.metric("Sets", summary.total_sets)
    c3.metric("Volume", f"{summary.total_volume:g} {u}")
    c4.metric("PRs", summary.pr_count)

    if not summary.exercises_progress:
        st.info("No sets logged in this workout yet.")
        return

    series = comparison_series(summary)
    chart_data: Dict[str, List[float]] = {"Today": series["current"], "Last Time": series["previous"]}
    st.caption("Volume: Today vs Last Time")
    st.bar_chart({**chart_data, "Exercise": series["labels"]}, x="Exercise", y=["Today", "Last Time"])

    for p in summary.exercises_progress:
        render_progress_card(p)

    d1, d2, d3 = st.columns(3)
    d1.download_button("Download CSV", data=to_csv(summary, unit=u), file_name=f"workout_{summary.workout_id}.csv", mime="text/csv")
    d2.download_button(
        "Download Markdown",
        data=to_markdown(summary, unit=u),
        file_name=f"workout_{summary.workout_id}.md",
        mime="text/markdown",
    )
    d3.download_button(
        "Download PDF",
        data=to_pdf(summary, unit=u),
        file_name=f"workout_{summary.workout_id}.pdf",
        mime="application/pdf",
    )


def render_active_workout(workout_id: int) -> None:
    u = unit()
    exercises = store.list_exercises()
    by_id = {ex.id: ex for ex in exercises}
    st.subheader(f"Workout {workout_id}")

    add_col, btn_col = st.columns([4, 1])
    with add_col:
        pick = st.selectbox(
            "Add exercise",
            options=[ex.id for ex in exercises],
            format_func=lambda i: f"{by_id[i].name} ({by_id[i].muscle_group})",
            key="pick-exercise",
        )
    with btn_col:
        st.write("")
        if st.button("Add", use_container_width=True):
            store.add_workout_exercise(workout_id, int(pick))
            st.rerun()

    with st.expander("New custom exercise", expanded=False):
        name = st.text_input("Name", key="custom-name")
        muscle = st.text_input("Muscle group", key="custom-muscle")
        if st.button("Create exercise", key="custom-create") and name.strip():
            ex = store.add_exercise(name.strip(), muscle.strip())
            store.add_workout_exercise(workout_id, ex.id)
            st.rerun()

    all_sets = store.list_sets(workout_id)
    for we in store.list_workout_exercises(workout_id):
        with st.container(border=True):
            st.markdown(f"**{we.exercise_name}**")
            sets = [s for s in all_sets if s.exercise_id == we.exercise_id]
            for i, s in enumerate(sets, start=1):
                st.caption(f"Set {i}: {s.weight:g} {u} × {s.reps}")
            previous = last_session_sets(store, we.exercise_id, workout_id)
            if previous:
                st.caption("Last time: " + ", ".join(f"{s.weight:g} {u} × {s.reps}" for s in previous))
            default_weight = sets[-1].weight if sets else (previous[0].weight if previous else 0.0)
            w_col, r_col, b_col = st.columns([2, 2, 1])
            weight = w_col.number_input(
                f"Weight ({u})", min_value=0.0, value=float(default_weight), step=2.5, key=f"w-{we.id}"
            )
            reps = r_col.number_input("Reps", min_value=1, value=sets[-1].reps if sets else 8, step=1, key=f"r-{we.id}")
            with b_col:
                st.write("")
                if st.button("Log set", key=f"log-{we.id}", use_container_width=True):
                    store.add_set(workout_id, we.exercise_id, float(weight), int(reps))
                    st.rerun()

    if st.button("✅ Finish workout", type="primary"):
        store.finish_workout(workout_id)
        st.session_state["active_workout_id"] = None
        st.session_state["summary_workout_id"] = workout_id
        st.toast("Workout saved.")
        st.rerun()


with st.sidebar:
    st.header("Gym Tracker")

    with st.expander("Profile", expanded=store.get_user() is None):
        current = store.get_user() or UserProfile(unit=settings.DEFAULT_UNIT)
        p_name = st.text_input("Name", value=current.name)
        p_weight = st.number_input("Body weight", min_value=0.0, value=float(current.weight), step=0.5)
        p_height = st.number_input("Height (cm)", min_value=0.0, value=float(current.height), step=1.0)
        p_goal = st.text_input("Goal", value=current.goal)
        p_unit = st.selectbox("Unit", ["kg", "lb"], index=0 if current.unit == "kg" else 1)
        if st.button("Save profile", use_container_width=True):
            store.save_user(UserProfile(name=p_name, weight=p_weight, height=p_height, goal=p_goal, unit=p_unit))
            st.toast("Profile saved.")

    st.metric("Workouts this week", weekly_workout_count(store))

    if st.button("➕ Start empty workout", use_container_width=True):
        w = store.create_workout()
        st.session_state["active_workout_id"] = w.id
        st.session_state["summary_workout_id"] = None
        st.rerun()

    templates = store.list_templates()
    if templates:
        t_pick = st.selectbox("Template", options=[t.id for t in templates],
                              format_func=lambda i: next(t.name for t in templates if t.id == i))
        if st.button("▶️ Start from template", use_container_width=True):
            w = start_workout_from_template(store, int(t_pick))
            st.session_state["active_workout_id"] = w.id
            st.session_state["summary_workout_id"] = None
            st.rerun()

    with st.expander("Templates", expanded=False):
        t_name = st.text_input("Template name", key="tpl-name")
        t_desc = st.text_input("Description", key="tpl-desc")
        exercises_all = store.list_exercises()
        t_ex = st.multiselect("Exercises", options=[ex.id for ex in exercises_all],
                              format_func=lambda i: next(ex.name for ex in exercises_all if ex.id == i))
        if st.button("Create template", use_container_width=True) and t_name.strip():
            create_template_with_exercises(store, t_name, t_ex, description=t_desc or None)
            st.rerun()
        for t in templates:
            names = ", ".join(te.exercise_name for te in store.list_template_exercises(t.id))
            st.caption(f"**{t.name}**: {names}")
            if st.button("🗑️ Delete", key=f"tpl-del-{t.id}"):
                store.delete_template(t.id)
                st.rerun()

active_id = st.session_state.get("active_workout_id")
summary_id = st.session_state.get("summary_workout_id")

if active_id is not None and store.workout_exists(active_id):
    render_active_workout(active_id)
elif summary_id is not None:
    if store.workout_exists(summary_id):
        render_summary(summarize_workout(store, summary_id))
    else:
        st.warning("That workout no longer exists.")
        st.session_state["summary_workout_id"] = None
else:
    st.info("Start a workout from the sidebar.")

st.divider()
st.subheader("Recent workouts")
for rw in recent_workouts(store):
    left, view_col, del_col = st.columns([6, 1, 1])
    left.markdown(
        f"**Workout {rw.id}** · {rw.created_at:%Y-%m-%d %H:%M} · "
        f"{rw.exercise_count} exercises · {rw.total_sets} sets"
    )
    if view_col.button("View", key=f"view-{rw.id}"):
        st.session_state["summary_workout_id"] = rw.id
        st.session_state["active_workout_id"] = None
        st.rerun()
    if del_col.button("🗑️", key=f"del-{rw.id}"):
        store.delete_workout(rw.id)
        if st.session_state.get("summary_workout_id") == rw.id:
            st.session_state["summary_workout_id"] = None
        if st.session_state.get("active_workout_id") == rw.id:
            st.session_state["active_workout_id"] = None
        st.rerun()
