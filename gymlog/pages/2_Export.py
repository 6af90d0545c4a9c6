from __future__ import annotations

import streamlit as st

from gymlog.services.export import to_csv, to_markdown, to_pdf

st.set_page_config(page_title="Export Summary", page_icon="📤")

st.title("Export")

summary = st.session_state.get("summary")
if summary is None:
    st.info("No workout summary in session. Finish or open a workout on the main page first.")
else:
    unit = st.session_state.get("unit", "kg")
    st.caption(f"Workout {summary.workout_id}: {summary.total_sets} sets, {summary.total_volume:g} {unit}")
    st.download_button("Download CSV", data=to_csv(summary, unit=unit), file_name="workout_summary.csv", mime="text/csv")
    st.download_button(
        "Download Markdown", data=to_markdown(summary, unit=unit), file_name="workout_summary.md", mime="text/markdown"
    )
    st.download_button(
        "Download PDF", data=to_pdf(summary, unit=unit), file_name="workout_summary.pdf", mime="application/pdf"
    )
