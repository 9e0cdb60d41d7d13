"""Streamlit front-end for the export integrity pipeline."""
from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
import streamlit as st

from atc_checker import ExportFile, ValidationOptions, validate_batch
from atc_checker.config import MAX_WORKERS, SETTINGS
from atc_checker.domain.results import ValidationOutcome
from atc_checker.presentation.summary import outcomes_to_dataframe, render_csv, render_xlsx

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

st.set_page_config(page_title="ATC Export Checker", layout="wide")
st.title("ATC Export Integrity Check")


def list_csv_files(folder: str) -> list[Path]:
    root = Path(folder).expanduser()
    if not root.is_dir():
        return []
    return sorted(p for p in root.iterdir() if p.is_file() and p.suffix.lower() == ".csv")


def files_to_dataframe(paths: list[Path]) -> pd.DataFrame:
    exports = [ExportFile(p) for p in paths]
    return pd.DataFrame(
        [{"file": e.name, "type": str(e.schema), "status": str(e.status)} for e in exports],
        columns=["file", "type", "status"],
    )


if "view" not in st.session_state:
    st.session_state["view"] = "select"
if "result" not in st.session_state:
    st.session_state["result"] = None


if st.session_state["view"] == "select":
    folder = st.text_input("Export folder", value=st.session_state.get("folder", ""))
    st.session_state["folder"] = folder
    available = list_csv_files(folder) if folder else []
    if folder and not available:
        st.warning("No CSV files found in this folder")

    selected_names = st.multiselect(
        "Files to validate",
        options=[p.name for p in available],
        default=[p.name for p in available],
    )
    selected = [p for p in available if p.name in selected_names]
    if selected:
        st.dataframe(files_to_dataframe(selected), hide_index=True, use_container_width=True)

    col1, col2, col3 = st.columns([1, 1, 1])
    with col1:
        detail = st.checkbox("Detail", value=SETTINGS.detail)
    with col2:
        remove_inconsistent = st.checkbox("Remove inconsistent rows", value=SETTINGS.remove_inconsistencies)
    with col3:
        workers = st.number_input("Workers", min_value=1, max_value=MAX_WORKERS, value=SETTINGS.max_workers)

    run_btn = st.button("Validate", disabled=not selected)
    if run_btn and selected:
        progress_bar = st.progress(0.0)

        def on_progress(index: int, total: int, outcome: ValidationOutcome) -> None:
            progress_bar.progress(index / total, text=f"{outcome.path.name}: {outcome.status}")

        options = ValidationOptions(detail=detail, remove_inconsistencies=remove_inconsistent)
        with st.spinner("Validating..."):
            result = validate_batch(selected, options=options, max_workers=int(workers), progress=on_progress)
        st.session_state["result"] = {
            "outcomes": result.outcomes,
            "summary_csv": render_csv(result.outcomes),
            "summary_xlsx": render_xlsx(result.outcomes),
        }
        st.session_state["view"] = "results"
        st.rerun()
else:
    back_clicked = st.button("← Back", key="back_to_select")
    if back_clicked:
        st.session_state["view"] = "select"
        st.session_state["result"] = None
        st.rerun()

    result = st.session_state.get("result")
    if not result:
        st.info("No results available. Select files and run the validation first.")
    else:
        outcomes: list[ValidationOutcome] = list(result["outcomes"])

        st.subheader("Summary")
        col1, col2, col3 = st.columns(3)
        col1.metric("Validated", sum(1 for o in outcomes if o.success))
        col2.metric("Errors", sum(1 for o in outcomes if o.error is not None))
        col3.metric("With findings", sum(1 for o in outcomes if o.report is not None and o.report.has_issues()))

        st.dataframe(outcomes_to_dataframe(outcomes), hide_index=True, use_container_width=True)
        st.download_button("Download summary CSV", data=result["summary_csv"], file_name="validation_summary.csv", mime="text/csv")
        st.download_button(
            "Download summary XLSX",
            data=result["summary_xlsx"],
            file_name="validation_summary.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )

        st.subheader("Reports")
        for outcome in outcomes:
            text = outcome.report_text()
            if not text:
                continue
            with st.expander(f"{outcome.path.name} ({outcome.status})"):
                st.code(text, language="text")
