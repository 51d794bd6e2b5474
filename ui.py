#!/usr/bin/env python3
"""
Streamlit UI for the Galette Fullcard generator
"""

import os
import tempfile
import time
import traceback
import zipfile
from pathlib import Path

import streamlit as st

from config import MAX_INDIVIDUAL_DOWNLOADS, ZIP_SPOOL_MAX_BYTES
from data_loaders import MemberStore, load_members_dataframe, members_from_dataframe
from models import Preferences

# Startup timing (logged to stdout for Streamlit Cloud logs)
_UI_T0 = time.perf_counter()
def _ui_log(msg: str) -> None:
    print(f"[ui] +{time.perf_counter() - _UI_T0:.3f}s {msg}", flush=True)

_ui_log("ui.py start")

st.set_page_config(
    page_title="Galette Fullcard",
    page_icon="🪪",
    layout="centered"
)

st.title("Galette Fullcard")
st.caption("Full member cards as PDF: membership form pre-filled with member details")
_ui_log("rendered header")

# Initialize session state
if "members_df" not in st.session_state:
    st.session_state.members_df = None
if "selected_rows" not in st.session_state:
    st.session_state.selected_rows = []
if "generated_items" not in st.session_state:
    # For <=10: list of {name, pdf_bytes, filename}
    st.session_state.generated_items = []
if "generated_zip" not in st.session_state:
    # For >10: {"zip_bytes": bytes, "zip_name": str, "count": int}
    st.session_state.generated_zip = None
if "_tmp_data_path" not in st.session_state:
    st.session_state._tmp_data_path = None
if "_tmp_logo_path" not in st.session_state:
    st.session_state._tmp_logo_path = None
if "_logo_key" not in st.session_state:
    st.session_state._logo_key = None


def _remove_tmp(key: str) -> None:
    p = st.session_state.get(key)
    if p and os.path.exists(p):
        os.unlink(p)
    st.session_state[key] = None


def _reset_loaded_data():
    st.session_state.members_df = None
    st.session_state.selected_rows = []
    st.session_state.generated_items = []
    st.session_state.generated_zip = None
    _remove_tmp("_tmp_data_path")


def _save_upload(uploaded, key: str) -> str:
    _remove_tmp(key)
    suffix = Path(uploaded.name).suffix
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as tmp:
        tmp.write(uploaded.getvalue())
        st.session_state[key] = tmp.name
    return tmp.name


@st.cache_data(show_spinner=False, max_entries=8)
def _blank_form_pdf(prefs: Preferences) -> bytes:
    """Blank form for one set of association settings; reruns reuse it."""
    from app import FullcardGenerator

    _ui_log("rendering blank form")
    return FullcardGenerator(prefs).render(None)


# --- Association ---
st.subheader("Association")
try:
    secrets_assoc = dict(st.secrets.get("association", {}))  # type: ignore[attr-defined]
except Exception:
    # No secrets file configured
    secrets_assoc = {}

assoc_name = st.text_input("Association name", value=secrets_assoc.get("name", ""))
postal_address = st.text_area(
    "Postal address",
    value=secrets_assoc.get("postal_address", ""),
    help="Printed at the top of the form, where members send it back.",
)
logo_file = st.file_uploader("Logo (optional)", type=["png", "jpg", "jpeg"])
if logo_file is not None:
    # Same upload on a rerun: keep the saved file so the settings stay equal
    logo_key = (logo_file.name, logo_file.size)
    if logo_key != st.session_state._logo_key or not st.session_state._tmp_logo_path:
        _save_upload(logo_file, "_tmp_logo_path")
        st.session_state._logo_key = logo_key
elif st.session_state._tmp_logo_path:
    _remove_tmp("_tmp_logo_path")
    st.session_state._logo_key = None

prefs = Preferences(
    pref_nom=assoc_name.strip(),
    postal_address=postal_address.strip(),
    logo_path=st.session_state._tmp_logo_path,
)
_ui_log("rendered association settings")

# --- Members ---
st.subheader("Members")
with st.form("members_load_form", clear_on_submit=False):
    data_file = st.file_uploader("Members export (CSV or Excel)", type=["csv", "xlsx", "xls"])
    load_uploaded = st.form_submit_button("📥 Load members")
if load_uploaded:
    if data_file is None:
        st.warning("Please upload a file first.")
    else:
        try:
            path = _save_upload(data_file, "_tmp_data_path")
            df = load_members_dataframe(path)
            st.session_state.members_df = df
            st.session_state.selected_rows = []
            stats = df.attrs.get("load_stats", {})
            st.success(
                f"Loaded {len(df)} members from {data_file.name} "
                f"(skipped {stats.get('skipped_missing_name', 0)} without a name)"
            )
        except (ValueError, ImportError, OSError) as e:
            st.error(f"Error reading {data_file.name}: {e}")
        except Exception as e:
            st.error(f"Unexpected error reading {data_file.name}: {e}")

if st.button("🧼 Clear loaded data"):
    _reset_loaded_data()

df = st.session_state.members_df
store = MemberStore(members_from_dataframe(df)) if df is not None else MemberStore()
members = list(store)

if members:
    labels = {
        i: f"{m.sname or m.name} ({m.login})" if m.login else (m.sname or m.name)
        for i, m in enumerate(members)
    }
    selected = st.multiselect(
        "Members to print",
        options=list(labels),
        format_func=labels.get,
        default=[i for i in st.session_state.selected_rows if i in labels],
    )
    st.session_state.selected_rows = selected
    st.info(f"**{len(selected)}** member(s) selected")
else:
    selected = []
    st.caption("No members loaded. You can still download a blank form below.")

# --- Generate ---
st.subheader("Cards")
# Import rendering code only once the page is laid out (Streamlit Cloud startup)
from app import FullcardGenerator

generator = FullcardGenerator(prefs, store)

blank_col, gen_col = st.columns([1, 1])
with blank_col:
    try:
        st.download_button(
            "⬇️ Blank form",
            data=_blank_form_pdf(prefs),
            file_name=generator.filename_for(None),
            mime="application/pdf",
            use_container_width=True,
        )
    except Exception as e:
        st.error(f"Error rendering the blank form: {e}")
        st.code(traceback.format_exc())

st.caption(
    f"Download behavior: up to **{MAX_INDIVIDUAL_DOWNLOADS}** selected → individual PDFs. "
    f"More than **{MAX_INDIVIDUAL_DOWNLOADS}** → one ZIP download."
)

with gen_col:
    generate = st.button("🚀 Generate cards", type="primary", use_container_width=True)

if generate:
    if not selected:
        st.warning("Please select at least one member")
    else:
        with st.spinner(f"Generating {len(selected)} card(s)..."):
            st.session_state.generated_items = []
            st.session_state.generated_zip = None
            chosen = [members[i] for i in selected]
            total = len(chosen)
            progress_bar = st.progress(0)
            status_text = st.empty()
            try:
                if total > MAX_INDIVIDUAL_DOWNLOADS:
                    # Use a spooled temp file so large ZIPs spill to disk instead of RAM.
                    zip_buf = tempfile.SpooledTemporaryFile(max_size=ZIP_SPOOL_MAX_BYTES)
                    with zipfile.ZipFile(zip_buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
                        for i, member in enumerate(chosen):
                            zf.writestr(generator.filename_for(member), generator.render(member))
                            progress_bar.progress((i + 1) / total)
                            status_text.text(f"Prepared {i + 1}/{total}: {member.sname}")
                    zip_buf.seek(0)
                    st.session_state.generated_zip = {
                        "zip_bytes": zip_buf.read(),
                        "zip_name": "fullcards.zip",
                        "count": total,
                    }
                else:
                    for i, member in enumerate(chosen):
                        st.session_state.generated_items.append(
                            {
                                "name": member.sname,
                                "pdf_bytes": generator.render(member),
                                "filename": generator.filename_for(member),
                            }
                        )
                        progress_bar.progress((i + 1) / total)
                        status_text.text(f"Prepared {i + 1}/{total}: {member.sname}")
            except (OSError, ValueError) as e:
                st.error(f"Error during generation: {e}")
            except Exception as e:
                st.error(f"Unexpected error during generation: {e}")
                st.code(traceback.format_exc())
            progress_bar.empty()
            status_text.empty()
            _ui_log(f"generated {total} card(s)")

# Render generated outputs (persisted in session)
if st.session_state.generated_zip is not None:
    z = st.session_state.generated_zip
    st.warning(f"More than {MAX_INDIVIDUAL_DOWNLOADS} selected (**{z['count']}**). Download as a single ZIP.")
    st.download_button(
        "⬇️ Download ZIP",
        data=z["zip_bytes"],
        file_name=z["zip_name"],
        mime="application/zip",
        key="dl_zip",
    )
elif st.session_state.generated_items:
    st.success(f"Prepared **{len(st.session_state.generated_items)}** PDF(s).")
    for n, it in enumerate(st.session_state.generated_items):
        st.download_button(
            f"⬇️ {it['name'] or it['filename']}",
            data=it["pdf_bytes"],
            file_name=it["filename"],
            mime="application/pdf",
            key=f"dl_{n}",
        )

_ui_log("ui.py rendered")
