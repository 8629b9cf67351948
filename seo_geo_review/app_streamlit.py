# seo_geo_review/app_streamlit.py
import json
import logging

import streamlit as st

import sys
from pathlib import Path
ROOT = Path(__file__).resolve().parents[1]  # repo root
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from seo_geo_review.loaders import load_products
from seo_geo_review.models import CUSTOM, DESCRIPTION_ITEM, NO_CHANGE, ProductAuditRecord, todo_tag
from seo_geo_review.render import OPTION_LABELS, render_submission_markdown
from seo_geo_review.submit import submission_receipt
from seo_geo_review.tracker import SelectionTracker, progress_frame

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

RADIO_KEYS = [NO_CHANGE, "seoPrioritized", "geoPrioritized", "balanced", CUSTOM]

# ---------------- Session state helpers ----------------

def _init_state():
    if "tracker" not in st.session_state:
        encoded = st.query_params.get("data")
        st.session_state.tracker = SelectionTracker(load_products(encoded))
    if "submitted" not in st.session_state: st.session_state.submitted = None

def _tracker() -> SelectionTracker:
    return st.session_state.tracker

# ---------------- Widget callbacks ----------------

def _on_description_change(product: ProductAuditRecord):
    key = st.session_state[f"desc_{product.id}"]
    tracker = _tracker()
    if key == CUSTOM:
        tracker.enable_custom_description(product.id)
    elif key == NO_CHANGE:
        tracker.select_description(product.id, NO_CHANGE)
    else:
        tracker.select_description(product.id, product.description_options.as_choices()[key])

def _on_custom_text(product_id: str):
    _tracker().set_custom_description_text(product_id, st.session_state[f"custom_{product_id}"])

def _on_todo(product_id: str, tag: str):
    _tracker().toggle_todo(product_id, tag)

def _on_complete(product_id: str):
    _tracker().toggle_completed_item(product_id, DESCRIPTION_ITEM)

def _on_submit():
    payload = _tracker().build_submission()
    submission_receipt(payload)
    st.session_state.submitted = payload

# ---------------- UI ----------------

def _labelled(title: str, items):
    st.markdown(f"**{title}**")
    if not items:
        st.caption("None.")
    for label, text in items.items():
        st.markdown(f"- **{label}:** {text}")

def _recommendations(product: ProductAuditRecord, kind: str, recs):
    tracker = _tracker()
    st.markdown("**Recommendations** (tick to add as to-do)")
    for idx, rec in enumerate(recs):
        tag = todo_tag(kind, idx)
        st.checkbox(
            rec,
            value=tracker.is_todo_selected(product.id, tag),
            key=f"todo_{product.id}_{tag}",
            on_change=_on_todo,
            args=(product.id, tag),
        )

def _description_block(product: ProductAuditRecord):
    tracker = _tracker()
    done = tracker.is_completed(product.id, DESCRIPTION_ITEM)
    st.subheader("Description" + (" ✅" if done else ""))
    st.button(
        "Unmark description" if done else "Mark description complete",
        key=f"complete_{product.id}",
        on_click=_on_complete,
        args=(product.id,),
    )

    texts = {NO_CHANGE: product.original_description, **product.description_options.as_choices()}
    current = tracker.description_choice_key(product.id)
    st.radio(
        "Choose a description",
        RADIO_KEYS,
        index=RADIO_KEYS.index(current) if current in RADIO_KEYS else None,
        format_func=lambda k: OPTION_LABELS[k],
        key=f"desc_{product.id}",
        on_change=_on_description_change,
        args=(product,),
    )
    for key in RADIO_KEYS[:-1]:
        with st.container(border=True):
            st.caption(OPTION_LABELS[key])
            st.write(texts[key] or "(empty)")

    if tracker.is_custom_input_visible(product.id):
        st.text_area(
            "Custom description",
            value=tracker.custom_description_text(product.id) or "",
            key=f"custom_{product.id}",
            on_change=_on_custom_text,
            args=(product.id,),
        )

def _product_panel(product: ProductAuditRecord):
    tracker = _tracker()
    done = tracker.completed_count(product.id)
    total = tracker.total_actionable_items(product.id)
    with st.expander(f"{product.title} — {done}/{total} items", expanded=False):
        if product.url:
            st.caption(product.url)
        seo_col, geo_col = st.columns(2)
        with seo_col:
            st.subheader("SEO Analysis")
            _labelled("Strengths", product.seo.strengths)
            _labelled("Issues", product.seo.issues)
            _recommendations(product, "seo", product.seo.recommendations)
        with geo_col:
            st.subheader("GEO Analysis")
            _labelled("Strengths", product.geo.strengths)
            _labelled("Gaps", product.geo.gaps)
            _recommendations(product, "geo", product.geo.recommendations)
        _description_block(product)

def main():
    st.set_page_config(page_title="SEO/GEO Optimization Review", layout="wide")
    _init_state()
    tracker = _tracker()

    st.title("SEO/GEO Optimization Report")
    st.caption("Pick a description per product and flag recommendations as to-dos, then submit.")

    if not tracker.products:
        st.info("No products to review.")
        return

    for product in tracker.products:
        _product_panel(product)

    st.header("Report Summary")
    s = tracker.summary()
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Products analyzed", s.products_analyzed)
    c2.metric("Descriptions selected", s.descriptions_selected)
    c3.metric("To-dos created", s.todos_created)
    c4.metric("Items selected", s.items_selected)
    st.dataframe(progress_frame(tracker), hide_index=True, use_container_width=True)

    st.button("Submit Report", type="primary", on_click=_on_submit)
    st.caption("Submit all selections and to-dos to the next workflow stage")

    payload = st.session_state.get("submitted")
    if payload is not None:
        data = json.dumps(payload.to_dict(), indent=2)
        st.success("Report submitted.")
        st.code(data, language="json")
        st.download_button("Download JSON", data, file_name="submission.json", mime="application/json")
        st.download_button("Download Markdown", render_submission_markdown(payload),
                           file_name="submission.md", mime="text/markdown")

if __name__ == "__main__":
    main()
