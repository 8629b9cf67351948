"""
Tests for seo_geo_review.render
"""

from seo_geo_review.loaders import load_sample_products
from seo_geo_review.models import ProductSelection, SubmissionPayload
from seo_geo_review.render import render_audit_report, render_submission_markdown
from seo_geo_review.tracker import ActionablePolicy, SelectionTracker


def test_report_marks_selected_todos_and_description():
    products = load_sample_products()
    tracker = SelectionTracker(products, policy=ActionablePolicy("fixed"))
    tracker.toggle_todo("ck-001", "geo-3")
    tracker.select_description("ck-001", products[0].description_options.geo_prioritized)
    tracker.toggle_completed_item("ck-001", "description")

    md = render_audit_report(products, tracker)
    assert md.startswith("# SEO/GEO Optimization Report")
    assert "## Wool Blend Belted Wrap Coat (ck-001)" in md
    assert "**Progress:** 3/8 items" in md
    assert "- [x] `geo-3` Enhance product description" in md
    assert "- [ ] `seo-0` Shorten the meta description" in md
    assert "**(•) GEO-prioritized**" in md
    assert "### Description Options (finalized)" in md
    assert "| 2 | 1 | 1 | 3 |" in md


def test_report_without_tracker_has_no_summary():
    md = render_audit_report(load_sample_products())
    assert "Report Summary" not in md
    assert "- [ ] `geo-2`" in md
    assert "(•)" not in md


def test_report_shows_custom_text():
    products = load_sample_products()
    tracker = SelectionTracker(products)
    tracker.enable_custom_description("ck-002")
    tracker.set_custom_description_text("ck-002", "Everyday bralette")
    md = render_audit_report(products, tracker)
    assert "**(•) Custom**\n> Everyday bralette" in md


def test_empty_report():
    assert "_No products to review._" in render_audit_report([])


def test_submission_markdown():
    payload = SubmissionPayload(products=[
        ProductSelection(id="ck-001", title="Coat", todos=["seo-0"], completed_items=["description"]),
        ProductSelection(id="ck-002", title="Bralette", selected_description="custom", custom_description="Mine"),
    ])
    md = render_submission_markdown(payload)
    assert "## Coat (ck-001)" in md
    assert "**Description:** no-change" in md
    assert "- seo-0" in md
    assert "**Completed:** description" in md
    assert "> Mine" in md
    assert "**Completed:** (none)" in md
