"""
Tests for seo_geo_review.cli_chat and seo_geo_review.main
"""

import json
from pathlib import Path

import pytest

from seo_geo_review import main as main_mod
from seo_geo_review.cli_chat import handle
from seo_geo_review.loaders import encode_products_param, load_sample_products
from seo_geo_review.tracker import ActionablePolicy, SelectionTracker


@pytest.fixture
def tracker():
    return SelectionTracker(load_sample_products(), policy=ActionablePolicy("fixed"))


def test_chat_commands_drive_tracker(tracker):
    assert "ck-001" in handle(tracker, "list")
    assert handle(tracker, "todo ck-001 seo-0") == "✅ To-do seo-0 added."
    assert handle(tracker, "todo ck-001 geo-1").endswith("added.")
    assert handle(tracker, "describe ck-001 balanced") == "✅ Description set to balanced."
    assert handle(tracker, "complete ck-001") == "✅ description completed."
    assert tracker.completed_count("ck-001") == 4

    assert handle(tracker, "todo ck-001 seo-0") == "✅ To-do seo-0 removed."
    assert tracker.completed_count("ck-001") == 3


def test_chat_custom_and_submit(tracker):
    handle(tracker, "custom ck-002 Soft and simple")
    handle(tracker, "describe ck-002 geo")
    out = json.loads(handle(tracker, "submit"))
    entry = out["products"][1]
    assert entry["customDescription"] == "Soft and simple"
    assert entry["selectedDescription"].startswith("Calvin Klein bralette")
    assert tracker.is_custom_input_visible("ck-002") is False


def test_chat_rejects_unknown_input(tracker):
    assert handle(tracker, "show nope").startswith("Unknown product")
    assert handle(tracker, "describe ck-001 fancy").startswith("Choose one of")
    assert handle(tracker, "dance ck-001") == "Unknown command. Type `help`."
    assert handle(tracker, "todo").startswith("Usage")
    assert "Progress" in handle(tracker, "show ck-002")
    assert "items=0" in handle(tracker, "status")


def test_main_writes_report_and_submission(tmp_path: Path):
    actions = tmp_path / "actions.json"
    actions.write_text(json.dumps([
        {"op": "toggle_todo", "product_id": "ck-002", "tag": "seo-2"},
        {"op": "select_description", "product_id": "ck-002", "choice": "balanced"},
    ]), encoding="utf-8")
    out = tmp_path / "report.md"
    sub = tmp_path / "submission.json"

    assert main_mod.main(["--actions", str(actions), "--out", str(out), "--submission", str(sub)]) == 0

    assert "## Modern Cotton Bralette (ck-002)" in out.read_text(encoding="utf-8")
    data = json.loads(sub.read_text(encoding="utf-8"))
    assert data["products"][1]["todos"] == ["seo-2"]
    assert data["products"][1]["selectedDescription"].startswith("Experience signature comfort")


def test_main_reads_encoded_data(tmp_path: Path):
    encoded = encode_products_param({"pages": [{"id": "x", "title": "Solo"}]})
    out = tmp_path / "r.md"
    main_mod.main(["--encoded", encoded, "--out", str(out)])
    assert "## Solo (x)" in out.read_text(encoding="utf-8")


def test_chat_custom_text_is_taken_verbatim(tracker):
    """
    Test that custom text keeps apostrophes and the spacing the user typed.
    """
    assert handle(tracker, "custom ck-001 It's warm") == "✅ Custom description saved."
    assert tracker.custom_description_text("ck-001") == "It's warm"
    assert tracker.selected_description("ck-001") == "custom"

    handle(tracker, 'custom ck-001 Wool  blend, "relaxed" fit')
    assert tracker.custom_description_text("ck-001") == 'Wool  blend, "relaxed" fit'
    assert handle(tracker, "custom nope It's cold").startswith("Unknown product")
