"""
Tests for seo_geo_review.loaders
"""

import base64
import json
import logging
from pathlib import Path

from seo_geo_review.loaders import (
    decode_base64_json_param,
    encode_products_param,
    load_products,
    load_records_file,
    load_sample_products,
    record_from_dict,
    records_from_payload,
)


RAW = {
    "id": "x-1",
    "title": "Linen Shirt",
    "url": "https://example.com/linen-shirt",
    "originalDescription": "A shirt.",
    "seo": {
        "strengths": {"Title Tag": "ok"},
        "issues": {"Canonical": "missing"},
        "recommendations": ["add canonical", "fix alt text"],
    },
    "geo": {
        "strengths": {"Brand": "strong"},
        "gaps": {"Schema": "none"},
        "recommendations": ["add Product schema"],
    },
    "descriptionOptions": {
        "seoPrioritized": "SEO copy",
        "geoPrioritized": "GEO copy",
        "balanced": "Balanced copy",
    },
}


def test_record_from_dict_reads_wire_shape():
    rec = record_from_dict(RAW)
    assert rec.id == "x-1"
    assert rec.original_description == "A shirt."
    assert rec.seo.recommendations == ["add canonical", "fix alt text"]
    assert rec.geo.gaps == {"Schema": "none"}
    assert rec.description_options.as_choices() == {
        "seoPrioritized": "SEO copy",
        "geoPrioritized": "GEO copy",
        "balanced": "Balanced copy",
    }


def test_record_from_dict_defaults_missing_blocks():
    rec = record_from_dict({"id": 7, "title": "T", "seo": {"recommendations": ["a", "b"]}})
    assert rec.id == "7"
    assert rec.url == ""
    assert rec.seo.strengths == {}
    assert rec.seo.recommendations == ["a", "b"]
    assert rec.geo.recommendations == []
    assert rec.description_options.balanced == ""


def test_records_from_payload_accepts_list_or_pages():
    assert [r.id for r in records_from_payload([RAW])] == ["x-1"]
    assert [r.id for r in records_from_payload({"pages": [RAW]})] == ["x-1"]
    assert records_from_payload({"products": [RAW]}) == []
    assert records_from_payload(None) == []
    # entries without an id are dropped
    assert records_from_payload([{"title": "no id"}, RAW])[0].id == "x-1"


def test_decode_round_trip():
    encoded = encode_products_param({"pages": [RAW]})
    assert decode_base64_json_param(encoded) == {"pages": [RAW]}


def test_decode_failure_logs_and_returns_empty(caplog):
    with caplog.at_level(logging.WARNING, logger="seo_geo_review.loaders"):
        assert decode_base64_json_param("not base64 at all!") == []
        bad_json = base64.b64encode(b"{not json").decode()
        assert decode_base64_json_param(bad_json) == []
    assert "Decode failed" in caplog.text


def test_sample_products_are_the_two_catalog_items():
    products = load_sample_products()
    assert [p.id for p in products] == ["ck-001", "ck-002"]
    assert len(products[0].seo.recommendations) == 3
    assert len(products[0].geo.recommendations) == 4
    assert len(products[1].geo.recommendations) == 3
    assert products[0].description_options.balanced.startswith("Experience modern elegance")


def test_load_products_prefers_decoded_data():
    encoded = encode_products_param([RAW])
    assert [p.id for p in load_products(encoded)] == ["x-1"]


def test_load_products_falls_back_to_sample():
    assert [p.id for p in load_products(None)] == ["ck-001", "ck-002"]
    assert [p.id for p in load_products(encode_products_param([]))] == ["ck-001", "ck-002"]
    assert [p.id for p in load_products("%%%")] == ["ck-001", "ck-002"]


def test_sample_path_override(monkeypatch, tmp_path: Path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"pages": [RAW]}), encoding="utf-8")
    monkeypatch.setenv("SEO_GEO_SAMPLE_DATA", str(path))
    assert [p.id for p in load_sample_products()] == ["x-1"]
    assert [p.id for p in load_records_file(path)] == ["x-1"]


def test_decode_accepts_unpadded_base64():
    """
    Test that base64 with the trailing `=` padding stripped still decodes.
    """
    raw = json.dumps([{"id": "x", "title": "T"}]).encode("utf-8")
    encoded = base64.b64encode(raw).decode("ascii")
    assert encoded.endswith("=")
    assert decode_base64_json_param(encoded.rstrip("=")) == [{"id": "x", "title": "T"}]


def test_load_products_accepts_url_safe_base64():
    """
    Test that URL-safe base64 (`-` and `_`) decodes instead of falling back to the sample.
    """
    # "?" and ">" bytes map to the URL-safe `-`/`_` digits
    raw = json.dumps([{"id": "x", "title": "??>??>"}]).encode("utf-8")
    encoded = base64.urlsafe_b64encode(raw).decode("ascii")
    assert "-" in encoded or "_" in encoded
    assert [p.id for p in load_products(encoded)] == ["x"]
    assert [p.id for p in load_products(encoded.rstrip("="))] == ["x"]
