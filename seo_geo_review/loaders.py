import base64
import binascii
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .config import sample_data_path
from .models import DescriptionOptions, GEOAudit, ProductAuditRecord, SEOAudit

logger = logging.getLogger(__name__)

# Wire keys are camelCase; accept snake_case too for records written by hand
ORIGINAL_DESC_ALIASES = ["originalDescription", "original_description", "description"]
OPTIONS_ALIASES       = ["descriptionOptions", "description_options"]
SEO_FIRST_ALIASES     = ["seoPrioritized", "seo_prioritized", "seo"]
GEO_FIRST_ALIASES     = ["geoPrioritized", "geo_prioritized", "geo"]
BALANCED_ALIASES      = ["balanced"]


def _first(raw: Dict[str, Any], aliases: List[str], default=None):
    for key in aliases:
        if key in raw and raw[key] is not None:
            return raw[key]
    return default

def _text_map(raw) -> Dict[str, str]:
    if not isinstance(raw, dict):
        return {}
    return {str(k): str(v) for k, v in raw.items()}

def _text_list(raw) -> List[str]:
    if not isinstance(raw, list):
        return []
    return [str(x) for x in raw]


def record_from_dict(raw: Dict[str, Any]) -> ProductAuditRecord:
    """Build a ProductAuditRecord from its JSON shape. Only `id` is required."""
    seo = raw.get("seo") if isinstance(raw.get("seo"), dict) else {}
    geo = raw.get("geo") if isinstance(raw.get("geo"), dict) else {}
    options = _first(raw, OPTIONS_ALIASES, default={})
    if not isinstance(options, dict):
        options = {}
    return ProductAuditRecord(
        id=str(raw["id"]),
        title=str(raw.get("title") or ""),
        url=str(raw.get("url") or ""),
        original_description=str(_first(raw, ORIGINAL_DESC_ALIASES, default="") or ""),
        seo=SEOAudit(
            strengths=_text_map(seo.get("strengths")),
            issues=_text_map(seo.get("issues")),
            recommendations=_text_list(seo.get("recommendations")),
        ),
        geo=GEOAudit(
            strengths=_text_map(geo.get("strengths")),
            gaps=_text_map(geo.get("gaps")),
            recommendations=_text_list(geo.get("recommendations")),
        ),
        description_options=DescriptionOptions(
            seo_prioritized=str(_first(options, SEO_FIRST_ALIASES, default="") or ""),
            geo_prioritized=str(_first(options, GEO_FIRST_ALIASES, default="") or ""),
            balanced=str(_first(options, BALANCED_ALIASES, default="") or ""),
        ),
    )


def records_from_payload(data: Union[List[Any], Dict[str, Any], None]) -> List[ProductAuditRecord]:
    """Accepts either a bare list of records or an object with a `pages` list."""
    if isinstance(data, dict):
        data = data.get("pages")
    if not isinstance(data, list):
        return []
    return [record_from_dict(item) for item in data if isinstance(item, dict) and "id" in item]


def decode_base64_json_param(encoded: str) -> Any:
    """Decode a base64-encoded JSON query parameter; `[]` on any failure."""
    try:
        # accept URL-safe alphabet and missing padding
        normalized = encoded.strip().replace("-", "+").replace("_", "/")
        normalized += "=" * (-len(normalized) % 4)
        decoded = base64.b64decode(normalized).decode("utf-8")
        return json.loads(decoded)
    except (binascii.Error, UnicodeDecodeError, ValueError, TypeError) as exc:
        logger.warning("Decode failed: %s", exc)
        return []


def load_records_file(path: Union[str, Path]) -> List[ProductAuditRecord]:
    with Path(path).open(encoding="utf-8") as f:
        return records_from_payload(json.load(f))


def load_sample_products(path: Optional[Union[str, Path]] = None) -> List[ProductAuditRecord]:
    return load_records_file(path or sample_data_path())


def load_products(encoded: Optional[str] = None,
                  path: Optional[Union[str, Path]] = None) -> List[ProductAuditRecord]:
    """
    Products for a review session: the decoded `data` parameter when it yields
    any records, otherwise the bundled sample catalog.
    """
    if encoded:
        records = records_from_payload(decode_base64_json_param(encoded))
        if records:
            return records
        logger.info("No products in encoded data; using sample catalog")
    return load_sample_products(path)


def encode_products_param(products: Union[List[Any], Dict[str, Any]]) -> str:
    return base64.b64encode(json.dumps(products).encode("utf-8")).decode("ascii")
