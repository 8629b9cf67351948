"""
Tool manifest and the fixed-response processing tool.

`stub_report` does not look at any user selections: every product comes back
with the balanced description, the description item completed and every SEO
recommendation flagged as a to-do.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .config import DISCOVERY_PATH
from .models import DESCRIPTION_ITEM, todo_tag

STUB_DESCRIPTION = "balanced"


class InvalidInput(ValueError):
    """Raised when the processing tool is called without a `pages` list."""


def discovery_manifest(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    with Path(path or DISCOVERY_PATH).open(encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _seo_recommendations(page: Dict[str, Any]) -> List[Any]:
    seo = page.get("seo")
    if not isinstance(seo, dict):
        return []
    recs = seo.get("recommendations")
    return recs if isinstance(recs, list) else []


def stub_report(body: Any) -> Dict[str, Any]:
    pages = body.get("pages") if isinstance(body, dict) else None
    if not isinstance(pages, list):
        raise InvalidInput("Invalid input")

    products = []
    for page in pages:
        page = page if isinstance(page, dict) else {}
        products.append({
            "id": page.get("id"),
            "title": page.get("title"),
            "selectedDescription": STUB_DESCRIPTION,
            "completedItems": [DESCRIPTION_ITEM],
            "todos": [todo_tag("seo", i) for i, _ in enumerate(_seo_recommendations(page))],
        })
    return {"products": products}
