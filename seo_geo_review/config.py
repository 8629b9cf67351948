"""
Environment-driven settings (reads `.env` when present).
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[1]  # repo root
DATA_DIR = ROOT / "data"

DEFAULT_SAMPLE_PATH = DATA_DIR / "sample_products.json"
DISCOVERY_PATH = DATA_DIR / "discovery.yaml"

POLICY_FIXED = "fixed"
POLICY_PER_PRODUCT = "per_product"

load_dotenv()


def sample_data_path() -> Path:
    override = os.getenv("SEO_GEO_SAMPLE_DATA")
    return Path(override) if override else DEFAULT_SAMPLE_PATH


def actionable_policy() -> str:
    value = (os.getenv("SEO_GEO_ACTIONABLE_POLICY") or POLICY_FIXED).strip().lower()
    if value not in (POLICY_FIXED, POLICY_PER_PRODUCT):
        return POLICY_FIXED
    return value


def smtp_config() -> Optional[Dict[str, Any]]:
    host = os.getenv("MAILJET_SMTP_HOST", "in-v3.mailjet.com")
    port = int(os.getenv("MAILJET_SMTP_PORT", "587"))
    username = os.getenv("MAILJET_API_KEY")
    password = os.getenv("MAILJET_SECRET_KEY")
    from_email = os.getenv("MAILJET_FROM_EMAIL")

    if not (username and password and from_email):
        return None
    return {
        "host": host,
        "port": port,
        "username": username,
        "password": password,
        "from_email": from_email,
    }
