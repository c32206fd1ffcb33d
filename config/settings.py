"""
Application settings

Values resolve from, in order:
1. process environment (a local `.env` is loaded first)
2. Streamlit secrets, root level
3. Streamlit secrets, `[supabase]` section
"""
import os
from typing import Optional

import streamlit as st
from dotenv import load_dotenv

load_dotenv()


def get_env(var: str, default: Optional[str] = None) -> Optional[str]:
    """Read a setting from os.environ, st.secrets or st.secrets['supabase']."""
    value = os.getenv(var)
    if value:
        return value

    # secrets.toml is optional; st.secrets raises when it is missing
    try:
        value = st.secrets[var]  # type: ignore[index]
        if value:
            return value
    except Exception:
        pass

    try:
        supa_cfg = st.secrets["supabase"]  # type: ignore[index]
        value = supa_cfg.get(var)  # type: ignore[union-attr]
        if value:
            return value
    except Exception:
        pass

    return default


def get_supabase_url() -> Optional[str]:
    return get_env("SUPABASE_URL") or get_env("url")


def get_supabase_key() -> Optional[str]:
    return get_env("SUPABASE_KEY") or get_env("key")


APP_CONFIG = {
    "title": get_env("APP_TITLE", "PG Manager"),
    "version": get_env("APP_VERSION", "v1.0"),
    "environment": get_env("ENVIRONMENT", "production"),
    "log_level": get_env("LOG_LEVEL", "INFO"),
    "dashboard_cache_ttl": int(get_env("DASHBOARD_CACHE_TTL", "300")),
    "query_cache_max_entries": int(get_env("QUERY_CACHE_MAX_ENTRIES", "1024")),
}

# Reminder links
DEFAULT_COUNTRY_CODE = get_env("DEFAULT_COUNTRY_CODE", "91")
WHATSAPP_HOST = get_env("WHATSAPP_HOST", "wa.me")

CURRENCY_SYMBOL = get_env("CURRENCY_SYMBOL", "₹")

MARK_PAID_NOTE = "Marked as fully paid"
