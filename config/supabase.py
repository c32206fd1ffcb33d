"""
Supabase client configuration
One shared client for the API and the dashboard
"""
from typing import Optional

from supabase import create_client, Client

from config.settings import get_supabase_url, get_supabase_key
from services.exceptions import ConfigurationError
from services.logger import logger

_client: Optional[Client] = None


def get_supabase() -> Client:
    """
    Return the shared Supabase client, creating it on first call.
    Used as a FastAPI dependency and by the Streamlit dashboard.
    """
    global _client

    if _client is None:
        url = get_supabase_url()
        key = get_supabase_key()

        if not url or not key:
            raise ConfigurationError("SUPABASE_URL and SUPABASE_KEY must be set in .env or secrets.toml")

        _client = create_client(url, key)
        logger.info("✅ Supabase client initialised")

    return _client
