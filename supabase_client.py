"""
Supabase Client Configuration

Lazily initializes the Supabase client used for authentication and
database operations.
"""

# Standard library
import logging
import os

# Third-party
from supabase import Client, create_client

# Configure logging
logger = logging.getLogger(__name__)


class _SupabaseProxy:
    """
    Module-level handle that resolves to the lazily created client.

    Lets call sites keep using ``supabase.table(...)`` while the real client
    is only created on first access.
    """

    def __bool__(self) -> bool:
        return get_supabase() is not None

    def __getattr__(self, name: str):
        client = get_supabase()
        if client is None:
            raise RuntimeError("Supabase client is not configured")
        return getattr(client, name)


_client: Client | None = None
_initialized = False

supabase = _SupabaseProxy()


def init_supabase() -> Client | None:
    """
    Creates the Supabase client from SUPABASE_URL / SUPABASE_KEY.

    Returns:
        The client, or None if credentials are missing or creation fails.
    """
    global _client, _initialized

    _initialized = True
    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_KEY")

    if not url or not key:
        logger.warning("SUPABASE_URL or SUPABASE_KEY not found - database features disabled")
        _client = None
        return None

    try:
        _client = create_client(url, key)
        logger.info("Supabase client initialized successfully")
    except Exception as e:  # noqa: BLE001
        logger.error(f"Failed to initialize Supabase client: {e}")
        _client = None
    return _client


def get_supabase() -> Client | None:
    """Returns the cached Supabase client, creating it on first use."""
    if not _initialized:
        return init_supabase()
    return _client


def reset_supabase_for_tests() -> None:
    """Drops the cached client so the next access re-reads the environment."""
    global _client, _initialized
    _client = None
    _initialized = False
