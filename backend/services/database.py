"""Supabase client shared by the service modules."""

from functools import lru_cache
from supabase import create_client, Client
from config import SupabaseConfig


@lru_cache(maxsize=1)
def get_config() -> SupabaseConfig:
    return SupabaseConfig.from_environment()


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    """Create the Supabase client on first use."""
    config = get_config()
    return create_client(config.url, config.service_key)


def legalflow_table(name: str):
    """Query builder for a table in the LegalFlow schema (activities, tickets)."""
    return get_supabase().schema(get_config().legalflow_schema).table(name)
