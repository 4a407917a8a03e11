# =============================================================================
# substock_core/data/supabase_client.py
# Supabase Client Configuration for SubStock RH
# Handles database connections and CRUD operations
# =============================================================================

from __future__ import annotations
import streamlit as st
from typing import Optional, Dict, Any, List, Sequence, Union

from substock_core.errors import ConfigurationError, StoreError
from substock_core.logging import get_logger

logger = get_logger(__name__)

# PostgREST returns at most this many rows per request
PAGE_SIZE = 1000


def get_supabase_client():
    """
    Initialize and return Supabase client using Streamlit secrets.

    Expects secrets in .streamlit/secrets.toml:
        [supabase]
        url = "https://your-project.supabase.co"
        key = "your-anon-key"

    Raises:
        ConfigurationError: if the [supabase] section is missing
    """
    from supabase import create_client, Client

    if "supabase" not in st.secrets:
        raise ConfigurationError(
            "Supabase credentials not found in .streamlit/secrets.toml",
            config_key="supabase",
        )

    url = st.secrets["supabase"]["url"]
    key = st.secrets["supabase"]["key"]

    client: Client = create_client(url, key)
    logger.info("Supabase client created")
    return client


@st.cache_resource(ttl=3600)  # Cache for 1 hour, then refresh
def get_cached_supabase_client():
    """Get cached Supabase client (reused across sessions)."""
    return get_supabase_client()


class SupabaseService:
    """
    Generic Supabase service for CRUD operations on one table.

    Every failure is logged and re-raised as StoreError so pages can show
    it through handle_error.
    """

    def __init__(self, table_name: str, client=None):
        """
        Args:
            table_name: Name of the Supabase table
            client: Optional client (defaults to the cached app client)
        """
        self.table_name = table_name
        self.client = client if client is not None else get_cached_supabase_client()

    def _fail(self, operation: str, error: Exception) -> StoreError:
        logger.error(f"{operation} on {self.table_name} failed: {error}")
        return StoreError(
            f"Could not {operation} {self.table_name}: {error}",
            table=self.table_name,
            operation=operation,
        )

    def fetch_all(
        self,
        order_by: Optional[Union[str, Sequence[str]]] = None,
        ascending: bool = True,
    ) -> List[Dict[str, Any]]:
        """
        Fetch ALL rows of the table, paging past the 1000 row limit.

        Offset paging is only stable when the ordering is unique, so pass a
        unique tie-breaker column last when the leading column has ties.

        Args:
            order_by: Column or columns to order by, most significant first
            ascending: Sort order (default: ascending)
        """
        if isinstance(order_by, str):
            order_by = [order_by]

        try:
            all_data: List[Dict[str, Any]] = []
            offset = 0

            while True:
                query = self.client.table(self.table_name).select("*")
                for column in order_by or ():
                    query = query.order(column, desc=not ascending)

                response = query.range(offset, offset + PAGE_SIZE - 1).execute()
                if not response.data:
                    break

                all_data.extend(response.data)
                # Fewer than a full page means we've reached the end
                if len(response.data) < PAGE_SIZE:
                    break
                offset += PAGE_SIZE

            return all_data

        except Exception as e:
            raise self._fail("read", e) from e

    def insert(self, data: Dict[str, Any]) -> None:
        try:
            self.client.table(self.table_name).insert(data).execute()
        except Exception as e:
            raise self._fail("insert into", e) from e

    def insert_many(self, records: List[Dict[str, Any]], batch_size: int = 500) -> None:
        """Insert rows in batches."""
        try:
            for i in range(0, len(records), batch_size):
                batch = records[i:i + batch_size]
                self.client.table(self.table_name).insert(batch).execute()
        except Exception as e:
            raise self._fail("insert into", e) from e

    def delete(self, filters: Dict[str, Any]) -> None:
        try:
            query = self.client.table(self.table_name).delete()
            for col, val in filters.items():
                query = query.eq(col, val)
            query.execute()
        except Exception as e:
            raise self._fail("delete from", e) from e

    def upsert(self, data: Dict[str, Any], on_conflict: Optional[str] = None) -> None:
        """Insert or update a row keyed by its primary key (or on_conflict)."""
        try:
            if on_conflict:
                self.client.table(self.table_name).upsert(data, on_conflict=on_conflict).execute()
            else:
                self.client.table(self.table_name).upsert(data).execute()
        except Exception as e:
            raise self._fail("upsert into", e) from e
