"""
Base data-access service - v2.0
✅ Shared Supabase client (injectable for tests)
✅ Uniform error wrapping and DB logging
✅ Query cache with invalidate-on-write
✅ Role checks at the data-access boundary
"""

from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional

from postgrest.exceptions import APIError
from supabase import Client

from config.supabase import get_supabase
from schemas.auth import CurrentUser
from services.exceptions import DataAccessError, PermissionDeniedError
from services.logger import logger, log_db_operation
from services.query_cache import QueryCache, QueryKey, query_cache


class BaseDBService:
    """Parent of every entity service"""

    TABLE_NAME = ""
    # cache prefixes dropped after a successful mutation
    INVALIDATES: tuple = ()

    def __init__(self, client: Optional[Client] = None, cache: Optional[QueryCache] = None):
        self.supabase = client if client is not None else get_supabase()
        self.cache = cache if cache is not None else query_cache
        self.logger = logger

    # ==================== Request execution ====================

    def _execute(self, operation: str, query, table: Optional[str] = None):
        """
        Run a built query and log the outcome.

        Args:
            operation: SELECT / INSERT / UPDATE / DELETE / COUNT
            query: Supabase query builder, not yet executed
            table: table name for the log line (defaults to TABLE_NAME)

        Returns:
            the APIResponse

        Raises:
            DataAccessError: the store rejected or failed the request
        """
        table = table or self.TABLE_NAME
        try:
            result = query.execute()
        except APIError as e:
            log_db_operation(operation, table, False, error=e.message)
            raise DataAccessError(e.message or str(e)) from e
        except Exception as e:
            log_db_operation(operation, table, False, error=str(e))
            raise DataAccessError(str(e)) from e

        rows = result.count if result.count is not None else len(result.data or [])
        log_db_operation(operation, table, True, rows=rows)
        return result

    def _select(self, query, table: Optional[str] = None) -> List[Dict[str, Any]]:
        return self._execute("SELECT", query, table).data or []

    def _select_first(self, query, table: Optional[str] = None) -> Optional[Dict[str, Any]]:
        rows = self._select(query.limit(1), table)
        return rows[0] if rows else None

    def _count(self, query, table: Optional[str] = None) -> int:
        return self._execute("COUNT", query, table).count or 0

    # ==================== Cache ====================

    def _cached(self, key: QueryKey, loader: Callable[[], Any]) -> Any:
        return self.cache.get_or_load(key, loader)

    def _invalidate(self, *prefixes: str) -> None:
        for prefix in prefixes or self.INVALIDATES:
            self.cache.invalidate(prefix)

    # ==================== Authorization ====================

    def _require_owner(self, user: CurrentUser, action: str) -> None:
        """Owner-only mutations are checked here, not only in the UI"""
        if not user.is_owner:
            self.logger.warning(f"⛔ {user.id} ({user.role}) tried to {action}")
            raise PermissionDeniedError(f"Only owners can {action}")

    # ==================== Helpers ====================

    @staticmethod
    def _today() -> date:
        return date.today()

    @staticmethod
    def _serialize(data: Dict[str, Any]) -> Dict[str, Any]:
        """Make a model dump JSON-safe for the Supabase client"""
        out = {}
        for key, value in data.items():
            if isinstance(value, (date, datetime)):
                out[key] = value.isoformat()
            else:
                out[key] = value
        return out

    def health_check(self) -> bool:
        """Store reachability probe"""
        try:
            self._count(self.supabase.table("buildings").select("id", count="exact", head=True), "buildings")
            return True
        except DataAccessError as e:
            self.logger.error(f"❌ Health check failed: {e.message}")
            return False
