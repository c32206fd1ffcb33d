"""
Tenant service - v2.0
✅ Tenants listed with room and building in one request
✅ Deactivation frees the room and stamps leaving_date
✅ Payment history is never touched by tenant operations
"""
from datetime import date
from typing import List, Optional

from schemas.auth import CurrentUser
from schemas.tenant import Tenant, TenantCreate, TenantUpdate, TenantWithRoom
from services.base_db import BaseDBService
from services.exceptions import NotFoundError, ValidationError
from services.logger import log_user_action


class TenantService(BaseDBService):
    """Tenant management"""

    TABLE_NAME = "tenants"
    INVALIDATES = ("tenants", "rooms", "payments", "dashboard")

    SELECT_WITH_ROOM = "*, room:rooms(*, building:buildings(*))"

    # ==================== Queries ====================

    def list_tenants(self, active_only: bool = True) -> List[TenantWithRoom]:
        """
        Tenants ordered by name.

        Args:
            active_only: skip tenants who have left
        """
        def load():
            query = self.supabase.table(self.TABLE_NAME)\
                .select(self.SELECT_WITH_ROOM)\
                .order("name")
            if active_only:
                query = query.eq("is_active", True)
            return [TenantWithRoom(**row) for row in self._select(query)]

        return self._cached(("tenants", "list", active_only), load)

    def get_tenant(self, tenant_id: str) -> TenantWithRoom:
        def load():
            row = self._select_first(
                self.supabase.table(self.TABLE_NAME).select(self.SELECT_WITH_ROOM).eq("id", tenant_id)
            )
            if not row:
                raise NotFoundError(f"Tenant {tenant_id} not found")
            return TenantWithRoom(**row)

        return self._cached(("tenants", tenant_id), load)

    def get_tenants_in_room(self, room_id: str) -> List[Tenant]:
        """Active tenants currently assigned to a room"""
        def load():
            rows = self._select(
                self.supabase.table(self.TABLE_NAME)
                    .select("*")
                    .eq("room_id", room_id)
                    .eq("is_active", True)
                    .order("name")
            )
            return [Tenant(**row) for row in rows]

        return self._cached(("tenants", "room", room_id), load)

    def search_tenants(self, query: str = "", building_id: Optional[str] = None,
                       active_only: bool = True) -> List[TenantWithRoom]:
        """
        Filter tenants by name (case-insensitive) or phone, and by building.
        """
        needle = (query or "").strip().lower()
        results = []
        for tenant in self.list_tenants(active_only):
            if needle and needle not in tenant.name.lower() and needle not in tenant.phone:
                continue
            if building_id and (tenant.room is None or tenant.room.building_id != building_id):
                continue
            results.append(tenant)
        return results

    # ==================== Mutations ====================

    def create_tenant(self, data: TenantCreate, user: CurrentUser) -> Tenant:
        """New tenants start active. Room capacity is not checked."""
        self._require_owner(user, "add tenants")

        payload = self._serialize(data.model_dump())
        payload["is_active"] = True

        rows = self._execute("INSERT", self.supabase.table(self.TABLE_NAME).insert(payload)).data
        tenant = Tenant(**rows[0])

        self._invalidate()
        log_user_action("create tenant", user.id, tenant_id=tenant.id, room_id=tenant.room_id)
        return tenant

    def update_tenant(self, tenant_id: str, data: TenantUpdate, user: CurrentUser) -> Tenant:
        """Owners and staff may edit tenant details; reassigning a room overwrites room_id"""
        payload = self._serialize(data.model_dump(exclude_unset=True))
        if not payload:
            raise ValidationError("Nothing to update")
        rows = self._execute(
            "UPDATE",
            self.supabase.table(self.TABLE_NAME).update(payload).eq("id", tenant_id),
        ).data
        if not rows:
            raise NotFoundError(f"Tenant {tenant_id} not found")

        self._invalidate()
        log_user_action("update tenant", user.id, tenant_id=tenant_id, fields=sorted(payload))
        return Tenant(**rows[0])

    def deactivate_tenant(self, tenant_id: str, user: CurrentUser,
                          today: Optional[date] = None) -> Tenant:
        """
        Mark a tenant as left.

        Sets is_active=False, room_id=None and leaving_date=today. Payments and
        payment transactions stay as they are.
        """
        self._require_owner(user, "remove tenants")

        leaving_date = today or self._today()
        rows = self._execute(
            "UPDATE",
            self.supabase.table(self.TABLE_NAME)
                .update({
                    "is_active": False,
                    "leaving_date": leaving_date.isoformat(),
                    "room_id": None,
                })
                .eq("id", tenant_id),
        ).data
        if not rows:
            raise NotFoundError(f"Tenant {tenant_id} not found")

        self._invalidate()
        log_user_action("deactivate tenant", user.id, tenant_id=tenant_id, leaving_date=leaving_date)
        return Tenant(**rows[0])
