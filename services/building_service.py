"""
Building service (BuildingService)
CRUD for buildings; every mutation is owner-only
"""
from typing import List

from schemas.auth import CurrentUser
from schemas.building import Building, BuildingCreate, BuildingUpdate
from services.base_db import BaseDBService
from services.exceptions import NotFoundError, ValidationError
from services.logger import log_user_action


class BuildingService(BaseDBService):
    """Building management"""

    TABLE_NAME = "buildings"
    INVALIDATES = ("buildings", "rooms", "tenants", "payments", "dashboard")

    def list_buildings(self) -> List[Building]:
        """All buildings ordered by name"""
        def load():
            rows = self._select(self.supabase.table(self.TABLE_NAME).select("*").order("name"))
            return [Building(**row) for row in rows]

        return self._cached(("buildings",), load)

    def get_building(self, building_id: str) -> Building:
        """
        Fetch one building.

        Raises:
            NotFoundError: no building with that id
        """
        def load():
            row = self._select_first(
                self.supabase.table(self.TABLE_NAME).select("*").eq("id", building_id)
            )
            if not row:
                raise NotFoundError(f"Building {building_id} not found")
            return Building(**row)

        return self._cached(("buildings", building_id), load)

    def create_building(self, data: BuildingCreate, user: CurrentUser) -> Building:
        self._require_owner(user, "add buildings")

        payload = data.model_dump()
        payload["created_by"] = user.id

        rows = self._execute("INSERT", self.supabase.table(self.TABLE_NAME).insert(payload)).data
        building = Building(**rows[0])

        self._invalidate()
        log_user_action("create building", user.id, building_id=building.id, name=building.name)
        return building

    def update_building(self, building_id: str, data: BuildingUpdate, user: CurrentUser) -> Building:
        self._require_owner(user, "edit buildings")

        payload = data.model_dump(exclude_unset=True)
        if not payload:
            raise ValidationError("Nothing to update")

        rows = self._execute(
            "UPDATE",
            self.supabase.table(self.TABLE_NAME).update(payload).eq("id", building_id),
        ).data
        if not rows:
            raise NotFoundError(f"Building {building_id} not found")

        self._invalidate()
        log_user_action("update building", user.id, building_id=building_id, fields=sorted(payload))
        return Building(**rows[0])

    def delete_building(self, building_id: str, user: CurrentUser) -> None:
        """Delete a building; its rooms go with it through the store's foreign keys"""
        self._require_owner(user, "delete buildings")

        self._execute("DELETE", self.supabase.table(self.TABLE_NAME).delete().eq("id", building_id))

        self._invalidate()
        log_user_action("delete building", user.id, building_id=building_id)
