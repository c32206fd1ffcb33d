"""
Room service (RoomService)
Room CRUD and bed occupancy. Capacity is displayed, never enforced.
"""
from typing import List, Optional

from schemas.auth import CurrentUser
from schemas.room import Room, RoomCreate, RoomOccupancy, RoomUpdate, RoomWithBuilding
from services.base_db import BaseDBService
from services.exceptions import NotFoundError, ValidationError
from services.logger import log_user_action


class RoomService(BaseDBService):
    """Room management"""

    TABLE_NAME = "rooms"
    INVALIDATES = ("rooms", "buildings", "tenants", "payments", "dashboard")

    SELECT_WITH_BUILDING = "*, building:buildings(*)"

    def list_rooms(self, building_id: Optional[str] = None) -> List[RoomWithBuilding]:
        """
        Rooms ordered by room number, with their building.

        Args:
            building_id: only rooms of this building
        """
        def load():
            query = self.supabase.table(self.TABLE_NAME)\
                .select(self.SELECT_WITH_BUILDING)\
                .order("room_number")
            if building_id:
                query = query.eq("building_id", building_id)
            return [RoomWithBuilding(**row) for row in self._select(query)]

        return self._cached(("rooms", building_id), load)

    def get_room(self, room_id: str) -> RoomWithBuilding:
        def load():
            row = self._select_first(
                self.supabase.table(self.TABLE_NAME).select(self.SELECT_WITH_BUILDING).eq("id", room_id)
            )
            if not row:
                raise NotFoundError(f"Room {room_id} not found")
            return RoomWithBuilding(**row)

        return self._cached(("rooms", "single", room_id), load)

    def create_room(self, data: RoomCreate, user: CurrentUser) -> Room:
        self._require_owner(user, "add rooms")

        rows = self._execute("INSERT", self.supabase.table(self.TABLE_NAME).insert(data.model_dump())).data
        room = Room(**rows[0])

        self._invalidate()
        log_user_action("create room", user.id, room_id=room.id, room_number=room.room_number)
        return room

    def update_room(self, room_id: str, data: RoomUpdate, user: CurrentUser) -> Room:
        self._require_owner(user, "edit rooms")

        payload = data.model_dump(exclude_unset=True)
        if not payload:
            raise ValidationError("Nothing to update")

        rows = self._execute(
            "UPDATE",
            self.supabase.table(self.TABLE_NAME).update(payload).eq("id", room_id),
        ).data
        if not rows:
            raise NotFoundError(f"Room {room_id} not found")

        self._invalidate()
        log_user_action("update room", user.id, room_id=room_id, fields=sorted(payload))
        return Room(**rows[0])

    def delete_room(self, room_id: str, user: CurrentUser) -> None:
        self._require_owner(user, "delete rooms")

        self._execute("DELETE", self.supabase.table(self.TABLE_NAME).delete().eq("id", room_id))

        self._invalidate()
        log_user_action("delete room", user.id, room_id=room_id)

    # ==================== Occupancy ====================

    def _active_counts_by_room(self) -> dict:
        rows = self._select(
            self.supabase.table("tenants").select("room_id").eq("is_active", True),
            "tenants",
        )
        counts: dict = {}
        for row in rows:
            if row.get("room_id"):
                counts[row["room_id"]] = counts.get(row["room_id"], 0) + 1
        return counts

    def get_room_occupancy(self, room_id: str) -> RoomOccupancy:
        """Active tenants in the room against its capacity"""
        room = self.get_room(room_id)
        occupied = self._count(
            self.supabase.table("tenants")
                .select("id", count="exact", head=True)
                .eq("room_id", room_id)
                .eq("is_active", True),
            "tenants",
        )
        return RoomOccupancy(room_id=room_id, occupied=occupied, capacity=room.capacity)

    def get_available_rooms(self, building_id: Optional[str] = None) -> List[RoomWithBuilding]:
        """Rooms with at least one free bed"""
        counts = self._active_counts_by_room()
        return [
            room for room in self.list_rooms(building_id)
            if counts.get(room.id, 0) < room.capacity
        ]
