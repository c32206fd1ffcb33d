"""
Room models
A room holds up to `capacity` beds; occupancy is displayed, never enforced
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from schemas.building import Building


class RoomBase(BaseModel):
    """Room base model"""
    room_number: str = Field(..., min_length=1, max_length=20, description="Room number", examples=["101", "A-2"])
    room_type: str = Field(default="shared", max_length=50, description="single / double / shared / dormitory")
    capacity: int = Field(default=1, ge=0, description="Number of beds")
    rent_amount: float = Field(..., ge=0, description="Monthly rent per bed")


class RoomCreate(RoomBase):
    building_id: str = Field(..., description="Owning building")


class RoomUpdate(BaseModel):
    building_id: Optional[str] = None
    room_number: Optional[str] = Field(None, min_length=1, max_length=20)
    room_type: Optional[str] = Field(None, max_length=50)
    capacity: Optional[int] = Field(None, ge=0)
    rent_amount: Optional[float] = Field(None, ge=0)


class Room(RoomBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    building_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RoomWithBuilding(Room):
    building: Optional[Building] = None


class RoomOccupancy(BaseModel):
    """Beds taken vs beds available in one room"""
    room_id: str
    occupied: int
    capacity: int

    @property
    def available(self) -> int:
        return max(self.capacity - self.occupied, 0)

    @property
    def is_full(self) -> bool:
        return self.occupied >= self.capacity
