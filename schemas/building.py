"""
Building models
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BuildingBase(BaseModel):
    """Building fields editable from the owner form"""
    name: str = Field(..., min_length=1, max_length=200, description="Building name", examples=["Sunrise PG"])
    address: Optional[str] = Field(None, max_length=500, description="Street address")
    total_rooms: int = Field(default=0, ge=0, description="Declared number of rooms")


class BuildingCreate(BuildingBase):
    pass


class BuildingUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    address: Optional[str] = None
    total_rooms: Optional[int] = Field(None, ge=0)


class Building(BuildingBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
