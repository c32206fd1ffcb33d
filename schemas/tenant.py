"""
Tenant Pydantic schema
✅ room_id is nullable: null means unassigned or departed
✅ leaving_date is only set when the tenant is deactivated
"""
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.room import RoomWithBuilding


class TenantBase(BaseModel):
    """Tenant fields shared by create and read models"""
    name: str = Field(
        ...,
        max_length=100,
        description="Tenant name",
        examples=["Asha Verma"]
    )
    phone: str = Field(
        ...,
        max_length=20,
        description="Mobile number used for reminders",
        examples=["98765 43210", "+91 98765 43210"]
    )
    occupation: Optional[str] = Field(
        None,
        max_length=100,
        description="Student / working professional / ...",
        examples=["Software engineer"]
    )
    room_id: Optional[str] = Field(None, description="Assigned room")
    monthly_rent: float = Field(
        ...,
        ge=0,
        description="Agreed monthly rent",
        examples=[6000.0]
    )


class TenantCreate(TenantBase):
    joining_date: date = Field(default_factory=date.today, description="Move-in date")

    @field_validator('name', 'phone')
    @classmethod
    def strip_required(cls, v):
        """Required text fields may not be blank"""
        v = v.strip()
        if not v:
            raise ValueError('must not be empty')
        return v


class TenantUpdate(BaseModel):
    """Fields staff may edit; deactivation has its own operation"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, min_length=1, max_length=20)
    occupation: Optional[str] = Field(None, max_length=100)
    room_id: Optional[str] = None
    monthly_rent: Optional[float] = Field(None, ge=0)


class Tenant(TenantBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    joining_date: date
    leaving_date: Optional[date] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TenantWithRoom(Tenant):
    room: Optional[RoomWithBuilding] = None
